[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "envil"
version = "0.1.0"
description = "Validate environment variables against type, range, pattern and command checks"
requires-python = ">=3.10"
keywords = ["environment", "validation", "env", "configuration", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]
dependencies = [
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
envil = "envil.cli:main"

[tool.setuptools.packages.find]
include = ["envil*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
