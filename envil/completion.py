"""Shell completion scripts for the envil command."""

import sys
from enum import Enum

from envil.checks import BUILTIN_CHECKS
from envil.options import BASE_OPTIONS, CHECK_OPTIONS


class ShellType(Enum):
    """Shells for which a completion script can be generated."""

    BASH = "bash"
    ZSH = "zsh"
    UNKNOWN = "unknown"


def get_shell_type(name):
    """Map a shell name, in any letter case, to a ShellType."""
    if not name:
        return ShellType.UNKNOWN
    lowered = name.lower()
    if lowered == "bash":
        return ShellType.BASH
    if lowered == "zsh":
        return ShellType.ZSH
    return ShellType.UNKNOWN


def _bash_script():
    words = []
    for option in BASE_OPTIONS:
        words.append(f"--{option.name} ")
        if option.short:
            words.append(f"-{option.short} ")
    words.extend(f"--{option.name} " for option in CHECK_OPTIONS)

    return (
        "_envil() {\n"
        "    local cur prev words cword split\n"
        "    _init_completion -s || return\n\n"
        "    case $prev in\n"
        "        -c|--config)\n"
        "            _filedir '@(yml|yaml|json)'\n"
        "            return\n"
        "            ;;\n"
        "        -e|--env)\n"
        '            COMPREPLY=($(compgen -e -- "${cur}"))\n'
        "            return\n"
        "            ;;\n"
        "        --type)\n"
        '            COMPREPLY=($(compgen -W "string integer float json" -- "${cur}"))\n'
        "            return\n"
        "            ;;\n"
        "    esac\n\n"
        "    if [[ $cur == -* ]]; then\n"
        "        COMPREPLY=($(compgen -W '"
        + "".join(words)
        + "' -- \"${cur}\"))\n"
        "        return\n"
        "    fi\n"
        "}\n\n"
        "complete -F _envil envil\n"
    )


def _zsh_base_line(option):
    name, short = option.name, option.short
    suffix = ":value:_files" if option.takes_argument else ""
    return f"        '(--{name} -{short})'{{--{name},-{short}}}'[{name}]{suffix}'\n"


def _zsh_script():
    base_lines = "".join(_zsh_base_line(option) for option in BASE_OPTIONS)
    check_lines = "".join(
        f"        '--{name}[{description}]:value:'\n"
        for name, description, *_ in BUILTIN_CHECKS
    )
    return (
        "#compdef envil\n\n"
        "_envil() {\n"
        "    local -a options\n"
        "    local -a check_options\n\n"
        "    options=(\n"
        + base_lines
        + "    )\n\n"
        "    check_options=(\n"
        + check_lines
        + "    )\n\n"
        "    case $words[CURRENT-1] in\n"
        "        --type)\n"
        "            _values 'types' string integer float json\n"
        "            return\n"
        "            ;;\n"
        "        -c|--config)\n"
        "            _files -g '*.{yml,yaml,json}'\n"
        "            return\n"
        "            ;;\n"
        "        -e|--env)\n"
        '            _parameters -g "*"\n'
        "            return\n"
        "            ;;\n"
        "    esac\n\n"
        "    _arguments -s -S \\\n"
        "        $options \\\n"
        "        $check_options\n"
        "}\n\n"
        '_envil "$@"\n'
    )


_GENERATORS = {
    ShellType.BASH: _bash_script,
    ShellType.ZSH: _zsh_script,
}


def generate_completion_script(shell, output=None):
    """Write the completion script for a shell to `output` (stdout by default).

    Raises ValueError for an unsupported shell.
    """
    try:
        generator = _GENERATORS[ShellType(shell)]
    except (KeyError, ValueError):
        raise ValueError("Unsupported shell type") from None
    out = sys.stdout if output is None else output
    out.write(generator())