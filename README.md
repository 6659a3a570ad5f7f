# envil

`envil` checks that environment variables are set and hold sensible values
before your application starts. Use it in container entrypoints, CI jobs or
shell scripts to fail early with a clear message instead of deep inside the
program.

## Installation

```sh
pip install .
```

This installs the `envil` command. PyYAML is its only dependency.

## Checking a single variable

```sh
envil -e PORT --type integer --gt 1024 --lt 65536
```

The exit status is `0` when every check passes. On failure a message such as

```
Error PORT: failed gt check (value must be greater than 1024)
```

is written to standard error and the exit status tells what went wrong:

| Status | Meaning                      |
|--------|------------------------------|
| 0      | all checks passed            |
| 1      | usage or configuration error |
| 2      | required variable not set    |
| 3      | value has the wrong type     |
| 4      | value failed a check         |
| 5      | a `--cmd` check failed       |

Checks stop at the first failure for a variable.

A variable without a default is required. Give a default with `-d` to make it
optional; the default is then validated when the variable is unset. Add `-p`
to print `NAME=value` to standard output once validation passes:

```sh
envil -e LOG_LEVEL -d info --enum debug,info,warn,error -p
```

## Checks

| Option          | Passes when the value…                                         |
|-----------------|----------------------------------------------------------------|
| `--type T`      | has type `string`, `integer`, `float` or `json`                |
| `--gt N`        | is a number greater than `N`                                   |
| `--lt N`        | is a number less than `N`                                      |
| `--ge N`        | is a number greater than or equal to `N`                       |
| `--le N`        | is a number less than or equal to `N`                          |
| `--len N`       | is exactly `N` bytes long (UTF-8)                              |
| `--lengt N`     | is longer than `N` bytes                                       |
| `--lenlt N`     | is shorter than `N` bytes                                      |
| `--eq S`        | equals `S`                                                     |
| `--ne S`        | differs from `S`                                               |
| `--enum a,b,c`  | is one of the comma-separated values (empty items are dropped) |
| `--regex P`     | contains a match for the Python regular expression `P`         |
| `--cmd C`       | makes `/bin/sh -c C` exit with status 0; the value is in `$VALUE` |

Notes:

- The type check always runs first, whatever order the options are given in.
- `integer` means an optional leading `-` followed by digits only. `float`
  accepts anything that parses completely as a C-style floating point number,
  including exponents, hexadecimal floats, `inf` and `nan`. `json` accepts any
  JSON document.
- The numeric thresholds of `--gt`, `--lt`, `--ge`, `--le` and the lengths of
  the `--len*` checks are read as integers: leading digits are used and
  anything after them is ignored (`1.5` becomes `1`, `abc` becomes `0`).
- Output of a `--cmd` command is echoed to standard error.

```sh
envil -l
```

lists every check with its description on standard error.

## Configuration files

Many variables can be checked at once from a YAML (`.yml`, `.yaml`) or JSON
(`.json`) file. Each top-level key names a variable; its mapping may hold a
`default` and a `checks` mapping of check names to arguments:

```yaml
DATABASE_URL:
  checks:
    regex: "^postgres://"
PORT:
  default: "8080"
  checks:
    type: integer
    gt: 1024
    lt: 65536
MODE:
  default: production
  checks:
    enum: development,staging,production
```

```sh
envil -c envil.yml -p
```

YAML scalars are used exactly as written. Every variable is validated, the
first failure of each is reported, and the exit status is that of the last
variable that failed. Unknown checks and invalid type names are reported and
skipped. `-c` and `-e` cannot be combined.

## Shell completion

```sh
envil -C bash > ~/.bash_completion.d/envil
envil -C zsh > ~/.zsh/completions/_envil
```

## Options

```
-c, --config FILE         Path to configuration file (YAML or JSON)
-e, --env NAME            Environment variable name
-d, --default VALUE       Default value if not set
-p, --print               Print value if validation passes
-v, --verbose             Verbose output: -v for info, -vv for debug
-l, --list-checks         List available check types and descriptions
-C, --completion SHELL    Generate shell completion script (bash|zsh)
-h, --help                Show the help message
```

Long options may be shortened to any unique prefix and take their argument
either as the next word or after `=`; short options may be grouped.

## Using it from Python

```python
from envil.checks import parse_check
from envil.validator import ValidationErrors
from envil.variable import EnvVariable, validate_variable

var = EnvVariable(
    name="PORT",
    checks=(parse_check("type", "integer"), parse_check("gt", "1024")),
)
errors = ValidationErrors()
code = validate_variable(var, "80", errors)
for error in errors:
    print(error.name, error.message, error.code)
```

Other entry points:

- `envil.config.handle_config_option(path, print_value, environ, out)`
  validates a configuration file against a mapping of your choice.
- `envil.checks.register_check(...)` adds a check to the shared registry;
  `envil.checks.get_check_definition(name)` looks one up.
- `envil.completion.generate_completion_script(shell, output)` writes a
  completion script to any text stream.

## Limitations

The `boolean` type exists as a name but cannot be selected with `--type`.
Checks added with `register_check` are available from Python only; the
command line and its completion scripts know only the built-in checks.