# emfcli

A command line tool for EMF projects. It reads the project's `config.yaml`,
builds the project into an executable with PyInstaller or Nuitka, removes
build output and downloaded models, and includes a small generator that turns
a syntax tree into formatted Python source.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Run `emf-cli` with no subcommand to print the help text.

Print the version and build date:

```
emf-cli version
```

### build

```
emf-cli build
emf-cli build --library nuitka --one-file --out-dir out --name myapp
emf-cli build --models-symlink
```

Options:

- `-o`, `--out-dir`: output directory. The default is `dist`. If it does not
  exist, the command creates it.
- `-n`, `--name`: name of the executable. If you leave it out, the command
  uses the `name` key from `config.yaml`.
- `-l`, `--library`: `pyinstaller` (the default) or `nuitka`. Any other value
  is rejected. Nuitka needs a working C compiler.
- `-f`, `--one-file`: build a single file.
- `-s`, `--models-symlink`: after the build, create `<out-dir>/models` as a
  symbolic link to the project's `models` folder.

The command reads `config.yaml` from the current directory. If the file
cannot be loaded, it asks for another directory, and it gives up after three
attempts. It uses the virtual environment in `.venv`: it finds `python` and
`pip` there, runs `pip install <library>`, and then runs the build tool.
Extra arguments come from the configuration keys `build.pyinstaller.args` or
`build.nuitka.args`, and duplicate arguments are dropped. A build tool that
fails or is interrupted is reported on screen. This does not change the
command's exit status.

### clean

```
emf-cli clean
emf-cli clean --all --yes
emf-cli --config-path path/to/project clean
```

This removes the `dist` directory. With `-a`/`--all` it also deletes every
model listed under `models` in the configuration from `./models/`, removes
any directories left empty, and clears the list in `config.yaml`. It asks for
confirmation first unless you pass `-y`/`--yes`.

The root option `--config-path` (default `.`) sets the directory that holds
`config.yaml` for `clean`.

## Configuration API

`emfcli.config.Config.load(directory)` reads `config.yaml` or `config.yml`
and raises `ConfigError` if neither is found.

Keys are dotted and case-insensitive:

- `get(key, default)` returns a value.
- `get_string_list(key)` returns a value as a list of strings.
- `set(key, value)` stores a value and creates parent tables as needed.
- `write()` saves the configuration back to the file it was loaded from.

Other functions:

- `load_with_retries(config, directory, ask_path)` calls `ask_path()` for a
  new directory after each failure, up to three attempts.
- `remove_item_physically(path)` deletes a file or directory, then the empty
  parent directories above it.
- `remove_all_models(config)` deletes every configured model and empties the
  list.

## Code generation

`emfcli.codegen.nodes` defines the tree: `File`, `Class`, `Function`,
`Parameter`, `Field`, `Import`, `ImportWhat`, `AssignmentStmt`,
`FunctionCall`, `FunctionCallParameter`, `FunctionCallStmt`, `CommentStmt`,
`ReturnStmt`, `IfStmt`, `ElifStmt` and `ElseStmt`. Each node has
`accept(visitor)`, which dispatches to a `PythonVisitor`.

`emfcli.codegen.generator.PythonCodeGenerator` is that visitor. It renders
the tree as Python source, indenting four spaces per level, or eight when
constructed with `False`:

```python
from emfcli.codegen.nodes import File, Function, Parameter, AssignmentStmt
from emfcli.codegen.generator import PythonCodeGenerator

tree = File(
    name="example.py",
    functions=[
        Function(
            name="main",
            params=[Parameter(name="args", type="List[str]")],
            body=[AssignmentStmt(variable="a", string_value="1")],
        )
    ],
)
print(PythonCodeGenerator(True).generate(tree))
```

`generate` raises `CodeGenerationError` if the tree is invalid. Examples are
an empty name, a parameter without a default after one with a default, or a
positional argument after a keyword argument. The error's `line` and `column`
show where generation stopped. Its `code` holds the partial output, with a
marker under the failing column.

## What this package does not do

There are no commands to create or install a project, to add, update or
remove individual models or tokenizers, or to upgrade or synchronise a
project. The package does not download models or generate shell completion
scripts. The code generator is a library only: no command writes generated
model code to disk.