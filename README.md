# exdrill

A command-line tool that compiles, runs and checks small Rust exercises. Each exercise is a `.rs` file with a mistake in it. Fix the mistake and the tool moves you on to the next one.

## Installation

```
pip install exdrill
```

You need `rustc` on your `PATH`. Clippy exercises also need `cargo`. Watch mode uses `watchdog`, which is installed along with the package.

## What you need to supply

The package contains no exercise files and no `info.toml`. You need a directory that holds an `info.toml` list of exercises and the `exercises/` folder that list points to. Run every command from that directory. If `info.toml` is missing, the tool prints a message and exits with status 1.

## Getting started

```
exdrill
```

Run it with no arguments to see a welcome message and a short introduction. The usual way to work is watch mode:

```
exdrill watch
```

Watch mode checks the exercises in order and stops at the first one that fails or is still pending. After that it watches `./exercises` for `.rs` files that are created or modified. Once changes have been quiet for about two seconds, it checks the changed exercise again, followed by every exercise that is still pending. At the watch prompt you can type:

- `hint`: show the hint for the exercise that failed last
- `clear`: clear the screen
- `quit`: leave watch mode
- `help`: list these commands

An exercise that builds but still contains a `// I AM NOT DONE` line counts as pending. The tool then shows the lines around the marker. Remove the marker when you are ready to move on.

## Commands

```
exdrill verify                 # check every exercise in the listed order
exdrill run <name>             # compile and run (or test) a single exercise
exdrill run next               # run the first exercise that is not done yet
exdrill hint <name>            # print the hint for an exercise
exdrill reset <name>           # run "git stash -- <file>" on the exercise's file
exdrill list                   # every exercise with its path and status
exdrill list -s / --solved     # only exercises that look done
exdrill list -u / --unsolved   # only pending exercises
exdrill list -p / --paths      # paths only
exdrill list -n / --names      # names only
exdrill list -f / --filter a,b # names or paths containing any of the patterns
exdrill lsp                    # write rust-project.json for rust-analyzer
exdrill --nocapture run <name> # also print the output of passing tests
exdrill -v / --version
```

`verify`, `run` and `hint` exit with status 1 when an exercise fails or cannot be found. `list` ends with a progress line that gives the number of exercises done and the percentage.

## Environment

- `NO_EMOJI`: when set, plain ASCII symbols replace emoji in the output.
- `NO_COLOR`: when set, colours are turned off. By default colours are used only when stdout is a terminal.
- `CLICOLOR_FORCE`: a value other than `0` turns colours on even when stdout is not a terminal.

## Exercise list

`info.toml` lists the exercises in order. Each entry has a `name`, a `path`, a `mode` and a `hint`. The mode is one of:

- `compile`: build the file with `rustc` and run the binary
- `test`: build the file with `rustc --test` and run its tests
- `clippy`: write `exercises/clippy/Cargo.toml` and run `cargo clippy` with warnings treated as errors

```toml
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"
hint = "Remove the I AM NOT DONE comment to move on."
```

## Library use

The code behind the commands can also be imported:

```python
from exdrill.exercise import load_exercise_file

for exercise in load_exercise_file("info.toml"):
    print(exercise.name, "done" if exercise.looks_done() else "pending")
```

- `exdrill.exercise`: `Exercise`, `Mode`, `load_exercises` and `load_exercise_file`. `Exercise.compile()` raises `CompileError`, and running the result raises `RunError`.
- `exdrill.verify`: `verify(exercises, progress, verbose)` raises `ExerciseFailed` at the first exercise that is not finished.
- `exdrill.run`: `run` and `reset` raise `RunFailed` when they fail.
- `exdrill.project`: `RustAnalyzerProject` builds `rust-project.json`.
- `exdrill.cli`: `main`, `find_exercise`, `list_exercises`, `watch` and `rustc_exists`.

The `exdrill.lessons` package holds reference solutions to some of the exercise topics, written in Python:

- `basics`: functions, enums, generics, options and conditionals
- `errors`: error handling
- `quiz`: the quizzes
- `stdtypes`: standard library types and iterators
- `containers`: dictionaries, strings and lists
- `models`: structs and traits

Type conversions have no reference solutions.