# cctx

`cctx` switches Claude Code between several saved settings configurations
("contexts").

Contexts are stored as JSON files in `~/.claude/settings/`. Switching to a
context copies it over `~/.claude/settings.json` and records the switch in
`~/.claude/settings/.cctx-state.json`, so you can jump back to the previous
context at any time.

## Installation

```sh
pip install .
```

Python 3.10 or later is required; there are no third-party dependencies.

## Usage

```sh
cctx                 # list contexts, the current one marked "(current)"
cctx work            # switch to the context "work"
cctx -               # switch back to the previous context
cctx -c              # print the current context
cctx -q              # print only the current context
cctx -n personal     # create "personal" from the current settings (empty {} if none)
cctx -n              # prompt for a name, then create it
cctx -d old          # delete a context; without a name, pick one and confirm
cctx -r work         # rename "work" (prompts for the new name)
cctx -r              # pick a context, then prompt for the new name
cctx -e work         # open a context in $EDITOR (then $VISUAL, then vi)
cctx -s work         # pretty-print a context's JSON
cctx --export work > work.json
cctx --import work < work.json
cctx -u              # remove the active settings file and clear the current context
cctx -V              # print the version
```

When `-e`, `-s` or `--export` are given no name, the current context is used;
if there is none, the command fails with `error: no current context set`.

Context names may not be empty, `-`, `.`, `..`, or contain `/`. The active
context cannot be deleted. `--import` checks that its input is valid JSON
before storing it.

Errors are printed to standard error and the command exits with status 1.

Colour is used only when standard output is a terminal and `NO_COLOR` is not
set.

### Project and local contexts

```sh
cctx --in-project    # manage contexts for ./.claude/settings.json
cctx --local         # manage contexts for ./.claude/settings.local.json
```

Both keep their contexts in `./.claude/settings/`. The local level keeps its own
state file (`.cctx-state.local.json`), so it tracks its current context
separately from the project level. When listing user-level contexts, `cctx`
mentions when the working directory has project or local contexts.

### Interactive selection

With `CCTX_INTERACTIVE=1` set, running `cctx` without arguments lets you pick a
context to switch to. `fzf` is used when it is on your `PATH` and `TERM` is set.
Otherwise a numbered list is shown: answer with a number, an exact name, or a
pattern whose letters appear in order in the name (an ambiguous pattern narrows
the list and asks again); an empty answer picks the first entry.

### Shell completions

```sh
cctx --completions bash > ~/.local/share/bash-completion/completions/cctx
cctx --completions zsh  > "${fpath[1]}/_cctx"
cctx --completions fish > ~/.config/fish/completions/cctx.fish
cctx --completions elvish
cctx --completions powershell
```

The bash, zsh and fish scripts include the names of your existing user-level
contexts, so regenerate them after adding or renaming contexts. The elvish and
powershell scripts complete option names only.

## Library use

`cctx.context.ContextManager` does the work behind the command. It takes a
`SettingsLevel` (`USER`, `PROJECT` or `LOCAL`) and optional home and working
directories, and raises `ContextError` when an operation cannot be done:

```python
from cctx.context import ContextManager, SettingsLevel

manager = ContextManager(SettingsLevel.USER, home_dir="/tmp/home")
manager.create_context("work")
manager.switch_context("work")
print(manager.list_contexts(), manager.get_current_context())
```

`cctx.completions.render_completions(shell, contexts)` returns a completion
script as a string.