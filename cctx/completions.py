"""Shell completion scripts that know the names of the stored contexts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from cctx.context import ContextManager


class Shell(Enum):
    """Shells that completion scripts can be generated for."""

    BASH = "bash"
    ELVISH = "elvish"
    FISH = "fish"
    POWERSHELL = "powershell"
    ZSH = "zsh"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class _Option:
    """One command-line option as the completion scripts describe it."""

    short: str | None
    long: str
    help: str
    takes_context: bool = False
    takes_shell: bool = False
    completed: bool = True
    completion_help: str | None = None

    @property
    def summary(self) -> str:
        return self.completion_help or self.help

    def flags(self) -> Iterator[str]:
        if self.short is not None:
            yield f"-{self.short}"
        yield f"--{self.long}"


_OPTIONS: tuple[_Option, ...] = (
    _Option("d", "delete", "Delete context mode", takes_context=True),
    _Option("c", "current", "Current context mode"),
    _Option("r", "rename", "Rename context mode"),
    _Option("n", "new", "Create new context from current settings"),
    _Option("e", "edit", "Edit context with $EDITOR", takes_context=True),
    _Option("s", "show", "Show context content", takes_context=True),
    _Option(None, "export", "Export context to stdout", takes_context=True),
    _Option(None, "import", "Import context from stdin"),
    _Option(
        "u",
        "unset",
        "Unset current context (removes settings file)",
        completion_help="Unset current context (removes ~/.claude/settings.json)",
    ),
    _Option(None, "completions", "Generate shell completions", takes_shell=True),
    _Option("q", "quiet", "Show only current context (no highlighting when listing)"),
    _Option(
        None,
        "in-project",
        "Manage project-level contexts (./.claude/settings.json)",
        completed=False,
    ),
    _Option(
        None,
        "local",
        "Manage local project contexts (./.claude/settings.local.json)",
        completed=False,
    ),
    _Option("h", "help", "Print help"),
    _Option("V", "version", "Print version"),
)

_PROGRAM = "cctx"


def _completed() -> list[_Option]:
    return [option for option in _OPTIONS if option.completed]


def _shell_names() -> str:
    return " ".join(shell.value for shell in Shell)


def _flags() -> Iterable[tuple[str, str]]:
    for option in _OPTIONS:
        for flag in option.flags():
            yield flag, option.help


def _indented(depth: int, *lines: str) -> list[str]:
    pad = "    " * depth
    return [pad + line if line else line for line in lines]


def _render_bash(contexts: list[str]) -> str:
    context_list = " ".join(contexts)
    options = _completed()
    shorts = [f"-{o.short}" for o in options if o.short]
    longs = [f"--{o.long}" for o in options]
    opts = " ".join(shorts + longs)
    context_flags = "|".join(
        flag for o in options if o.takes_context for flag in o.flags()
    )
    shell_flags = "|".join(f"--{o.long}" for o in options if o.takes_shell)

    def reply(words: str) -> str:
        return f'COMPREPLY=($(compgen -W "{words}" -- "${{cur}}"))'

    def arm(pattern: str, words: str) -> list[str]:
        return _indented(4, f"{pattern})", f"    {reply(words)}", "    return 0", "    ;;")

    fn = f"_{_PROGRAM}"
    version = '"${BASH_VERSINFO[0]}"'
    lines = [f"{fn}() {{"]
    lines += _indented(
        1,
        "local i cur prev opts cmd",
        "COMPREPLY=()",
        f"if [[ {version} -ge 4 ]]; then",
        '    cur="$2"',
        "else",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        "fi",
        'prev="$3"',
        'cmd=""',
        'opts=""',
        "",
        'for i in "${COMP_WORDS[@]:0:COMP_CWORD}"',
        "do",
        '    case "${cmd},${i}" in',
        '        ",$1")',
        f'            cmd="{_PROGRAM}"',
        "            ;;",
        "        *)",
        "            ;;",
        "    esac",
        "done",
        "",
        'case "${cmd}" in',
        f"    {_PROGRAM})",
    )
    lines += _indented(
        3,
        f'opts="{opts}"',
        'if [[ ${cur} == -* || ${COMP_CWORD} -eq 1 ]] ; then',
        f'    {reply("${opts}")}',
        "    return 0",
        "fi",
        'case "${prev}" in',
    )
    lines += arm(shell_flags, _shell_names())
    lines += arm(context_flags, context_list)
    lines += arm("*", f"{context_list} ${{opts}}")
    lines += _indented(3, "esac", "    ;;")
    lines += _indented(1, "esac")
    lines.append("}")
    lines.append("")
    modern = (
        '"${BASH_VERSINFO[0]}" -eq 4 && "${BASH_VERSINFO[1]}" -ge 4 '
        '|| "${BASH_VERSINFO[0]}" -gt 4'
    )
    lines.append(f"if [[ {modern} ]]; then")
    lines.append(f"    complete -F {fn} -o nosort -o bashdefault -o default {_PROGRAM}")
    lines.append("else")
    lines.append(f"    complete -F {fn} -o bashdefault -o default {_PROGRAM}")
    lines.append("fi")
    return "\n".join(lines)


def _render_fish(contexts: list[str]) -> str:
    context_list = " ".join(contexts)
    options = _completed()
    lines: list[str] = []
    for option in options:
        if option.takes_shell:
            choices = "\n".join(f"{shell.value}\t''" for shell in Shell)
            lines.append(
                f"complete -c {_PROGRAM} -l {option.long} -d '{option.summary}'"
                f' -r -f -a "{choices}"'
            )
    context_shorts = [f"-{o.short}" for o in options if o.takes_context and o.short]
    context_longs = [f"--{o.long}" for o in options if o.takes_context]
    for flag in context_shorts + context_longs:
        lines.append(
            f"complete -c {_PROGRAM} {flag} -d 'Context name' -r -f -a \"{context_list}\""
        )
    for option in options:
        if option.takes_shell:
            continue
        parts = [f"complete -c {_PROGRAM}"]
        if option.short:
            parts.append(f"-s {option.short}")
        parts.append(f"-l {option.long}")
        parts.append(f"-d '{option.summary}'")
        lines.append(" ".join(parts))
    if contexts:
        lines.append(f'complete -c {_PROGRAM} -f -a "{context_list}"')
    return "\n".join(lines)


def _render_zsh(contexts: list[str]) -> str:
    fn = f"_{_PROGRAM}"
    contexts_fn = f"{fn}_contexts"
    options = _completed()

    specs: list[str] = []
    for option in options:
        if option.takes_shell:
            specs.append(
                f"'--{option.long}=[{option.summary}]:"
                f"{option.long.upper()}:({_shell_names()})'"
            )
    for option in options:
        if option.takes_shell:
            continue
        text = option.summary.replace("$", "\\$")
        suffix = f":context:{contexts_fn}" if option.takes_context else ""
        specs.extend(f"'{flag}[{text}]{suffix}'" for flag in option.flags())
    specs.append(f"'::context:{contexts_fn}'")

    if contexts:
        quoted = " ".join(f"'{c}'" for c in contexts)
        body = f"local contexts=({quoted})\n    _describe 'contexts' contexts"
    else:
        body = ""

    lines = [f"#compdef {_PROGRAM}", "", "autoload -U is-at-least", "", f"{fn}() {{"]
    lines += _indented(
        1,
        "typeset -A opt_args",
        "typeset -a _arguments_options",
        "local ret=1",
        "",
        "if is-at-least 5.2; then",
        "    _arguments_options=(-s -S -C)",
        "else",
        "    _arguments_options=(-s -C)",
        "fi",
        "",
        'local context curcontext="$curcontext" state line',
        '_arguments "${_arguments_options[@]}" : \\',
    )
    lines += [f"{spec} \\" for spec in specs]
    lines.append("&& ret=0")
    lines.append("}")
    lines.append("")
    lines.append(f"{contexts_fn}() {{")
    lines.append(f"    {body}")
    lines.append("}")
    lines.append("")
    lines.append(f"(( $+functions[{fn}_commands] )) ||")
    lines.append(f"{fn}_commands() {{")
    lines.append("    local commands; commands=()")
    lines.append(f"    _describe -t commands '{_PROGRAM} commands' commands \"$@\"")
    lines.append("}")
    lines.append("")
    lines.append(f'if [ "$funcstack[1]" = "{fn}" ]; then')
    lines.append(f'    {fn} "$@"')
    lines.append("else")
    lines.append(f"    compdef {fn} {_PROGRAM}")
    lines.append("fi")
    return "\n".join(lines)


def _render_elvish() -> str:
    lines = [
        "use builtin;",
        "use str;",
        "",
        f"set edit:completion:arg-completer[{_PROGRAM}] = {{|@words|",
        "    fn cand {|text desc|",
        "        edit:complex-candidate $text &display=$text' '$desc",
        "    }",
    ]
    lines.extend(f"    cand {flag} '{desc.replace(chr(39), chr(39) * 2)}'" for flag, desc in _flags())
    lines.append("}")
    return "\n".join(lines)


def _render_powershell() -> str:
    lines = [
        "using namespace System.Management.Automation",
        "using namespace System.Management.Automation.Language",
        "",
        f"Register-ArgumentCompleter -Native -CommandName '{_PROGRAM}' -ScriptBlock {{",
        "    param($wordToComplete, $commandAst, $cursorPosition)",
        "    $completions = @(",
    ]
    for flag, desc in _flags():
        escaped = desc.replace("'", "''")
        lines.append(
            f"        [CompletionResult]::new('{flag}', '{flag}', "
            f"[CompletionResultType]::ParameterName, '{escaped}')"
        )
    lines.extend(
        [
            "    )",
            '    $completions.Where{ $_.CompletionText -like "$wordToComplete*" } |',
            "        Sort-Object -Property ListItemText",
            "}",
        ]
    )
    return "\n".join(lines)


def render_completions(shell: Shell | str, contexts: Iterable[str]) -> str:
    """Return the completion script for ``shell`` offering ``contexts``."""
    shell = Shell(shell)
    names = list(contexts)
    if shell is Shell.BASH:
        return _render_bash(names)
    if shell is Shell.FISH:
        return _render_fish(names)
    if shell is Shell.ZSH:
        return _render_zsh(names)
    if shell is Shell.ELVISH:
        return _render_elvish()
    return _render_powershell()


def print_enhanced_completions(shell: Shell | str, manager: ContextManager | None = None) -> None:
    """Print the completion script for ``shell`` using the user-level contexts."""
    if manager is None:
        manager = ContextManager()
    print(render_completions(shell, manager.list_contexts()))