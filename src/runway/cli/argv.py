"""
Argv preprocessor for forgiving CLI flag and command handling.

Normalizes sys.argv before Typer parses it, handling common user patterns:
- ``runway --version`` → ``runway version``
- ``runway help run`` → ``runway run --help``
- ``runway run --debug`` → ``runway --debug run``
- ``runway run app.sc -- a b`` → ``runway run app.sc --arg=a --arg=b``
- ``runway test . -- a b`` is left as is: the tokens are more inputs
"""

_GLOBAL_FLAGS = {"--debug"}

PROGRAM_ARGS_SEPARATOR = "--"
PROGRAM_ARG_OPTION = "--arg"

# Commands that pass the tokens after ``--`` to the program
_PROGRAM_ARG_COMMANDS = {"run"}


def preprocess_argv(argv: list[str]) -> list[str]:
    """Normalize CLI arguments for Typer compatibility.

    Applied rules (in order):
    1. ``--version`` / ``-V`` as first arg → ``version`` subcommand
    2. ``help`` pseudo-command → ``--help`` appended to subcommands
    3. For ``run``, everything after ``--`` becomes program arguments;
       other commands keep ``--`` and read the tokens as positional inputs
    4. Global flags hoisted before the subcommand
    """
    if not argv:
        return argv

    if argv[0] in ("--version", "-V"):
        return ["version"]

    if argv[0] == "help":
        return _rewrite_help(argv[1:])

    own, program_args = split_program_args(argv)
    own = _hoist_global_flags(own)
    if not program_args:
        return own
    if _subcommand(own) in _PROGRAM_ARG_COMMANDS:
        return [*own, *(f"{PROGRAM_ARG_OPTION}={arg}" for arg in program_args)]
    return [*own, PROGRAM_ARGS_SEPARATOR, *program_args]


def split_program_args(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first ``--`` into runway's own and the program's."""
    if PROGRAM_ARGS_SEPARATOR not in argv:
        return list(argv), []
    index = argv.index(PROGRAM_ARGS_SEPARATOR)
    return argv[:index], argv[index + 1 :]


def _subcommand(argv: list[str]) -> str | None:
    return next((token for token in argv if not token.startswith("-")), None)


def _rewrite_help(rest: list[str]) -> list[str]:
    """Rewrite ``help [subcmd]`` into ``[subcmd] --help``."""
    subcmds: list[str] = []
    for token in rest:
        if token.startswith("-") or token == "help":
            continue
        subcmds.append(token)
        break
    return [*subcmds, "--help"]


def _hoist_global_flags(argv: list[str]) -> list[str]:
    """Move global flags (e.g. ``--debug``) before the subcommand."""
    hoisted: list[str] = []
    rest: list[str] = []
    seen: set[str] = set()
    for token in argv:
        if token in _GLOBAL_FLAGS:
            if token not in seen:
                hoisted.append(token)
                seen.add(token)
        else:
            rest.append(token)
    return [*hoisted, *rest]
