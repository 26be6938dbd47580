"""
clicraft command-line parser: split one command level's tokens into flags and
positional arguments.

Rules (applied token by token)
1. flag-like token
   • a pending boolean flag is recorded as true (implicit value)
   • a pending non-boolean flag fails with NoFlagValueProvidedError
   • the token is resolved against the registry (NoFlagsAddedToCommandError when
     the level has no flags, FlagNotFoundError when unknown) and becomes pending
2. literal token while a flag is pending
   • boolean flag: "true"/"false" is consumed as its value; any other literal makes
     the flag implicitly true and the literal becomes a positional argument, which
     at a branching level also ends the scan (the literal is the subcommand name)
   • other flags: the literal is converted and recorded
3. literal token with nothing pending: positional argument; at a branching level the
   scan ends right after it

At the end of the input a pending boolean is true and any other pending flag fails
with NoFlagValueProvidedError.

The parser reads from a shared Arguments cursor; tokens after the subcommand name
stay on the cursor for the next level.
"""
from .arguments import Arguments
from .faults import (
    Diagnostics,
    FlagNotFound,
    NoFlagValueProvided,
    NoFlagsAddedToCommand,
)
from .flags import Flags, FlagType, ParsedFlags
from .utils import Unset


class CommandLineParser:
    """
    Parser bound to one cursor and one flag registry (None when the level has no flags).
    """

    def __init__(self, arguments, flags=None, /):
        if not isinstance(arguments, Arguments):
            raise TypeError("command-line-parser 'arguments' must be an arguments cursor")
        if flags is not None and not isinstance(flags, Flags):
            raise TypeError("command-line-parser 'flags' must be a flags registry")
        self._arguments = arguments
        self._flags = flags

    def _resolve(self, token, diagnostics):
        if not self._flags:
            raise diagnostics.report_and_fail(NoFlagsAddedToCommand(flag=token))
        name = Flags.normalize(token)
        if (flag := self._flags.get(name)) is None:
            raise diagnostics.report_and_fail(FlagNotFound(flag_name=name))
        return flag

    def parse(self, has_subcommands=False, /, *, diagnostics=Unset):
        """
        Consume tokens and return (ParsedFlags, positional arguments).
        """
        diagnostics = Diagnostics() if diagnostics is Unset else diagnostics
        parsed = ParsedFlags()
        positionals = []
        pending = None

        for token in self._arguments:
            if Flags.looks_like_flag(token):
                if pending is not None:
                    if pending.type is not FlagType.BOOLEAN:
                        raise diagnostics.report_and_fail(NoFlagValueProvided(flag_name=pending.name))
                    parsed.add(pending.name, True)
                pending = self._resolve(token, diagnostics)
                continue

            if pending is not None:
                flag, pending = pending, None
                if flag.type is FlagType.BOOLEAN and token not in ("true", "false"):
                    parsed.add(flag.name, True)
                    positionals.append(token)
                    if has_subcommands:
                        break
                    continue
                parsed.add(flag.name, flag.convert(token, diagnostics=diagnostics))
                continue

            positionals.append(token)
            if has_subcommands:
                break

        if pending is not None:
            if pending.type is not FlagType.BOOLEAN:
                raise diagnostics.report_and_fail(NoFlagValueProvided(flag_name=pending.name))
            parsed.add(pending.name, True)

        return parsed, positionals


__all__ = (
    "CommandLineParser",
)
