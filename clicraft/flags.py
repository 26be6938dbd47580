"""
clicraft flags: typed switches, per-command registries and parsed values.

Scope
- FlagType: the closed set of value types (boolean, int64, string) and their
  token conversion rules.
- Flag: one declared switch (long name, optional single-character short name,
  description, type, default, persistence).
- Flags: the registry of one command level. Names and short names are unique;
  lookups accept a long name or, for single-character tokens, a short name.
- ParsedFlag / ParsedFlags: the values collected by one parse, handed to the
  command handler read-only.

Token grammar
- "-x"  → flag-like (exactly one dash and one non-dash character)
- "--x…" → flag-like (two dashes and at least one more character)
- anything else is a literal (positional argument or flag value)

Conversion rules
- boolean: exactly "true" or "false" (case-sensitive)
- int64: optional sign followed by ASCII digits, within the signed 64-bit range
- string: the token verbatim

Notes
- Persistent flags declared on a parent command are merged into every descendant
  level at execution time; local flags stay on the command that declares them.
- Flag values are plain Python values: bool, int and str.
"""
import re
from enum import Enum
from typing import NamedTuple

from .faults import (
    Diagnostics,
    FlagNameAlreadyExists,
    FlagShortNameAlreadyExists,
    FlagShortNameMergeConflict,
    FlagConflictSameLongNameDifferentShortName,
    FlagConflictSameShortNameDifferentLongName,
    FlagConflictMissingShortName,
    FlagNotFound,
    FlagTypeMismatch,
    InvalidBoolean,
    InvalidInteger,
)
from .utils import Unset, coalesce, mirror

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

HELP = "help"


def _diagnostics(diagnostics):
    if diagnostics is Unset:
        return Diagnostics()
    if not isinstance(diagnostics, Diagnostics):
        raise TypeError("'diagnostics' must be a diagnostics recorder")
    return diagnostics


class FlagType(Enum):
    BOOLEAN = "boolean"
    INT64 = "int64"
    STRING = "string"

    def __str__(self):
        return self.value

    @classmethod
    def infer(cls, value, /):
        """
        Return the flag type of a Python default value.
        """
        match value:
            case bool():
                return cls.BOOLEAN
            case int():
                return cls.INT64
            case str():
                return cls.STRING
        raise TypeError(f"flag default must be a bool, an int or a str, not {type(value).__name__!r}")

    def accepts(self, value, /):
        match self:
            case FlagType.BOOLEAN:
                return isinstance(value, bool)
            case FlagType.INT64:
                return type(value) is int and INT64_MIN <= value <= INT64_MAX
            case FlagType.STRING:
                return isinstance(value, str)


class Flag:
    """
    A declared command-line switch.

    Parameters
    - name: long name without dashes (e.g. "verbose" for "--verbose").
    - descr: one-line description used by help.
    - short: optional single character (e.g. "v" for "-v").
    - type: FlagType; inferred from `default` when omitted, boolean when both are omitted.
    - default: value recorded when the flag is absent from the command line.
    - persistent: when True, descendant commands inherit the flag.
    """
    name = mirror("name")
    short_name = mirror("short_name")
    descr = mirror("descr")
    type = mirror("type")
    default = mirror("default")
    persistent = mirror("persistent")

    def __init__(self, name, /, descr=Unset, *, short=Unset, type=Unset, default=Unset, persistent=False):
        if not isinstance(name, str):
            raise TypeError("flag 'name' must be a string")
        if not re.fullmatch(r"[^\s-]\S*", name):
            raise ValueError(f"flag 'name' must be a non-empty word without leading dashes, got {name!r}")
        if not isinstance(descr, str | Unset):
            raise TypeError("flag 'descr' must be a string")
        if not isinstance(short, str | Unset):
            raise TypeError("flag 'short' must be a string")
        if short is not Unset and not re.fullmatch(r"[^\s-]", short):
            raise ValueError(f"flag 'short' must be a single non-dash character, got {short!r}")
        if not isinstance(type, FlagType | Unset):
            raise TypeError("flag 'type' must be a flag-type")
        if not isinstance(persistent, bool):
            raise TypeError("flag 'persistent' must be a boolean")

        if type is Unset:
            type = FlagType.BOOLEAN if default is Unset else FlagType.infer(default)
        if default is not Unset and not type.accepts(default):
            raise TypeError(f"flag {name!r} default {default!r} is not a valid {type} value")

        self._name = name
        self._short_name = coalesce(short)
        self._descr = coalesce(descr, "")
        self._type = type
        self._default = default
        self._persistent = persistent

    @property
    def has_default(self):
        return self._default is not Unset

    def convert(self, value, /, *, diagnostics=Unset):
        """
        Convert a raw token into a value of this flag's type.

        Raises InvalidBooleanError / InvalidIntegerError (recorded in `diagnostics`)
        when the token is not a literal of the flag's type.
        """
        if not isinstance(value, str):
            raise TypeError("flag value must be a string")
        match self._type:
            case FlagType.BOOLEAN:
                if value == "true":
                    return True
                if value == "false":
                    return False
                raise _diagnostics(diagnostics).report_and_fail(InvalidBoolean(value=value, flag_name=self._name))
            case FlagType.INT64:
                if re.fullmatch(r"[+-]?[0-9]+", value) and INT64_MIN <= (number := int(value)) <= INT64_MAX:
                    return number
                raise _diagnostics(diagnostics).report_and_fail(InvalidInteger(value=value, flag_name=self._name))
            case FlagType.STRING:
                return value

    def __repr__(self):
        fields = [repr(self._name), f"type={self._type}"]
        if self._short_name is not None:
            fields.append(f"short={self._short_name!r}")
        if self._default is not Unset:
            fields.append(f"default={self._default!r}")
        if self._persistent:
            fields.append("persistent=True")
        return f"Flag({", ".join(fields)})"


class Flags:
    """
    Registry of the flags available at one command level.

    Invariants
    - every flag name is unique
    - every short name is unique and resolves to exactly one flag
    - iteration follows registration order
    """

    def __init__(self, flags=(), /):
        self._flags = {}
        self._shorts = {}
        for flag in flags:
            self.add(flag)

    @staticmethod
    def looks_like_flag(token, /):
        """
        Return True when `token` has the shape of a flag ("-x" or "--xyz").
        """
        if len(token) == 2:
            return token[0] == "-" and token[1] != "-"
        return len(token) > 2 and token.startswith("--")

    @staticmethod
    def normalize(token, /):
        """
        Strip the leading dashes of a flag-like token ("--verbose" → "verbose").
        """
        return token[2:] if token.startswith("--") else token[1:]

    def add(self, flag, /, *, diagnostics=Unset):
        """
        Register `flag`, rejecting duplicated names and short names.
        """
        if not isinstance(flag, Flag):
            raise TypeError("flags can only register flag instances")
        if flag.name in self._flags:
            raise _diagnostics(diagnostics).report_and_fail(FlagNameAlreadyExists(flag_name=flag.name))
        if flag.short_name is not None and flag.short_name in self._shorts:
            raise _diagnostics(diagnostics).report_and_fail(FlagShortNameAlreadyExists(
                short_name=flag.short_name,
                existing_flag_name=self._shorts[flag.short_name],
            ))
        self._flags[flag.name] = flag
        if flag.short_name is not None:
            self._shorts[flag.short_name] = flag.name

    def add_help(self, *, diagnostics=Unset):
        self.add(Flag(HELP, "show help for command", short="h", persistent=True), diagnostics=diagnostics)

    def get(self, name, /):
        """
        Resolve a normalized token: exact long name first, then (single-character
        tokens only) a short name. Returns None when nothing matches.
        """
        try:
            return self._flags[name]
        except KeyError:
            pass
        if len(name) == 1 and name in self._shorts:
            return self._flags[self._shorts[name]]
        return None

    def convert(self, flag, value, /, *, diagnostics=Unset):
        return flag.convert(value, diagnostics=diagnostics)

    def add_defaults_to(self, parsed, /):
        """
        Record each flag's default in `parsed` unless the flag was already given.
        """
        for flag in self._flags.values():
            if flag.has_default and flag.name not in parsed:
                parsed.add(flag.name, flag.default)

    def merge_from(self, other, /, *, diagnostics=Unset):
        """
        Add the flags of `other` whose names are not registered here yet.

        Same-name flags keep the local declaration. A short name already taken by
        a different local flag is a FlagShortNameMergeConflictError, except for the
        help flag, which is merged without its short name.
        """
        for flag in other:
            if flag.name in self._flags:
                continue
            if flag.name == HELP and flag.short_name in self._shorts:
                flag = Flag(HELP, flag.descr, type=flag.type, persistent=flag.persistent)
            if flag.short_name is not None and flag.short_name in self._shorts:
                raise _diagnostics(diagnostics).report_and_fail(FlagShortNameMergeConflict(
                    short_name=flag.short_name,
                    existing_flag_name=self._shorts[flag.short_name],
                    incoming_flag_name=flag.name,
                ))
            self.add(flag, diagnostics=diagnostics)

    def persistent(self):
        return Flags(flag for flag in self._flags.values() if flag.persistent)

    def copy(self):
        return Flags(self._flags.values())

    def conflict_with(self, other, /, command, subcommand):
        """
        Compare these (parent, persistent) flags with the local flags of a subcommand.

        Returns the first conflict record found or None:
        - same long name with a different short name
        - same short name with a different long name
        - same long name redeclared without the parent's short name
        """
        for flag in self._flags.values():
            context = {
                "command": command,
                "subcommand": subcommand,
                "flag_name": flag.name,
                "short_name": flag.short_name,
            }
            if (child := other._flags.get(flag.name)) is not None:
                if flag.short_name is not None and child.short_name is None:
                    return FlagConflictMissingShortName(
                        **context,
                        conflicting_flag_name=child.name,
                        conflicting_short_name=None,
                    )
                if child.short_name != flag.short_name:
                    return FlagConflictSameLongNameDifferentShortName(
                        **context,
                        conflicting_flag_name=child.name,
                        conflicting_short_name=child.short_name,
                    )
            if flag.short_name is not None and (name := other._shorts.get(flag.short_name)) not in (None, flag.name):
                return FlagConflictSameShortNameDifferentLongName(
                    **context,
                    conflicting_flag_name=name,
                    conflicting_short_name=flag.short_name,
                )
        return None

    def __contains__(self, name, /):
        return name in self._flags

    def __iter__(self):
        return iter(self._flags.values())

    def __len__(self):
        return len(self._flags)

    def __bool__(self):
        return bool(self._flags)

    def __repr__(self):
        return f"Flags({list(self._flags.values())!r})"


class ParsedFlag(NamedTuple):
    name: str
    value: bool | int | str


class ParsedFlags:
    """
    Flag values collected while parsing a command line.

    Handlers receive a frozen instance: reads work as usual, writes raise TypeError.
    Typed getters (boolean/integer/string) fail with FlagNotFoundError or
    FlagTypeMismatchError so handlers never see a value of an unexpected type.
    """

    def __init__(self, flags=(), /):
        self._flags = {}
        self._frozen = False
        for name, value in flags:
            self.add(name, value)

    @property
    def frozen(self):
        return self._frozen

    def freeze(self):
        self._frozen = True
        return self

    def add(self, name, value, /):
        """
        Record `value` for `name`; a later value for the same flag wins.
        """
        if self._frozen:
            raise TypeError("parsed flags are read-only")
        if not isinstance(name, str):
            raise TypeError("parsed flag name must be a string")
        if not isinstance(value, bool | int | str):
            raise TypeError("parsed flag value must be a bool, an int or a str")
        self._flags[name] = ParsedFlag(name, value)

    def merge_from(self, other, /):
        """
        Copy the flags of `other` that are not present here.
        """
        for flag in other:
            if flag.name not in self._flags:
                self.add(flag.name, flag.value)

    def select(self, registry, /):
        """
        New ParsedFlags holding only the values of flags declared in `registry`.
        """
        return ParsedFlags((flag.name, flag.value) for flag in self if flag.name in registry)

    def contains_help(self):
        return self.get(HELP) is True

    def get(self, name, default=None, /):
        try:
            return self._flags[name].value
        except KeyError:
            return default

    def _typed(self, name, type, diagnostics):
        try:
            value = self._flags[name].value
        except KeyError:
            raise _diagnostics(diagnostics).report_and_fail(FlagNotFound(flag_name=name)) from None
        if not type.accepts(value):
            raise _diagnostics(diagnostics).report_and_fail(FlagTypeMismatch(
                flag_name=name,
                expected_type=str(type),
                value=value,
            ))
        return value

    def boolean(self, name, /, *, diagnostics=Unset):
        return self._typed(name, FlagType.BOOLEAN, diagnostics)

    def integer(self, name, /, *, diagnostics=Unset):
        return self._typed(name, FlagType.INT64, diagnostics)

    def string(self, name, /, *, diagnostics=Unset):
        return self._typed(name, FlagType.STRING, diagnostics)

    def as_dict(self):
        return {flag.name: flag.value for flag in self._flags.values()}

    def __getitem__(self, name, /):
        return self._flags[name].value

    def __contains__(self, name, /):
        return name in self._flags

    def __iter__(self):
        return iter(self._flags.values())

    def __len__(self):
        return len(self._flags)

    def __repr__(self):
        return f"ParsedFlags({self.as_dict()!r})"


__all__ = (
    "FlagType",
    "Flag",
    "Flags",
    "ParsedFlag",
    "ParsedFlags",
)
