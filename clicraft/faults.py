"""
clicraft faults (errors, warnings, diagnostics) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (command tree, flags, arguments, delegated, warnings).
- CommandException / CommandWarning: base types that carry a message plus options
  and know how to render themselves through rich.
- Diagnostic records: one class per failure mode, each carrying exactly the context
  fields needed to explain it (names, counts, values), a title, a message template
  and a hint. Every record maps 1:1 to an exception type.
- Diagnostics: single-slot recorder. report_and_fail() stores the record (last write
  wins) and returns the mapped exception for the caller to raise; log() renders the
  stored record to an OutputStream.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).

Integration
- Builders, the parser and the dispatcher do `raise diagnostics.report_and_fail(...)`.
  The exception keeps a reference to its record (exception.diagnostic) so callers
  that only see the exception still get the structured context.
- In shell mode the application logs the record and exits with status 1; otherwise the
  typed exception propagates to the host.

Customisation
- __codes__ in __main__ remaps numeric codes to labels (see FaultCode.normalize).
- __styles__ in __main__ overrides palette entries used when colorful=True.
- __prog__ in __main__ overrides the program name shown in headers.
"""
import copy
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .streams import OutputStream
from .utils import Unset, mirror, pluralize


class FaultCode(IntEnum):
    """
    canonical fault codes used across the framework (stable identifiers).

    grouping (by high-level domain)
    - command tree (1110x)
      • registration, attachment, freezing and routing faults
    - flags (1111x/1112x)
      • registry collisions, lookups, conversions and missing values
    - arguments (1113x)
      • one code per argument specification mismatch, plus invalid ranges
    - delegated errors (11141)
      • exceptions escaping a command handler
    - warnings (12xxx)
      • deprecations
    """
    # --- command tree errors (1110x) ---
    COMMAND_NAME_ALREADY_EXISTS            = 11101
    COMMAND_ALIAS_ALREADY_EXISTS           = 11102
    COMMAND_HAS_A_PARENT                   = 11103
    SUBCOMMAND_ADDED_TO_EXECUTABLE         = 11104
    SUBCOMMAND_NAME_SAME_AS_PARENT         = 11105
    COMMAND_ALREADY_FROZEN                 = 11106
    MISSING_COMMAND_NAME_TO_EXECUTE        = 11107
    COMMAND_NOT_ADDED                      = 11108
    SUBCOMMAND_NOT_ADDED_TO_PARENT_COMMAND = 11109

    # --- flag errors (1111x/1112x) ---
    FLAG_NAME_ALREADY_EXISTS               = 11111
    FLAG_SHORT_NAME_ALREADY_EXISTS         = 11112
    FLAG_SHORT_NAME_MERGE_CONFLICT         = 11113
    FLAG_CONFLICT                          = 11114
    FLAG_NOT_FOUND                         = 11115
    FLAG_TYPE_MISMATCH                     = 11116
    INVALID_BOOLEAN                        = 11117
    INVALID_INTEGER                        = 11118
    NO_FLAG_VALUE_PROVIDED                 = 11119
    NO_FLAGS_ADDED_TO_COMMAND              = 11121

    # --- argument errors (1113x) ---
    ARGUMENTS_NOT_EQUAL_TO_ZERO            = 11131
    ARGUMENTS_LESS_THAN_MINIMUM            = 11132
    ARGUMENTS_GREATER_THAN_MAXIMUM         = 11133
    ARGUMENTS_NOT_MATCHING_EXPECTED        = 11134
    ARGUMENTS_NOT_IN_END_EXCLUSIVE_RANGE   = 11135
    ARGUMENTS_NOT_IN_END_INCLUSIVE_RANGE   = 11136
    INVALID_RANGE                          = 11137

    # --- delegated errors (1114x) ---
    DELEGATED_ERROR                        = 11141

    # --- warnings (12xxx) ---
    DEPRECATED_COMMAND                     = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, kind):
    """
    Build the rich renderable shared by exceptions and warnings.

    Layout: "[ prog — code | title ]", then the message, then "→ hint".
    With fancy=True the message and hint are wrapped in a Panel titled by the header.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = getattr(main, "__prog__", options.get("prog", "clicraft"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", "code"),
        " | ",
        text(str(options.get("title", kind)).title(), f"{kind}-title"),
        " ]"
    )
    renders = [text(fault.message, f"{kind}-message")]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class CommandException(Exception):
    """
    base class for every error raised by the framework.

    options (read-only mapping)
    - diagnostic: the record that produced this exception (see Diagnostic)
    - code, title, hint: rendering metadata
    - prog, shell, fancy, colorful, stream: runtime options used by __rich__/__trigger__
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def diagnostic(self):
        return self.options.get("diagnostic")

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error")

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        stream = self.options.get("stream") or OutputStream()
        stream.print_error(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class FlagException(CommandException): ...
class FlagNameAlreadyExistsError(FlagException): ...
class FlagShortNameAlreadyExistsError(FlagException): ...
class FlagShortNameMergeConflictError(FlagException): ...
class FlagConflictError(FlagException): ...
class FlagNotFoundError(FlagException): ...
class FlagTypeMismatchError(FlagException): ...
class InvalidBooleanError(FlagException): ...
class InvalidIntegerError(FlagException): ...
class NoFlagValueProvidedError(FlagException): ...
class NoFlagsAddedToCommandError(FlagException): ...

class CommandTreeException(CommandException): ...
class CommandNameAlreadyExistsError(CommandTreeException): ...
class CommandAliasAlreadyExistsError(CommandTreeException): ...
class CommandHasAParentError(CommandTreeException): ...
class SubCommandAddedToExecutableError(CommandTreeException): ...
class SubCommandNameSameAsParentError(CommandTreeException): ...
class CommandAlreadyFrozenError(CommandTreeException): ...
class MissingCommandNameToExecuteError(CommandTreeException): ...
class CommandNotAddedError(CommandTreeException): ...
class SubcommandNotAddedToParentCommandError(CommandTreeException): ...

class ArgumentException(CommandException): ...
class ArgumentsNotEqualToZeroError(ArgumentException): ...
class ArgumentsLessThanMinimumError(ArgumentException): ...
class ArgumentsGreaterThanMaximumError(ArgumentException): ...
class ArgumentsNotMatchingExpectedError(ArgumentException): ...
class ArgumentsNotInEndExclusiveRangeError(ArgumentException): ...
class ArgumentsNotInEndInclusiveRangeError(ArgumentException): ...
class InvalidRangeError(ArgumentException): ...

class DelegatedCommandError(CommandException): ...


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=3)
        stream = self.options.get("stream") or OutputStream()
        stream.print_error(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DeprecatedCommandWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - errors: raised unless shell=True, in which case they are printed to the
      stream's error console and the process exits with status 1.
    - warnings: emitted through the warnings module unless shell=True, in which
      case they are printed and execution continues.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


class Diagnostic:
    """
    structured context of a single failure.

    subclasses declare
    - __fields__: names of the context fields (all required, keyword-only)
    - __fault__: exception type this record maps to
    - code / title: FaultCode and short title for the rendered header
    - template: %-style message template interpolated with the context
    - advice: %-style hint template (optional)

    every field is published as a read-only attribute (see mirror()).
    """
    __fields__ = ()
    __fault__ = CommandException

    code = None
    title = "error"
    template = ""
    advice = ""

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        for field in cls.__fields__:
            setattr(cls, field, mirror(field))

    def __init__(self, /, **context):
        fields = type(self).__fields__
        if missing := [field for field in fields if field not in context]:
            raise TypeError(f"{type(self).__name__} missing context field(s): {", ".join(missing)}")
        if unknown := [field for field in context if field not in fields]:
            raise TypeError(f"{type(self).__name__} got unexpected context field(s): {", ".join(unknown)}")
        for field in fields:
            setattr(self, "_" + field, context[field])

    @property
    def context(self):
        return MappingProxyType({field: getattr(self, field) for field in type(self).__fields__})

    def message(self):
        return self.template % self.context

    def hint(self):
        return self.advice % self.context if self.advice else ""

    def exception(self, /, **options):
        """
        build the exception mapped from this record.

        extra options (prog, shell, fancy, colorful, stream) are passed through to the
        exception so it can render itself.
        """
        return self.__fault__(
            self.message(),
            diagnostic=self,
            code=self.code,
            title=self.title,
            hint=self.hint(),
            **options,
        )

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return dict(self.context) == dict(other.context)

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({", ".join(f"{key}={value!r}" for key, value in self.context.items())})"


def _did_you_mean(suggestions):
    match list(suggestions):
        case []:
            return ""
        case [suggestion]:
            return f"did you mean {suggestion!r}?"
        case [*suggestions]:
            return f"did you mean one of {", ".join(map(repr, suggestions))}?"


# --- flag records ---

class FlagNameAlreadyExists(Diagnostic):
    __fields__ = ("flag_name",)
    __fault__ = FlagNameAlreadyExistsError
    code = FaultCode.FLAG_NAME_ALREADY_EXISTS
    title = "duplicated flag"
    template = "flag name %(flag_name)r already exists"
    advice = "give every flag of a command a unique name"


class FlagShortNameAlreadyExists(Diagnostic):
    __fields__ = ("short_name", "existing_flag_name")
    __fault__ = FlagShortNameAlreadyExistsError
    code = FaultCode.FLAG_SHORT_NAME_ALREADY_EXISTS
    title = "duplicated short name"
    template = "flag short name %(short_name)r already exists for the flag %(existing_flag_name)r"
    advice = "pick another short name or drop it"


class FlagShortNameMergeConflict(Diagnostic):
    __fields__ = ("short_name", "existing_flag_name", "incoming_flag_name")
    __fault__ = FlagShortNameMergeConflictError
    code = FaultCode.FLAG_SHORT_NAME_MERGE_CONFLICT
    title = "short name clash"
    template = (
        "flag short name %(short_name)r of the inherited flag %(incoming_flag_name)r "
        "is already used by the flag %(existing_flag_name)r"
    )
    advice = "rename one of the short names so inherited flags stay reachable"


class FlagConflict(Diagnostic):
    __fields__ = ("command", "subcommand", "flag_name", "short_name", "conflicting_flag_name", "conflicting_short_name")
    __fault__ = FlagConflictError
    code = FaultCode.FLAG_CONFLICT
    title = "flag conflict"
    advice = "persistent flags of %(command)r must be redeclared identically by %(subcommand)r or not at all"


class FlagConflictSameLongNameDifferentShortName(FlagConflict):
    template = (
        "persistent flag %(flag_name)r of %(command)r has short name %(short_name)r "
        "but the subcommand %(subcommand)r declares it with %(conflicting_short_name)r"
    )


class FlagConflictSameShortNameDifferentLongName(FlagConflict):
    template = (
        "short name %(short_name)r belongs to the persistent flag %(flag_name)r of %(command)r "
        "but the subcommand %(subcommand)r uses it for %(conflicting_flag_name)r"
    )


class FlagConflictMissingShortName(FlagConflict):
    template = (
        "persistent flag %(flag_name)r of %(command)r has short name %(short_name)r "
        "but the subcommand %(subcommand)r redeclares it without one"
    )


class FlagNotFound(Diagnostic):
    __fields__ = ("flag_name",)
    __fault__ = FlagNotFoundError
    code = FaultCode.FLAG_NOT_FOUND
    title = "unknown flag"
    template = "flag %(flag_name)r not found"
    advice = "run with '--help' to list the available flags"


class FlagTypeMismatch(Diagnostic):
    __fields__ = ("flag_name", "expected_type", "value")
    __fault__ = FlagTypeMismatchError
    code = FaultCode.FLAG_TYPE_MISMATCH
    title = "flag type mismatch"
    template = "flag %(flag_name)r holds %(value)r which is not of type %(expected_type)s"
    advice = "read the flag with the getter matching its declared type"


class InvalidBoolean(Diagnostic):
    __fields__ = ("value", "flag_name")
    __fault__ = InvalidBooleanError
    code = FaultCode.INVALID_BOOLEAN
    title = "invalid boolean"
    template = "invalid boolean value %(value)r for flag %(flag_name)r"
    advice = "expected 'true' or 'false'"


class InvalidInteger(Diagnostic):
    __fields__ = ("value", "flag_name")
    __fault__ = InvalidIntegerError
    code = FaultCode.INVALID_INTEGER
    title = "invalid integer"
    template = "invalid integer value %(value)r for flag %(flag_name)r"
    advice = "expected a base-10 number within the signed 64-bit range"


class NoFlagValueProvided(Diagnostic):
    __fields__ = ("flag_name",)
    __fault__ = NoFlagValueProvidedError
    code = FaultCode.NO_FLAG_VALUE_PROVIDED
    title = "missing flag value"
    template = "no flag value was provided for the flag %(flag_name)r"
    advice = "pass the value right after the flag"


class NoFlagsAddedToCommand(Diagnostic):
    __fields__ = ("flag",)
    __fault__ = NoFlagsAddedToCommandError
    code = FaultCode.NO_FLAGS_ADDED_TO_COMMAND
    title = "unexpected flag"
    template = "no flags added to the command but found the flag %(flag)r"
    advice = "this command does not accept flags"


# --- command tree records ---

class CommandNameAlreadyExists(Diagnostic):
    __fields__ = ("command",)
    __fault__ = CommandNameAlreadyExistsError
    code = FaultCode.COMMAND_NAME_ALREADY_EXISTS
    title = "duplicated command"
    template = "command name %(command)r already exists"
    advice = "command names and aliases must be unique within the same parent"


class CommandAliasAlreadyExists(Diagnostic):
    __fields__ = ("alias", "existing_command")
    __fault__ = CommandAliasAlreadyExistsError
    code = FaultCode.COMMAND_ALIAS_ALREADY_EXISTS
    title = "duplicated alias"
    template = "command alias %(alias)r already exists for the command %(existing_command)r"
    advice = "command names and aliases must be unique within the same parent"


class CommandHasAParent(Diagnostic):
    __fields__ = ("command",)
    __fault__ = CommandHasAParentError
    code = FaultCode.COMMAND_HAS_A_PARENT
    title = "command has a parent"
    template = "command %(command)r is already a subcommand and cannot be added at the top level"
    advice = "add only the top-most parent command to the application"


class SubCommandAddedToExecutable(Diagnostic):
    __fields__ = ("command", "subcommand")
    __fault__ = SubCommandAddedToExecutableError
    code = FaultCode.SUBCOMMAND_ADDED_TO_EXECUTABLE
    title = "executable command"
    template = "subcommand %(subcommand)r cannot be added to the executable command %(command)r"
    advice = "declare %(command)r as a parent command (without a handler)"


class SubCommandNameSameAsParent(Diagnostic):
    __fields__ = ("command",)
    __fault__ = SubCommandNameSameAsParentError
    code = FaultCode.SUBCOMMAND_NAME_SAME_AS_PARENT
    title = "subcommand named after parent"
    template = "subcommand name %(command)r is the same as its parent command"
    advice = "give the subcommand a different name"


class CommandAlreadyFrozen(Diagnostic):
    __fields__ = ("command",)
    __fault__ = CommandAlreadyFrozenError
    code = FaultCode.COMMAND_ALREADY_FROZEN
    title = "frozen command"
    template = (
        "command %(command)r is already frozen and cannot be modified after being "
        "added as a subcommand or to the application"
    )
    advice = "finish configuring a command before attaching it"


class MissingCommandNameToExecute(Diagnostic):
    __fields__ = ()
    __fault__ = MissingCommandNameToExecuteError
    code = FaultCode.MISSING_COMMAND_NAME_TO_EXECUTE
    title = "missing command"
    template = "no command was provided to execute"
    advice = "run with '--help' to list the available commands"


class CommandNotAdded(Diagnostic):
    __fields__ = ("command", "suggestions")
    __fault__ = CommandNotAddedError
    code = FaultCode.COMMAND_NOT_ADDED
    title = "unknown command"
    template = "command %(command)r not found"

    def hint(self):
        return _did_you_mean(self.suggestions) or "run with '--help' to list the available commands"


class SubcommandNotAddedToParentCommand(Diagnostic):
    __fields__ = ("command", "subcommand", "suggestions")
    __fault__ = SubcommandNotAddedToParentCommandError
    code = FaultCode.SUBCOMMAND_NOT_ADDED_TO_PARENT_COMMAND
    title = "unknown subcommand"
    template = "subcommand %(subcommand)r not added to the parent command %(command)r"

    def hint(self):
        return _did_you_mean(self.suggestions) or f"run '{self.command} --help' to list its subcommands"


# --- argument records ---

class ArgumentsNotEqualToZero(Diagnostic):
    __fields__ = ("actual",)
    __fault__ = ArgumentsNotEqualToZeroError
    code = FaultCode.ARGUMENTS_NOT_EQUAL_TO_ZERO
    title = "unexpected arguments"
    advice = "this command accepts zero arguments"

    def message(self):
        return f"expected no arguments but received {pluralize("argument", self.actual)}"


class ArgumentsLessThanMinimum(Diagnostic):
    __fields__ = ("expected", "actual")
    __fault__ = ArgumentsLessThanMinimumError
    code = FaultCode.ARGUMENTS_LESS_THAN_MINIMUM
    title = "too few arguments"

    def message(self):
        return f"expected at least {pluralize("argument", self.expected)} but received {self.actual}"

    def hint(self):
        return f"this command accepts a minimum of {pluralize("argument", self.expected)}"


class ArgumentsGreaterThanMaximum(Diagnostic):
    __fields__ = ("expected", "actual")
    __fault__ = ArgumentsGreaterThanMaximumError
    code = FaultCode.ARGUMENTS_GREATER_THAN_MAXIMUM
    title = "too many arguments"

    def message(self):
        return f"expected at most {pluralize("argument", self.expected)} but received {self.actual}"

    def hint(self):
        return f"this command accepts a maximum of {pluralize("argument", self.expected)}"


class ArgumentsNotMatchingExpected(Diagnostic):
    __fields__ = ("expected", "actual")
    __fault__ = ArgumentsNotMatchingExpectedError
    code = FaultCode.ARGUMENTS_NOT_MATCHING_EXPECTED
    title = "wrong number of arguments"

    def message(self):
        return f"expected exactly {pluralize("argument", self.expected)} but received {self.actual}"

    def hint(self):
        return f"this command accepts exactly {pluralize("argument", self.expected)}"


class ArgumentsNotInEndExclusiveRange(Diagnostic):
    __fields__ = ("minimum", "maximum", "actual")
    __fault__ = ArgumentsNotInEndExclusiveRangeError
    code = FaultCode.ARGUMENTS_NOT_IN_END_EXCLUSIVE_RANGE
    title = "wrong number of arguments"
    template = "expected between %(minimum)d and %(maximum)d arguments (end exclusive) but received %(actual)d"
    advice = "this command accepts at least %(minimum)d and fewer than %(maximum)d arguments"


class ArgumentsNotInEndInclusiveRange(Diagnostic):
    __fields__ = ("minimum", "maximum", "actual")
    __fault__ = ArgumentsNotInEndInclusiveRangeError
    code = FaultCode.ARGUMENTS_NOT_IN_END_INCLUSIVE_RANGE
    title = "wrong number of arguments"
    template = "expected between %(minimum)d and %(maximum)d arguments (end inclusive) but received %(actual)d"
    advice = "this command accepts at least %(minimum)d and at most %(maximum)d arguments"


class InvalidRange(Diagnostic):
    __fields__ = ("minimum", "maximum", "inclusive")
    __fault__ = InvalidRangeError
    code = FaultCode.INVALID_RANGE
    title = "invalid range"

    def message(self):
        if self.inclusive:
            return f"end-inclusive range maximum {self.maximum} must not be less than minimum {self.minimum}"
        return f"end-exclusive range maximum {self.maximum} must be greater than minimum {self.minimum}"


# --- delegated records ---

class DelegatedCommand(Diagnostic):
    __fields__ = ("command", "error")
    __fault__ = DelegatedCommandError
    code = FaultCode.DELEGATED_ERROR
    title = "command failed"
    template = "command %(command)r failed: %(error)s"
    advice = "the error was raised by the command handler"


class Diagnostics:
    """
    single-slot diagnostic recorder (last write wins).

    usage
        diagnostics = Diagnostics()
        raise diagnostics.report_and_fail(FlagNotFound(flag_name="verbose"))

    the slot is not a stack: parsing, validation and dispatch abort on the first
    failure, so the most recent record is the one worth reporting.
    """
    __slots__ = ("_record",)

    def __init__(self):
        self._record = None

    @property
    def record(self):
        return self._record

    def report_and_fail(self, record, /):
        """
        store `record` (overwriting any previous one) and return its mapped exception.
        """
        if not isinstance(record, Diagnostic):
            raise TypeError("report_and_fail() argument must be a diagnostic record")
        self._record = record
        return record.exception()

    def clear(self):
        self._record = None

    def log(self, stream, /, **options):
        """
        render the stored record, if any, to the error console of `stream`.

        options (prog, fancy, colorful) are forwarded to the rendered exception.
        """
        if not isinstance(stream, OutputStream):
            raise TypeError("log() argument must be an output-stream")
        if self._record is None:
            return
        stream.print_error(self._record.exception(**options))

    def __bool__(self):
        return self._record is not None

    def __repr__(self):
        return f"Diagnostics({self._record!r})"


__all__ = (
    "FaultCode",
    "CommandException",
    "FlagException",
    "FlagNameAlreadyExistsError",
    "FlagShortNameAlreadyExistsError",
    "FlagShortNameMergeConflictError",
    "FlagConflictError",
    "FlagNotFoundError",
    "FlagTypeMismatchError",
    "InvalidBooleanError",
    "InvalidIntegerError",
    "NoFlagValueProvidedError",
    "NoFlagsAddedToCommandError",
    "CommandTreeException",
    "CommandNameAlreadyExistsError",
    "CommandAliasAlreadyExistsError",
    "CommandHasAParentError",
    "SubCommandAddedToExecutableError",
    "SubCommandNameSameAsParentError",
    "CommandAlreadyFrozenError",
    "MissingCommandNameToExecuteError",
    "CommandNotAddedError",
    "SubcommandNotAddedToParentCommandError",
    "ArgumentException",
    "ArgumentsNotEqualToZeroError",
    "ArgumentsLessThanMinimumError",
    "ArgumentsGreaterThanMaximumError",
    "ArgumentsNotMatchingExpectedError",
    "ArgumentsNotInEndExclusiveRangeError",
    "ArgumentsNotInEndInclusiveRangeError",
    "InvalidRangeError",
    "DelegatedCommandError",
    "CommandWarning",
    "DeprecatedCommandWarning",
    "trigger",
    "Diagnostic",
    "FlagNameAlreadyExists",
    "FlagShortNameAlreadyExists",
    "FlagShortNameMergeConflict",
    "FlagConflict",
    "FlagConflictSameLongNameDifferentShortName",
    "FlagConflictSameShortNameDifferentLongName",
    "FlagConflictMissingShortName",
    "FlagNotFound",
    "FlagTypeMismatch",
    "InvalidBoolean",
    "InvalidInteger",
    "NoFlagValueProvided",
    "NoFlagsAddedToCommand",
    "CommandNameAlreadyExists",
    "CommandAliasAlreadyExists",
    "CommandHasAParent",
    "SubCommandAddedToExecutable",
    "SubCommandNameSameAsParent",
    "CommandAlreadyFrozen",
    "MissingCommandNameToExecute",
    "CommandNotAdded",
    "SubcommandNotAddedToParentCommand",
    "ArgumentsNotEqualToZero",
    "ArgumentsLessThanMinimum",
    "ArgumentsGreaterThanMaximum",
    "ArgumentsNotMatchingExpected",
    "ArgumentsNotInEndExclusiveRange",
    "ArgumentsNotInEndInclusiveRange",
    "InvalidRange",
    "DelegatedCommand",
    "Diagnostics",
)
