"""
clicraft command layer: build, compose, and run command trees.

What this module provides
- CommandAction: the closed pair of command behaviours.
  • Executable(handler): a leaf that runs handler(flags, arguments).
  • Subcommands(commands): an interior node owning a nested command collection.
- Command: a named unit composing an action, aliases, local flags, an optional
  argument specification and an optional deprecation notice. Commands are mutable
  while being built and frozen the moment they are attached to a parent or to the
  application; any later mutation is a CommandAlreadyFrozenError.
- Commands: the name/alias → Command registry of one level, with atomic add,
  exact lookup, "did you mean" suggestions and dispatch to the resolved command.
- Application: the top-level orchestrator. It owns the root Commands, the
  Diagnostics slot, the OutputStream and the runtime options (shell, fancy,
  colorful, help).
- Factories and helpers:
  • command(...): create a Command from a function, or a decorator that does.
  • invoke(object, prompt): convenience runner for applications, commands or callables.

Execution, per level
1. The level's flag registry is the command's local flags plus the persistent flags
   inherited from its ancestors (the built-in help flag included when enabled).
2. CommandLineParser splits the shared token cursor into flags and positionals,
   stopping at the first positional token when the command has subcommands.
3. Parent flag values are merged in (absent only), then defaults are applied.
4. --help prints this level's help and stops.
5. Executable: the argument specification is validated, the flags are frozen and
   the handler runs. Subcommands: the first positional names the child, which
   repeats the procedure on the same cursor.

Quick start
    from clicraft import Application, Flag, ArgumentSpecification

    app = Application("calc", "tiny calculator")

    @app.command(arguments=ArgumentSpecification.exact(2), flags=[Flag("verbose", short="v")])
    def add(flags, arguments):
        \"\"\"add two numbers\"\"\"
        print(sum(map(int, arguments)))

    if __name__ == "__main__":
        app.execute()   # e.g. `calc add 2 5 -v`
"""
import inspect
import os.path
import re
import sys
from typing import final

from .arguments import Arguments, ArgumentSpecification
from .distance import THRESHOLD, suggestions
from .faults import *
from .flags import Flag, Flags
from .help import CommandHelp, ApplicationHelp
from .parser import CommandLineParser
from .streams import OutputStream
from .utils import Unset, coalesce, mirror, rename


def _diagnostics(diagnostics):
    if diagnostics is Unset:
        return Diagnostics()
    if not isinstance(diagnostics, Diagnostics):
        raise TypeError("'diagnostics' must be a diagnostics recorder")
    return diagnostics


def _check_name(name, label):
    if not isinstance(name, str):
        raise TypeError(f"command {label} must be a string")
    if not re.fullmatch(r"[^\s-]\S*", name):
        raise ValueError(f"command {label} must be a non-empty word that does not start with a dash, got {name!r}")
    return name


class CommandAction:
    """
    Behaviour of a command: exactly one of Executable or Subcommands.
    """
    __slots__ = ()

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        if cls.__name__ not in ("Executable", "Subcommands") or cls.__module__ != __name__:
            raise TypeError(f"type {cls.__name__!r} is not an acceptable base type")


@final
class Executable(CommandAction):
    __slots__ = ("_handler",)
    __match_args__ = ("handler",)

    def __init__(self, handler, /):
        if not callable(handler):
            raise TypeError("executable handler must be callable")
        self._handler = handler

    @property
    def handler(self):
        return self._handler

    def __repr__(self):
        return f"Executable({getattr(self._handler, "__qualname__", self._handler)!s})"


@final
class Subcommands(CommandAction):
    __slots__ = ("_commands",)
    __match_args__ = ("commands",)

    def __init__(self, commands=Unset, /):
        if not isinstance(commands, Commands | Unset):
            raise TypeError("subcommands must be a commands registry")
        self._commands = Commands() if commands is Unset else commands

    @property
    def commands(self):
        return self._commands

    def __repr__(self):
        return f"Subcommands({self._commands!r})"


class Invocation:
    """
    Runtime context shared by every level of one execution.

    - diagnostics: the single-slot recorder failures are reported to
    - stream: OutputStream for help, warnings and rendered faults
    - prog: program name shown in fault headers
    - shell/fancy/colorful: rendering and surfacing options
    """
    __slots__ = ("diagnostics", "stream", "prog", "shell", "fancy", "colorful")

    def __init__(self, *, diagnostics=Unset, stream=Unset, prog="clicraft", shell=False, fancy=False, colorful=False):
        self.diagnostics = _diagnostics(diagnostics)
        self.stream = OutputStream() if stream is Unset else stream
        self.prog = prog
        self.shell = shell
        self.fancy = fancy
        self.colorful = colorful

    @property
    def options(self):
        return {"prog": self.prog, "fancy": self.fancy, "colorful": self.colorful}


class Command:
    """
    A named command: executable leaf (with a handler) or parent (with subcommands).

    Parameters
    - name: primary name used on the command line.
    - descr: one-line description shown in help.
    - handler: callable(flags, arguments). When omitted the command is a parent.
    - aliases: alternative names resolving to this command.
    - flags: local Flag declarations (persistent ones are inherited by subcommands).
    - arguments: ArgumentSpecification for positional arguments (executables only).
    - deprecated: deprecation notice; running the command emits a warning.
    """
    name = mirror("name")
    descr = mirror("descr")
    aliases = mirror("aliases")
    action = mirror("action")
    arguments = mirror("arguments")
    deprecated = mirror("deprecated")
    has_parent = mirror("has_parent")
    frozen = mirror("frozen")

    def __init__(self, name, /, descr=Unset, handler=Unset, *, aliases=(), flags=(), arguments=Unset, deprecated=Unset):
        _check_name(name, "name")
        if not isinstance(descr, str | Unset):
            raise TypeError("command 'descr' must be a string")
        if not isinstance(arguments, ArgumentSpecification | Unset):
            raise TypeError("command 'arguments' must be an argument-specification")
        if not isinstance(deprecated, str | Unset):
            raise TypeError("command 'deprecated' must be a string")
        if handler is Unset and arguments is not Unset:
            raise TypeError(f"parent command {name!r} cannot declare an argument-specification")
        if isinstance(aliases, str):
            raise TypeError("command 'aliases' must be an iterable of strings, not a string")

        self._name = name
        self._descr = coalesce(descr, "")
        self._action = Subcommands() if handler is Unset else Executable(handler)
        self._aliases = list(dict.fromkeys(_check_name(alias, "alias") for alias in aliases))
        self._flags = Flags(flags)
        self._arguments = coalesce(arguments)
        self._deprecated = coalesce(deprecated)
        self._has_parent = False
        self._frozen = False

    @property
    def flags(self):
        """
        Copy of the local flag registry (use add_flag() to register new flags).
        """
        return self._flags.copy()

    @property
    def has_subcommands(self):
        return isinstance(self._action, Subcommands)

    @property
    def subcommands(self):
        match self._action:
            case Subcommands(commands):
                return commands
        return None

    def _ensure_mutable(self, diagnostics):
        if self._frozen:
            raise _diagnostics(diagnostics).report_and_fail(CommandAlreadyFrozen(command=self._name))

    def add_alias(self, alias, /, *, diagnostics=Unset):
        self._ensure_mutable(diagnostics)
        if (alias := _check_name(alias, "alias")) not in self._aliases:
            self._aliases.append(alias)
        return self

    def add_aliases(self, *aliases, diagnostics=Unset):
        self._ensure_mutable(diagnostics)
        for alias in map(lambda x: _check_name(x, "alias"), aliases):
            if alias not in self._aliases:
                self._aliases.append(alias)
        return self

    def add_flag(self, flag, /, *, diagnostics=Unset):
        self._ensure_mutable(diagnostics)
        self._flags.add(flag, diagnostics=_diagnostics(diagnostics))
        return self

    def set_argument_specification(self, specification, /, *, diagnostics=Unset):
        self._ensure_mutable(diagnostics)
        if not isinstance(specification, ArgumentSpecification):
            raise TypeError("command argument-specification must be an argument-specification")
        if self.has_subcommands:
            raise TypeError(f"parent command {self._name!r} cannot declare an argument-specification")
        self._arguments = specification
        return self

    def mark_deprecated(self, message, /, *, diagnostics=Unset):
        self._ensure_mutable(diagnostics)
        if not isinstance(message, str):
            raise TypeError("command deprecation message must be a string")
        self._deprecated = message
        return self

    def add_subcommand(self, child, /, *, diagnostics=Unset):
        """
        Attach `child` under this command.

        Fails when this command is frozen or executable, when the child is named
        after this command, when the child's local flags conflict with this
        command's persistent flags, or when the child's name/aliases collide with
        an existing subcommand. On success the child is frozen and has a parent.
        """
        diagnostics = _diagnostics(diagnostics)
        self._ensure_mutable(diagnostics)
        if not isinstance(child, Command):
            raise TypeError("subcommand must be a command")
        if child._name == self._name:
            raise diagnostics.report_and_fail(SubCommandNameSameAsParent(command=child._name))
        match self._action:
            case Executable():
                raise diagnostics.report_and_fail(SubCommandAddedToExecutable(command=self._name, subcommand=child._name))
            case Subcommands(commands):
                if (conflict := self._flags.persistent().conflict_with(child._flags, self._name, child._name)) is not None:
                    raise diagnostics.report_and_fail(conflict)
                commands.add(child, allow_parent=True, diagnostics=diagnostics)
                child._has_parent = True
        return self

    def command(self, source=Unset, /, **kwargs):
        """
        Create a subcommand from a function and attach it here (see command()).
        """
        @rename("command")
        def wrapper(source, /):
            child = command(source, **kwargs)
            self.add_subcommand(child)
            return child

        return wrapper(source) if source is not Unset else wrapper

    def help(self, stream=Unset, /, **options):
        """
        Print this command's help with its local flags (and the help flag).
        """
        registry = self._flags.copy()
        registry.merge_from(_help_flags())
        CommandHelp(self, registry, **options).print(OutputStream() if stream is Unset else stream)

    def execute(self, arguments, invocation=Unset, /, *, inherited=Unset, parsed=Unset, route=Unset):
        """
        Parse this level's tokens from `arguments` and run the command.

        - inherited: persistent flags of the ancestors (Flags)
        - parsed: persistent flag values parsed by the ancestors (ParsedFlags)
        - route: space-separated path used in help and delegated errors
        """
        if not isinstance(arguments, Arguments):
            raise TypeError("command arguments must be an arguments cursor")
        invocation = Invocation() if invocation is Unset else invocation
        diagnostics = invocation.diagnostics
        route = coalesce(route, self._name)

        registry = self._flags.copy()
        if inherited is not Unset:
            registry.merge_from(inherited, diagnostics=diagnostics)

        flags, positionals = CommandLineParser(arguments, registry).parse(self.has_subcommands, diagnostics=diagnostics)
        if parsed is not Unset:
            flags.merge_from(parsed)
        registry.add_defaults_to(flags)

        if flags.contains_help():
            CommandHelp(self, registry, route=route, fancy=invocation.fancy, colorful=invocation.colorful).print(invocation.stream)
            return

        if self._deprecated is not None:
            trigger(
                DeprecatedCommandWarning(
                    f"command {route!r} is deprecated",
                    code=FaultCode.DEPRECATED_COMMAND,
                    title="deprecated command",
                    hint=self._deprecated,
                ),
                shell=invocation.shell,
                stream=invocation.stream,
                **invocation.options,
            )

        match self._action:
            case Executable(handler):
                if self._arguments is not None:
                    self._arguments.validate(len(positionals), diagnostics=diagnostics)
                try:
                    handler(flags.freeze(), positionals)
                except CommandException:
                    raise
                except Exception as exception:
                    raise diagnostics.report_and_fail(DelegatedCommand(
                        command=route,
                        error=str(exception) or type(exception).__name__,
                    )) from exception
            case Subcommands(commands):
                if not positionals:
                    raise diagnostics.report_and_fail(MissingCommandNameToExecute())
                persistent = registry.persistent()
                commands.execute(
                    positionals[0],
                    arguments,
                    invocation,
                    parent=self._name,
                    inherited=persistent,
                    parsed=flags.select(persistent),
                    route=route,
                )

    def __invoke__(self, prompt=Unset):
        """
        Run this command on its own, with the built-in help flag available.
        """
        self.execute(Arguments.from_prompt(prompt), Invocation(prog=self._name), inherited=_help_flags())

    def __repr__(self):
        return f"Command({self._name!r}, action={self._action!r}, aliases={self._aliases!r})"


def _help_flags():
    flags = Flags()
    flags.add_help()
    return flags


class Commands:
    """
    Registry of the commands of one level (top level or a parent's children).

    Invariants
    - every key (primary name or alias) maps to exactly one command
    - a failing add() leaves the registry unchanged
    - iteration yields each command once, in registration order
    """

    def __init__(self):
        self._entries = {}

    def add(self, command, /, *, allow_parent=False, diagnostics=Unset):
        """
        Register `command` under its name and aliases, then freeze it.

        allow_parent=False is how the application refuses commands that already
        belong to a parent command.
        """
        diagnostics = _diagnostics(diagnostics)
        if not isinstance(command, Command):
            raise TypeError("commands can only register command instances")
        if not allow_parent and command.has_parent:
            raise diagnostics.report_and_fail(CommandHasAParent(command=command.name))
        if command.name in self._entries:
            raise diagnostics.report_and_fail(CommandNameAlreadyExists(command=command.name))
        for alias in command.aliases:
            if alias == command.name:
                raise diagnostics.report_and_fail(CommandAliasAlreadyExists(alias=alias, existing_command=command.name))
            if alias in self._entries:
                raise diagnostics.report_and_fail(CommandAliasAlreadyExists(
                    alias=alias,
                    existing_command=self._entries[alias].name,
                ))

        self._entries[command.name] = command
        for alias in command.aliases:
            self._entries[alias] = command
        command._frozen = True

    def get(self, name, /):
        """
        Exact lookup by primary name or alias; None when unregistered.
        """
        return self._entries.get(name)

    def names(self):
        return tuple(self._entries)

    def suggestions_for(self, name, /, threshold=THRESHOLD):
        return suggestions(name, self._entries, threshold)

    def execute(self, name, arguments, invocation=Unset, /, *, parent=Unset, inherited=Unset, parsed=Unset, route=Unset):
        """
        Resolve `name` and execute the command it designates.

        Unknown names fail with CommandNotAddedError at the top level (parent
        Unset) or SubcommandNotAddedToParentCommandError below it, both carrying
        suggestions.
        """
        invocation = Invocation() if invocation is Unset else invocation
        if (command := self.get(name)) is None:
            if parent is Unset:
                record = CommandNotAdded(command=name, suggestions=self.suggestions_for(name))
            else:
                record = SubcommandNotAddedToParentCommand(
                    command=parent,
                    subcommand=name,
                    suggestions=self.suggestions_for(name),
                )
            raise invocation.diagnostics.report_and_fail(record)
        command.execute(
            arguments,
            invocation,
            inherited=inherited,
            parsed=parsed,
            route=command.name if route is Unset else f"{route} {command.name}",
        )

    def __contains__(self, name, /):
        return name in self._entries

    def __iter__(self):
        return iter(dict.fromkeys(self._entries.values()))

    def __len__(self):
        return len(dict.fromkeys(self._entries.values()))

    def __bool__(self):
        return bool(self._entries)

    def __repr__(self):
        return f"Commands({list(map(lambda x: x.name, self))!r})"


class Application:
    """
    Top-level entry point of a command-line program.

    Runtime options
    - shell: when True, failures are rendered to the error stream and the process
      exits with status 1; when False (default), typed exceptions propagate.
    - fancy: wrap help and faults in rich panels.
    - colorful: apply the palette (overridable via __main__.__styles__).
    - help: register the persistent --help/-h flag on every level.
    - output: OutputStream used for help, warnings and faults.
    """
    name = mirror("name")
    descr = mirror("descr")
    commands = mirror("commands")
    diagnostics = mirror("diagnostics")
    output = mirror("output")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, /, descr=Unset, *, output=Unset, help=True, shell=False, fancy=False, colorful=False):
        if not isinstance(name, str | Unset):
            raise TypeError("application 'name' must be a string")
        if not isinstance(descr, str | Unset):
            raise TypeError("application 'descr' must be a string")
        if not isinstance(output, OutputStream | Unset):
            raise TypeError("application 'output' must be an output-stream")
        for option, value in (("help", help), ("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(value, bool):
                raise TypeError(f"application {option!r} must be a boolean")

        self._name = coalesce(name, os.path.basename(sys.argv[0]) or "clicraft")
        self._descr = coalesce(descr, "")
        self._commands = Commands()
        self._diagnostics = Diagnostics()
        self._output = OutputStream() if output is Unset else output
        self._help = help
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful

    def _invocation(self):
        return Invocation(
            diagnostics=self._diagnostics,
            stream=self._output,
            prog=self._name,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def _surface(self, invocation):
        """
        shell mode: log the recorded diagnostic and exit(1); otherwise re-raise.
        """
        if not self._shell:
            raise
        self._diagnostics.log(self._output, **invocation.options)
        sys.exit(1)

    def _flags(self):
        flags = Flags()
        if self._help:
            flags.add_help()
        return flags

    def new_executable_command(self, name, descr, handler, /, **kwargs):
        return Command(name, descr, handler, **kwargs)

    def new_parent_command(self, name, descr, /, **kwargs):
        return Command(name, descr, **kwargs)

    def add_command(self, command, /):
        """
        Register a top-level command; commands that already have a parent are refused.
        """
        try:
            self._commands.add(command, allow_parent=False, diagnostics=self._diagnostics)
        except CommandException:
            self._surface(self._invocation())
        return command

    def add_executable_command(self, name, descr, handler, /, **kwargs):
        return self.add_command(self.new_executable_command(name, descr, handler, **kwargs))

    def add_parent_command(self, name, descr, /, **kwargs):
        return self.add_command(self.new_parent_command(name, descr, **kwargs))

    def command(self, source=Unset, /, **kwargs):
        """
        Create a top-level command from a function (see command()).
        """
        @rename("command")
        def wrapper(source, /):
            return self.add_command(command(source, **kwargs))

        return wrapper(source) if source is not Unset else wrapper

    def help(self):
        ApplicationHelp(
            self._name,
            self._descr,
            self._commands,
            self._flags(),
            fancy=self._fancy,
            colorful=self._colorful,
        ).print(self._output)

    def execute(self, prompt=Unset, /):
        """
        Run the application.

        prompt
        - Unset: process arguments (sys.argv[1:]).
        - str: shell-like string split with shlex.split.
        - Iterable[str] or Arguments: pre-tokenized input.
        """
        arguments = Arguments.from_prompt(prompt)
        invocation = self._invocation()
        self._diagnostics.clear()
        try:
            registry = self._flags()
            parsed, positionals = CommandLineParser(arguments, registry).parse(True, diagnostics=self._diagnostics)
            if parsed.contains_help():
                return self.help()
            if not positionals:
                raise self._diagnostics.report_and_fail(MissingCommandNameToExecute())
            persistent = registry.persistent()
            self._commands.execute(
                positionals[0],
                arguments,
                invocation,
                inherited=persistent,
                parsed=parsed.select(persistent),
                route=self._name,
            )
        except CommandException:
            self._surface(invocation)

    def __invoke__(self, prompt=Unset):
        self.execute(prompt)

    def __repr__(self):
        return f"Application({self._name!r}, commands={self._commands!r})"


def command(source=Unset, /, *, name=Unset, descr=Unset, aliases=(), flags=(), arguments=Unset, deprecated=Unset):
    """
    Create an executable Command from a function, or return a decorator that does.

    Defaults
    - name: the function name with underscores turned into dashes
    - descr: the function docstring (first paragraph), or empty

    Invocation modes
    - cmd = command(func, name="x")
    - @command
    - @command(name="x", arguments=ArgumentSpecification.exact(2))
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        docstring = (inspect.getdoc(source) or "").split("\n\n")[0].strip()
        return Command(
            coalesce(name, source.__name__.strip("_").replace("_", "-")),
            coalesce(descr, docstring),
            source,
            aliases=aliases,
            flags=flags,
            arguments=arguments,
            deprecated=deprecated,
        )

    return wrapper(source) if source is not Unset else wrapper


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for applications, commands or callables.

    - objects implementing __invoke__ (Application, Command) are run with `prompt`
    - plain callables are wrapped with command() first
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        object.__invoke__(prompt)
        return

    if callable(object):
        return invoke(command(object), prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "CommandAction",
    "Executable",
    "Subcommands",
    "Invocation",
    "Command",
    "Commands",
    "Application",
    "command",
    "invoke",
)
