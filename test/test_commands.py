"""
Commands module behavioral tests (tree building, freezing, dispatch).

Scope
- Validate command construction, aliases and the closed action variants.
- Validate atomic registration, alias resolution and parent checks.
- Validate freezing after attachment and subcommand attachment faults.
- Validate per-level execution: flag inheritance, defaults, argument
  specifications, delegated handler errors and deprecation warnings.

Conventions
- Test method names follow CamelCase per project convention.
- Handlers record what they receive in a list owned by the test.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from clicraft import (
    Arguments,
    ArgumentSpecification,
    Command,
    Commands,
    CommandAction,
    Executable,
    Subcommands,
    Invocation,
    Diagnostics,
    OutputStream,
    Flag,
    Flags,
    FlagType,
    command,
    invoke,
    CommandAliasAlreadyExistsError,
    CommandAlreadyFrozen,
    CommandAlreadyFrozenError,
    CommandHasAParentError,
    CommandNameAlreadyExistsError,
    CommandNotAdded,
    CommandNotAddedError,
    DelegatedCommandError,
    DeprecatedCommandWarning,
    FlagConflictError,
    FlagNotFoundError,
    ArgumentsGreaterThanMaximumError,
    MissingCommandNameToExecuteError,
    SubCommandAddedToExecutableError,
    SubCommandNameSameAsParentError,
    SubcommandNotAddedToParentCommand,
    SubcommandNotAddedToParentCommandError,
)


def quiet():
    return Invocation(stream=OutputStream(Console(file=io.StringIO()), Console(file=io.StringIO())))


def help_flags():
    flags = Flags()
    flags.add_help()
    return flags


class TestCommandBuilding(TestCase):
    """Command construction and mutation."""

    def testHandlerMakesAnExecutable(self):
        self.assertIsInstance(Command("add", "add numbers", lambda flags, arguments: None).action, Executable)
        self.assertIsInstance(Command("get", "get resources").action, Subcommands)

    def testActionMatchesByVariant(self):
        match Command("get").action:
            case Executable():
                self.fail("parent command must not be executable")
            case Subcommands(commands):
                self.assertIsInstance(commands, Commands)

    def testActionVariantsAreClosed(self):
        with self.assertRaises(TypeError):
            class Other(CommandAction):
                pass

    def testInvalidNamesAreRejected(self):
        for name in ("", "-get", "get pods"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Command(name)
        with self.assertRaises(TypeError):
            Command("get", aliases="g")

    def testParentCannotDeclareArguments(self):
        with self.assertRaises(TypeError):
            Command("get", arguments=ArgumentSpecification.zero())

    def testAliasesAreDeduplicated(self):
        cmd = Command("get", aliases=["g", "g"]).add_aliases("fetch", "g")
        self.assertEqual(cmd.aliases, ("g", "fetch"))

    def testFlagsPropertyIsACopy(self):
        cmd = Command("get", flags=[Flag("verbose")])
        cmd.flags.add(Flag("other"))
        self.assertNotIn("other", cmd.flags)

    def testDecoratorUsesFunctionNameAndDocstring(self):
        @command(arguments=ArgumentSpecification.exact(1))
        def show_logs(flags, arguments):
            """print the logs of a pod

            Longer explanation that is not part of the help line.
            """

        self.assertEqual(show_logs.name, "show-logs")
        self.assertEqual(show_logs.descr, "print the logs of a pod")
        self.assertEqual(show_logs.arguments, ArgumentSpecification.exact(1))


class TestCommandFreezing(TestCase):
    """Frozen-after-attach behavior."""

    def testAttachedCommandIsFrozen(self):
        parent = Command("get")
        child = Command("pods", handler=lambda flags, arguments: None)
        parent.add_subcommand(child)
        self.assertTrue(child.frozen)
        self.assertTrue(child.has_parent)

        diagnostics = Diagnostics()
        with self.assertRaises(CommandAlreadyFrozenError):
            child.add_flag(Flag("verbose"), diagnostics=diagnostics)
        self.assertEqual(diagnostics.record, CommandAlreadyFrozen(command="pods"))
        for mutation in (
            lambda: child.add_alias("p"),
            lambda: child.set_argument_specification(ArgumentSpecification.zero()),
            lambda: child.mark_deprecated("use 'pod' instead"),
        ):
            with self.assertRaises(CommandAlreadyFrozenError):
                mutation()

    def testRegisteredCommandIsFrozen(self):
        commands = Commands()
        cmd = Command("get")
        commands.add(cmd)
        self.assertTrue(cmd.frozen)
        self.assertFalse(cmd.has_parent)
        with self.assertRaises(CommandAlreadyFrozenError):
            cmd.add_subcommand(Command("pods"))

    def testChildrenAreAttachedBeforeTheParent(self):
        root, middle, leaf = Command("config"), Command("view"), Command("raw", handler=lambda flags, arguments: None)
        middle.add_subcommand(leaf)
        root.add_subcommand(middle)
        self.assertIs(root.subcommands.get("view").subcommands.get("raw"), leaf)


class TestSubcommandAttachment(TestCase):
    """add_subcommand() faults."""

    def testExecutableCannotHaveSubcommands(self):
        with self.assertRaises(SubCommandAddedToExecutableError):
            Command("add", handler=lambda flags, arguments: None).add_subcommand(Command("more"))

    def testSubcommandNamedAfterParent(self):
        with self.assertRaises(SubCommandNameSameAsParentError):
            Command("get").add_subcommand(Command("get"))

    def testPersistentFlagConflict(self):
        parent = Command("get", flags=[Flag("output", short="o", type=FlagType.STRING, persistent=True)])
        child = Command("pods", handler=lambda flags, arguments: None, flags=[Flag("output", short="x", type=FlagType.STRING)])
        with self.assertRaises(FlagConflictError):
            parent.add_subcommand(child)
        self.assertFalse(child.frozen)
        self.assertIsNone(parent.subcommands.get("pods"))

    def testDuplicateSubcommandLeavesChildMutable(self):
        parent = Command("get")
        parent.add_subcommand(Command("pods", handler=lambda flags, arguments: None))
        duplicate = Command("pods", handler=lambda flags, arguments: None)
        with self.assertRaises(CommandNameAlreadyExistsError):
            parent.add_subcommand(duplicate)
        self.assertFalse(duplicate.frozen)
        self.assertFalse(duplicate.has_parent)


class TestCommandsRegistry(TestCase):
    """Commands registry invariants."""

    def testAliasesResolveToTheSameCommand(self):
        commands = Commands()
        cmd = Command("get", aliases=["g", "fetch"])
        commands.add(cmd)
        for key in ("get", "g", "fetch"):
            with self.subTest(key=key):
                self.assertIs(commands.get(key), cmd)
        self.assertIsNone(commands.get("describe"))
        self.assertEqual(list(commands), [cmd])
        self.assertEqual(len(commands), 1)

    def testFailedAddIsAtomic(self):
        commands = Commands()
        commands.add(Command("get", aliases=["g"]))
        before = commands.names()
        clashing = Command("describe", aliases=["d", "g"])
        with self.assertRaises(CommandAliasAlreadyExistsError) as context:
            commands.add(clashing)
        self.assertEqual(context.exception.diagnostic.existing_command, "get")
        self.assertEqual(commands.names(), before)
        self.assertIsNone(commands.get("d"))
        self.assertFalse(clashing.frozen)

    def testAliasEqualToOwnName(self):
        with self.assertRaises(CommandAliasAlreadyExistsError):
            Commands().add(Command("get", aliases=["get"]))

    def testCommandWithParentIsRefusedUnlessAllowed(self):
        child = Command("pods", handler=lambda flags, arguments: None)
        Command("get").add_subcommand(child)
        with self.assertRaises(CommandHasAParentError):
            Commands().add(child)
        Commands().add(child, allow_parent=True)

    def testSuggestionsFollowDistanceThenRegistration(self):
        commands = Commands()
        for name in ("stringer", "str", "strm"):
            commands.add(Command(name))
        self.assertEqual(commands.suggestions_for("strn"), ["str", "strm"])

    def testUnknownTopLevelCommandCarriesSuggestions(self):
        commands = Commands()
        commands.add(Command("get"))
        invocation = quiet()
        with self.assertRaises(CommandNotAddedError) as context:
            commands.execute("gte", Arguments(), invocation)
        self.assertEqual(invocation.diagnostics.record, CommandNotAdded(command="gte", suggestions=["get"]))
        self.assertEqual(context.exception.options["hint"], "did you mean 'get'?")

    def testUnknownSubcommandNamesTheParent(self):
        commands = Commands()
        commands.add(Command("pods", handler=lambda flags, arguments: None))
        invocation = quiet()
        with self.assertRaises(SubcommandNotAddedToParentCommandError):
            commands.execute("pod", Arguments(), invocation, parent="get")
        self.assertEqual(
            invocation.diagnostics.record,
            SubcommandNotAddedToParentCommand(command="get", subcommand="pod", suggestions=["pods"]),
        )


class TestCommandExecution(TestCase):
    """Command.execute() across levels."""

    def setUp(self):
        self.calls = []

    def handler(self, flags, arguments):
        self.calls.append((flags.as_dict(), arguments))

    def testHandlerReceivesFlagsAndPositionals(self):
        cmd = Command("add", handler=self.handler, flags=[Flag("verbose", short="v")], arguments=ArgumentSpecification.exact(2))
        cmd.execute(Arguments(["2", "5", "--verbose"]), quiet())
        self.assertEqual(self.calls, [({"verbose": True}, ["2", "5"])])

    def testHandlerReceivesFrozenFlags(self):
        received = []
        Command("add", handler=lambda flags, arguments: received.append(flags)).execute(Arguments(), quiet())
        self.assertTrue(received[0].frozen)

    def testArgumentSpecificationRunsBeforeHandler(self):
        cmd = Command("add", handler=self.handler, arguments=ArgumentSpecification.maximum(3))
        with self.assertRaises(ArgumentsGreaterThanMaximumError):
            cmd.execute(Arguments(["1", "2", "3", "4"]), quiet())
        self.assertEqual(self.calls, [])

    def testDefaultsAreApplied(self):
        cmd = Command("get", handler=self.handler, flags=[Flag("timeout", short="t", default=30), Flag("watch")])
        cmd.execute(Arguments([]), quiet())
        self.assertEqual(self.calls, [({"timeout": 30}, [])])

    def testPersistentFlagsReachDescendants(self):
        root = Command("kubectl", flags=[
            Flag("verbose", short="v", persistent=True),
            Flag("context", type=FlagType.STRING, default="local"),
        ])
        get = Command("get", flags=[Flag("output", short="o", default="text", persistent=True)])
        get.add_subcommand(Command("pods", handler=self.handler, flags=[Flag("watch", short="w")]))
        root.add_subcommand(get)

        root.execute(Arguments(["-v", "get", "pods", "-o", "json", "-w", "nginx"]), quiet())
        self.assertEqual(self.calls, [({"verbose": True, "output": "json", "watch": True}, ["nginx"])])

    def testParentLocalValuesStayWithTheParent(self):
        root = Command("kubectl", flags=[Flag("secret", type=FlagType.STRING, default="none")])
        root.add_subcommand(Command("version", handler=self.handler))
        root.execute(Arguments(["--secret", "x", "version"]), quiet())
        self.assertEqual(self.calls, [({}, [])])

    def testLocalFlagsAreNotInherited(self):
        root = Command("kubectl", flags=[Flag("context", type=FlagType.STRING)])
        root.add_subcommand(Command("version", handler=self.handler, flags=[Flag("client")]))
        with self.assertRaises(FlagNotFoundError):
            root.execute(Arguments(["version", "--context", "prod"]), quiet())

    def testParentLevelParsesBeforeSubcommandName(self):
        root = Command("kubectl", flags=[Flag("verbose", persistent=True)])
        root.add_subcommand(Command("get", handler=self.handler))
        root.execute(Arguments(["--verbose", "get", "pods"]), quiet())
        self.assertEqual(self.calls, [({"verbose": True}, ["pods"])])

    def testMissingSubcommandName(self):
        root = Command("kubectl", flags=[Flag("verbose")])
        root.add_subcommand(Command("get", handler=self.handler))
        with self.assertRaises(MissingCommandNameToExecuteError):
            root.execute(Arguments(["--verbose"]), quiet())

    def testAliasDispatch(self):
        root = Command("kubectl")
        root.add_subcommand(Command("get", handler=self.handler, aliases=["g"]))
        root.execute(Arguments(["g", "pods"]), quiet())
        self.assertEqual(self.calls, [({}, ["pods"])])

    def testHandlerErrorsAreDelegated(self):
        def broken(flags, arguments):
            raise ValueError("disk full")

        invocation = quiet()
        with self.assertRaises(DelegatedCommandError) as context:
            Command("save", handler=broken).execute(Arguments(), invocation, route="app save")
        self.assertIsInstance(context.exception.__cause__, ValueError)
        self.assertEqual(context.exception.message, "command 'app save' failed: disk full")
        self.assertEqual(invocation.diagnostics.record.command, "app save")

    def testCommandExceptionsFromHandlersPropagateUnchanged(self):
        def strict(flags, arguments):
            flags.integer("missing")

        with self.assertRaises(FlagNotFoundError):
            Command("strict", handler=strict).execute(Arguments(), quiet())

    def testDeprecatedCommandWarns(self):
        cmd = Command("run", handler=self.handler, deprecated="use 'create' instead")
        with self.assertWarns(DeprecatedCommandWarning) as context:
            cmd.execute(Arguments(), quiet())
        self.assertEqual(context.warning.options["hint"], "use 'create' instead")
        self.assertEqual(len(self.calls), 1)

    def testHelpFlagPrintsHelpInsteadOfRunning(self):
        output = io.StringIO()
        cmd = Command("add", "add two numbers", self.handler, flags=[Flag("verbose", short="v", descr="chatty")])
        invocation = Invocation(stream=OutputStream(Console(file=output, width=100), Console(file=io.StringIO())))
        cmd.execute(Arguments(["--help"]), invocation, inherited=help_flags())
        self.assertEqual(self.calls, [])
        self.assertIn("add two numbers", output.getvalue())
        self.assertIn("--verbose, -v", output.getvalue())

    def testInvokeWrapsPlainCallables(self):
        received = []

        def greet(flags, arguments):
            received.append(arguments)

        invoke(greet, "world")
        self.assertEqual(received, [["world"]])


if __name__ == "__main__":
    unittest.main()
