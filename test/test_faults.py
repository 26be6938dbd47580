"""
Faults module behavioral tests (diagnostic records, recorder, rendering).

Scope
- Validate record construction, read-only context and message/hint templates.
- Validate the single-slot recorder (last write wins, clear, log).
- Validate rich rendering of exceptions and warnings and the trigger() contract.

Conventions
- Test method names follow CamelCase per project convention.
- Rendered output is captured with rich consoles writing to io.StringIO.
"""

from __future__ import annotations

import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from clicraft import (
    OutputStream,
    Diagnostics,
    FaultCode,
    CommandException,
    DeprecatedCommandWarning,
    FlagException,
    FlagNotFound,
    FlagNotFoundError,
    NoFlagValueProvided,
    CommandNotAdded,
    SubcommandNotAddedToParentCommand,
    DelegatedCommand,
    DelegatedCommandError,
    MissingCommandNameToExecute,
    trigger,
)


def capture():
    output, error = io.StringIO(), io.StringIO()
    return OutputStream(Console(file=output, width=120), Console(file=error, width=120)), output, error


class TestDiagnosticRecords(TestCase):
    """Diagnostic record construction and templates."""

    def testMissingAndUnknownFieldsAreRejected(self):
        with self.assertRaises(TypeError):
            FlagNotFound()
        with self.assertRaises(TypeError):
            FlagNotFound(flag_name="x", command="y")

    def testContextIsReadOnly(self):
        record = CommandNotAdded(command="gte", suggestions=["get"])
        self.assertEqual(record.suggestions, ("get",))
        with self.assertRaises(TypeError):
            record.context["command"] = "other"
        with self.assertRaises(AttributeError):
            record.command = "other"

    def testRecordsCompareByTypeAndContext(self):
        self.assertEqual(FlagNotFound(flag_name="x"), FlagNotFound(flag_name="x"))
        self.assertNotEqual(FlagNotFound(flag_name="x"), FlagNotFound(flag_name="y"))
        self.assertNotEqual(FlagNotFound(flag_name="x"), NoFlagValueProvided(flag_name="x"))

    def testExceptionCarriesRecordAndMetadata(self):
        record = FlagNotFound(flag_name="verbos")
        exception = record.exception()
        self.assertIsInstance(exception, FlagNotFoundError)
        self.assertIsInstance(exception, FlagException)
        self.assertIs(exception.diagnostic, record)
        self.assertEqual(exception.options["code"], FaultCode.FLAG_NOT_FOUND)
        self.assertEqual(str(exception), "flag 'verbos' not found")

    def testSuggestionHints(self):
        self.assertEqual(CommandNotAdded(command="x", suggestions=[]).hint(), "run with '--help' to list the available commands")
        self.assertEqual(CommandNotAdded(command="strn", suggestions=["str", "strm"]).hint(), "did you mean one of 'str', 'strm'?")
        self.assertEqual(
            SubcommandNotAddedToParentCommand(command="get", subcommand="x", suggestions=[]).hint(),
            "run 'get --help' to list its subcommands",
        )

    def testRecordWithoutFields(self):
        self.assertEqual(MissingCommandNameToExecute().message(), "no command was provided to execute")


class TestDiagnostics(TestCase):
    """Single-slot recorder."""

    def testLastWriteWins(self):
        diagnostics = Diagnostics()
        self.assertFalse(diagnostics)
        diagnostics.report_and_fail(FlagNotFound(flag_name="a"))
        exception = diagnostics.report_and_fail(NoFlagValueProvided(flag_name="b"))
        self.assertEqual(diagnostics.record, NoFlagValueProvided(flag_name="b"))
        self.assertIs(exception.diagnostic, diagnostics.record)
        diagnostics.clear()
        self.assertIsNone(diagnostics.record)

    def testReportRejectsNonRecords(self):
        with self.assertRaises(TypeError):
            Diagnostics().report_and_fail(ValueError("x"))

    def testLogRendersToErrorConsole(self):
        stream, output, error = capture()
        diagnostics = Diagnostics()
        diagnostics.report_and_fail(DelegatedCommand(command="app save", error="disk full"))
        diagnostics.log(stream, prog="app")
        rendered = error.getvalue()
        self.assertIn("[ app — 11141 | Command Failed ]", rendered)
        self.assertIn("command 'app save' failed: disk full", rendered)
        self.assertIn("→ the error was raised by the command handler", rendered)
        self.assertEqual(output.getvalue(), "")

    def testLogWithoutRecordPrintsNothing(self):
        stream, output, error = capture()
        Diagnostics().log(stream)
        self.assertEqual(error.getvalue(), "")

    def testHostCanRelabelCodesAndProgram(self):
        stream, _, error = capture()
        diagnostics = Diagnostics()
        diagnostics.report_and_fail(FlagNotFound(flag_name="x"))
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.FLAG_NOT_FOUND: "E-FLAG"}, create=True), \
                mock.patch.object(main, "__prog__", "kc", create=True):
            diagnostics.log(stream, prog="app")
        self.assertIn("[ kc — E-FLAG | Unknown Flag ]", error.getvalue())

    def testFancyRenderingUsesAPanel(self):
        stream, _, error = capture()
        diagnostics = Diagnostics()
        diagnostics.report_and_fail(FlagNotFound(flag_name="x"))
        diagnostics.log(stream, prog="app", fancy=True)
        self.assertIn("╭", error.getvalue())
        self.assertIn("flag 'x' not found", error.getvalue())


class TestTrigger(TestCase):
    """trigger() surfacing rules."""

    def testErrorsRaiseOutsideShellMode(self):
        with self.assertRaises(DelegatedCommandError) as context:
            trigger(DelegatedCommandError("boom", code=FaultCode.DELEGATED_ERROR), prog="app")
        self.assertEqual(context.exception.options["prog"], "app")

    def testErrorsExitInShellMode(self):
        stream, _, error = capture()
        with self.assertRaises(SystemExit) as context:
            trigger(CommandException("boom", title="failure"), shell=True, stream=stream, prog="app")
        self.assertEqual(context.exception.code, 1)
        self.assertIn("boom", error.getvalue())

    def testWarningsPrintInShellMode(self):
        stream, _, error = capture()
        trigger(DeprecatedCommandWarning("old", code=FaultCode.DEPRECATED_COMMAND), shell=True, stream=stream, prog="app")
        self.assertIn("[ app — 12111 | Warning ]", error.getvalue())

    def testWarningsUseTheWarningsModule(self):
        with self.assertWarns(DeprecatedCommandWarning):
            trigger(DeprecatedCommandWarning("old"))

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


if __name__ == "__main__":
    unittest.main()
