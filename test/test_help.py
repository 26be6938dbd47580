"""
Help rendering tests (CommandHelp and ApplicationHelp through rich).

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured with a rich console writing to io.StringIO.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from clicraft import (
    ApplicationHelp,
    ArgumentSpecification,
    Command,
    CommandHelp,
    Commands,
    Flag,
    Flags,
    FlagType,
    OutputStream,
)


def render(renderer):
    output = io.StringIO()
    renderer.print(OutputStream(Console(file=output, width=120), Console(file=io.StringIO())))
    return output.getvalue()


class TestCommandHelp(TestCase):

    def testExecutableHelp(self):
        cmd = Command(
            "logs",
            "print the logs of a pod",
            lambda flags, arguments: None,
            aliases=["log"],
            flags=[Flag("tail", type=FlagType.INT64, default=10, descr="lines to show")],
            arguments=ArgumentSpecification.exact(1),
        )
        registry = cmd.flags
        registry.add_help()
        text = render(CommandHelp(cmd, registry, route="kubectl logs"))
        self.assertIn("logs - print the logs of a pod", text)
        self.assertIn("usage: kubectl logs [flags] [arguments]", text)
        self.assertIn("aliases: log", text)
        self.assertIn("--tail", text)
        self.assertIn("int64", text)
        self.assertIn("lines to show", text)
        self.assertIn("arguments: accepts exactly 1 argument", text)
        self.assertIn("global options:", text)
        self.assertNotIn("[subcommand]", text)

    def testParentHelpListsSubcommands(self):
        parent = Command("get", "display resources")
        parent.add_subcommand(Command("pods", "list pods", lambda flags, arguments: None, aliases=["po"]))
        text = render(CommandHelp(parent, Flags()))
        self.assertIn("usage: get [subcommand] [arguments]", text)
        self.assertIn("pods (po)", text)
        self.assertIn("list pods", text)
        self.assertNotIn("global options", text)

    def testDeprecationNotice(self):
        cmd = Command("run", "run a pod", lambda flags, arguments: None, deprecated="use 'create' instead")
        self.assertIn("deprecated: use 'create' instead", render(CommandHelp(cmd, Flags())))

    def testFancyHelpUsesAPanel(self):
        cmd = Command("run", "run a pod", lambda flags, arguments: None)
        text = render(CommandHelp(cmd, Flags(), fancy=True))
        self.assertIn("╭", text)
        self.assertIn("RUN HELP", text)

    def testHelpMethodIncludesHelpFlag(self):
        output = io.StringIO()
        Command("run", "run a pod", lambda flags, arguments: None).help(
            OutputStream(Console(file=output, width=120), Console(file=io.StringIO())),
        )
        self.assertIn("--help, -h", output.getvalue())


class TestApplicationHelp(TestCase):

    def testListsCommandsInRegistrationOrder(self):
        commands = Commands()
        commands.add(Command("get", "display resources"))
        commands.add(Command("apply", "apply a configuration"))
        text = render(ApplicationHelp("kubectl", "talk to the cluster", commands, Flags()))
        self.assertIn("kubectl - talk to the cluster", text)
        self.assertLess(text.index("get"), text.index("apply"))
        self.assertNotIn("global options", text)


if __name__ == "__main__":
    unittest.main()
