"""
clicraft help rendering (rich).

CommandHelp renders one command level:
    name - description
    usage: route [subcommand] [flags] [arguments]
    aliases
    flags table (names, type, default, description)
    subcommands table
    arguments (argument specification phrase)
    global options (--help, -h)
    deprecation notice

ApplicationHelp renders the top level: the application description, the usage
line and the table of registered commands.

Palette keys
- usage-label, program-name, description-section, section-label
- flag-name, flag-type, flag-default, flag-description
- children, children-description, children-table, deprecated-name
- deprecated-label, deprecated-message

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed; deprecated names keep a strike.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .flags import HELP
from .utils import Unset

_PALETTE = {
    "usage-label": "bold #00E6FF",
    "program-name": "bold #FF4D94",
    "description-section": "italic #A3A3A3",
    "section-label": "bold #FFFFFF",

    "flag-name": "bold #22C55E",
    "flag-type": "#FFD600",
    "flag-default": "#9CA3AF dim",
    "flag-description": "#9CA3AF",

    "children": "bold #36C5F0",
    "children-description": "#9CA3AF",
    "children-table": "#4B5563",
    "deprecated-name": "bold #F97316 strike",

    "deprecated-label": "bold #EF4444",
    "deprecated-message": "bold #FFD600",
}


class _Renderer:
    """
    shared styling helpers; subclasses assemble the sections.
    """

    def __init__(self, *, colorful=False, fancy=False):
        self.colorful = colorful
        self.fancy = fancy
        self.styles = defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(self, style):
        if "deprecated" in style and not self.colorful:
            return "strike"
        return self.styles[style] if self.colorful else ""

    def text(self, fragment, style=""):
        if not self.colorful:
            return Text(str(fragment))
        return Text(str(fragment), self.styler(style))

    def label(self, label):
        return Text.assemble(self.text(label, "section-label"), ":")

    def flags(self, flags):
        """
        Table of the flags of a registry, the built-in help flag excluded.
        """
        table = Table(
            "flag", "type", "default", "description",
            box=ROUNDED,
            style=self.styler("children-table"),
            header_style=self.styler("section-label"),
        )
        for flag in flags:
            if flag.name == HELP:
                continue
            names = f"--{flag.name}" if flag.short_name is None else f"--{flag.name}, -{flag.short_name}"
            default = ""
            if flag.has_default:
                default = str(flag.default).lower() if isinstance(flag.default, bool) else repr(flag.default)
            table.add_row(
                self.text(names, "flag-name"),
                self.text(flag.type, "flag-type"),
                self.text(default, "flag-default"),
                self.text(flag.descr, "flag-description"),
            )
        return table if table.row_count else None

    def commands(self, commands, title):
        table = Table(
            "name", "help",
            title=self.text(title, "section-label"),
            box=ROUNDED,
            style=self.styler("children-table"),
            header_style=self.styler("section-label"),
        )
        for command in commands:
            name = self.text(command.name, "deprecated-name" if command.deprecated else "children")
            if command.aliases:
                name.append(f" ({", ".join(command.aliases)})")
            table.add_row(name, self.text(command.descr, "children-description"))
        return table if table.row_count else None

    def globals(self, flags):
        if HELP not in flags:
            return None
        help = flags.get(HELP)
        names = f"--{HELP}" if help.short_name is None else f"--{HELP}, -{help.short_name}"
        return Group(
            self.label("global options"),
            Text.assemble("  ", self.text(names, "flag-name"), "    ", self.text("show help for command", "flag-description")),
        )

    def finish(self, renders, title):
        renderable = Group(*renders)
        if self.fancy:
            return Panel(
                renderable,
                title=Text.assemble("[ ", f"{title} HELP".upper(), " ]", style=self.styler("program-name")),
                title_align="left",
            )
        return renderable


class CommandHelp(_Renderer):
    """
    Help for one command, given the flag registry effective at its level.
    """

    def __init__(self, command, flags, /, route=Unset, **options):
        super().__init__(**options)
        self.command = command
        self.registry = flags
        self.route = command.name if route is Unset else route

    def render(self):
        command = self.command
        branching = command.has_subcommands
        visible = any(flag.name != HELP for flag in self.registry)

        renders = [Text.assemble(self.text(command.name, "program-name"), " - ", self.text(command.descr, "description-section"))]

        usage = Text.assemble(self.text("usage", "usage-label"), ": ", self.text(self.route, "program-name"))
        if branching:
            usage.append(" [subcommand]")
        if self.registry:
            usage.append(" [flags]")
        usage.append(" [arguments]")
        renders.append(usage)

        if command.aliases:
            renders.append(Text.assemble(self.label("aliases"), " ", ", ".join(command.aliases)))

        if visible and (table := self.flags(self.registry)) is not None:
            renders.append(self.label("flags"))
            renders.append(table)

        if branching and (table := self.commands(command.subcommands, "subcommands")) is not None:
            renders.append(table)

        if command.arguments is not None:
            renders.append(Text.assemble(self.label("arguments"), " ", command.arguments.describe()))

        if (options := self.globals(self.registry)) is not None:
            renders.append(options)

        if command.deprecated is not None:
            renders.append(Text.assemble(
                self.text("deprecated", "deprecated-label"), ": ",
                self.text(command.deprecated, "deprecated-message"),
            ))

        return self.finish(renders, command.name)

    def print(self, stream, /):
        stream.print(self.render())


class ApplicationHelp(_Renderer):
    """
    Help for the application itself: description, usage and the command list.
    """

    def __init__(self, name, descr, commands, flags, /, **options):
        super().__init__(**options)
        self.name = name
        self.descr = descr
        self.children = commands
        self.registry = flags

    def render(self):
        renders = []
        if self.descr:
            renders.append(Text.assemble(self.text(self.name, "program-name"), " - ", self.text(self.descr, "description-section")))
        renders.append(Text.assemble(
            self.text("usage", "usage-label"), ": ",
            self.text(self.name, "program-name"), " [command] [flags] [arguments]",
        ))
        if (table := self.commands(self.children, "commands")) is not None:
            renders.append(table)
        if (options := self.globals(self.registry)) is not None:
            renders.append(options)
        return self.finish(renders, self.name)

    def print(self, stream, /):
        stream.print(self.render())


__all__ = (
    "CommandHelp",
    "ApplicationHelp",
)
