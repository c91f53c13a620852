"""
Reins rendering: help, version and parse-fault output through rich.

Everything here is a stateless consumer of a Registry: it reads the app
name, banner, version, delimiters, actions and flags, and prints.

Palette keys
- banner, usage-label, program-name, usage
- group-label, action-name, flag-name, type, default, description
- version

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .faults import UndefinedActionError

_styles = {
    "banner": "bold #FF4D94",
    "usage-label": "bold #00E6FF",
    "program-name": "bold #FF4D94",
    "usage": "bold #36C5F0",
    "group-label": "bold #FFFFFF",
    "action-name": "bold #36C5F0",
    "flag-name": "bold #22C55E",
    "type": "#FFD600",
    "default": "italic #A3A3A3",
    "description": "#9CA3AF",
    "version": "bold #22C55E",
}


def _palette():
    return defaultdict(str, _styles | getattr(__import__("__main__"), "__styles__", {}))


def _flags_table(title, flags, styles):
    table = Table(title=Text(title, styles["group-label"]), title_justify="left", box=ROUNDED, show_header=False)
    table.add_column("flag", no_wrap=True)
    table.add_column("type", no_wrap=True)
    table.add_column("default")
    table.add_column("description")
    for flag in flags:
        table.add_row(
            Text(" | ".join(flag.spellings), styles["flag-name"]),
            Text(flag.type.value, styles["type"]),
            Text(flag.type.format(flag.default), styles["default"]),
            Text(flag.help, styles["description"]),
        )
    return table


def _usage(registry, action, styles):
    usage = Text.assemble(
        Text("usage: ", styles["usage-label"]),
        Text(registry.name, styles["program-name"]),
        " ",
    )
    if action is None:
        usage.append("[flags] <action> [arguments] [flags]", styles["usage"])
    else:
        arguments = " ".join("<arg%d>" % index for index in range(1, action.arity + 1))
        usage.append(" ".join(part for part in (action.name, arguments, "[flags]") if part), styles["usage"])
    if registry.delimiters and (action is None or action.chainable):
        usage.append(" [%s <action> ...]" % registry.delimiters[0], styles["usage"])
    return usage


def show_help(registry, action=None, /, *, console=None):
    """
    print help for the whole interface, or for one action when `action` is
    given (UndefinedActionError if it does not exist).
    """
    console = console or Console()
    styles = _palette()

    if action is not None:
        if (action := registry.actions.lookup(name := action)) is None:
            raise UndefinedActionError(
                "cannot show help for undefined action %r" % name,
                name=name,
                hint="pass one of the defined action names",
            )

    renders = []
    if registry.banner:
        renders.append(Text(registry.banner, styles["banner"]))
    renders.append(_usage(registry, action, styles))

    if action is None:
        if len(registry.actions):
            table = Table(title=Text("actions", styles["group-label"]), title_justify="left", box=ROUNDED, show_header=False)
            table.add_column("action", no_wrap=True)
            table.add_column("arguments", no_wrap=True)
            table.add_column("chain", no_wrap=True)
            table.add_column("description")
            for entry in registry.actions:
                table.add_row(
                    Text(entry.name, styles["action-name"]),
                    Text(str(entry.arity), styles["type"]),
                    Text("chainable" if entry.chainable else "", styles["default"]),
                    Text(entry.description, styles["description"]),
                )
            renders.append(table)
    else:
        renders.append(Text(action.help, styles["description"]))
        if flags := registry.flags.flags(action.name):
            renders.append(_flags_table("%s flags" % action.name, flags, styles))

    renders.append(_flags_table("global flags", registry.flags.flags(None), styles))

    if registry.delimiters:
        renders.append(Text.assemble(
            Text("chain actions with: ", styles["group-label"]),
            Text(" ".join(registry.delimiters), styles["flag-name"]),
        ))

    console.print(Group(*renders))


def show_version(registry, /, *, console=None):
    console = console or Console()
    styles = _palette()
    console.print(Text.assemble(
        Text(registry.name, styles["program-name"]),
        " ",
        Text(registry.version or "unknown version", styles["version"]),
    ))


def show_fault(fault, /, *, console=None):
    """
    print a ParseFault (or RegistryError) to stderr, or to `console`.
    """
    console = console or Console(stderr=True)
    console.print(fault)


__all__ = (
    "show_help",
    "show_version",
    "show_fault",
)
