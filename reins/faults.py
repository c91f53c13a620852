"""
Reins faults (parse results, registry errors and parse diagnostics).

Scope
- ParseResult: the closed set of codes returned by parse(). Returning a code
  is the only channel for reporting malformed end-user input.
- RegistryError and subclasses: raised immediately when the host misuses the
  registry API (duplicate names, unknown action, type mismatch, undefined
  flag, validator rejection on a direct set_flag()).
- ParseFault: a small record describing why the last parse() did not return
  PARSE_OK, so the host can print something friendlier than a bare code.

UX goals
- Position-first messages: parse faults name the ordinal position of the
  offending token ("unknown flag '--bogus' at second position").
- Short titles, one-sentence bodies and a single clear hint.
- Every fault renders itself through rich (__rich__), with the palette
  overridable from a __styles__ mapping in __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple

from rich.console import Group
from rich.text import Text

from .utils import Unset


class ParseResult(IntEnum):
    """
    result codes returned by parse().

    - OK: the execution plan is ready for start().
    - HELP: --help/-h was present; nothing was parsed.
    - VERSION: --version was present; nothing was parsed.
    - ERROR: structural problem (unknown action, missing or extra arguments,
      misplaced delimiter).
    - INVALID_FLAG: unknown flag, malformed flag value or validator rejection.
    """
    OK           = 0
    HELP         = 1
    VERSION      = 2
    ERROR        = 3
    INVALID_FLAG = 4


PARSE_OK = ParseResult.OK
PARSE_HELP = ParseResult.HELP
PARSE_VERSION = ParseResult.VERSION
PARSE_ERROR = ParseResult.ERROR
PARSE_INVALID_FLAG = ParseResult.INVALID_FLAG


def _palette(defaults, /):
    main = __import__("__main__")
    return defaultdict(str, defaults | getattr(main, "__styles__", {}))


def _render(prog, label, title, message, hint, /, *, styles):
    """
    assemble the three-line fault block shared by errors and parse faults.

        [ prog — label | Title ]
        message
         → hint
    """
    header = Text.assemble(
        "[ ",
        Text(str(prog), styles["prog-name"]),
        " — ",
        Text(str(label), styles["code"]),
        " | ",
        Text(str(title), styles["title"]),
        " ]"
    )
    renders = [header, Text(str(message), styles["message"])]
    if hint:
        renders.append(Text.assemble(Text(" → ", styles["hint-arrow"]), Text(str(hint), styles["hint"])))
    return Group(*renders)


class RegistryError(Exception):
    """
    base class for programmer-misuse errors raised by the registry API.

    these indicate a bug in the host's setup code, not bad end-user input,
    so they are raised immediately and never reported through ParseResult.

    options
    - name: the flag or action name involved.
    - hint: one actionable sentence shown under the message.
    - prog: program name used in the rendered header (defaults to "reins").
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def name(self):
        return self.options.get("name")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        styles = _palette({
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })
        title = self.options.get("title", type(self).__name__)
        return _render(self.options.get("prog", "reins"), "error", title, self.message or "", self.hint, styles=styles)


class DuplicateFlagError(RegistryError): ...
class DuplicateActionError(RegistryError): ...
class UndefinedActionError(RegistryError): ...
class UndefinedFlagError(RegistryError): ...
class TypeMismatchError(RegistryError, TypeError): ...
class FlagValidationError(RegistryError, ValueError): ...


class ParseFault(NamedTuple):
    """
    diagnostic for the last unsuccessful parse().

    fields
    - code: the ParseResult that parse() returned (ERROR or INVALID_FLAG).
    - title: short lowercase title ("unknown flag").
    - message: one sentence naming the token and its ordinal position.
    - hint: one actionable sentence.
    - token: the offending token, or None when the input ended early.
    - index: 1-based position of the token after the program name.
    - prog: program name shown in the rendered header.
    """
    code: ParseResult
    title: str
    message: str
    hint: str
    token: str | None = None
    index: int = 0
    prog: str = "reins"

    def __rich__(self):
        styles = _palette({
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })
        return _render(self.prog, self.code.name.lower().replace("_", "-"), self.title.title(), self.message, self.hint, styles=styles)


__all__ = (
    "ParseResult",
    "PARSE_OK",
    "PARSE_HELP",
    "PARSE_VERSION",
    "PARSE_ERROR",
    "PARSE_INVALID_FLAG",
    "RegistryError",
    "DuplicateFlagError",
    "DuplicateActionError",
    "UndefinedActionError",
    "UndefinedFlagError",
    "TypeMismatchError",
    "FlagValidationError",
    "ParseFault",
)
