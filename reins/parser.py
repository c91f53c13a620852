"""
Reins tokenizer/parser: turn an argument vector into an execution plan.

Token classes
- flag token: "--name", "--name=value", "-x" or "-x=value" (x a letter).
- delimiter: a token equal to one of the configured delimiters.
- word: anything else ("-5", "-", "--" included).

Phases
- pre-scan
  • "--help"/"-h" anywhere → PARSE_HELP, "--version" anywhere → PARSE_VERSION
    (first occurrence wins, "=value" spellings included); nothing else is
    touched.
- leading flags
  • flag tokens before the first action resolve against the global scope.
- segments
  • the first word must name an action. words become its positional
    arguments, flag tokens resolve against the action scope then the global
    scope.
  • a delimiter closes a chainable action's segment; the next token must
    name a chainable action.
  • implicit boundary: once a chainable action has its required arguments,
    a word naming an action opens the next segment.
  • a non-chainable action takes exactly its arity and must be the only
    segment.
  • a segment with fewer words than the action's arity is an error.
  • a non-Bool flag never takes a delimiter as its value.

Failures never raise: the parser stops at the first problem and reports a
ParseResult plus a ParseFault carrying a position-first message.

Flag values are assigned as they are read, so a failed parse leaves the
values assigned by the processed prefix. Action-scoped values are also
recorded on their segment so chained invocations of the same action keep
their own values.
"""
import re
from collections import deque
from types import MappingProxyType
from typing import NamedTuple

from .faults import *
from .flags import FlagType, ScopeContext, GLOBAL
from .logging import get_logger
from .utils import ordinal, pluralize

logger = get_logger(__name__)

HELP_TOKENS = ("--help", "-h")
VERSION_TOKENS = ("--version",)

_SHORT = re.compile(r"-[^\W\d_](=.*)?", re.S)


class Segment(NamedTuple):
    """
    one link of the execution plan.

    - action: action name.
    - arguments: positional arguments in encounter order.
    - flags: action-scoped flag values given inside this segment, keyed by
      canonical flag name (read-only).
    """
    action: str
    arguments: tuple[str, ...] = ()
    flags: MappingProxyType = MappingProxyType({})


class _Halt(Exception):
    def __init__(self, fault):
        super().__init__(fault.message)
        self.fault = fault


def isflag(token, /):
    return (token.startswith("--") and len(token) > 2) or bool(_SHORT.fullmatch(token))


class Parser:
    """
    single-pass parser bound to an action registry, a flag registry and a
    delimiter set.

    calling the parser with the tokens after the program name returns
    (result, plan, fault): plan is a tuple of Segment (empty unless
    result is PARSE_OK) and fault is a ParseFault or None.
    """

    def __init__(self, actions, flags, delimiters=(), /, *, prog="reins"):
        self._actions = actions
        self._flags = flags
        self._delimiters = frozenset(delimiters)
        self._prog = prog
        self._tokens = deque()
        self._index = 0
        self._plan = []

    def __call__(self, tokens, /):
        tokens = list(tokens)
        logger.debug("parse_started", tokens=len(tokens))

        for token in (token.partition("=")[0] for token in tokens):
            if token in HELP_TOKENS:
                logger.debug("parse_finished", result=PARSE_HELP.name)
                return PARSE_HELP, (), None
            if token in VERSION_TOKENS:
                logger.debug("parse_finished", result=PARSE_VERSION.name)
                return PARSE_VERSION, (), None

        self._tokens = deque(tokens)
        self._index = 0
        self._plan = []

        try:
            self._parse()
        except _Halt as halt:
            logger.debug("parse_failed", result=halt.fault.code.name, token=halt.fault.token, index=halt.fault.index)
            return halt.fault.code, (), halt.fault

        plan = tuple(self._plan)
        logger.debug("parse_finished", result=PARSE_OK.name, actions=[segment.action for segment in plan])
        return PARSE_OK, plan, None

    def _next(self):
        self._index += 1
        return self._tokens.popleft()

    def _fail(self, code, title, message, hint, token=None):
        raise _Halt(ParseFault(code, title, message, hint, token, self._index, self._prog))

    def _parse(self):
        while self._tokens and isflag(self._tokens[0]) and self._tokens[0] not in self._delimiters:
            self._flag(self._next(), GLOBAL, {})

        if not self._tokens:
            self._fail(
                PARSE_ERROR,
                "missing action",
                "no action was given",
                "run '%s --help' to see the available actions" % self._prog,
            )

        action = self._action(self._next())
        while action is not None:
            action = self._segment(action)

    def _action(self, token):
        if (action := self._actions.lookup(token)) is None:
            self._fail(
                PARSE_ERROR,
                "unknown action",
                "unknown action %r at %s position" % (token, ordinal(self._index)),
                "run '%s --help' to see the available actions" % self._prog,
                token,
            )
        if self._plan and not action.chainable:
            self._fail(
                PARSE_ERROR,
                "action cannot be chained",
                "action %r at %s position cannot be chained after %r" % (
                    token, ordinal(self._index), self._plan[-1].action
                ),
                "run %r on its own" % action.name,
                token,
            )
        return action

    def _segment(self, action):
        """
        consume one segment; return the action opening the next one, or None.
        """
        context = ScopeContext(action.name)
        arguments = []
        recorded = {}

        while self._tokens:
            token = self._tokens[0]

            if token in self._delimiters:
                self._next()
                if not action.chainable:
                    self._fail(
                        PARSE_ERROR,
                        "action cannot be chained",
                        "delimiter %r at %s position follows %r, which cannot be chained" % (
                            token, ordinal(self._index), action.name
                        ),
                        "run %r on its own" % action.name,
                        token,
                    )
                self._close(action, arguments, recorded)
                if not self._tokens:
                    self._fail(
                        PARSE_ERROR,
                        "missing action",
                        "delimiter %r at %s position is not followed by an action" % (token, ordinal(self._index)),
                        "add an action after %r or remove it" % token,
                        token,
                    )
                return self._action(self._next())

            if isflag(token):
                self._flag(self._next(), context, recorded)
                continue

            if action.chainable and len(arguments) >= action.arity and token in self._actions:
                self._close(action, arguments, recorded)
                return self._action(self._next())

            self._next()
            if not action.chainable and len(arguments) >= action.arity:
                self._fail(
                    PARSE_ERROR,
                    "unexpected argument",
                    "unexpected argument %r at %s position; %r takes %s" % (
                        token, ordinal(self._index), action.name, pluralize(action.arity, "argument")
                    ),
                    "remove the extra input or run '%s --help'" % self._prog,
                    token,
                )
            arguments.append(token)

        self._close(action, arguments, recorded)
        return None

    def _close(self, action, arguments, recorded):
        if (given := len(arguments)) < action.arity:
            self._fail(
                PARSE_ERROR,
                "missing arguments",
                "action %r requires %s but %s given" % (
                    action.name, pluralize(action.arity, "argument"), "%d was" % given if given == 1 else "%d were" % given
                ),
                "add the missing arguments after %r" % action.name,
            )
        self._plan.append(Segment(action.name, tuple(arguments), MappingProxyType(dict(recorded))))
        logger.debug("segment_parsed", action=action.name, arguments=len(arguments), flags=sorted(recorded))

    def _flag(self, token, context, recorded):
        short = not token.startswith("--")
        name, separator, text = token[1 if short else 2:].partition("=")

        flag = self._flags.find(name, context)
        if flag is None or (len(name) == 1) != short:
            self._fail(
                PARSE_INVALID_FLAG,
                "unknown flag",
                "unknown flag %r at %s position" % (token.partition("=")[0], ordinal(self._index)),
                "run '%s --help' to see the available flags" % self._prog,
                token,
            )

        if not separator and flag.type is FlagType.BOOL:
            text = "true"
        elif not separator:
            if not self._tokens or self._tokens[0] in self._delimiters:
                self._fail(
                    PARSE_INVALID_FLAG,
                    "missing flag value",
                    "flag %r at %s position needs a %s value" % (token, ordinal(self._index), flag.type.value),
                    "pass it as %s=<value> or %s <value>" % (token, token),
                    token,
                )
            text = self._next()

        try:
            value = flag.assign(flag.type.parse(text))
        except ValueError as error:
            # FlagValidationError is a ValueError too
            self._fail(
                PARSE_INVALID_FLAG,
                "invalid flag value",
                "invalid value %r for flag %r at %s position" % (text, flag.name, ordinal(self._index)),
                error.hint if isinstance(error, FlagValidationError) else "expected a %s literal" % flag.type.value,
                token,
            )

        if flag.scope is not None:
            recorded[flag.name] = value


__all__ = (
    "Segment",
    "Parser",
    "HELP_TOKENS",
    "VERSION_TOKENS",
    "isflag",
)
