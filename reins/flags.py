r"""
Reins flag registry.

Overview
- FlagType: closed enumeration of the value types a flag can hold
  (BOOL, INT, DOUBLE, STRING). Each variant owns its rules:
  • coerce(value): accept a Python value of a compatible type (int → float for
    DOUBLE, bool → int for INT) or fail with TypeMismatchError.
  • parse(text): turn command-line text into a value or fail with ValueError.
  • format(value): turn a value back into command-line text (help output).

- Flag: one definition. Holds its aliases, description, help text, type,
  default, optional validator, owning scope and current value.

- ScopeContext: the ordered scope chain used for lookups. With an action set,
  the action's partition is searched first and the global one second.

- FlagRegistry: the storage, partitioned by scope (None is the global scope,
  any other key is an action name).

Names
- A flag is defined with one or more aliases separated by whitespace
  ("h help"). One-character aliases are spelled "-h" on the command line,
  longer ones "--help". Aliases must match r"[^\W_][\w-]*" and be unique
  within their scope; the same alias may exist in the global scope and in
  any action scope, and the action one shadows the global one while that
  action is current.

Validators
- A validator is a predicate over the typed candidate value. It must be pure:
  assignment validates before mutating, and a rejected value leaves the
  current value untouched. A validator that raises counts as a rejection
  (FlagValidationError chained to the original exception).
"""
import re
from enum import Enum
from typing import NamedTuple

from .faults import *
from .logging import get_logger
from .utils import *

logger = get_logger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")
_FLOATING = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_ALIAS = re.compile(r"[^\W_][\w-]*")


class FlagType(Enum):
    """
    value types a flag can hold.

    members map one-to-one to Python types: BOOL → bool, INT → int,
    DOUBLE → float, STRING → str.
    """
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"

    @property
    def pytype(self):
        return {
            FlagType.BOOL: bool,
            FlagType.INT: int,
            FlagType.DOUBLE: float,
            FlagType.STRING: str,
        }[self]

    @classmethod
    def of(cls, value, /):
        """
        infer the flag type of a Python value (bool is checked before int).
        """
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.DOUBLE
        if isinstance(value, str):
            return cls.STRING
        raise TypeMismatchError(
            "cannot infer a flag type from %r" % (value,),
            hint="use a bool, int, float or str default, or pass type= explicitly",
        )

    @classmethod
    def resolve(cls, type, /):
        """
        accept a FlagType, one of the mapped Python types, or a member value
        ("bool", "int", "double", "string").
        """
        if isinstance(type, cls):
            return type
        for member in cls:
            if type is member.pytype or type == member.value:
                return member
        raise TypeMismatchError(
            "%r is not a flag type" % (type,),
            hint="use FlagType.BOOL/INT/DOUBLE/STRING or bool/int/float/str",
        )

    def coerce(self, value, /):
        match self:
            case FlagType.BOOL if isinstance(value, bool):
                return value
            case FlagType.INT if isinstance(value, int):
                return int(value)
            case FlagType.DOUBLE if isinstance(value, int | float) and not isinstance(value, bool):
                return float(value)
            case FlagType.STRING if isinstance(value, str):
                return value
        raise TypeMismatchError(
            "%r is not a valid %s value" % (value, self.value),
            hint="pass a %s value" % self.pytype.__name__,
        )

    def parse(self, text, /):
        """
        parse command-line text; raises ValueError on a malformed literal.
        """
        match self:
            case FlagType.BOOL:
                try:
                    return {"true": True, "false": False}[text.lower()]
                except KeyError:
                    raise ValueError("%r is not 'true' or 'false'" % text) from None
            case FlagType.INT:
                if not _INTEGER.fullmatch(text):
                    raise ValueError("%r is not an integer literal" % text)
                return int(text)
            case FlagType.DOUBLE:
                if not _FLOATING.fullmatch(text):
                    raise ValueError("%r is not a floating literal" % text)
                return float(text)
            case FlagType.STRING:
                return text

    def format(self, value, /):
        if self is FlagType.BOOL:
            return "true" if value else "false"
        if self is FlagType.STRING:
            return repr(value)
        return str(value)


class Flag:
    """
    a single flag definition and its current value.

    parameters
    - names: str, whitespace separated aliases ("h help").
    - description: str, one-line description used in help tables.
    - default: typed default; also the initial current value.
    - validator: None | Callable[[value], bool].
    - type: Unset | FlagType | bool/int/float/str; inferred from the default
      when Unset, otherwise the default is coerced to it.
    - help: Unset | str, extended help text (defaults to the description).
    - scope: None for global flags, the owning action name otherwise.
    """
    aliases = mirror("aliases")

    def __init__(self, names, description, default, validator=None, /, *, type=Unset, help=Unset, scope=None):
        if not isinstance(names, str):
            raise TypeError("flag names must be a string")
        if not (aliases := tuple(dict.fromkeys(names.split()))):
            raise ValueError("flag names cannot be empty")
        for alias in aliases:
            if not _ALIAS.fullmatch(alias):
                raise ValueError("flag name %r must start with a letter or digit and contain no spaces or '='" % alias)
        if not isinstance(description, str):
            raise TypeError("flag description must be a string")
        if validator is not None and not callable(validator):
            raise TypeError("flag validator must be callable or None")
        if not isinstance(help, str | Unset):
            raise TypeError("flag help must be a string")

        self._aliases = aliases
        self.description = description
        self.help = coalesce(help, description)
        self.type = FlagType.of(default) if type is Unset else FlagType.resolve(type)
        self.default = self.type.coerce(default)
        self.validator = validator
        self.scope = scope
        self._value = self.default

    @property
    def name(self):
        """
        canonical alias: the first long alias, or the first alias.
        """
        return next((alias for alias in self._aliases if len(alias) > 1), self._aliases[0])

    @property
    def spellings(self):
        """
        command-line spellings of every alias ("-h", "--help").
        """
        return tuple(("-" if len(alias) == 1 else "--") + alias for alias in self._aliases)

    @property
    def value(self):
        return self._value

    def accepts(self, candidate, /):
        return self.validator is None or bool(self.validator(candidate))

    def assign(self, value, /):
        """
        coerce, validate, then store; a rejected value leaves the flag unchanged.
        """
        candidate = self.type.coerce(value)
        try:
            accepted = self.accepts(candidate)
        except Exception as error:
            raise FlagValidationError(
                "the validator of flag %r raised %s on %r" % (self.name, type(error).__name__, candidate),
                name=self.name,
                hint="validators must return a bool instead of raising",
            ) from error
        if not accepted:
            raise FlagValidationError(
                "value %r was rejected by the validator of flag %r" % (candidate, self.name),
                name=self.name,
                hint="pass a value the validator accepts",
            )
        self._value = candidate
        return candidate

    def restore(self, value=Unset, /):
        """
        reset the current value to `value` (already validated) or the default.
        """
        self._value = coalesce(value, self.default)

    def __repr__(self):
        return "flag(name=%r, type=%s, default=%r, value=%r, scope=%r)" % (
            self.name, self.type.value, self.default, self._value, self.scope
        )

    def __rich_repr__(self):
        yield "name", self.name
        yield "aliases", self._aliases
        yield "type", self.type.value
        yield "default", self.default
        yield "value", self._value
        yield "scope", self.scope


class ScopeContext(NamedTuple):
    """
    the scope chain for flag lookups: the current action (if any), then global.
    """
    action: str | None = None

    @property
    def chain(self):
        return (None,) if self.action is None else (self.action, None)


GLOBAL = ScopeContext()


class FlagRegistry:
    """
    flag storage partitioned by scope.

    partitions
    - None: global flags.
    - "<action>": flags of that action; opened by open() when the action is
      defined, so defining into an unknown action fails.
    """

    def __init__(self):
        self._partitions = {None: {}}

    def open(self, scope, /):
        self._partitions.setdefault(scope, {})

    def define(self, scope, names, description, default, validator=None, /, **options):
        try:
            partition = self._partitions[scope]
        except KeyError:
            raise UndefinedActionError(
                "cannot define flag %r for undefined action %r" % (names, scope),
                name=scope,
                hint="define the action before its flags",
            ) from None

        flag = Flag(names, description, default, validator, scope=scope, **options)

        for alias in flag.aliases:
            if alias in partition:
                raise DuplicateFlagError(
                    "flag %r is already defined in the %s scope" % (alias, "global" if scope is None else repr(scope)),
                    name=alias,
                    hint="pick another name or alias",
                )
        for alias in flag.aliases:
            partition[alias] = flag

        logger.debug("flag_defined", name=flag.name, scope=scope, type=flag.type.value, default=flag.default)
        return flag

    def flags(self, scope=None, /):
        """
        the distinct flags of a scope in definition order.
        """
        return tuple(dict.fromkeys(self._partitions.get(scope, {}).values()))

    def find(self, name, context=GLOBAL, /):
        """
        resolve a name (or alias) along the context chain; None when absent.
        """
        for scope in context.chain:
            try:
                return self._partitions[scope][name]
            except KeyError:
                continue
        return None

    def lookup(self, name, context=GLOBAL, /):
        if (flag := self.find(name, context)) is None:
            raise UndefinedFlagError(
                "flag %r is not defined%s" % (
                    name, "" if context.action is None else " for action %r or globally" % context.action
                ),
                name=name,
                hint="define it with define_global_flag() or define_action_flag() first",
            )
        return flag

    def get(self, name, type=Unset, /, *, context=GLOBAL):
        flag = self.lookup(name, context)
        _expect(flag, type)
        return flag.value

    def set(self, name, value, type=Unset, /, *, context=GLOBAL):
        flag = self.lookup(name, context)
        _expect(flag, type)
        return flag.assign(value)

    def type(self, name, /, *, context=GLOBAL):
        return self.lookup(name, context).type


def _expect(flag, type, /):
    if type is Unset:
        return
    if (expected := FlagType.resolve(type)) is not flag.type:
        raise TypeMismatchError(
            "flag %r holds %s values, not %s" % (flag.name, flag.type.value, expected.value),
            name=flag.name,
            hint="use type %s for this flag" % flag.type.pytype.__name__,
        )


__all__ = (
    "FlagType",
    "Flag",
    "ScopeContext",
    "GLOBAL",
    "FlagRegistry",
)
