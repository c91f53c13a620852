"""
Reins action registry.

An action is a named subcommand: it declares how many positional arguments
it requires, whether further actions may be chained after it, its help copy
and the callback that runs it. Each action owns a flag partition in the
FlagRegistry, opened when the action is defined.
"""
import re

from .faults import *
from .logging import get_logger

logger = get_logger(__name__)

_NAME = re.compile(r"[^\s-]\S*")


class Action:
    """
    a single action definition.

    parameters
    - name: str, globally unique, no whitespace, must not start with '-'.
    - arity: int >= 0, required number of positional arguments. exact for a
      non-chainable action, a minimum for a chainable one.
    - chainable: bool, whether more actions may follow in the same invocation.
    - description: str, one-line description for the actions table.
    - help: str, extended help shown by show_help(action=...).
    - callback: None | Callable[[list[str]], int | None]; None return counts
      as status 0, a None callback is a no-op with status 0.
    """

    def __init__(self, name, arity, chainable, description, help, callback, /):
        if not isinstance(name, str):
            raise TypeError("action name must be a string")
        if not _NAME.fullmatch(name):
            raise ValueError("action name %r must be non-empty, without spaces and not start with '-'" % name)
        if not isinstance(arity, int) or isinstance(arity, bool):
            raise TypeError("action arity must be an integer")
        if arity < 0:
            raise ValueError("action arity must be a non-negative integer")
        if not isinstance(description, str) or not isinstance(help, str):
            raise TypeError("action description and help must be strings")
        if callback is not None and not callable(callback):
            raise TypeError("action callback must be callable or None")

        self.name = name
        self.arity = arity
        self.chainable = bool(chainable)
        self.description = description
        self.help = help
        self.callback = callback

    def __call__(self, arguments, /):
        if self.callback is None:
            return 0
        status = self.callback(arguments)
        return 0 if status is None else int(status)

    def __repr__(self):
        return "action(name=%r, arity=%d, chainable=%r)" % (self.name, self.arity, self.chainable)


class ActionRegistry:
    """
    action definitions keyed by name, in definition order.
    """

    def __init__(self, flags, /):
        self._actions = {}
        self._flags = flags

    def define(self, name, arity, chainable, description, help, callback, /):
        action = Action(name, arity, chainable, description, help, callback)
        if self._actions.setdefault(name, action) is not action:
            raise DuplicateActionError(
                "action %r is already defined" % name,
                name=name,
                hint="each action name can be defined only once",
            )
        self._flags.open(name)
        logger.debug("action_defined", name=name, arity=arity, chainable=action.chainable)
        return action

    def define_flag(self, action, names, description, default, validator=None, /, **options):
        if action not in self._actions:
            raise UndefinedActionError(
                "cannot define flag %r for undefined action %r" % (names, action),
                name=action,
                hint="define the action with define_action() before its flags",
            )
        return self._flags.define(action, names, description, default, validator, **options)

    def lookup(self, name, /):
        return self._actions.get(name)

    def __contains__(self, name):
        return name in self._actions

    def __iter__(self):
        return iter(self._actions.values())

    def __len__(self):
        return len(self._actions)


__all__ = (
    "Action",
    "ActionRegistry",
)
