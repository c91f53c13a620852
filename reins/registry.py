"""
Reins registry: the explicit state object behind every operation.

What this module provides
- Registry: app name, version, help banner, delimiters, flag and action
  registries, the execution plan of the last parse(), the statuses of the
  last start(), the fault of the last failed parse(), and the current scope.
  Hosts that want isolation (tests, several parsers in one process) create
  their own instances.
- A process-wide default Registry behind module-level functions
  (define_action, parse, start, get_flag, ...). reset() swaps it for a fresh
  instance, returning the system to its initial state.

Quick start
    import reins

    def copy(arguments):
        source, target = arguments
        retries = reins.get_flag("retries", int)
        ...
        return 0

    reins.define_global_flag("retries", "how many times to retry", 3)
    reins.define_action("copy", 2, False, "copy a file", "copy SOURCE TARGET", copy)

    match reins.parse(sys.argv):
        case reins.PARSE_OK:
            sys.exit(reins.start())
        case reins.PARSE_HELP:
            reins.show_help()
        case reins.PARSE_VERSION:
            reins.show_version()
        case _:
            reins.show_help()
            sys.exit(2)

Built-in global flags
- "h help" and "version" (Bool): found by the parser's pre-scan.
- "verbose" (Bool) and "vlevel" (Int, non-negative): read them to call
  reins.logging.configure_logging().

Threading
- No internal locking: hosts serialize define/parse/start calls themselves.
"""
import os.path
import shlex
import sys
from collections.abc import Iterable
from contextlib import contextmanager

from .actions import ActionRegistry
from .dispatcher import Dispatcher, outcome
from .faults import *
from .flags import FlagRegistry, ScopeContext, GLOBAL
from .logging import get_logger
from .parser import Parser
from . import render
from .utils import *

logger = get_logger(__name__)


class Registry:
    """
    process state of one command-line interface.

    read-only views
    - name, version, banner, delimiters: configuration set through the setters.
    - plan: tuple of Segment from the last successful parse().
    - statuses: statuses returned by the actions of the last start().
    - fault: ParseFault of the last failed parse(), else None.
    - context: the ScopeContext used by get_flag()/set_flag().
    - flags, actions: the underlying FlagRegistry and ActionRegistry.
    """
    delimiters = mirror("delimiters")
    statuses = mirror("statuses")

    def __init__(self):
        self._name = Unset
        self._version = Unset
        self._banner = Unset
        self._delimiters = ()
        self._plan = ()
        self._statuses = []
        self._fault = None
        self._context = GLOBAL
        self.flags = FlagRegistry()
        self.actions = ActionRegistry(self.flags)

        self.define_global_flag("h help", "show this help and exit", False)
        self.define_global_flag("version", "show the version and exit", False)
        self.define_global_flag("verbose", "enable verbose output", False)
        self.define_global_flag("vlevel", "verbosity level", 0, lambda level: level >= 0)

    @property
    def name(self):
        return coalesce(self._name, "reins")

    @property
    def version(self):
        return coalesce(self._version)

    @property
    def banner(self):
        return coalesce(self._banner)

    @property
    def plan(self):
        return self._plan

    @property
    def fault(self):
        return self._fault

    @property
    def context(self):
        return self._context

    def set_app_name(self, name, /):
        """
        set the program name used in help, version and fault output.
        """
        if not isinstance(name, str):
            raise TypeError("app name must be a string")
        if not (name := name.strip()):
            raise ValueError("app name cannot be empty")
        self._name = name

    def set_version(self, version, /):
        if not isinstance(version, str):
            raise TypeError("version must be a string")
        self._version = version

    def set_help_banner(self, banner, /):
        """
        set the text shown above the usage line by show_help().
        """
        if not isinstance(banner, str):
            raise TypeError("help banner must be a string")
        self._banner = banner

    def set_delimiters(self, delimiters, /):
        """
        replace the chain-separator token set (e.g. ["+", "--then"]).
        """
        if isinstance(delimiters, str) or not isinstance(delimiters, Iterable):
            raise TypeError("delimiters must be an iterable of strings")
        delimiters = tuple(dict.fromkeys(delimiters))
        for delimiter in delimiters:
            if not isinstance(delimiter, str):
                raise TypeError("delimiters must be an iterable of strings")
            if not delimiter or delimiter != delimiter.strip():
                raise ValueError("delimiter %r must be non-empty without surrounding spaces" % delimiter)
        self._delimiters = delimiters

    def define_global_flag(self, names, description, default, validator=None, /, *, type=Unset, help=Unset):
        """
        define a global flag; DuplicateFlagError if a name is taken globally.
        """
        return self.flags.define(None, names, description, default, validator, type=type, help=help)

    def define_action(self, name, arity, chainable=False, description="", help=Unset, callback=None):
        """
        define an action; DuplicateActionError if the name is taken.

        `help` defaults to the description; `callback` receives the list of
        positional arguments and returns an integer status.
        """
        return self.actions.define(name, arity, chainable, description, coalesce(help, description), callback)

    def define_action_flag(self, action, names, description, default, validator=None, /, *, type=Unset, help=Unset):
        """
        define a flag scoped to `action`; UndefinedActionError if the action
        does not exist, DuplicateFlagError if a name is taken in that scope.
        """
        return self.actions.define_flag(action, names, description, default, validator, type=type, help=help)

    def get_flag(self, name, type=Unset, /):
        """
        value of `name` in the current scope chain (action, then global).

        `type` (FlagType or bool/int/float/str) asserts the stored type and
        raises TypeMismatchError when it differs.
        """
        return self.flags.get(name, type, context=self._context)

    def set_flag(self, name, value, type=Unset, /):
        """
        assign `name` in the current scope chain; the value is validated
        first and left untouched on FlagValidationError.
        """
        return self.flags.set(name, value, type, context=self._context)

    def get_flag_type(self, name, /):
        return self.flags.type(name, context=self._context)

    @contextmanager
    def scope(self, action=None, /):
        """
        make `action` the current scope for the duration of the block.
        """
        if action is not None and action not in self.actions:
            raise UndefinedActionError(
                "cannot enter the scope of undefined action %r" % (action,),
                name=action,
                hint="define the action with define_action() first",
            )
        previous, self._context = self._context, ScopeContext(action)
        try:
            yield self._context
        finally:
            self._context = previous

    def parse(self, argv=Unset, /):
        """
        parse a full argument vector (program name first) into the plan.

        argv
        - Unset: sys.argv.
        - str: a shell-like command line, split with shlex.split.
        - Iterable[str]: used as-is.

        returns one ParseResult; malformed input never raises.
        """
        if argv is Unset:
            argv = sys.argv
        elif isinstance(argv, str):
            argv = shlex.split(argv)
        elif not isinstance(argv, Iterable):
            raise TypeError("parse() argument must be a string or an iterable of strings")

        argv = list(argv)
        for token in argv:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")

        if argv and self._name is Unset and argv[0]:
            self._name = os.path.basename(argv[0])

        parser = Parser(self.actions, self.flags, self._delimiters, prog=self.name)
        result, self._plan, self._fault = parser(argv[1:])
        return result

    def start(self):
        """
        run the plan of the last successful parse(); return the last
        non-zero status, or 0.
        """
        self._statuses = []
        Dispatcher(self)(self._plan, self._statuses)
        return outcome(self._statuses)

    def get_parsed_actions(self):
        return [segment.action for segment in self._plan]

    def show_help(self, action=None, /, *, console=None):
        render.show_help(self, action, console=console)

    def show_version(self, *, console=None):
        render.show_version(self, console=console)

    def __repr__(self):
        return "registry(name=%r, actions=%r, delimiters=%r, plan=%r)" % (
            self.name, [action.name for action in self.actions], self._delimiters, self.get_parsed_actions()
        )


_current = Registry()


def current():
    """
    the process-wide default registry.
    """
    return _current


def reset():
    """
    replace the default registry with a fresh one and return it.
    """
    global _current
    _current = Registry()
    logger.debug("registry_reset")
    return _current


def _delegate(name, /):
    @rename(name)
    def function(*args, **kwargs):
        return getattr(_current, name)(*args, **kwargs)
    function.__doc__ = getattr(Registry, name).__doc__
    return function


_DELEGATES = (
    "set_app_name",
    "set_version",
    "set_help_banner",
    "set_delimiters",
    "define_global_flag",
    "define_action",
    "define_action_flag",
    "get_flag",
    "set_flag",
    "get_flag_type",
    "parse",
    "start",
    "get_parsed_actions",
    "show_help",
    "show_version",
)

for _name in _DELEGATES:
    globals()[_name] = _delegate(_name)
del _name


__all__ = (
    "Registry",
    "current",
    "reset",
) + _DELEGATES
