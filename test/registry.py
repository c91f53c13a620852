"""
Registry tests (configuration, typed flag access, module-level delegates).

Conventions
- Test method names follow CamelCase per project convention.
- Tests touching the module-level functions reset the default registry
  before and after running.
"""

import unittest
from unittest import TestCase

import reins
from reins import Registry, FlagType
from reins.faults import (
    DuplicateActionError,
    DuplicateFlagError,
    FlagValidationError,
    TypeMismatchError,
    UndefinedActionError,
    UndefinedFlagError,
)


def prepareGlobal():
    reins.set_app_name("test-app")
    reins.define_global_flag("global-get", "a test flag", False)
    reins.define_global_flag("global-bad-flag", "a bad test flag", False, type=int)


class TestReset(TestCase):

    def tearDown(self):
        reins.reset()

    def testResetClearsGlobalFlags(self):
        prepareGlobal()
        reins.reset()
        with self.assertRaises(UndefinedFlagError):
            reins.get_flag("global-get", bool)

    def testResetInstallsAFreshRegistry(self):
        before = reins.current()
        after = reins.reset()
        self.assertIsNot(before, after)
        self.assertIs(reins.current(), after)
        self.assertEqual(after.name, "reins")

    def testResetKeepsBuiltInFlags(self):
        reins.reset()
        self.assertIs(reins.get_flag("help"), False)
        self.assertIs(reins.get_flag("version"), False)
        self.assertIs(reins.get_flag("verbose"), False)
        self.assertEqual(reins.get_flag("vlevel"), 0)


class TestGlobalFlags(TestCase):

    def setUp(self):
        reins.reset()
        prepareGlobal()

    def tearDown(self):
        reins.reset()

    def testDefaultValueOfAnUnsetFlag(self):
        self.assertIs(reins.get_flag("global-get", bool), False)
        self.assertEqual(reins.get_flag("global-bad-flag", int), 0)

    def testUndefinedFlag(self):
        with self.assertRaises(UndefinedFlagError):
            reins.get_flag("not-global-get", bool)
        with self.assertRaises(UndefinedFlagError):
            reins.set_flag("not-global-get", False, bool)
        with self.assertRaises(UndefinedFlagError):
            reins.get_flag_type("not-global-get")

    def testSetEveryType(self):
        reins.set_flag("global-get", True, bool)
        self.assertIs(reins.get_flag("global-get", bool), True)

        reins.define_global_flag("global-int", "test", 1)
        reins.set_flag("global-int", 42, int)
        self.assertEqual(reins.get_flag("global-int", int), 42)

        reins.define_global_flag("global-double", "test", 1.1)
        reins.set_flag("global-double", 3.14, float)
        self.assertEqual(reins.get_flag("global-double", float), 3.14)

        reins.define_global_flag("global-string", "test", "bar")
        reins.set_flag("global-string", "foo", str)
        self.assertEqual(reins.get_flag("global-string", str), "foo")

    def testFlagTypes(self):
        reins.define_global_flag("global-int", "test", 1)
        reins.define_global_flag("global-double", "test", 1.1)
        reins.define_global_flag("global-string", "test", "bar")
        self.assertIs(reins.get_flag_type("global-get"), FlagType.BOOL)
        self.assertIs(reins.get_flag_type("global-int"), FlagType.INT)
        self.assertIs(reins.get_flag_type("global-double"), FlagType.DOUBLE)
        self.assertIs(reins.get_flag_type("global-string"), FlagType.STRING)

    def testTypeMismatch(self):
        with self.assertRaises(TypeMismatchError):
            reins.get_flag("global-get", int)
        with self.assertRaises(TypeMismatchError):
            reins.set_flag("global-bad-flag", "5")
        with self.assertRaises(TypeError):
            reins.set_flag("global-bad-flag", 5, str)

    def testIntegersWidenToDoubles(self):
        reins.define_global_flag("global-double", "test", 1.1)
        self.assertEqual(reins.set_flag("global-double", 3), 3.0)
        self.assertIsInstance(reins.get_flag("global-double"), float)

    def testValidation(self):
        reins.define_global_flag("global-success", "a test flag", False, lambda value: True)
        reins.define_global_flag("global-failure", "a test flag", False, lambda value: False)
        reins.set_flag("global-success", False, bool)
        with self.assertRaises(FlagValidationError):
            reins.set_flag("global-failure", True, bool)
        self.assertIs(reins.get_flag("global-failure"), False)

    def testVerbosityLevelRejectsNegativeValues(self):
        with self.assertRaises(ValueError):
            reins.set_flag("vlevel", -1)
        self.assertEqual(reins.get_flag("vlevel"), 0)

    def testDuplicateFlag(self):
        with self.assertRaises(DuplicateFlagError):
            reins.define_global_flag("global-get", "again", True)
        with self.assertRaises(DuplicateFlagError):
            reins.define_global_flag("h", "a second help", False)


class TestActions(TestCase):

    def setUp(self):
        self.registry = Registry()

    def testHelpDefaultsToDescription(self):
        action = self.registry.define_action("run", 0, description="run it")
        self.assertEqual(action.help, "run it")
        self.assertFalse(action.chainable)
        self.assertIsNone(action.callback)

    def testDuplicateAction(self):
        self.registry.define_action("run", 0)
        with self.assertRaises(DuplicateActionError):
            self.registry.define_action("run", 0)

    def testActionFlagNeedsTheAction(self):
        with self.assertRaises(UndefinedActionError) as context:
            self.registry.define_action_flag("run", "force", "", False)
        self.assertEqual(context.exception.name, "run")

    def testActionAndGlobalFlagsAreIndependent(self):
        self.registry.define_global_flag("x", "", 1)
        self.registry.define_action("run", 0)
        self.registry.define_action_flag("run", "x", "", 10)

        with self.registry.scope("run"):
            self.registry.set_flag("x", 20)
            self.assertEqual(self.registry.get_flag("x"), 20)
        self.assertEqual(self.registry.get_flag("x"), 1)

        self.registry.set_flag("x", 2)
        with self.registry.scope("run"):
            self.assertEqual(self.registry.get_flag("x"), 20)

    def testScope(self):
        self.registry.define_action("run", 0)
        self.registry.define_action_flag("run", "force", "", False)
        with self.assertRaises(UndefinedActionError):
            with self.registry.scope("missing"):
                pass
        with self.registry.scope("run") as context:
            self.assertEqual(context.action, "run")
            self.assertIs(self.registry.get_flag("force"), False)
            with self.registry.scope():
                with self.assertRaises(UndefinedFlagError):
                    self.registry.get_flag("force")
            self.assertIs(self.registry.context, context)
        with self.assertRaises(UndefinedFlagError):
            self.registry.get_flag("force")


class TestConfiguration(TestCase):

    def setUp(self):
        self.registry = Registry()

    def testAppName(self):
        self.registry.set_app_name("tool")
        self.assertEqual(self.registry.name, "tool")
        with self.assertRaises(ValueError):
            self.registry.set_app_name("  ")
        with self.assertRaises(TypeError):
            self.registry.set_app_name(None)

    def testVersionAndBanner(self):
        self.assertIsNone(self.registry.version)
        self.assertIsNone(self.registry.banner)
        self.registry.set_version("1.2.3")
        self.registry.set_help_banner("welcome")
        self.assertEqual(self.registry.version, "1.2.3")
        self.assertEqual(self.registry.banner, "welcome")

    def testDelimiters(self):
        self.assertEqual(self.registry.delimiters, ())
        self.registry.set_delimiters(["+", "--then", "+"])
        self.assertEqual(self.registry.delimiters, ("+", "--then"))
        with self.assertRaises(TypeError):
            self.registry.set_delimiters("+")
        with self.assertRaises(TypeError):
            self.registry.set_delimiters([1])
        with self.assertRaises(ValueError):
            self.registry.set_delimiters([""])
        self.assertEqual(self.registry.delimiters, ("+", "--then"))

    def testRegistriesAreIsolated(self):
        other = Registry()
        self.registry.define_action("run", 0)
        self.registry.define_global_flag("retries", "", 3)
        self.assertNotIn("run", other.actions)
        with self.assertRaises(UndefinedFlagError):
            other.get_flag("retries")


class TestDelegates(TestCase):

    def tearDown(self):
        reins.reset()

    def testDelegatesFollowTheCurrentRegistry(self):
        reins.reset()
        reins.define_action("run", 0, False, "run it")
        self.assertIn("run", reins.current().actions)
        self.assertEqual(reins.parse(["app", "run"]), reins.PARSE_OK)
        self.assertEqual(reins.get_parsed_actions(), ["run"])
        self.assertEqual(reins.start(), 0)

        reins.reset()
        self.assertEqual(reins.parse(["app", "run"]), reins.PARSE_ERROR)

    def testDelegatesCarryStableNames(self):
        self.assertEqual(reins.parse.__name__, "parse")
        self.assertEqual(reins.define_action.__doc__, Registry.define_action.__doc__)


if __name__ == "__main__":
    unittest.main()
