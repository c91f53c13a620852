"""
Action registry tests (definitions, callbacks, scoped flag partitions).
"""

import unittest
from unittest import TestCase

from reins.actions import Action, ActionRegistry
from reins.faults import DuplicateActionError, UndefinedActionError
from reins.flags import FlagRegistry, ScopeContext


class TestAction(TestCase):

    def testMalformedDefinitionsRaise(self):
        with self.assertRaises(TypeError):
            Action(None, 0, False, "", "", None)
        with self.assertRaises(ValueError):
            Action("two words", 0, False, "", "", None)
        with self.assertRaises(ValueError):
            Action("-run", 0, False, "", "", None)
        with self.assertRaises(ValueError):
            Action("run", -1, False, "", "", None)
        with self.assertRaises(TypeError):
            Action("run", True, False, "", "", None)
        with self.assertRaises(TypeError):
            Action("run", 0, False, "", "", "not callable")

    def testCallbackReceivesArguments(self):
        received = []
        action = Action("run", 1, False, "", "", lambda arguments: received.extend(arguments) or 4)
        self.assertEqual(action(["x"]), 4)
        self.assertEqual(received, ["x"])

    def testNoneStatusAndNoneCallbackCountAsSuccess(self):
        self.assertEqual(Action("run", 0, False, "", "", lambda arguments: None)([]), 0)
        self.assertEqual(Action("run", 0, False, "", "", None)([]), 0)


class TestActionRegistry(TestCase):

    def setUp(self):
        self.flags = FlagRegistry()
        self.actions = ActionRegistry(self.flags)

    def testDuplicateActionRaises(self):
        self.actions.define("run", 0, False, "", "", None)
        with self.assertRaises(DuplicateActionError):
            self.actions.define("run", 1, True, "", "", None)
        self.assertEqual(self.actions.lookup("run").arity, 0)

    def testLookupReturnsNoneWhenAbsent(self):
        self.assertIsNone(self.actions.lookup("run"))
        self.assertNotIn("run", self.actions)

    def testDefinitionOrder(self):
        for name in ("b", "a", "c"):
            self.actions.define(name, 0, False, "", "", None)
        self.assertEqual([action.name for action in self.actions], ["b", "a", "c"])
        self.assertEqual(len(self.actions), 3)

    def testActionFlagsNeedTheAction(self):
        with self.assertRaises(UndefinedActionError):
            self.actions.define_flag("run", "force", "", False)

        self.actions.define("run", 0, False, "", "", None)
        flag = self.actions.define_flag("run", "f force", "", False)
        self.assertEqual(flag.scope, "run")
        self.assertIs(self.flags.find("force", ScopeContext("run")), flag)
        self.assertIsNone(self.flags.find("force"))


if __name__ == "__main__":
    unittest.main()
