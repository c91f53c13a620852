"""
Utilities tests (sentinel, coalesce, rename, mirror, ordinal, pluralize).
"""

import unittest
from unittest import TestCase

from reins.utils import *


class TestUnset(TestCase):

    def testSentinel(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsInstance(Unset, str | Unset)
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)


class TestHelpers(TestCase):

    def testRename(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(rename(lambda: None, "other").__qualname__, "other")
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorCopiesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a", ["b"]]

        holder = Holder()
        self.assertEqual(holder.items, ("a", ("b",)))
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(112), "112th")

    def testPluralize(self):
        self.assertEqual(pluralize(1, "argument"), "1 argument")
        self.assertEqual(pluralize(0, "argument"), "0 arguments")
        self.assertEqual(pluralize(2, "alias"), "2 aliases")


if __name__ == "__main__":
    unittest.main()
