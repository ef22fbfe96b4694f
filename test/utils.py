"""
Utility tests (Unset sentinel, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from types import MappingProxyType
from unittest import TestCase

from invocations.utils import *


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))


class TestRename(TestCase):

    def testFunctionForm(self):
        def work():
            pass

        self.assertIs(rename(work, "forward"), work)
        self.assertEqual(work.__name__, "forward")
        self.assertEqual(work.__qualname__, "forward")

    def testDecoratorForm(self):
        @rename("forward")
        def work():
            pass

        self.assertEqual(work.__name__, "forward")

    def testRejectsBuiltins(self):
        with self.assertRaises(TypeError):
            rename(len, "size")

    def testArgumentCount(self):
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):

    def testReadOnlyViews(self):
        class Holder:
            _items = [1, 2]
            _names = {"a": 1}
            _text = "text"
            items = mirror("items")
            names = mirror("names")
            text = mirror("text")

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.names, MappingProxyType)
        self.assertEqual(holder.text, "text")
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == '__main__':
    unittest.main()
