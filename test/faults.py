"""
Fault tests (codes, taxonomy, rich rendering).

Scope
- Validate the exception hierarchy (builtin bases for idiomatic handling).
- Validate default and overridden options.
- Validate plain and fancy rich rendering.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from rich.console import Console

from invocations.faults import *


class TestFaults(TestCase):

    def render(self, fault):
        console = Console(color_system=None, force_terminal=False, width=120)
        with console.capture() as capture:
            console.print(fault)
        return capture.get()

    def testHierarchy(self):
        self.assertTrue(issubclass(MissingCallableError, InvocationFault))
        self.assertTrue(issubclass(MissingCallableError, TypeError))
        self.assertTrue(issubclass(SignatureError, InvocationFault))
        self.assertTrue(issubclass(SignatureError, ValueError))

    def testDefaultOptions(self):
        fault = MissingCallableError("nothing to call")
        self.assertIs(fault.options["code"], FaultCode.MISSING_CALLABLE)
        self.assertEqual(fault.options["title"], "missing callable")
        self.assertTrue(fault.options["colorful"])
        self.assertFalse(fault.options["fancy"])

    def testOverriddenOptions(self):
        fault = SignatureError("bad", code=FaultCode.MALFORMED_DESCRIPTOR)
        self.assertIs(fault.options["code"], FaultCode.MALFORMED_DESCRIPTOR)
        self.assertEqual(fault.options["title"], "unintrospectable signature")

    def testMessage(self):
        self.assertEqual(str(MissingCallableError("nothing to call")), "nothing to call")
        self.assertEqual(str(MissingCallableError()), "")

    def testNormalize(self):
        self.assertEqual(FaultCode.MISSING_CALLABLE.normalize(), "21101")

    def testPlainRendering(self):
        output = self.render(MissingCallableError("nothing to call", colorful=False))
        self.assertIn("[ invocations — 21101 | Missing Callable ]", output)
        self.assertIn("nothing to call", output)
        self.assertIn("→ pass a function", output)

    def testFancyRendering(self):
        output = self.render(SignatureError("opaque target", fancy=True, colorful=False))
        self.assertIn("Unintrospectable Signature", output)
        self.assertIn("opaque target", output)

    def testReplace(self):
        fault = copy.replace(MissingCallableError("nothing to call"), colorful=False)
        self.assertIsInstance(fault, MissingCallableError)
        self.assertFalse(fault.options["colorful"])
        self.assertEqual(fault.message, "nothing to call")

    def testReplaceRejectsPositionals(self):
        with self.assertRaises(AssertionError):
            MissingCallableError("x").__replace__("y")


if __name__ == '__main__':
    unittest.main()
