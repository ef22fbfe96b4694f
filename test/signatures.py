"""
Signature classifier tests (kinds, descriptors, arity encoding).

Scope
- Validate ParameterKind classification of inspect parameters.
- Validate the __params__()/__arity__() descriptor protocol and its faults.
- Validate the negated-variadic arity encoding and its normalization.
- Validate synthesized and restricted signatures.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import inspect
import unittest
from unittest import TestCase

from invocations import FaultCode, ParameterKind, SignatureError
from invocations.signatures import arity, defaults, normalize, parameters, select, signature


def shaped(a, b=1, *c, d, e=2, **f):
    pass


class Described:
    def __init__(self, entries, minimum=None):
        self.entries = entries
        self.minimum = minimum

    def __call__(self, *args, **kwargs):
        return args, kwargs

    def __params__(self):
        return self.entries


class TestParameterKind(TestCase):

    def testClassification(self):
        kinds = [ParameterKind.of(parameter) for parameter in inspect.signature(shaped).parameters.values()]
        self.assertEqual(kinds, ["req", "opt", "rest", "keyreq", "key", "keyrest"])

    def testPositionalOnlyIsPositional(self):
        def positional(a, b=1, /):
            pass

        self.assertEqual(parameters(positional), (("req", "a"), ("opt", "b")))

    def testPositionalAndKeywordFlags(self):
        self.assertTrue(ParameterKind.REST.positional)
        self.assertFalse(ParameterKind.REST.keyword)
        self.assertTrue(ParameterKind.KEYREST.keyword)


class TestParameters(TestCase):

    def testFunction(self):
        self.assertEqual(
            parameters(shaped),
            (("req", "a"), ("opt", "b"), ("rest", "c"), ("keyreq", "d"), ("key", "e"), ("keyrest", "f")),
        )

    def testBoundMethodDropsInstance(self):
        class Holder:
            def method(self, x, *, y):
                pass

        self.assertEqual(parameters(Holder().method), (("req", "x"), ("keyreq", "y")))

    def testSelectKeepsDeclaredOrder(self):
        self.assertEqual(select(parameters(shaped), ParameterKind.KEY, ParameterKind.OPT), ("b", "e"))

    def testDescriptorIsTrusted(self):
        described = Described([("req", "x"), (ParameterKind.KEY, "y")])
        self.assertEqual(parameters(described), ((ParameterKind.REQ, "x"), (ParameterKind.KEY, "y")))

    def testDescriptorIgnoredOnClasses(self):
        self.assertEqual(parameters(Described), (("req", "entries"), ("opt", "minimum")))

    def testMalformedDescriptorEntries(self):
        for entries in ([("bogus", "x")], [("req",)], [("req", "")], [("req", 3)], "req"):
            with self.subTest(entries=entries):
                with self.assertRaises(SignatureError) as context:
                    parameters(Described(entries))
                self.assertIs(context.exception.options["code"], FaultCode.MALFORMED_DESCRIPTOR)

    def testNonCallableIsUnintrospectable(self):
        with self.assertRaises(SignatureError) as context:
            parameters(42)
        self.assertIs(context.exception.options["code"], FaultCode.UNINTROSPECTABLE_SIGNATURE)
        self.assertIsInstance(context.exception.__cause__, TypeError)


class TestArity(TestCase):

    def testEncoding(self):
        cases = {
            "fixed": (lambda a, b: None, 2),
            "optional": (lambda a, b=1: None, -2),
            "rest": (lambda *a: None, -1),
            "required keyword": (lambda a, *, k: None, 2),
            "required and optional keywords": (lambda a, *, k, j=1: None, 2),
            "optional keyword": (lambda a, *, j=1: None, -2),
            "keyword rest": (lambda a, **kw: None, -2),
            "nothing": (lambda: None, 0),
            "everything": (shaped, -3),
        }
        for name, (function, expected) in cases.items():
            with self.subTest(name=name):
                self.assertEqual(arity(function), expected)

    def testDescriptorArity(self):
        described = Described([("opt", "x")])
        described.__arity__ = lambda: 1
        self.assertEqual(arity(described), 1)

    def testMalformedDescriptorArity(self):
        described = Described([("opt", "x")])
        described.__arity__ = lambda: "one"
        with self.assertRaises(SignatureError):
            arity(described)

    def testNormalize(self):
        self.assertEqual(normalize(3), 3)
        self.assertEqual(normalize(-4), 3)
        self.assertEqual(normalize(-1), 0)
        self.assertEqual(normalize(0), 1)


class TestDefaults(TestCase):

    def testPositionalOnlyDefaults(self):
        def positional(a, b=10, /, c=20, *, d=30):
            pass

        self.assertEqual(defaults(positional), {"a": inspect.Parameter.empty, "b": 10})

    def testDescriptorDeclaresNoDefaults(self):
        self.assertEqual(defaults(Described([("req", "x"), ("opt", "y")])), {})


class TestSignature(TestCase):

    def testRestrictedSignature(self):
        self.assertEqual(str(signature(shaped, exclude={"a", "d"})), "(b=1, *c, e=2, **f)")

    def testSynthesizedSignature(self):
        described = Described([("req", "x"), ("opt", "y"), ("rest", "z"), ("keyreq", "k")])
        self.assertEqual(str(signature(described)), "(x, y=Unset, *z, k)")


if __name__ == '__main__':
    unittest.main()
