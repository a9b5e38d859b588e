"""
Rewriter module behavioral tests (identifier rewriting, arity validation).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from powerfunc_gen import InvalidArityError, Role, TypeReference, Variant, instantiate, rewrite, validate


class TestValidate(TestCase):
    """Behavioral tests for arity validation."""

    def testAcceptsNonNegativeIntegers(self):
        for arity in (0, 1, 10, 64):
            self.assertEqual(validate(arity), arity)

    def testRejectsNegative(self):
        with self.assertRaises(InvalidArityError) as context:
            validate(-1)
        self.assertEqual(context.exception.options["arity"], -1)

    def testRejectsNonIntegers(self):
        for arity in (1.0, "3", True, None):
            with self.subTest(arity=arity):
                with self.assertRaises(InvalidArityError):
                    validate(arity)


class TestRewrite(TestCase):
    """Behavioral tests for family reference rewriting."""

    def testCommentReferenceIsBareName(self):
        self.assertEqual(rewrite(TypeReference(Variant.CTX_FUNC_ERROR, Role.COMMENT), 3), "CtxFunc3Error")
        self.assertEqual(rewrite(TypeReference(Variant.FUNC_RESULT, Role.COMMENT), 2), "Func2Result")

    def testCodeReferenceNonGeneric(self):
        self.assertEqual(rewrite(TypeReference(Variant.FUNC, Role.CODE), 2), "Func2[P0, P1]")
        self.assertEqual(rewrite(TypeReference(Variant.CTX_FUNC, Role.CODE), 1), "CtxFunc1[P0]")

    def testCodeReferenceGeneric(self):
        self.assertEqual(rewrite(TypeReference(Variant.FUNC_RESULT, Role.CODE, "T"), 2), "Func2Result[T, P0, P1]")
        self.assertEqual(rewrite(TypeReference(Variant.CTX_FUNC_VALUE, Role.CODE, "R"), 1), "CtxFunc1Value[R, P0]")

    def testDeclarationNonGeneric(self):
        self.assertEqual(rewrite(TypeReference(Variant.FUNC, Role.DECLARATION), 2), "Func2[P0, P1 any]")

    def testDeclarationGeneric(self):
        reference = TypeReference(Variant.FUNC_VALUE, Role.DECLARATION, "T", "any")
        self.assertEqual(rewrite(reference, 3), "Func3Value[T, P0, P1, P2 any]")

    def testDeclarationKeepsCustomConstraint(self):
        reference = TypeReference(Variant.FUNC_VALUE, Role.DECLARATION, "T", "comparable")
        self.assertEqual(rewrite(reference, 2), "Func2Value[T comparable, P0, P1 any]")
        self.assertEqual(rewrite(reference, 0), "FuncValue[T comparable]")

    def testArityZeroReproducesTemplateNames(self):
        self.assertEqual(rewrite(TypeReference(Variant.FUNC, Role.DECLARATION), 0), "Func")
        self.assertEqual(rewrite(TypeReference(Variant.FUNC, Role.CODE), 0), "Func")
        self.assertEqual(rewrite(TypeReference(Variant.FUNC_RESULT, Role.DECLARATION, "T", "any"), 0), "FuncResult[T any]")
        self.assertEqual(rewrite(TypeReference(Variant.FUNC_RESULT, Role.CODE, "T"), 0), "FuncResult[T]")

    def testRejectsNegativeArity(self):
        with self.assertRaises(InvalidArityError):
            rewrite(TypeReference(Variant.FUNC, Role.CODE), -2)


class TestInstantiate(TestCase):
    """Behavioral tests for explicit instantiation."""

    def testBareNameWithoutArguments(self):
        self.assertEqual(instantiate(Variant.CTX_FUNC, 0), "CtxFunc")

    def testArgumentsAreJoined(self):
        self.assertEqual(instantiate(Variant.FUNC_VALUE, 1, ["T", "P1"]), "Func1Value[T, P1]")


if __name__ == "__main__":
    unittest.main()
