"""
Expander module behavioral tests (signature expansion of whole templates).

Conventions
- Test method names follow CamelCase per project convention.
- Expansion is checked against the bundled bases: arity 0 must give the base
  back, arity 1 must collapse back to it once its single parameter is removed.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from powerfunc_gen import (
    BASES,
    Convention,
    InvalidArityError,
    TemplateLoader,
    Variant,
    argument_list,
    expand,
    parameter_list,
    parse,
    quantity,
)

COLLAPSE = (
    ("[P0 any]", ""),
    (", P0 any]", " any]"),
    ("[P0]", ""),
    (", P0]", "]"),
    ("(ctx context.Context, p0 P0)", "(ctx context.Context)"),
    ("(p0 P0)", "()"),
    ("(ctx, p0)", "(ctx)"),
    ("(p0)", "()"),
    ("Func1", "Func"),
    ("takes 1 argument", "takes 0 arguments"),
)


def undirected(source):
    return "".join(line for line in source.splitlines(keepends=True) if not line.startswith("//go:")).lstrip("\n")


class TestExpand(TestCase):
    """Behavioral tests for template expansion."""

    @classmethod
    def setUpClass(cls):
        cls.loader = TemplateLoader(BASES)

    def source(self, variant):
        return (BASES / variant.filename).read_text(encoding="utf-8")

    def testArityZeroReproducesBase(self):
        for variant in Variant:
            with self.subTest(variant=variant):
                self.assertEqual(expand(self.loader.load(variant), 0), undirected(self.source(variant)))

    def testArityOneCollapsesToBase(self):
        for variant in Variant:
            with self.subTest(variant=variant):
                generated = expand(self.loader.load(variant), 1)
                for old, new in COLLAPSE:
                    generated = generated.replace(old, new)
                self.assertEqual(generated, undirected(self.source(variant)))

    def testDeclarationAndExecAtArityThree(self):
        generated = expand(self.loader.load(Variant.CTX_FUNC_RESULT), 3)
        self.assertIn(
            "type CtxFunc3Result[R, P0, P1, P2 any] func(ctx context.Context, p0 P0, p1 P1, p2 P2) (R, error)",
            generated,
        )
        self.assertIn(
            "func (f CtxFunc3Result[R, P0, P1, P2]) Exec(ctx context.Context, p0 P0, p1 P1, p2 P2) (R, error) {",
            generated,
        )
        self.assertIn("f(ctx, p0, p1, p2)", generated)

    def testCrossFamilyReferencesFollowArity(self):
        generated = expand(self.loader.load(Variant.FUNC), 2)
        self.assertIn("func (f Func2[P0, P1]) Fallible() Func2Error[P0, P1] {", generated)
        self.assertIn("// Fallible transforms a Func2 into a Func2Error.", generated)

    def testLookalikeWordsUntouched(self):
        generated = expand(self.loader.load(Variant.FUNC_ERROR), 4)
        self.assertIn("Retry returns a Function that will retry the Function", generated)
        self.assertNotIn("Func4tion", generated)

    def testQualifiedNamesUntouched(self):
        template = parse(
            "package p\n\n// Func1Error and CtxFunc2 stay.\ntype Func func()\n\n"
            "func (f Func) Exec() {\n\tf()\n}\n\nvar _ = Func1Error(nil)\n",
            Variant.FUNC,
        )
        generated = expand(template, 3)
        self.assertIn("// Func1Error and CtxFunc2 stay.", generated)
        self.assertIn("var _ = Func1Error(nil)", generated)

    def testQuantityInDocComments(self):
        self.assertIn("takes 1 argument and", expand(self.loader.load(Variant.FUNC_ERROR), 1))
        self.assertIn("takes 5 arguments and", expand(self.loader.load(Variant.FUNC_ERROR), 5))

    def testDirectiveDropped(self):
        self.assertNotIn("//go:generate", expand(self.loader.load(Variant.FUNC), 2))

    def testExpansionIsDeterministic(self):
        template = self.loader.load(Variant.CTX_FUNC_VALUE)
        self.assertEqual(expand(template, 4), expand(template, 4))

    def testRejectsNegativeArity(self):
        with self.assertRaises(InvalidArityError):
            expand(self.loader.load(Variant.FUNC), -1)

    def testParsedInlineTemplate(self):
        template = parse(
            "package p\n\n// Func takes 0 arguments.\ntype Func func()\n\nfunc (f Func) Exec() {\n\tf()\n}\n",
            Variant.FUNC,
        )
        self.assertEqual(
            expand(template, 2),
            "package p\n\n// Func2 takes 2 arguments.\ntype Func2[P0, P1 any] func(p0 P0, p1 P1)\n\n"
            "func (f Func2[P0, P1]) Exec(p0 P0, p1 P1) {\n\tf(p0, p1)\n}\n",
        )


class TestLists(TestCase):
    """Behavioral tests for parameter and argument lists."""

    def testParameterList(self):
        self.assertEqual(parameter_list(Convention.PLAIN, range(0)), "()")
        self.assertEqual(parameter_list(Convention.PLAIN, range(2)), "(p0 P0, p1 P1)")
        self.assertEqual(parameter_list(Convention.CARRIER, range(1, 3)), "(ctx context.Context, p1 P1, p2 P2)")

    def testArgumentList(self):
        self.assertEqual(argument_list(Convention.CARRIER, range(0)), "(ctx)")
        self.assertEqual(argument_list(Convention.PLAIN, range(3)), "(p0, p1, p2)")

    def testQuantity(self):
        self.assertEqual(quantity(0), "0 arguments")
        self.assertEqual(quantity(1), "1 argument")
        self.assertEqual(quantity(2), "2 arguments")


if __name__ == "__main__":
    unittest.main()
