"""
Generator module behavioral tests (whole runs over template directories).

Scope
- Validate the generated file set, its determinism and its idempotence.
- Validate that template and arity faults abort the run before any write.
- Validate opt-in console reporting.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import TestCase

from rich.console import Console

from powerfunc_gen import (
    BASES,
    Generator,
    InvalidArityError,
    PatternMismatchError,
    TemplateNotFoundError,
    Variant,
    WriteFailureError,
    generate,
)


class TestGenerator(TestCase):
    """Behavioral tests for generation runs."""

    def setUp(self):
        self.directory = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.directory, ignore_errors=True)
        self.target = self.directory / "out"

    def sources(self):
        source = self.directory / "bases"
        shutil.copytree(BASES, source)
        return source

    def testFileSetCoversEveryKey(self):
        paths = Generator(BASES, self.target).run(3)
        self.assertEqual(len(paths), 24)
        self.assertEqual(
            {path.name for path in paths},
            {f"{arity}_{variant.filename}" for variant in Variant for arity in range(1, 4)},
        )
        self.assertEqual(sorted(self.target.iterdir()), sorted(paths))

    def testGeneratedFileLayout(self):
        Generator(BASES, self.target).run(2)
        source = (self.target / "2_func_result.go").read_text(encoding="utf-8")
        self.assertTrue(source.startswith("// Code generated by powerfunc-gen from func_result.go. DO NOT EDIT.\n\npackage powerfunc\n"))
        self.assertIn("type Func2Result[T, P0, P1 any] func(p0 P0, p1 P1) (T, error)", source)
        self.assertLess(source.index("Curry1("), source.index("Curry2("))
        self.assertIn("Curry1(p0 P0) Func1Result[T, P1] {", source)
        self.assertIn("Curry2(p0 P0, p1 P1) FuncResult[T] {", source)
        self.assertNotIn("//go:generate", (self.target / "1_func.go").read_text(encoding="utf-8"))

    def testRunIsIdempotent(self):
        generator = Generator(BASES, self.target)
        generator.run(3)
        first = {path.name: path.read_bytes() for path in self.target.iterdir()}
        generator.run(3)
        second = {path.name: path.read_bytes() for path in self.target.iterdir()}
        self.assertEqual(first, second)

    def testSeparateGeneratorsAgree(self):
        self.assertEqual(
            [unit.source for unit in Generator(BASES).units(2)],
            [unit.source for unit in Generator(BASES).units(2)],
        )

    def testUnitsOrder(self):
        units = Generator(BASES).units(2)
        self.assertEqual([unit.key for unit in units][:3], [
            (Variant.FUNC, 1),
            (Variant.FUNC, 2),
            (Variant.FUNC_ERROR, 1),
        ])

    def testArityZeroGeneratesNothing(self):
        self.assertEqual(Generator(BASES, self.target).run(0), ())
        self.assertFalse(self.target.exists())

    def testTargetDefaultsToSource(self):
        source = self.sources()
        generator = Generator(source)
        self.assertEqual(generator.target, source)
        generator.run(1)
        self.assertTrue((source / "1_ctx_func_value.go").is_file())
        self.assertTrue((source / "ctx_func_value.go").is_file())

    def testTemplatesLeftUntouched(self):
        source = self.sources()
        before = {path.name: path.read_bytes() for path in source.iterdir()}
        Generator(source).run(2)
        self.assertEqual(before, {path.name: path.read_bytes() for path in source.glob("*.go") if not path.name[0].isdigit()})

    def testInvalidArityAbortsBeforeWriting(self):
        with self.assertRaises(InvalidArityError):
            Generator(BASES, self.target).run(-1)
        with self.assertRaises(InvalidArityError):
            generate("3", BASES, self.target)
        self.assertFalse(self.target.exists())

    def testMissingTemplateAbortsBeforeWriting(self):
        source = self.sources()
        (source / "ctx_func_result.go").unlink()
        with self.assertRaises(TemplateNotFoundError) as context:
            Generator(source, self.target).run(2)
        self.assertEqual(context.exception.options["template"], "ctx_func_result.go")
        self.assertFalse(self.target.exists())

    def testMalformedTemplateAbortsBeforeWriting(self):
        source = self.sources()
        (source / "ctx_func_value.go").write_text("package powerfunc\n", encoding="utf-8")
        with self.assertRaises(PatternMismatchError) as context:
            Generator(source, self.target).run(2)
        self.assertEqual(context.exception.options["template"], "ctx_func_value.go")
        self.assertFalse(self.target.exists())

    def testBlockedOutputAbortsWholeBatch(self):
        (self.target / "3_func.go").mkdir(parents=True)
        with self.assertRaises(WriteFailureError) as context:
            Generator(BASES, self.target).run(3)
        self.assertEqual(context.exception.options["path"], str(self.target / "3_func.go"))
        self.assertEqual([entry.name for entry in self.target.iterdir()], ["3_func.go"])

    def testSilentWithoutConsole(self):
        Generator(BASES, self.target).run(1)

    def testConsoleReport(self):
        stream = io.StringIO()
        console = Console(file=stream, width=120, color_system=None)
        paths = generate(2, BASES, self.target, console=console)
        output = stream.getvalue()
        for path in paths:
            self.assertIn(f"wrote {path}", output)
        self.assertIn("ctx_func_result.go", output)
        self.assertIn("CtxFunc1Result .. CtxFunc2Result", output)


if __name__ == "__main__":
    unittest.main()
