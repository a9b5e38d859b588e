"""
powerfunc-gen orchestration: Load → Rewrite → Expand → Synthesize → Emit.

Behavior
- Every (variant, arity) unit of a run is rendered in memory before the first
  write, so a template or arity fault never leaves a partial output set behind.
- Arity 0 generates nothing: the templates themselves are the arity-0 forms.
- Reporting is opt-in: pass a rich Console to get one line per written file
  and a closing summary table; library use stays silent.

Quick example:
    >>> from powerfunc_gen import BASES, Generator
    >>> Generator(BASES, "out").run(3)
    (PosixPath('out/1_func.go'), PosixPath('out/2_func.go'), ...)
"""
import os
from collections import defaultdict
from pathlib import Path

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .curry import synthesize
from .emitter import Emitter, GeneratedUnit
from .expander import expand
from .rewriter import validate
from .templates import TemplateLoader
from .utils import *
from .variants import Variant

BASES = Path(__file__).parent / "bases"


class Generator:
    """
    Generate the arity-qualified wrappers of a template directory.

    Parameters
    - source: directory holding the templates (defaults to the working directory).
    - target: output directory (defaults to source).
    - console: rich Console used for reporting, or Unset/None for silence.
    """

    def __init__(self, source=Unset, target=Unset, /, *, console=Unset):
        self._source = Path(coalesce(source, os.getcwd()))
        self._target = Path(coalesce(target, self._source))
        self._console = coalesce(console)
        self._loader = TemplateLoader(self._source)
        self._emitter = Emitter(self._target)

    source = mirror("source")
    target = mirror("target")

    def unit(self, variant, arity, /):
        """
        Render the unit of one (variant, arity) key without writing it.
        """
        template = self._loader.load(variant)
        return GeneratedUnit(
            variant=template.variant,
            arity=validate(arity),
            template=template.name,
            body=expand(template, arity),
            curries=synthesize(template, arity),
        )

    def units(self, arity, /):
        """
        Render every variant at every arity in 1..arity.
        """
        arity = validate(arity)
        return tuple(self.unit(variant, count) for variant in Variant for count in range(1, arity + 1))

    def run(self, arity=1, /):
        """
        Render then write every unit up to arity; return the written paths.

        Raises
        - InvalidArityError, TemplateNotFoundError, PatternMismatchError:
          before anything is written.
        - WriteFailureError: when any unit cannot be persisted; no output of
          the run is left behind.
        """
        units = self.units(arity)
        paths = self._emitter.emit_all(units)
        if self._console is not None:
            self._report(units, paths)
        return paths

    def _report(self, units, paths):
        styles = defaultdict(str, {
            "wrote-label": "#9CE19C dim",  # gentle green prefix
            "path": "bold #36C5F0",  # sky-blue file names
            "table": "#4B5563",  # slate border
            "table-title": "bold #FFFFFF",
            "variant": "bold #FF4D94",  # magenta type names
            "count": "#FFD600",  # amber numbers
        } | getattr(__import__("__main__"), "__styles__", {}))

        for path in paths:
            self._console.print(Text.assemble(("wrote ", styles["wrote-label"]), (str(path), styles["path"])))

        summary = defaultdict(list)
        for unit in units:
            summary[unit.variant].append(unit)

        table = Table(
            "template", "types", "files", "curries",
            title=Text("generated", styles["table-title"]),
            box=ROUNDED,
            style=styles["table"],
            header_style=styles["table-title"],
        )
        for variant, generated in summary.items():
            table.add_row(
                variant.filename,
                Text(f"{generated[0].variant.typename(generated[0].arity)} .. {variant.typename(generated[-1].arity)}", styles["variant"]),
                Text(str(len(generated)), styles["count"]),
                Text(str(sum(len(unit.curries) for unit in generated)), styles["count"]),
            )
        self._console.print(table)


def generate(arity=1, /, source=Unset, target=Unset, *, console=Unset):
    """
    Functional shortcut for Generator(source, target, console=console).run(arity).
    """
    return Generator(source, target, console=console).run(arity)


__all__ = (
    "BASES",
    "Generator",
    "generate",
)
