"""
Emission of generated units.

A GeneratedUnit is derived purely from a template and an arity; the Emitter
persists batches atomically (temporary files + os.replace) under a deterministic
name, `{arity}_{template file name}`.
"""
import contextlib
import errno
import os
from dataclasses import dataclass
from pathlib import Path

from .faults import WriteFailureError
from .utils import *
from .variants import Variant

HEADER = "// Code generated by powerfunc-gen from {template}. DO NOT EDIT.\n\n"


@dataclass(frozen=True, slots=True)
class GeneratedUnit:
    """
    one generated Go file.

    fields
    - variant, arity: the generation key.
    - template:       name of the template the unit was rendered from.
    - body:           the expanded template.
    - curries:        CurryMethod tuple, ordered by bound count.
    """
    variant: Variant
    arity: int
    template: str
    body: str
    curries: tuple = ()

    @property
    def key(self):
        return self.variant, self.arity

    @property
    def filename(self):
        return f"{self.arity}_{self.variant.filename}"

    @property
    def source(self):
        body = self.body if self.body.endswith("\n") else self.body + "\n"
        return HEADER.format(template=self.template) + body + "".join(curry.source for curry in self.curries)


class Emitter:
    """
    Write generated units into a directory.

    behavior
    - the directory is created when missing.
    - previous outputs are overwritten, never patched.
    - a batch is all or nothing: every unit is staged to a temporary file
      before any target is replaced, and replaced targets are restored when
      a later replacement fails.
    - any OSError becomes WriteFailureError.
    """

    def __init__(self, directory, /):
        self._directory = Path(directory)

    directory = mirror("directory")

    def _path(self, unit, suffix=""):
        path = self._directory / unit.filename
        return path.with_name(f".{path.name}{suffix}") if suffix else path

    @staticmethod
    def _discard(*paths):
        for path in paths:
            with contextlib.suppress(OSError):
                path.unlink(missing_ok=True)

    def _stage(self, units):
        staged = []
        path = self._directory
        try:
            for unit in units:
                path, temporary = self._path(unit), self._path(unit, ".tmp")
                self._directory.mkdir(parents=True, exist_ok=True)
                if path.is_dir():
                    raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), str(path))
                staged.append((path, temporary))
                with open(temporary, "w", encoding="utf-8", newline="\n") as stream:
                    stream.write(unit.source)
        except OSError as error:
            self._discard(*(temporary for _, temporary in staged))
            raise WriteFailureError(
                f"cannot write {str(path)!r}: {error.strerror or error}",
                path=str(path),
            ) from error
        return staged

    def _commit(self, staged):
        committed = []
        try:
            for path, temporary in staged:
                backup = path.with_name(f".{path.name}.bak")
                if path.is_file():
                    os.replace(path, backup)
                else:
                    backup = None
                committed.append((path, backup))
                os.replace(temporary, path)
        except OSError as error:
            for target, backup in reversed(committed):
                with contextlib.suppress(OSError):
                    if backup is not None:
                        os.replace(backup, target)
                    elif target != path:
                        target.unlink(missing_ok=True)
            self._discard(*(temporary for _, temporary in staged))
            raise WriteFailureError(
                f"cannot write {str(path)!r}: {error.strerror or error}",
                path=str(path),
            ) from error
        self._discard(*(backup for _, backup in committed if backup is not None))
        return tuple(path for path, _ in staged)

    def emit(self, unit, /):
        return self.emit_all((unit,))[0]

    def emit_all(self, units, /):
        """
        Write every unit and return their paths, in order.

        Raises
        - ValueError: when two units share the same (variant, arity) key;
          nothing is written in that case.
        - WriteFailureError: when any unit cannot be written; the directory
          is left as it was before the call.
        """
        units = tuple(units)
        keys = set()
        for unit in units:
            if unit.key in keys:
                raise ValueError(f"duplicate generated unit {unit.filename!r}")
            keys.add(unit.key)
        return self._commit(self._stage(units))


__all__ = (
    "HEADER",
    "GeneratedUnit",
    "Emitter",
)
