"""
powerfunc-gen command line.

    powerfunc-gen [-a N | --arity N]

Templates are read from, and generated files written to, the working
directory: the Go package directory when run through `//go:generate`.
"""
from . import __version__
from .arguments import Option
from .commands import command, invoke
from .faults import console
from .generator import Generator


@command(
    name="powerfunc-gen",
    version=__version__,
    shell=True,
    colorful=True,
)
def generate(
        arity=Option("-a", "--arity", metavar="N", type=int, default=1, descr="highest arity to generate"),
):
    """
    Generate the arity-qualified callable wrappers (1..N) of every base template
    found in the working directory.
    """
    Generator(console=console).run(arity)


def main():
    invoke(generate)


__all__ = (
    "generate",
    "main",
)
