__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'powerfunc-gen'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
__version__ = "0.1.0"

from .arguments import *
from .commands import *
from .faults import *
from .variants import *
from .templates import *
from .rewriter import *
from .expander import *
from .curry import *
from .emitter import *
from .generator import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the arguments
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the variants
__all__ += variants.__all__  # type: ignore[attr-defined]
# Load the exposed API of the templates
__all__ += templates.__all__  # type: ignore[attr-defined]
# Load the exposed API of the rewriter
__all__ += rewriter.__all__  # type: ignore[attr-defined]
# Load the exposed API of the expander
__all__ += expander.__all__  # type: ignore[attr-defined]
# Load the exposed API of the curry synthesizer
__all__ += curry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the emitter
__all__ += emitter.__all__  # type: ignore[attr-defined]
# Load the exposed API of the generator
__all__ += generator.__all__  # type: ignore[attr-defined]
