__title__ = 'cliaid'
__author__ = 'cliaid contributors'
__license__ = 'MIT'
__version__ = "0.0.0"

from .tokenizer import *
from .usage import *
from .schema import *
from .outcomes import *
from .commands import *
from .shell import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the tokenizer
__all__ += tokenizer.__all__  # type: ignore[attr-defined]
# Load the exposed API of the usage templates
__all__ += usage.__all__  # type: ignore[attr-defined]
# Load the exposed API of the schema resolver
__all__ += schema.__all__  # type: ignore[attr-defined]
# Load the exposed API of the outcomes
__all__ += outcomes.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the shell collaborator
__all__ += shell.__all__  # type: ignore[attr-defined]
