"""dir2md: render a directory as a single markdown snapshot."""

from .core.models import Config
from .core.generator import SnapshotGenerator, generate_markdown
from .adapters import InvalidRootError, validate_root

__version__ = "1.0.0"

__all__ = [
    "Config",
    "SnapshotGenerator",
    "generate_markdown",
    "InvalidRootError",
    "validate_root",
    "__version__",
]
