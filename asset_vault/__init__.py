"""Asset Vault - package assets with their hard dependencies for reuse across projects."""

__version__ = "0.1.0"

from .errors import VaultError  # noqa: E402
from .manager import PackageManager  # noqa: E402
from .types import Category  # noqa: E402
from .types import ExportOptions  # noqa: E402
from .types import PackageDescriptor  # noqa: E402

__all__ = [
    "Category",
    "ExportOptions",
    "PackageDescriptor",
    "PackageManager",
    "VaultError",
    "__version__",
]
