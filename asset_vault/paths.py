"""Path policy for the vault.

This module centralizes ALL path construction. Export, conflict checks and
descriptor resolution build package roots through ``build_package_root`` so
the three always agree on layout.

Layout:
    storage_root/{category}/[custom_folder/]{name}/[version/]
"""

from pathlib import Path
from pathlib import PurePosixPath

from .errors import InvalidExportRequest
from .errors import PathTraversalError
from .types import Category
from .types import ExportOptions


def _segments(value: str) -> list[str]:
    """Split a user path fragment into non-empty segments."""
    return [part for part in value.replace("\\", "/").split("/") if part and part != "."]


def build_package_root(
    storage_root: Path,
    category: Category,
    name: str,
    *,
    custom_folder: str = "",
    version: str = "",
) -> Path:
    """Compute the package root for an export.

    Empty ``custom_folder`` and ``version`` are omitted entirely, never
    producing empty path components.

    Raises:
        InvalidExportRequest: name is empty or malformed, custom folder or version
            could escape the storage root, or category is the ``All`` wildcard
    """
    if not name or not name.strip():
        raise InvalidExportRequest("Package name cannot be empty")
    if "/" in name or "\\" in name or name.strip() in (".", ".."):
        raise InvalidExportRequest(f"Invalid package name: {name!r}")
    if not category.is_storable:
        raise InvalidExportRequest("Category 'All' is a query wildcard and cannot be exported to")
    try:
        custom_folder = validate_subfolder(custom_folder)
        version = validate_subfolder(version)
    except PathTraversalError as e:
        raise InvalidExportRequest(f"Package location escapes the storage root: {e}") from e

    root = Path(storage_root) / category.value
    for segment in _segments(custom_folder):
        root = root / segment
    root = root / name.strip()
    for segment in _segments(version):
        root = root / segment
    return root


def package_root_for(storage_root: Path, options: ExportOptions) -> Path:
    """``build_package_root`` driven by export options."""
    return build_package_root(
        storage_root,
        options.category,
        options.name,
        custom_folder=options.custom_folder,
        version=options.version,
    )


def relative_export_path(package_root: Path, storage_root: Path) -> str:
    """Package root relative to the storage root, with forward slashes."""
    return Path(package_root).relative_to(Path(storage_root)).as_posix()


def asset_name(package_id: str) -> str:
    """Base name of a package id (``/Game/Chars/Hero`` -> ``Hero``).

    An object suffix (``/Game/Chars/Hero.Hero``) is dropped.
    """
    last = PurePosixPath(package_id.replace("\\", "/")).name
    return last.split(".", 1)[0]


def package_filename(package_id: str, content_root: Path, mount_point: str, extension: str) -> Path:
    """Map a package id to its payload file below the content root.

    ``/Game/Chars/Hero`` with mount point ``/Game`` and extension ``uasset``
    becomes ``content_root/Chars/Hero.uasset``.

    Raises:
        ValueError: package id is not under the mount point
    """
    normalized = package_id.replace("\\", "/").split(".", 1)[0]
    mount = "/" + mount_point.strip("/")
    if normalized != mount and not normalized.startswith(mount + "/"):
        raise ValueError(f"Package '{package_id}' is not under mount point '{mount}'")

    parts = _segments(normalized[len(mount) :])
    if not parts or ".." in parts:
        raise ValueError(f"Package '{package_id}' does not name a file")

    target = Path(content_root).joinpath(*parts)
    return target.with_name(f"{target.name}.{extension.lstrip('.')}")


def with_extension(path: Path, extension: str) -> Path:
    """Same base name, different extension."""
    return path.with_suffix("." + extension.lstrip("."))


def validate_subfolder(subfolder: str) -> str:
    """Reject a subfolder that could escape the content root.

    Must run before any path is constructed from user input.

    Returns:
        The subfolder normalized to forward slashes ("" for the content root)

    Raises:
        PathTraversalError: a ``..`` segment or an absolute path
    """
    if not subfolder:
        return ""

    text = subfolder.replace("\\", "/")
    if text.startswith("/") or PurePosixPath(text).is_absolute() or (len(text) > 1 and text[1] == ":"):
        raise PathTraversalError(subfolder)
    if ".." in text.split("/"):
        raise PathTraversalError(subfolder)

    return "/".join(_segments(text))


def resolve_import_target(content_root: Path, subfolder: str) -> Path:
    """Absolute import destination for a validated subfolder."""
    clean = validate_subfolder(subfolder)
    root = Path(content_root).resolve()
    if not clean:
        return root
    return root.joinpath(*clean.split("/"))


def content_display_path(subfolder: str) -> str:
    """How an import destination is shown to the user (``/Content/Chars``)."""
    return "/Content" if not subfolder else f"/Content/{subfolder}"
