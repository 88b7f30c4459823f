"""File transfer engine.

Copies payload files between a project content root and a package root,
preserving each file's path relative to the side it came from.

Error policy:
- Directory creation failure is fatal (DirectoryCreationError)
- A package without its primary payload file is skipped with a warning
- A failed copy is recorded and skipped, unless force-overwrite is set, in
  which case one read-all-bytes/write-all-bytes fallback is attempted
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from collections.abc import Callable
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .errors import DirectoryCreationError
from .paths import package_filename
from .paths import with_extension

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedCopy:
    """One (source, destination) pair of a transfer plan."""

    source: Path
    destination: Path
    primary: bool = False


@dataclass
class TransferFailure:
    """A file that could not be copied."""

    source: Path
    destination: Path
    reason: str
    fallback_attempted: bool = False


@dataclass
class TransferResult:
    """Outcome of executing a transfer plan."""

    copied: set[Path] = field(default_factory=set)
    skipped: list[Path] = field(default_factory=list)
    failures: list[TransferFailure] = field(default_factory=list)
    missing_packages: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """True if at least one file was copied."""
        return bool(self.copied)

    def merge(self, other: TransferResult) -> None:
        self.copied |= other.copied
        self.skipped.extend(other.skipped)
        self.failures.extend(other.failures)
        self.missing_packages.extend(other.missing_packages)


def ensure_directory(path: Path) -> None:
    """Create ``path`` and its parents.

    Raises:
        DirectoryCreationError: the directory could not be created
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(path, e) from e


def find_payload_files(root: Path, extension: str) -> list[Path]:
    """All files with ``extension`` below ``root``, sorted. Missing root yields nothing."""
    if not root.is_dir():
        return []
    pattern = f"*.{extension.lstrip('.')}"
    return sorted(p for p in root.rglob(pattern) if p.is_file())


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True


def build_export_plan(
    package_ids: Iterable[str],
    content_root: Path,
    destination_root: Path,
    *,
    mount_point: str,
    primary_extension: str,
    auxiliary_extensions: Iterable[str],
) -> tuple[list[PlannedCopy], list[str]]:
    """Plan the copy of every resolved package into ``destination_root``.

    Returns:
        Tuple of (plan, package ids skipped because their primary file is missing)
    """
    auxiliaries = [ext for ext in auxiliary_extensions if ext.lstrip(".") != primary_extension.lstrip(".")]
    plan: list[PlannedCopy] = []
    missing: list[str] = []

    for package_id in sorted(package_ids):
        try:
            primary = package_filename(package_id, content_root, mount_point, primary_extension)
        except ValueError as e:
            logger.warning(f"Skipping {package_id}: {e}")
            missing.append(package_id)
            continue

        if not primary.is_file():
            logger.warning(f"Main .{primary_extension.lstrip('.')} file does not exist: {primary}")
            missing.append(package_id)
            continue

        target = destination_root / primary.relative_to(content_root)
        plan.append(PlannedCopy(primary, target, primary=True))

        for extension in auxiliaries:
            source = with_extension(primary, extension)
            if source.is_file():
                plan.append(PlannedCopy(source, with_extension(target, extension)))

    return plan, missing


def build_import_plan(
    source_root: Path,
    destination_root: Path,
    *,
    extensions: Iterable[str],
    primary_extension: str,
) -> list[PlannedCopy]:
    """Plan the copy of every payload file below ``source_root``.

    Files whose resolved location falls outside either root are left out.
    """
    plan: list[PlannedCopy] = []
    primary_ext = primary_extension.lstrip(".")

    for extension in extensions:
        found = find_payload_files(source_root, extension)
        logger.info(f"[Vault] Found {len(found)} files with extension .{extension.lstrip('.')}")

        for source in found:
            if not _is_within(source, source_root):
                logger.error(f"[Vault] Path mismatch, skipping: {source} is outside {source_root}")
                continue

            destination = destination_root / source.relative_to(source_root)
            if not _is_within(destination, destination_root):
                logger.error(f"[Vault] Destination escapes target folder, skipping: {destination}")
                continue

            plan.append(PlannedCopy(source, destination, primary=extension.lstrip(".") == primary_ext))

    return plan


def _make_writable(path: Path) -> None:
    try:
        mode = path.stat().st_mode
        if not mode & stat.S_IWUSR:
            os.chmod(path, mode | stat.S_IWUSR)
    except OSError as e:
        logger.warning(f"Could not clear read-only flag on {path}: {e}")


def copy_file(source: Path, destination: Path, *, force_overwrite: bool) -> TransferFailure | None:
    """Copy one file, falling back to a raw byte copy when forcing.

    Returns:
        None on success, otherwise the failure to record
    """
    try:
        shutil.copy2(source, destination)
        return None
    except OSError as e:
        if not force_overwrite:
            logger.error(f"Failed to copy {source} to {destination}: {e}")
            return TransferFailure(source, destination, str(e))
        logger.warning(f"[Vault] Copy failed ({e}), trying overwrite with memory buffer: {destination}")

    try:
        data = source.read_bytes()
    except OSError as e:
        logger.error(f"[Vault] Fallback read failed: {source}: {e}")
        return TransferFailure(source, destination, f"fallback read failed: {e}", fallback_attempted=True)

    if destination.exists():
        _make_writable(destination)

    try:
        destination.write_bytes(data)
    except OSError as e:
        logger.error(f"[Vault] Fallback write failed: {destination}: {e}")
        return TransferFailure(source, destination, f"fallback write failed: {e}", fallback_attempted=True)

    logger.info(f"[Vault] Fallback write succeeded ({len(data)} bytes): {destination}")
    return None


def execute_plan(
    plan: Iterable[PlannedCopy],
    *,
    overwrite_existing: bool,
    force_overwrite: bool,
    before_replace: Callable[[Path], None] | None = None,
) -> TransferResult:
    """Run a transfer plan.

    Args:
        plan: Pairs to copy
        overwrite_existing: Replace files already at the destination; otherwise skip them
        force_overwrite: Allow the raw-bytes fallback when the copy primitive fails
        before_replace: Called with the destination of a primary file about to be replaced

    Raises:
        DirectoryCreationError: a destination directory could not be created
    """
    result = TransferResult()

    for item in plan:
        ensure_directory(item.destination.parent)

        if item.destination.exists():
            if not overwrite_existing:
                logger.warning(f"[Vault] Skipped (already exists): {item.destination}")
                result.skipped.append(item.destination)
                continue
            logger.warning(f"[Vault] Replacing existing file: {item.destination}")
            if item.primary and before_replace is not None:
                before_replace(item.destination)

        failure = copy_file(item.source, item.destination, force_overwrite=force_overwrite)
        if failure is not None:
            result.failures.append(failure)
            continue

        logger.debug(f"Copied {item.source} -> {item.destination}")
        result.copied.add(item.destination)

    return result


def copy_packages(
    package_ids: Iterable[str],
    content_root: Path,
    destination_root: Path,
    *,
    mount_point: str,
    primary_extension: str,
    auxiliary_extensions: Iterable[str],
    force_overwrite: bool = True,
) -> TransferResult:
    """Export direction: copy resolved packages and their auxiliary files."""
    plan, missing = build_export_plan(
        package_ids,
        content_root,
        destination_root,
        mount_point=mount_point,
        primary_extension=primary_extension,
        auxiliary_extensions=auxiliary_extensions,
    )
    result = execute_plan(plan, overwrite_existing=True, force_overwrite=force_overwrite)
    result.missing_packages.extend(missing)
    logger.info(
        f"Copied {len(result.copied)} files from {len(plan)} planned "
        f"({len(missing)} packages without payload) to {destination_root}"
    )
    return result


def copy_package_tree(
    source_root: Path,
    destination_root: Path,
    *,
    extensions: Iterable[str],
    primary_extension: str,
    force_overwrite: bool,
    before_replace: Callable[[Path], None] | None = None,
) -> TransferResult:
    """Import direction: copy a package root's payload into the content tree.

    Existing files are skipped unless ``force_overwrite`` is set.
    """
    plan = build_import_plan(
        source_root,
        destination_root,
        extensions=extensions,
        primary_extension=primary_extension,
    )
    return execute_plan(
        plan,
        overwrite_existing=force_overwrite,
        force_overwrite=force_overwrite,
        before_replace=before_replace,
    )
