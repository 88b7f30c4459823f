"""Package manager - export, import, conflict checks, catalog and delete.

Flows:
- Export: resolve hard dependencies -> copy payloads -> write sidecar
- Import: validate input -> ensure target -> copy (skip existing unless
  forced) -> rescan touched folders -> notify

Lower layers raise VaultError subclasses. This class is the boundary: it
logs, notifies the user once with a one-line summary and returns a plain
result.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from collections.abc import Sequence
from pathlib import Path

import click

from .catalog import CatalogRecord
from .catalog import scan_catalog
from .conflicts import ConflictReport
from .conflicts import detect_export_conflicts
from .conflicts import detect_import_conflicts
from .dependencies import resolve_hard_dependencies
from .descriptor import write_descriptor
from .errors import InvalidExportRequest
from .errors import PathTraversalError
from .errors import RegistryNotReadyError
from .errors import SourceNotFoundError
from .errors import VaultError
from .host import DependencyRegistry
from .host import HostHooks
from .host import LocalHostHooks
from .host import LoggingNotifier
from .host import ManifestRegistry
from .host import Notifier
from .paths import asset_name
from .paths import content_display_path
from .paths import package_root_for
from .paths import relative_export_path
from .paths import resolve_import_target
from .paths import validate_subfolder
from .settings import VaultConfig
from .transfer import TransferResult
from .transfer import copy_package_tree
from .transfer import copy_packages
from .transfer import ensure_directory
from .transfer import find_payload_files
from .types import ExportOptions
from .types import PackageDescriptor
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)

DEFAULT_AUXILIARY_EXTENSIONS = ("uexp", "ubulk", "map")
DEFAULT_IMPORT_EXTENSIONS = ("uasset", "uexp", "ubulk")


def add_unique_items(existing: list[str], selected: Iterable[str]) -> list[str]:
    """Append items of ``selected`` not already in ``existing``.

    Returns:
        The newly added items, in selection order
    """
    seen = set(existing)
    added: list[str] = []
    for item in selected:
        if not item:
            continue
        if item in seen:
            logger.debug(f"Duplicate skipped: {item}")
            continue
        seen.add(item)
        existing.append(item)
        added.append(item)
        logger.debug(f"Added by path: {item}")
    return added


class PackageManager:
    """Vault operations against one project.

    Contract:
    - Inputs: package ids, export root, ExportOptions, import paths
    - Outputs: booleans, ConflictReport, CatalogRecord lists
    - Side Effects: filesystem writes below the export root and content root
    - Errors: never raises VaultError from export/import/delete; reports via Notifier
    """

    def __init__(
        self,
        registry: DependencyRegistry,
        hooks: HostHooks,
        notifier: Notifier | None = None,
        *,
        mount_point: str = "/Game",
        engine_version: str = "",
        primary_extension: str = "uasset",
        auxiliary_extensions: Sequence[str] = DEFAULT_AUXILIARY_EXTENSIONS,
        import_extensions: Sequence[str] = DEFAULT_IMPORT_EXTENSIONS,
    ):
        self.registry = registry
        self.hooks = hooks
        self.notifier = notifier or LoggingNotifier()
        self.mount_point = mount_point
        self.engine_version = engine_version
        self.primary_extension = primary_extension.lstrip(".")
        self.auxiliary_extensions = [ext.lstrip(".") for ext in auxiliary_extensions]
        self.import_extensions = [ext.lstrip(".") for ext in import_extensions]

    @classmethod
    def from_config(cls, config: VaultConfig, base_dir: Path, notifier: Notifier | None = None) -> PackageManager:
        """Manager backed by the manifest registry and local host hooks."""
        return cls(
            registry=ManifestRegistry(config.manifest_path(base_dir)),
            hooks=LocalHostHooks(config.content_root(base_dir)),
            notifier=notifier,
            mount_point=config.project.mount_point,
            engine_version=config.project.engine_version,
            primary_extension=config.packaging.primary_extension,
            auxiliary_extensions=config.packaging.auxiliary_extensions,
            import_extensions=config.packaging.import_extensions,
        )

    # ----- Export -----

    def export(self, item: str, export_root: Path, options: ExportOptions) -> bool:
        """Export one item and its hard dependencies as a package."""
        if not item:
            return self._fail("Export failed: no asset provided.")
        return self._run_export([item], export_root, options, sidecar_name=asset_name(item))

    def export_many(self, items: Sequence[str], export_root: Path, options: ExportOptions) -> bool:
        """Export several items into one package root with a single sidecar."""
        unique: list[str] = []
        add_unique_items(unique, items)
        if not unique:
            return self._fail("Export failed: no assets provided.")
        return self._run_export(unique, export_root, options, sidecar_name=options.name)

    def _run_export(self, items: list[str], export_root: Path, options: ExportOptions, sidecar_name: str) -> bool:
        try:
            package_root, result = self._export_package(items, Path(export_root), options, sidecar_name)
        except (VaultError, OSError) as e:
            logger.error(f"Export of {', '.join(items)} failed: {e}")
            return self._fail(f"Export failed: {format_error_message(e, include_type=False)}")

        message = f"Exported {len(result.copied)} file(s) to {package_root}"
        if result.failures:
            message += f" ({len(result.failures)} failed)"
        self.notifier.notify(message, True)
        return True

    def _export_package(
        self, items: list[str], export_root: Path, options: ExportOptions, sidecar_name: str
    ) -> tuple[Path, TransferResult]:
        package_root = package_root_for(export_root, options)

        if not self.registry.is_index_ready():
            raise RegistryNotReadyError("Dependency registry is still loading. Try again later.")

        packages: set[str] = set()
        for item in items:
            packages |= resolve_hard_dependencies(item, self.registry)

        ensure_directory(package_root)

        result = copy_packages(
            packages,
            self.hooks.project_content_root(),
            package_root,
            mount_point=self.mount_point,
            primary_extension=self.primary_extension,
            auxiliary_extensions=self.auxiliary_extensions,
        )
        for failure in result.failures:
            logger.error(f"Failed to copy {failure.source} to {failure.destination}: {failure.reason}")

        if not result.copied:
            raise InvalidExportRequest(f"No payload files found for {', '.join(items)}")

        descriptor = self._build_descriptor(options, export_root, package_root)
        sidecar = write_descriptor(descriptor, package_root, item_name=sidecar_name)
        logger.info(f"Asset and metadata successfully exported to: {package_root} ({sidecar.name})")
        return package_root, result

    def _build_descriptor(self, options: ExportOptions, export_root: Path, package_root: Path) -> PackageDescriptor:
        # Rescan: the files actually present are the ground truth
        names = sorted({path.stem for path in find_payload_files(package_root, self.primary_extension)})
        fields = options.model_dump()
        fields.update(
            engine_version=options.engine_version or self.engine_version,
            relative_export_path=relative_export_path(package_root, export_root),
            exported_asset_names=names,
        )
        return PackageDescriptor.model_validate(fields)

    def check_export_conflict(self, export_root: Path, options: ExportOptions) -> tuple[bool, Path]:
        """Whether the package root for ``options`` already holds payload files.

        Raises:
            InvalidExportRequest: the options do not describe a valid package root
        """
        package_root = package_root_for(Path(export_root), options)
        return detect_export_conflicts(package_root, self.primary_extension), package_root

    # ----- Import -----

    def import_package(
        self,
        export_root: Path,
        relative_path: str,
        target_subfolder: str = "",
        force_overwrite: bool = False,
    ) -> bool:
        """Copy a package's payload into the project content tree.

        Existing files are skipped unless ``force_overwrite``. Succeeds when at
        least one file was copied.
        """
        logger.info("VAULT IMPORT BEGIN")
        logger.info(f"[Vault] RelativeExportPath: {relative_path}")
        logger.info(f"[Vault] ExportRoot: {export_root}")
        logger.info(f"[Vault] TargetSubfolder: {target_subfolder}")

        try:
            subfolder = validate_subfolder(target_subfolder)
            source_root = self._package_source(Path(export_root), relative_path)
            target_root = resolve_import_target(self.hooks.project_content_root(), subfolder)
        except PathTraversalError as e:
            logger.error(f"[Vault] {e}")
            return self._fail("Error: Invalid target subfolder path.")
        except SourceNotFoundError as e:
            logger.error(f"[Vault] {e}")
            return self._fail("Error: Source folder not found.")

        try:
            ensure_directory(target_root)
            result = copy_package_tree(
                source_root,
                target_root,
                extensions=self.import_extensions,
                primary_extension=self.primary_extension,
                force_overwrite=force_overwrite,
                before_replace=self.hooks.notify_replaced,
            )
        except (VaultError, OSError) as e:
            logger.error(f"[Vault] Import aborted: {e}")
            return self._fail(f"Import failed: {format_error_message(e, include_type=False)}")

        if not result.copied:
            logger.error("[Vault] Nothing copied")
            return self._fail("Import failed: No files copied.")

        touched = {path.parent for path in result.copied if path.suffix == f".{self.primary_extension}"}
        if touched:
            self.hooks.rescan_paths(touched)

        count = len(result.copied)
        display = content_display_path(subfolder)
        message = "1 file imported to " + display if count == 1 else f"{count} files imported to {display}"
        self.notifier.notify(message, True)

        logger.info(
            f"[Vault] Successfully imported {count} file(s) to {target_root} "
            f"({len(result.skipped)} skipped, {len(result.failures)} failed)"
        )
        logger.info("VAULT IMPORT COMPLETE")
        return True

    def check_import_conflict(self, export_root: Path, relative_path: str, target_subfolder: str = "") -> ConflictReport:
        """Files of a package that already exist at the import destination."""
        if not relative_path:
            return ConflictReport.unavailable("No package path given")
        try:
            subfolder = validate_subfolder(target_subfolder)
            source_root = Path(export_root) / validate_subfolder(relative_path)
            target_root = resolve_import_target(self.hooks.project_content_root(), subfolder)
        except PathTraversalError as e:
            return ConflictReport.unavailable(str(e))
        return detect_import_conflicts(source_root, target_root, self.primary_extension)

    def _package_source(self, export_root: Path, relative_path: str) -> Path:
        clean = validate_subfolder(relative_path)
        # The export root itself is never a package
        if not clean:
            raise SourceNotFoundError(export_root)
        source_root = export_root / clean
        if not source_root.is_dir():
            raise SourceNotFoundError(source_root)
        return source_root

    # ----- Catalog and housekeeping -----

    def scan_catalog(self, export_root: Path) -> list[CatalogRecord]:
        return scan_catalog(Path(export_root))

    def delete_package(self, package_root: Path | str) -> bool:
        """Remove a package root and everything in it.

        A root that does not exist counts as deleted.
        """
        if not str(package_root).strip():
            logger.error("[Vault] Delete failed: target folder is empty.")
            return False

        target = Path(package_root)
        logger.info(f"VAULT DELETE BEGIN: {target}")

        if not target.is_dir():
            logger.warning(f"[Vault] Directory does not exist: {target}")
            return True

        try:
            shutil.rmtree(target)
        except OSError as e:
            logger.error(f"[Vault] Failed to delete directory {target}: {e}")
            return self._fail(f"Failed to delete {target.name}: {format_error_message(e, include_type=False)}")

        logger.info(f"[Vault] Successfully deleted folder and its contents: {target}")
        return True

    def open_package_folder(self, export_root: Path, relative_export_path: str) -> Path:
        """Create (if needed) and reveal a package folder in the file manager."""
        folder = Path(export_root) / validate_subfolder(relative_export_path)
        folder.mkdir(parents=True, exist_ok=True)
        logger.info(f"Opening folder: {folder}")
        click.launch(str(folder))
        return folder

    def _fail(self, message: str) -> bool:
        self.notifier.notify(message, False)
        return False
