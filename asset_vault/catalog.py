"""Package catalog - discovery of exported packages.

Convention over configuration: every ``*.json`` file in a directory below
the storage root is a sidecar descriptor. No caching; each scan reads the
filesystem again.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .descriptor import SIDECAR_EXTENSION
from .descriptor import read_descriptor
from .errors import DescriptorParseError
from .types import Category
from .types import PackageDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogRecord:
    """A parsed descriptor and the sidecar it came from."""

    descriptor: PackageDescriptor
    sidecar_path: Path

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def category(self) -> Category:
        return self.descriptor.category

    def package_root(self, storage_root: Path) -> Path:
        """Package root resolved from the recorded relative path.

        Falls back to the sidecar's directory for descriptors written without one.
        """
        if self.descriptor.relative_export_path:
            return Path(storage_root) / self.descriptor.relative_export_path
        return self.sidecar_path.parent


def scan_catalog(storage_root: Path) -> list[CatalogRecord]:
    """Parse every sidecar below ``storage_root``.

    Each file is parsed independently: a malformed descriptor is logged and
    left out, never aborting the scan.

    Returns:
        Records in directory-walk order (sorted paths)
    """
    if not storage_root.is_dir():
        logger.debug(f"Storage root does not exist: {storage_root}")
        return []

    records: list[CatalogRecord] = []
    folders = sorted(p for p in storage_root.rglob("*") if p.is_dir())

    for folder in folders:
        for sidecar in sorted(folder.glob(f"*.{SIDECAR_EXTENSION}")):
            if not sidecar.is_file():
                continue
            try:
                descriptor = read_descriptor(sidecar)
            except DescriptorParseError as e:
                logger.warning(str(e))
                continue
            records.append(CatalogRecord(descriptor=descriptor, sidecar_path=sidecar))

    logger.debug(f"Catalog scan of {storage_root}: {len(records)} packages")
    return records


def filter_and_sort(records: list[CatalogRecord], category: Category = Category.ALL) -> list[CatalogRecord]:
    """Keep records of ``category`` (all for ``Category.ALL``), ordered by name.

    Names compare case-sensitively; equal names keep their input order.
    """
    if category is Category.ALL:
        kept = list(records)
    else:
        kept = [record for record in records if record.category is category]
    return sorted(kept, key=lambda record: record.name)


def find_by_name(records: list[CatalogRecord], name: str) -> list[CatalogRecord]:
    """Records whose package name equals ``name``."""
    return [record for record in records if record.name == name]
