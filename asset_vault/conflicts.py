"""Pre-flight conflict checks for export and import. Read-only."""

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .transfer import find_payload_files

logger = logging.getLogger(__name__)


@dataclass
class ConflictReport:
    """Result of an import conflict check.

    ``determinable`` is False when the check could not run (a directory is
    missing or the input was rejected). Callers must not read that as
    "no conflicts".
    """

    determinable: bool
    conflicts: list[str] = field(default_factory=list)
    reason: str = ""

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @classmethod
    def unavailable(cls, reason: str) -> "ConflictReport":
        return cls(determinable=False, reason=reason)


def detect_export_conflicts(destination_root: Path, primary_extension: str) -> bool:
    """True iff a primary payload file already exists anywhere below ``destination_root``."""
    found = find_payload_files(destination_root, primary_extension)
    logger.info(f"[Vault] Export path conflict check: {'YES' if found else 'NO'} => {destination_root}")
    return bool(found)


def detect_import_conflicts(source_root: Path, destination_root: Path, primary_extension: str) -> ConflictReport:
    """Primary files under ``source_root`` whose destination already exists.

    Destinations are computed with the same relative-path rule the import
    uses. Both directories must exist.
    """
    if not source_root.is_dir() or not destination_root.is_dir():
        logger.error(f"[Vault] Cannot check conflicts, missing directory: {source_root} / {destination_root}")
        return ConflictReport.unavailable("Source or target folder does not exist")

    conflicts: list[str] = []
    for source in find_payload_files(source_root, primary_extension):
        target = destination_root / source.relative_to(source_root)
        if target.exists():
            logger.warning(f"[Vault] Conflict found: {target.name}")
            conflicts.append(target.name)

    logger.info(f"[Vault] Conflict check result: {'YES' if conflicts else 'NO'}")
    return ConflictReport(determinable=True, conflicts=conflicts)
