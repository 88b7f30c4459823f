"""Sidecar descriptor persistence.

Each package root holds one JSON sidecar named
``{item}_{category}_{HASH}.json`` where HASH is the uppercase hex CRC-32 of
item name, category and the write timestamp. The hash keeps repeated exports
of the same name apart without a counter or lock file; it is a heuristic,
not a guarantee.
"""

import contextlib
import json
import logging
import re
import tempfile
import zlib
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from .errors import DescriptorParseError
from .types import PackageDescriptor

logger = logging.getLogger(__name__)

SIDECAR_EXTENSION = "json"
DEFAULT_VERSION = "1.0"

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_filename(filename: str) -> str:
    """Replace characters that are invalid in file names on common filesystems."""
    cleaned = _INVALID_FILENAME_CHARS.sub("_", filename).strip().rstrip(".")
    return cleaned or "_"


def sidecar_filename(item_name: str, category_name: str, timestamp: datetime | None = None) -> str:
    """Collision-resistant sidecar file name for one export."""
    stamp = (timestamp or datetime.now()).isoformat(timespec="microseconds")
    checksum = zlib.crc32(f"{item_name}{category_name}{stamp}".encode()) & 0xFFFFFFFF
    return sanitize_filename(f"{item_name}_{category_name}_{checksum:X}.{SIDECAR_EXTENSION}")


def write_descriptor(
    descriptor: PackageDescriptor,
    package_root: Path,
    item_name: str | None = None,
    timestamp: datetime | None = None,
) -> Path:
    """Write ``descriptor`` into ``package_root`` atomically.

    Args:
        descriptor: Record to persist
        package_root: Existing package root directory
        item_name: Name used in the sidecar file name (defaults to the package name)
        timestamp: Hash input; defaults to now

    Returns:
        Path of the written sidecar

    Raises:
        IOError: the sidecar could not be written
    """
    name = item_name or descriptor.name
    sidecar_path = package_root / sidecar_filename(name, descriptor.category.value, timestamp)

    with tempfile.NamedTemporaryFile(
        mode="w", dir=package_root, prefix="descriptor_", suffix=".tmp", delete=False, encoding="utf-8"
    ) as tmp_file:
        temp_path = Path(tmp_file.name)
        try:
            json.dump(descriptor.to_sidecar(), tmp_file, indent=2, ensure_ascii=False)
            tmp_file.flush()

            # Atomic rename
            temp_path.replace(sidecar_path)

        except Exception as e:
            with contextlib.suppress(Exception):
                temp_path.unlink()
            raise OSError(f"Failed to save descriptor: {e}") from e

    logger.debug(f"Descriptor written to {sidecar_path}")
    return sidecar_path


def read_descriptor(path: Path) -> PackageDescriptor:
    """Parse a sidecar file.

    Unknown fields are ignored. A missing or empty ``Version`` reads back as
    ``"1.0"``.

    Raises:
        DescriptorParseError: unreadable file, invalid JSON, or invalid record
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DescriptorParseError(path, f"cannot read file: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DescriptorParseError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DescriptorParseError(path, "top-level value is not an object")

    if not data.get("Version"):
        data["Version"] = DEFAULT_VERSION

    try:
        return PackageDescriptor.model_validate(data)
    except ValidationError as e:
        raise DescriptorParseError(path, str(e)) from e
