"""Host collaborators consumed by the packaging engine.

The engine never owns the host's object model. It talks to three small
protocols instead:

- DependencyRegistry: hard dependencies of a package and index readiness
- HostHooks: content root, live-object unload and directory rescan
- Notifier: fire-and-forget user notifications

Default implementations back these with a YAML dependency manifest and
logging, so the engine runs standalone from the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from typing import Protocol
from typing import runtime_checkable

import yaml

logger = logging.getLogger(__name__)


@runtime_checkable
class DependencyRegistry(Protocol):
    """Read-only view of the host's dependency graph."""

    def get_hard_dependencies(self, package_id: str) -> list[str]:
        """Direct hard dependencies of a package."""
        ...

    def is_index_ready(self) -> bool:
        """False while the host is still indexing."""
        ...


@runtime_checkable
class HostHooks(Protocol):
    """Host callbacks around file changes."""

    def project_content_root(self) -> Path:
        """Root directory of the project's content."""
        ...

    def notify_replaced(self, item_path: Path) -> None:
        """Called once per item before its file is overwritten by an import."""
        ...

    def rescan_paths(self, paths: set[Path]) -> None:
        """Called with every unique directory touched by an import."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """User-facing notification sink."""

    def notify(self, message: str, success: bool) -> None:
        """Show a message. Must not raise."""
        ...


class ManifestRegistry:
    """Dependency registry backed by a YAML manifest.

    Manifest format::

        ready: true
        packages:
          /Game/Chars/Hero:
            hard: [/Game/Materials/M_Hero]
            soft: [/Game/Sounds/S_Step]
          /Game/Materials/M_Hero: [/Game/Textures/T_Hero]

    A plain list is shorthand for hard dependencies. Soft dependencies are
    parsed but never returned. A missing manifest is an empty graph.
    """

    def __init__(self, manifest_path: Path | None = None, packages: dict[str, Any] | None = None, ready: bool = True):
        self.manifest_path = manifest_path
        self._ready = ready
        self._hard: dict[str, list[str]] = {}

        if packages is not None:
            self._load_packages(packages)
        elif manifest_path is not None:
            self._load_manifest(manifest_path)

    def _load_manifest(self, path: Path) -> None:
        if not path.exists():
            logger.debug(f"No dependency manifest at {path}, using empty graph")
            return

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Dependency manifest must be a mapping: {path}")

        self._ready = bool(data.get("ready", True))
        self._load_packages(data.get("packages") or {})
        logger.debug(f"Loaded {len(self._hard)} package entries from {path}")

    def _load_packages(self, packages: dict[str, Any]) -> None:
        for package_id, entry in packages.items():
            if isinstance(entry, dict):
                hard = entry.get("hard") or []
            elif isinstance(entry, list):
                hard = entry
            elif entry is None:
                hard = []
            else:
                raise ValueError(f"Invalid dependency entry for {package_id}: {entry!r}")
            self._hard[str(package_id)] = [str(dep) for dep in hard]

    def get_hard_dependencies(self, package_id: str) -> list[str]:
        return list(self._hard.get(package_id, []))

    def is_index_ready(self) -> bool:
        return self._ready


class LocalHostHooks:
    """Host hooks for a plain directory project.

    There is no live object model to unload, so replacements and rescans are
    logged and recorded for inspection.
    """

    def __init__(self, content_root: Path):
        self._content_root = Path(content_root)
        self.replaced: list[Path] = []
        self.rescanned: list[Path] = []

    def project_content_root(self) -> Path:
        return self._content_root

    def notify_replaced(self, item_path: Path) -> None:
        logger.warning(f"[Vault] Releasing in-memory copy of: {item_path}")
        self.replaced.append(item_path)

    def rescan_paths(self, paths: set[Path]) -> None:
        for path in sorted(paths):
            logger.info(f"[Vault] Scanning: {path}")
            self.rescanned.append(path)


class LoggingNotifier:
    """Notifier that only writes to the log."""

    def notify(self, message: str, success: bool) -> None:
        if success:
            logger.info(message)
        else:
            logger.error(message)
