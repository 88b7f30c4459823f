"""CLI commands for asset-vault."""

__all__ = [
    "catalog",
    "conflicts",
    "export",
    "import_package",
    "manage",
    "settings",
]
