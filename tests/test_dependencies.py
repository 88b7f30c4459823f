"""Tests for hard-dependency resolution."""

from unittest.mock import MagicMock

import pytest

from asset_vault.dependencies import resolve_hard_dependencies
from asset_vault.errors import RegistryNotReadyError
from asset_vault.host import ManifestRegistry


def test_no_dependencies_returns_root():
    registry = ManifestRegistry(packages={})
    assert resolve_hard_dependencies("/Game/A", registry) == {"/Game/A"}


def test_transitive_closure():
    registry = ManifestRegistry(packages={"/Game/A": ["/Game/B"], "/Game/B": ["/Game/C"]})
    assert resolve_hard_dependencies("/Game/A", registry) == {"/Game/A", "/Game/B", "/Game/C"}


def test_cycle_terminates():
    registry = ManifestRegistry(packages={"/Game/A": ["/Game/B"], "/Game/B": ["/Game/A"]})
    assert resolve_hard_dependencies("/Game/A", registry) == {"/Game/A", "/Game/B"}


def test_diamond_visits_each_node_once():
    registry = MagicMock()
    registry.is_index_ready.return_value = True
    graph = {"/Game/A": ["/Game/B", "/Game/C"], "/Game/B": ["/Game/D"], "/Game/C": ["/Game/D"]}
    registry.get_hard_dependencies.side_effect = lambda node: graph.get(node, [])

    result = resolve_hard_dependencies("/Game/A", registry)

    assert result == {"/Game/A", "/Game/B", "/Game/C", "/Game/D"}
    queried = [call.args[0] for call in registry.get_hard_dependencies.call_args_list]
    assert sorted(queried) == ["/Game/A", "/Game/B", "/Game/C", "/Game/D"]


def test_soft_dependencies_not_followed():
    registry = ManifestRegistry(packages={"/Game/A": {"hard": ["/Game/B"], "soft": ["/Game/S"]}})
    assert resolve_hard_dependencies("/Game/A", registry) == {"/Game/A", "/Game/B"}


def test_registry_not_ready():
    registry = ManifestRegistry(packages={"/Game/A": ["/Game/B"]}, ready=False)
    with pytest.raises(RegistryNotReadyError):
        resolve_hard_dependencies("/Game/A", registry)


def test_self_cycle():
    registry = ManifestRegistry(packages={"/Game/A": ["/Game/A"]})

    first = resolve_hard_dependencies("/Game/A", registry)

    assert first == {"/Game/A"}
    assert resolve_hard_dependencies("/Game/A", registry) == first


def test_repeated_resolution_is_stable():
    registry = ManifestRegistry(packages={"/Game/A": ["/Game/C", "/Game/B"], "/Game/B": ["/Game/C", "/Game/A"]})
    assert resolve_hard_dependencies("/Game/A", registry) == resolve_hard_dependencies("/Game/A", registry)
