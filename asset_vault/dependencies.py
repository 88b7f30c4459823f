"""Hard-dependency resolution.

Breadth-first walk over the registry's hard dependencies. Soft dependencies
are never followed; they are not needed for a package to load.
"""

import logging
from collections import deque

from .errors import RegistryNotReadyError
from .host import DependencyRegistry

logger = logging.getLogger(__name__)


def resolve_hard_dependencies(root: str, registry: DependencyRegistry) -> set[str]:
    """Transitive closure of ``root`` over hard dependencies, root included.

    Cycles are tolerated. Callers must rely on set membership only, never on
    traversal order.

    Raises:
        RegistryNotReadyError: the registry is still indexing
    """
    if not registry.is_index_ready():
        raise RegistryNotReadyError("Dependency registry is still loading. Try again later.")

    visited = {root}
    queue = deque([root])

    while queue:
        current = queue.popleft()
        for dependency in registry.get_hard_dependencies(current):
            if dependency not in visited:
                visited.add(dependency)
                queue.append(dependency)

    logger.debug(f"Resolved {len(visited)} packages for {root}")
    return visited
