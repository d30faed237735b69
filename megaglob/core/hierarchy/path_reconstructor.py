"""Rebuilding human-readable paths by ascending parent edges."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Type

from ..storage.protocols import StorageService
from .segments import format_path


class ParentStrategy(ABC):
    """Chooses which parent edges to follow when ascending."""
    
    @abstractmethod
    def select(self, storage: StorageService, node: Any) -> List[Any]:
        """Returns the parents to follow; empty for the graph root."""
        pass


class FirstParentStrategy(ParentStrategy):
    """
    Follows whichever parent the storage reports first.
    
    Nodes with several parents get one arbitrary path.
    """
    
    def select(self, storage: StorageService, node: Any) -> List[Any]:
        first = next(iter(storage.parents(node)), None)
        return [] if first is None else [first]


class AllParentsStrategy(ParentStrategy):
    """Follows every parent, yielding one path per ancestor chain."""
    
    def select(self, storage: StorageService, node: Any) -> List[Any]:
        return list(storage.parents(node))


PARENT_STRATEGIES: Dict[str, Type[ParentStrategy]] = {
    'first': FirstParentStrategy,
    'all': AllParentsStrategy,
}


def strategy_for(name: str) -> ParentStrategy:
    """
    Create a parent strategy by name.
    
    Raises:
        ValueError: If the name is not a known strategy
    """
    try:
        return PARENT_STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown parent strategy: {name!r} (expected one of {sorted(PARENT_STRATEGIES)})"
        ) from None


class PathReconstructor:
    """
    Builds the folder path leading to a node.
    
    Paths list ancestor names from the root's direct child down to the
    node's immediate parent. Neither the root's name nor the node's own
    name is included.
    """
    
    def __init__(self, storage: StorageService, strategy: ParentStrategy = None):
        self.storage = storage
        self.strategy = strategy or FirstParentStrategy()
    
    def path_to(self, node: Any) -> List[str]:
        """
        Ancestor names of a node, root side first.
        
        Returns:
            Empty list for the root and for its direct children
        """
        return self.paths_to(node)[0]
    
    def paths_to(self, node: Any) -> List[List[str]]:
        """Every ancestor chain the strategy follows, at least one."""
        return self._chains(node) or [[]]
    
    def _chains(self, node: Any) -> List[List[str]]:
        # An empty result means the node itself is the root
        chains = []
        for parent in self.strategy.select(self.storage, node):
            above = self._chains(parent)
            if not above:
                chains.append([])
                continue
            name = self.storage.name(parent)
            chains.extend(chain + [name] for chain in above)
        return chains
    
    def full_path(self, node: Any) -> str:
        """Absolute path string of a node, including its own name."""
        chains = self._chains(node)
        if not chains:
            return '/'
        return format_path(chains[0] + [self.storage.name(node)])
