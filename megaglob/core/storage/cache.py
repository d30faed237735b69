"""Memoizing wrapper around a storage service."""
from operator import attrgetter
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional

from ..logging import get_logger
from .protocols import StorageService


class CachingStorage:
    """
    Storage service that remembers listings of the service it wraps.

    Child and parent enumerations are fetched once per node identity and
    replayed afterwards. Name-filtered children are answered from the full
    listing, so a search never issues the same enumeration twice. Results
    are the same as those of the wrapped service.

    Args:
        inner: Wrapped storage service
        key: Function returning the identity of a node (defaults to
            its ``handle`` attribute)
    """

    def __init__(self, inner: StorageService, key: Optional[Callable[[Any], Hashable]] = None):
        self.inner = inner
        self._key = key or attrgetter('handle')
        self._root: Any = None
        self._names: Dict[Hashable, str] = {}
        self._folders: Dict[Hashable, List[Any]] = {}
        self._files: Dict[Hashable, List[Any]] = {}
        self._parents: Dict[Hashable, List[Any]] = {}
        self._logger = get_logger('megaglob.storage.cache')

    def clear(self):
        """Forget every cached listing."""
        self._root = None
        self._names.clear()
        self._folders.clear()
        self._files.clear()
        self._parents.clear()

    def _cached(self, cache: Dict[Hashable, List[Any]], node: Any, fetch: Callable) -> List[Any]:
        key = self._key(node)
        if key not in cache:
            cache[key] = list(fetch(node))
        else:
            self._logger.debug(f"Cache hit for {key}")
        return cache[key]

    def _filtered(self, nodes: List[Any], name: Optional[str]) -> Iterator[Any]:
        if name is None:
            return iter(nodes)
        return iter([n for n in nodes if self.name(n) == name])

    def root_folder(self) -> Any:
        if self._root is None:
            self._root = self.inner.root_folder()
        return self._root

    def name(self, node: Any) -> str:
        key = self._key(node)
        if key not in self._names:
            self._names[key] = self.inner.name(node)
        return self._names[key]

    def all_child_folders(self, folder: Any) -> Iterator[Any]:
        return iter(self._cached(self._folders, folder, self.inner.all_child_folders))

    def all_child_files(self, folder: Any) -> Iterator[Any]:
        return iter(self._cached(self._files, folder, self.inner.all_child_files))

    def child_folders(self, folder: Any, name: Optional[str] = None) -> Iterator[Any]:
        return self._filtered(self._cached(self._folders, folder, self.inner.all_child_folders), name)

    def child_files(self, folder: Any, name: Optional[str] = None) -> Iterator[Any]:
        return self._filtered(self._cached(self._files, folder, self.inner.all_child_files), name)

    def parents(self, node: Any) -> Iterator[Any]:
        return iter(self._cached(self._parents, node, self.inner.parents))
