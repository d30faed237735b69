"""
NodeFinder - path and glob lookup over a storage service.

Example:
    >>> storage = await load_public_folder(link)
    >>> finder = NodeFinder(storage)
    >>> finder.search_files("/Photos/*/IMG_*.jpg")
    >>> finder.resolve_folder("/Documents/2024")
"""
import logging
from typing import Any, List, Optional

from .core.config import APIConfig, FinderConfig
from .core.hierarchy import (
    GlobSearchEngine,
    PathReconstructor,
    PathResolver,
    format_path,
)
from .core.logging import get_logger
from .core.storage import CachingStorage, StorageService
from .core.storage.mega import load_public_folder

# Loggers of the components a finder drives
FINDER_LOGGERS = (
    'megaglob.finder',
    'megaglob.hierarchy.resolver',
    'megaglob.hierarchy.search',
    'megaglob.storage.cache',
)


class NodeFinder:
    """
    Main entry point for locating nodes by path or glob.

    Every operation accepts an optional starting folder; the storage root
    is used when it is omitted. Failures raised by the storage service
    propagate unchanged.
    """

    def __init__(self, storage: StorageService, config: Optional[FinderConfig] = None):
        """
        Args:
            storage: Storage service to navigate
            config: Search configuration (uses defaults if not provided)
        """
        self._config = config or FinderConfig.default()
        self._logger = get_logger('megaglob.finder')

        if self._config.cache:
            storage = CachingStorage(storage)
        self.storage = storage

        self.resolver = PathResolver(self.storage)
        self.search = GlobSearchEngine(self.storage, extended=self._config.extended_glob)
        self.reconstructor = PathReconstructor(self.storage, self._config.create_strategy())

        # Applied last: get_logger resets levels while root has no handlers
        for name in FINDER_LOGGERS:
            logging.getLogger(name).setLevel(self._config.log_level)

    @classmethod
    async def from_public_link(
        cls,
        url: str,
        config: Optional[FinderConfig] = None,
        api_config: Optional[APIConfig] = None
    ) -> 'NodeFinder':
        """Load a MEGA public folder and wrap it in a finder."""
        storage = await load_public_folder(url, api_config)
        return cls(storage, config)

    @property
    def config(self) -> FinderConfig:
        return self._config

    def resolve_files(self, path: str, start: Optional[Any] = None) -> List[Any]:
        """Every file at a literal path (ambiguous folder names branch)."""
        return self.resolver.resolve_files(path, start)

    def resolve_folder(self, path: str, start: Optional[Any] = None) -> Optional[Any]:
        """The folder at a literal path, following first matches only."""
        return self.resolver.resolve_folder(path, start)

    def search_files(self, glob_path: str, start: Optional[Any] = None) -> List[Any]:
        """Files whose path matches a glob."""
        return self.search.search_files(glob_path, start)

    def search_folders(self, glob_path: str, start: Optional[Any] = None) -> List[Any]:
        """Folders whose path matches a glob."""
        return self.search.search_folders(glob_path, start)

    def path_to(self, node: Any) -> List[str]:
        """Ancestor names of a node, from the root's child to its parent."""
        return self.reconstructor.path_to(node)

    def paths_to(self, node: Any) -> List[List[str]]:
        """Every ancestor chain the configured parent strategy follows."""
        return self.reconstructor.paths_to(node)

    def full_path(self, node: Any) -> str:
        """Absolute path of a node, including its own name."""
        return self.reconstructor.full_path(node)

    @staticmethod
    def format_path(segments: List[str]) -> str:
        return format_path(segments)
