"""
megaglob - Path and glob lookup for remote node graphs.

Usage:
    >>> from megaglob import NodeFinder, load_public_folder
    >>>
    >>> storage = await load_public_folder("https://mega.nz/folder/<handle>#<key>")
    >>> finder = NodeFinder(storage)
    >>> for node in finder.search_files("/Documents/*.pdf"):
    ...     print(finder.full_path(node))
"""
import logging
from .finder import NodeFinder

# Configuration
from .core.config import FinderConfig, APIConfig, TimeoutConfig, RetryConfig

# Glob compilation
from .core.glob import Pattern, GlobCompiler, compile_glob

# Storage
from .core.storage import (
    Node,
    StorageService,
    MemoryStorage,
    CachingStorage,
)
from .core.storage.mega import load_public_folder, parse_folder_link

# Traversal
from .core.hierarchy import (
    PathResolver,
    GlobSearchEngine,
    PathReconstructor,
    FirstParentStrategy,
    AllParentsStrategy,
    split_segments,
    format_path,
)

# Errors
from .core.exceptions import (
    MegaGlobException,
    NodeNotFoundError,
    InvalidLinkError,
    MegaDecryptionError,
)
from .core.api import MegaAPIError

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for megaglob modules.

    This ensures that all megaglob loggers are properly configured
    to show log messages at the specified level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'megaglob',
        'megaglob.finder',
        'megaglob.api',
        'megaglob.crypto',
        'megaglob.storage',
        'megaglob.storage.cache',
        'megaglob.storage.mega',
        'megaglob.hierarchy.resolver',
        'megaglob.hierarchy.search',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'NodeFinder',
    'FinderConfig',
    'APIConfig',
    'TimeoutConfig',
    'RetryConfig',
    'Pattern',
    'GlobCompiler',
    'compile_glob',
    'Node',
    'StorageService',
    'MemoryStorage',
    'CachingStorage',
    'load_public_folder',
    'parse_folder_link',
    'PathResolver',
    'GlobSearchEngine',
    'PathReconstructor',
    'FirstParentStrategy',
    'AllParentsStrategy',
    'split_segments',
    'format_path',
    'MegaGlobException',
    'NodeNotFoundError',
    'InvalidLinkError',
    'MegaDecryptionError',
    'MegaAPIError',
    'setup_logging',
]
