"""Storage backends and the navigation protocol."""
from .models import Node, NODE_TYPE_FILE, NODE_TYPE_FOLDER
from .protocols import StorageService
from .memory import MemoryStorage
from .cache import CachingStorage

__all__ = [
    'Node',
    'NODE_TYPE_FILE',
    'NODE_TYPE_FOLDER',
    'StorageService',
    'MemoryStorage',
    'CachingStorage',
]
