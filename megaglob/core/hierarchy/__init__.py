"""Path resolution, glob search and path reconstruction."""
from .segments import split_segments, format_path
from .path_resolver import PathResolver
from .glob_search import GlobSearchEngine
from .path_reconstructor import (
    PathReconstructor,
    ParentStrategy,
    FirstParentStrategy,
    AllParentsStrategy,
    strategy_for,
)

__all__ = [
    'split_segments',
    'format_path',
    'PathResolver',
    'GlobSearchEngine',
    'PathReconstructor',
    'ParentStrategy',
    'FirstParentStrategy',
    'AllParentsStrategy',
    'strategy_for',
]
