"""Glob-driven search over a storage service."""
from typing import Any, List, Optional

from ..glob import GlobCompiler
from ..logging import get_logger
from ..storage.protocols import StorageService
from .segments import split_segments


class GlobSearchEngine:
    """
    Enumerates folders and files whose path matches a glob.
    
    Each path level is compiled into its own pattern right before that
    level is searched. A match at an intermediate level is only descended
    into; results come from the last level. Nodes reachable through several
    branches are reported once per branch.
    
    Example:
        >>> engine = GlobSearchEngine(storage)
        >>> engine.search_files("/photos/*/IMG_*.jpg")
    """
    
    def __init__(self, storage: StorageService, extended: bool = False):
        """
        Args:
            storage: Storage service to search
            extended: Enable ``? [ ] { } ,`` glob syntax
        """
        self.storage = storage
        self.compiler = GlobCompiler(extended)
        self._logger = get_logger('megaglob.hierarchy.search')
    
    @property
    def extended(self) -> bool:
        return self.compiler.extended
    
    def search_folders(self, glob_path: str, start: Optional[Any] = None) -> List[Any]:
        """
        Find folders matching a glob path.
        
        Args:
            glob_path: Slash-delimited glob, one pattern per folder level
            start: Folder to search from (defaults to the storage root)
            
        Returns:
            Matching folders in enumeration order, possibly empty
        """
        if start is None:
            start = self.storage.root_folder()
        
        return self._folders_matching(split_segments(glob_path), start)
    
    def _folders_matching(self, segments: List[str], start: Any) -> List[Any]:
        results: List[Any] = []
        self._descend_folders(start, segments, results)
        return results
    
    def _descend_folders(self, folder: Any, remaining: List[str], results: List[Any]):
        pattern = self.compiler.compile(remaining[0])
        rest = remaining[1:]
        
        self._logger.debug(f"Searching {pattern.source!r} with {len(rest)} level(s) below")
        
        for child in self.storage.all_child_folders(folder):
            if not pattern.matches(self.storage.name(child)):
                continue
            if not rest:
                results.append(child)
            else:
                self._descend_folders(child, rest, results)
    
    def search_files(self, glob_path: str, start: Optional[Any] = None) -> List[Any]:
        """
        Find files matching a glob path.
        
        The folder part of the glob selects candidate folders; the last
        segment is matched against the direct files of each candidate.
        """
        if start is None:
            start = self.storage.root_folder()
        
        segments = split_segments(glob_path)
        folder_glob, file_glob = segments[:-1], segments[-1]
        
        if folder_glob:
            folders = self._folders_matching(folder_glob, start)
        else:
            folders = [start]
        
        pattern = self.compiler.compile(file_glob)
        results = []
        for folder in folders:
            for child in self.storage.all_child_files(folder):
                if pattern.matches(self.storage.name(child)):
                    results.append(child)
        
        self._logger.debug(
            f"search_files({glob_path!r}) matched {len(results)} file(s) in {len(folders)} folder(s)"
        )
        return results
