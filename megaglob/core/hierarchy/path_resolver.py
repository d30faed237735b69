"""Exact path resolution over a storage service."""
from typing import Any, List, Optional

from ..logging import get_logger
from ..storage.protocols import StorageService
from .segments import split_segments


class PathResolver:
    """
    Resolves literal (non-glob) paths by walking name-matched children.

    File lookup branches through every folder carrying the segment's name
    and aggregates all matches. Folder lookup follows only the first
    match at each level and gives up as soon as a level has none.
    """
    
    def __init__(self, storage: StorageService):
        self.storage = storage
        self._logger = get_logger('megaglob.hierarchy.resolver')
    
    def resolve_files(self, path: str, start: Optional[Any] = None) -> List[Any]:
        """
        Find every file reachable at a literal path.
        
        Args:
            path: Slash-delimited path whose last segment is the file name
            start: Folder to resolve from (defaults to the storage root)
            
        Returns:
            Matching files across all branches, possibly empty
        """
        if start is None:
            start = self.storage.root_folder()
        
        segments = split_segments(path)
        results: List[Any] = []
        self._descend_files(start, segments[:-1], segments[-1], results)
        
        self._logger.debug(f"resolve_files({path!r}) matched {len(results)} file(s)")
        return results
    
    def _descend_files(self, folder: Any, remaining: List[str], file_name: str, results: List[Any]):
        if not remaining:
            results.extend(self.storage.child_files(folder, file_name))
            return
        
        segment, rest = remaining[0], remaining[1:]
        for child in self.storage.child_folders(folder, segment):
            self._descend_files(child, rest, file_name, results)
    
    def resolve_folder(self, path: str, start: Optional[Any] = None) -> Optional[Any]:
        """
        Find the folder at a literal path.
        
        Only the first folder reported at each level is followed.
        
        Returns:
            Folder node, or None if any level has no match
        """
        if start is None:
            start = self.storage.root_folder()
        
        current = start
        for segment in split_segments(path):
            current = next(iter(self.storage.child_folders(current, segment)), None)
            if current is None:
                self._logger.debug(f"resolve_folder({path!r}) stopped at {segment!r}")
                return None
        
        return current
