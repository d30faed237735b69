"""
Storage service protocols.

Defines the navigation interface consumed by the traversal engine.
Any remote store exposing identity-based parent/child navigation can
implement it.
"""
from typing import Protocol, Iterator, Optional, Any, runtime_checkable


@runtime_checkable
class StorageService(Protocol):
    """
    Protocol for hierarchical storage backends.
    
    Nodes are opaque to callers of this protocol: every question about a
    node goes back through the service. Failures raised by an
    implementation propagate to the caller unchanged.
    """
    
    def root_folder(self) -> Any:
        """
        Get the root folder of the graph.
        
        Returns:
            Root folder node
        """
        ...
    
    def name(self, node: Any) -> str:
        """
        Get the display name of a node.
        """
        ...
    
    def child_folders(self, folder: Any, name: Optional[str] = None) -> Iterator[Any]:
        """
        Iterate child folders, optionally only those literally named ``name``.
        """
        ...
    
    def child_files(self, folder: Any, name: Optional[str] = None) -> Iterator[Any]:
        """
        Iterate child files, optionally only those literally named ``name``.
        """
        ...
    
    def all_child_folders(self, folder: Any) -> Iterator[Any]:
        """Iterate every child folder."""
        ...
    
    def all_child_files(self, folder: Any) -> Iterator[Any]:
        """Iterate every child file."""
        ...
    
    def parents(self, node: Any) -> Iterator[Any]:
        """
        Iterate the parent folders of a node.
        
        Returns:
            Empty iterator for the graph root
        """
        ...
