"""Storage domain models."""
from dataclasses import dataclass

NODE_TYPE_FILE = 0
NODE_TYPE_FOLDER = 1


@dataclass(frozen=True)
class Node:
    """
    A file or folder in a remote store.
    
    Nodes are read-only views: the handle is the stable identity, the name
    is not guaranteed unique among siblings.
    """
    handle: str
    name: str
    node_type: int = NODE_TYPE_FILE
    
    @property
    def is_folder(self) -> bool:
        return self.node_type == NODE_TYPE_FOLDER
    
    @property
    def is_file(self) -> bool:
        return not self.is_folder
    
    def to_dict(self) -> dict:
        """Converts node to dictionary."""
        return {
            'h': self.handle,
            'n': self.name,
            't': self.node_type,
        }
