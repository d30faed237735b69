"""
Custom exceptions for megaglob.

Traversal itself never raises its own errors: a search that finds nothing
returns an empty result. These exceptions belong to the storage backends
and the link loader.
"""
from typing import Optional


class MegaGlobException(Exception):
    """Base exception for all megaglob errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class NodeNotFoundError(MegaGlobException):
    """Raised when a storage backend is asked about an unknown node."""
    
    def __init__(self, handle: str) -> None:
        self.handle = handle
        super().__init__(f"Node not found: {handle}")


class InvalidLinkError(MegaGlobException):
    """Raised when a public folder link cannot be parsed."""
    pass


class MegaDecryptionError(MegaGlobException):
    """Exception raised when decryption of node data fails."""
    
    def __init__(
        self, 
        message: str, 
        node_handle: Optional[str] = None, 
        error_code: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            node_handle: Handle of the node that failed to decrypt
            error_code: Numeric error code (if available)
        """
        self.node_handle = node_handle
        super().__init__(message, error_code)
