"""MEGA API access for public folders."""
from .client import PublicFolderClient
from .errors import MegaAPIError, APIErrorCodes

__all__ = [
    'PublicFolderClient',
    'MegaAPIError',
    'APIErrorCodes',
]
