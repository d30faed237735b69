"""
MEGA public folder backend.

Loads every node of a shared folder once, decrypts the names and builds
an in-memory graph that the synchronous search engine walks.

Example:
    >>> storage = await load_public_folder(
    ...     "https://mega.nz/folder/iJkVRL7T#SMCUCSEOhqwgV6uIUa1Wsw"
    ... )
    >>> storage.root_folder().name
"""
import re
from typing import Optional, Tuple

from ..api import PublicFolderClient
from ..config import APIConfig
from ..crypto import Base64Encoder, NodeDecryptor
from ..exceptions import InvalidLinkError
from ..logging import get_logger
from .memory import MemoryStorage

FOLDER_LINK_PATTERNS = (
    re.compile(r'mega(?:\.co)?\.nz/folder/([\w-]+)#([\w-]+)'),
    re.compile(r'#F!([\w-]+)!([\w-]+)'),
)


def parse_folder_link(url: str) -> Tuple[str, bytes]:
    """
    Extract the folder handle and share key from a public folder link.

    Accepts ``https://mega.nz/folder/<handle>#<key>`` (optionally followed
    by ``/folder/<sub>``) and the legacy ``https://mega.nz/#F!<handle>!<key>``.

    Raises:
        InvalidLinkError: If the link is not a folder link
    """
    for pattern in FOLDER_LINK_PATTERNS:
        match = pattern.search(url)
        if match:
            handle, key = match.groups()
            try:
                share_key = Base64Encoder.decode(key)
            except ValueError as e:
                raise InvalidLinkError(f"Invalid folder key in link: {url}") from e
            if len(share_key) != 16:
                raise InvalidLinkError(f"Folder key must be 16 bytes: {url}")
            return handle, share_key

    raise InvalidLinkError(f"Not a MEGA folder link: {url}")


async def load_public_folder(
    url: str,
    config: Optional[APIConfig] = None,
    client: Optional[PublicFolderClient] = None
) -> MemoryStorage:
    """
    Load a public folder into a searchable graph.

    Args:
        url: Public folder link
        config: API configuration (ignored when ``client`` is given)
        client: Existing client to reuse; it is not closed afterwards

    Returns:
        MemoryStorage rooted at the shared folder
    """
    logger = get_logger('megaglob.storage.mega')
    handle, share_key = parse_folder_link(url)

    if client is None:
        async with PublicFolderClient(config) as own_client:
            records = await own_client.get_folder_nodes(handle)
    else:
        records = await client.get_folder_nodes(handle)

    decryptor = NodeDecryptor(share_key)
    flat = [
        {
            'h': record['h'],
            'p': record.get('p'),
            't': record.get('t', 0),
            'n': decryptor.decrypt_name(record),
        }
        for record in records
    ]

    storage = MemoryStorage.from_flat(flat, root_handle=handle)
    logger.info(f"Loaded {len(storage)} nodes from public folder {handle}")
    return storage
