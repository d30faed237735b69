"""Decryption of MEGA node keys and attributes."""
import base64
import json
from typing import Any, Dict, Optional

from Crypto.Cipher import AES

from .exceptions import MegaDecryptionError
from .logging import get_logger


class Base64Encoder:
    """Base64 URL-safe encoder/decoder."""

    @staticmethod
    def encode(data: bytes) -> str:
        """Encodes bytes to Base64 URL-safe without padding."""
        encoded = base64.b64encode(data).decode()
        encoded = encoded.replace('+', '-').replace('/', '_')
        encoded = encoded.rstrip('=')
        return encoded

    @staticmethod
    def decode(data: str) -> bytes:
        """Decodes Base64 URL-safe (with or without padding)."""
        data = data.replace('-', '+').replace('_', '/')
        padding = len(data) % 4
        if padding:
            data += '=' * (4 - padding)
        return base64.b64decode(data)


def unmerge_key_mac(merged_key: bytes) -> bytes:
    """Folds a 32-byte file key into its AES key (folder keys pass unchanged)."""
    new_key = bytearray(32)
    copy_len = min(len(merged_key), 32)
    new_key[:copy_len] = merged_key[:copy_len]

    for i in range(16):
        new_key[i] = new_key[i] ^ new_key[16 + i]

    return bytes(new_key[:16])


class NodeDecryptor:
    """
    Decrypts nodes of a public folder with the folder's share key.

    Node keys arrive as ``owner:key`` pairs (several joined by '/'),
    encrypted with AES-ECB under the share key. Attributes are AES-CBC
    encrypted with a zero IV and decode to ``MEGA{json}``.
    """

    def __init__(self, share_key: bytes, encoder: Base64Encoder = None):
        if len(share_key) != 16:
            raise ValueError(f"Share key must be 16 bytes, got {len(share_key)}")
        self.share_key = share_key
        self.encoder = encoder or Base64Encoder()
        self._logger = get_logger('megaglob.crypto')

    def decrypt_key(self, node_data: Dict[str, Any]) -> bytes:
        """
        Decrypts the key of a node record.

        Raises:
            MegaDecryptionError: If the record has no usable key
        """
        handle = node_data.get('h')
        raw = node_data.get('k')
        if not raw:
            raise MegaDecryptionError("Node has no key", node_handle=handle)

        encrypted = self._pick_key(raw)
        if encrypted is None:
            raise MegaDecryptionError("Malformed node key", node_handle=handle)

        try:
            key_bytes = self.encoder.decode(encrypted)
        except ValueError as e:
            raise MegaDecryptionError(f"Invalid key encoding: {e}", node_handle=handle) from e

        if not key_bytes or len(key_bytes) % 16:
            raise MegaDecryptionError(
                f"Unexpected key length {len(key_bytes)}", node_handle=handle
            )

        aes = AES.new(self.share_key, AES.MODE_ECB)
        return aes.decrypt(key_bytes)

    @staticmethod
    def _pick_key(raw: str) -> Optional[str]:
        # Public folder listings carry a single owner:key pair
        for pair in raw.split('/'):
            if ':' in pair:
                return pair.split(':', 1)[1]
        return None

    def decrypt_attributes(self, attr: str, node_key: bytes, node_handle: str = None) -> Dict[str, Any]:
        """
        Decrypts node attributes.

        Raises:
            MegaDecryptionError: If the plaintext is not a MEGA attribute block
        """
        try:
            data = self.encoder.decode(attr)
        except ValueError as e:
            raise MegaDecryptionError(f"Invalid attribute encoding: {e}", node_handle=node_handle) from e

        if not data or len(data) % 16:
            raise MegaDecryptionError("Attribute block is not AES aligned", node_handle=node_handle)

        aes = AES.new(unmerge_key_mac(node_key), AES.MODE_CBC, b'\0' * 16)
        attr_str = aes.decrypt(data).rstrip(b'\0').decode('utf-8', errors='ignore')

        if not attr_str.startswith('MEGA{"'):
            raise MegaDecryptionError("MEGA NOT VALID ATTRS", node_handle=node_handle)

        try:
            return json.loads(attr_str[4:])
        except json.JSONDecodeError as e:
            raise MegaDecryptionError(f"Invalid JSON in attributes: {e}", node_handle=node_handle) from e

    def decrypt_name(self, node_data: Dict[str, Any]) -> str:
        """
        Decrypts the display name of a node record.

        Falls back to the node handle when decryption fails.
        """
        handle = node_data.get('h', '')
        try:
            node_key = self.decrypt_key(node_data)
            attrs = self.decrypt_attributes(node_data.get('a', ''), node_key, handle)
        except MegaDecryptionError as e:
            self._logger.warning(f"Could not decrypt node {handle}: {e}")
            return handle
        return attrs.get('n', handle)
