"""
Async client for MEGA public folder listings.
"""
import json
import random
import asyncio
from typing import Dict, Optional, Any, List
import aiohttp

from ..config import APIConfig
from ..logging import get_logger
from .errors import MegaAPIError


class PublicFolderClient:
    """
    Asynchronous client for the MEGA API, scoped to one public folder.
    
    Example:
        >>> async with PublicFolderClient() as client:
        ...     nodes = await client.get_folder_nodes("iJkVRL7T")
    """
    
    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize async API client.
        
        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._counter_id = random.randint(0, 1_000_000_000)
        self._logger = get_logger('megaglob.api')
        self._logger.setLevel(self._config.log_level)
    
    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config
    
    async def __aenter__(self) -> 'PublicFolderClient':
        await self._ensure_session()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(**self._config.get_session_kwargs())
        return self._session
    
    async def close(self):
        """Close client and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
    
    def _build_url(self, folder_handle: str) -> str:
        return f"{self._config.gateway}cs?id={self._counter_id}&n={folder_handle}"
    
    async def request(
        self,
        data: Dict[str, Any],
        folder_handle: str,
        retry_count: int = 0
    ) -> Any:
        """
        Make an API request in the context of a public folder.
        
        Args:
            data: Request data
            folder_handle: Handle of the shared folder
            retry_count: Current retry attempt
            
        Returns:
            API response data
            
        Raises:
            MegaAPIError: On a negative API result or a network failure
                that outlasts the retry budget
        """
        session = await self._ensure_session()
        self._counter_id += 1
        url = self._build_url(folder_handle)
        
        self._logger.debug(f"Request to {url}: {data}")
        
        try:
            async with session.post(url, data=json.dumps([data]), proxy=self._config.proxy) as response:
                response_text = await response.text()
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error: {e}")
            
            if retry_count < self._config.retry.max_retries:
                await asyncio.sleep(self._config.retry.calculate_delay(retry_count))
                return await self.request(data, folder_handle, retry_count + 1)
            
            raise MegaAPIError(-1) from e
        
        result = self._parse_response(response_text)
        
        if isinstance(result, int) and result < 0:
            if self._should_retry(result, retry_count):
                self._logger.warning(f"Retrying after error {result}, attempt {retry_count + 1}")
                await asyncio.sleep(self._config.retry.calculate_delay(retry_count))
                return await self.request(data, folder_handle, retry_count + 1)
            
            raise MegaAPIError(result)
        
        return result
    
    def _parse_response(self, response_text: str) -> Any:
        """Parse API response."""
        try:
            data = json.loads(response_text)
        except json.JSONDecodeError:
            return response_text
        
        if isinstance(data, list) and len(data) > 0:
            return data[0]
        return data
    
    def _should_retry(self, error_code: int, retry_count: int) -> bool:
        """Check if should retry for given error."""
        return (
            error_code in self._config.retry.retry_on_codes and
            retry_count < self._config.retry.max_retries
        )
    
    async def get_folder_nodes(self, folder_handle: str) -> List[Dict[str, Any]]:
        """
        List every node of a public folder, the folder itself included.
        
        Returns:
            Raw node records (encrypted keys and attributes)
        """
        response = await self.request({'a': 'f', 'c': 1, 'ca': 1, 'r': 1}, folder_handle)
        if not isinstance(response, dict):
            return []
        return response.get('f', [])
