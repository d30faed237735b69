"""
Configuration module.

Search behavior for the finder and connection settings for the MEGA
public folder backend.
"""
from dataclasses import dataclass, field, fields
from typing import Optional, Dict, Any
import logging

from .hierarchy.path_reconstructor import PARENT_STRATEGIES, ParentStrategy, strategy_for


@dataclass
class FinderConfig:
    """
    Search configuration.

    extended_glob enables ``? [ ] { } ,`` as glob syntax. It is off by
    default, so ``?`` matches only a literal question mark.
    """
    extended_glob: bool = False
    parent_strategy: str = 'first'  # 'first' or 'all'
    cache: bool = False  # Memoize listings during a session
    log_level: int = logging.INFO

    def __post_init__(self):
        if self.parent_strategy not in PARENT_STRATEGIES:
            raise ValueError(f"Unknown parent strategy: {self.parent_strategy!r}")

    @classmethod
    def default(cls) -> 'FinderConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create configuration from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def create_strategy(self) -> ParentStrategy:
        return strategy_for(self.parent_strategy)


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Granular control over different timeout types.
    """
    total: float = 300.0  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_read: float = 60.0  # Socket read timeout

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class RetryConfig:
    """
    Retry configuration.

    Controls retry behavior for failed requests.
    """
    max_retries: int = 4
    base_delay: float = 0.25
    max_delay: float = 16.0
    exponential_base: float = 2.0
    retry_on_codes: tuple = (-3, -6, -18)  # MEGA error codes to retry

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt number."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


@dataclass
class APIConfig:
    """
    MEGA API configuration for loading public folders.
    """
    # Gateway settings
    gateway: str = 'https://g.api.mega.co.nz/'

    # User agent
    user_agent: str = 'megaglob/1.0.0'

    # Sub-configurations
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Optional proxy URL
    proxy: Optional[str] = None

    # Logging
    log_level: int = logging.INFO

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
