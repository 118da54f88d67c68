"""
API configuration module.

Provides configuration for the mobile API client.
Open for extension through custom configurations.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl

from ..constants import (
    BASE_URL,
    API_PATH,
    IG_APP_VERSION,
    IG_SIGNATURE_KEY,
    IG_SIGNATURE_KEY_VERSION,
    ACCEPT_LANGUAGE,
    VIDEO_CHUNK_SIZE,
    DEFAULT_VIDEO_DURATION_MS,
    IMAGE_COMPRESSION,
)


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior (e.g. for an intercepting proxy).
    """
    verify: bool = True
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()

        if self.ca_file:
            context.load_verify_locations(self.ca_file)

        if self.cert_file:
            context.load_cert_chain(
                self.cert_file,
                keyfile=self.key_file
            )

        context.check_hostname = self.check_hostname

        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Granular control over different timeout types.
    """
    total: float = 300.0
    connect: float = 30.0
    sock_read: float = 60.0
    sock_connect: float = 30.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read,
            sock_connect=self.sock_connect
        )


@dataclass
class UploadConfig:
    """
    Media upload settings.

    Attributes:
        chunk_size: Size of the first video chunk; the second takes the rest
        default_video_duration_ms: Used when the MP4 duration cannot be read
        image_compression: Descriptor sent with every photo upload
    """
    chunk_size: int = VIDEO_CHUNK_SIZE
    default_video_duration_ms: int = DEFAULT_VIDEO_DURATION_MS
    image_compression: str = IMAGE_COMPRESSION


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all configuration options for the client.
    """
    # Endpoint
    base_url: str = BASE_URL
    api_path: str = API_PATH

    # Signing
    signature_key: str = IG_SIGNATURE_KEY
    signature_key_version: str = IG_SIGNATURE_KEY_VERSION

    # Identity
    app_version: str = IG_APP_VERSION
    user_agent: Optional[str] = None  # overrides the device User-Agent
    accept_language: str = ACCEPT_LANGUAGE

    # Pause before every request, in seconds
    request_delay: float = 0.0

    # Sub-configurations
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)

    # Additional headers
    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Logging
    log_level: int = 20  # logging.INFO

    # Connection pool settings
    limit_per_host: int = 10
    limit: int = 100

    @property
    def api_url(self) -> str:
        """Base URL of the versioned API, with trailing slash."""
        return f"{self.base_url.rstrip('/')}{self.api_path.rstrip('/')}/"

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(
            proxy=ProxyConfig(url=proxy_url),
            **kwargs
        )

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(
            ssl=SSLConfig(verify=False, check_hostname=False),
            **kwargs
        )

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': dict(self.extra_headers),
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
