"""
HTTP transport for the Course Explorer API.

Thin wrapper around requests.Session:
- Base URL is explicit per transport (no process-wide client state)
- Relative paths are joined onto the base URL
- Every failure (status, connection, timeout) becomes TransportError
"""

import logging
from typing import Optional
from urllib.parse import urljoin

import requests

from cisapi.config import get_app_config
from cisapi.exceptions import TransportError

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Performs GET requests and returns response bodies as text.

    Usage:
        with HttpTransport() as transport:
            xml = transport.get("schedule/2020.xml")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            base_url: Base for relative paths (default: AppConfig.base_url)
            timeout: Request timeout in seconds (default: AppConfig.request_timeout)
            user_agent: User-Agent header (default: AppConfig.user_agent)
            session: Existing session to reuse; the transport does not close it
        """
        config = get_app_config()
        self.base_url = base_url or config.base_url
        if not self.base_url.endswith('/'):
            self.base_url += '/'
        self.timeout = timeout or config.request_timeout

        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/xml, text/xml;q=0.9, */*;q=0.8',
            'User-Agent': user_agent or config.user_agent,
        })

    def url_for(self, url_or_path: str) -> str:
        """Absolute URL for a full URL or a base-relative path."""
        return urljoin(self.base_url, url_or_path)

    def get(self, url_or_path: str) -> str:
        """
        Fetch one document.

        Args:
            url_or_path: Absolute URL or path relative to base_url

        Returns:
            Response body decoded as text

        Raises:
            TransportError: On non-2xx status, connection failure or timeout
        """
        url = self.url_for(url_or_path)
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise TransportError(f"Request failed for {url}: {e}", url=url) from e

        if not response.ok:
            logger.error(f"GET {url} returned HTTP {response.status_code}")
            raise TransportError(
                f"GET {url} returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code
            )

        # The explorer serves UTF-8 but does not always declare a charset
        if 'charset' not in response.headers.get('Content-Type', '').lower():
            response.encoding = 'utf-8'

        return response.text

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> 'HttpTransport':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
