"""Image download over HTTP"""
from typing import Dict, Optional
import httpx
from hexit.core.config import get_settings
from hexit.core.errors import FetchError, NetworkError
from hexit.core.logging import logger


def browser_headers(user_agent: str) -> Dict[str, str]:
    """Headers that make the request look like it comes from a browser"""
    return {
        "User-Agent": user_agent,
        "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


class ImageFetcher:
    """Downloads raw image bytes, one client per request"""

    def __init__(self, user_agent: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.user_agent = user_agent or get_settings().user_agent
        self.transport = transport

    async def fetch(self, url: str) -> bytes:
        """
        Fetch an image

        Args:
            url: Absolute http(s) URL

        Returns:
            Response body on any 2xx status

        Raises:
            FetchError: Remote server answered with a non-2xx status
            NetworkError: Connection failed or the URL is unusable
        """
        try:
            target = httpx.URL(url)
            if target.scheme not in ("http", "https"):
                raise httpx.UnsupportedProtocol(f"Unsupported URL scheme: {target.scheme!r}")
            async with httpx.AsyncClient(
                headers=browser_headers(self.user_agent),
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(target)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.bind(url=url, status=response.status_code).warning("Image fetch rejected")
            raise FetchError(response.status_code)

        return response.content
