"""
Upstream daemon document fetcher.

The document is fetched fresh for every request. There is no cache and no
retry: a single failed fetch is reported to the caller immediately.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from daemon_mcp.errors import UnavailableError
from daemon_mcp.logging import get_logger

if TYPE_CHECKING:
    from daemon_mcp.config import UpstreamConfig

logger = get_logger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch daemon data"


class DocumentFetchError(UnavailableError):
    """Raised when the daemon document cannot be fetched."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            message=FETCH_FAILED_MESSAGE,
            details={"url": url, "reason": reason},
        )


class DocumentFetcher:
    """
    Fetches the raw daemon document over HTTP.

    Example:
        >>> fetcher = DocumentFetcher("https://example.com/daemon.md")
        >>> text = await fetcher.fetch()
    """

    def __init__(self, document_url: str) -> None:
        """
        Initialize the fetcher.

        Args:
            document_url: URL of the section-tagged daemon document.
        """
        self.document_url = document_url

    @classmethod
    def from_config(cls, config: UpstreamConfig) -> DocumentFetcher:
        """Create a DocumentFetcher from configuration."""
        return cls(document_url=config.document_url)

    async def fetch(self) -> str:
        """
        Download the document text.

        Returns:
            The document body decoded as text.

        Raises:
            DocumentFetchError: On transport errors or a non-2xx status.
        """
        logger.debug("Fetching daemon document from %s", self.document_url)

        try:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.get(self.document_url)
                response.raise_for_status()
                text = response.text
        except httpx.HTTPError as e:
            logger.warning(
                "Failed to fetch daemon document",
                extra={"url": self.document_url, "error": str(e)},
            )
            raise DocumentFetchError(self.document_url, str(e)) from e

        logger.debug(
            "Fetched daemon document",
            extra={"url": self.document_url, "bytes": len(text)},
        )
        return text
