"""WordPress posts client.

Learn: A thin wrapper around httpx.AsyncClient. One GET per tick against
wp-json/wp/v2/posts; every way that can go wrong (transport error, HTTP
status, non-JSON body, wrong shape) is folded into a FetchFailure.
The poller logs failures; this module stays quiet about them.
"""

from dataclasses import dataclass
from typing import Optional, Union

import httpx
import structlog

from blogwords.config import settings
from blogwords.errors import FetchError
from blogwords.words import Document

logger = structlog.get_logger()


@dataclass(frozen=True)
class FetchSuccess:
    documents: tuple[Document, ...]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    error: FetchError

    @property
    def ok(self) -> bool:
        return False

    @property
    def documents(self) -> tuple[Document, ...]:
        return ()


FetchResult = Union[FetchSuccess, FetchFailure]


def parse_posts(payload: object) -> tuple[Document, ...]:
    """Turn a decoded wp/v2/posts response into Documents."""
    if not isinstance(payload, list):
        raise FetchError(f"expected a list of posts, got {type(payload).__name__}")
    documents = []
    for i, post in enumerate(payload):
        if not isinstance(post, dict):
            raise FetchError(f"post #{i} is {type(post).__name__}, not an object")
        documents.append(Document.from_wp_post(post))
    return tuple(documents)


class BlogClient:
    """Fetches the current post list from a WordPress site.

    Usage:
        async with BlogClient() as blog:
            result = await blog.fetch_documents()
    """

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        per_page: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.blog_api_url
        self.per_page = per_page or settings.blog_per_page
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.fetch_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BlogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_documents(self) -> FetchResult:
        """GET the post list. Never raises for network or payload errors."""
        try:
            resp = await self._client.get(self.url, params={"per_page": self.per_page})
            resp.raise_for_status()
            documents = parse_posts(resp.json())
        except httpx.HTTPStatusError as e:
            return self._failed(f"HTTP {e.response.status_code} from {self.url}", e)
        except httpx.HTTPError as e:
            return self._failed(f"request to {self.url} failed: {e!r}", e)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            return self._failed(f"invalid JSON from {self.url}: {e}", e)
        except FetchError as e:
            return FetchFailure(e)

        logger.debug("blog.fetched", url=self.url, posts=len(documents))
        return FetchSuccess(documents)

    def _failed(self, message: str, cause: Exception) -> FetchFailure:
        error = FetchError(message)
        error.__cause__ = cause
        return FetchFailure(error)
