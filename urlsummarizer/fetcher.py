import time
from typing import Dict, Optional, Tuple

import httpx

from .config import DEFAULT_USER_AGENT
from .errors import FetchError
from .logging import logger

_BASE_HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}


def _http_client(user_agent: Optional[str], timeout_ms: int,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    headers = dict(_BASE_HEADERS)
    headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT
    # 0 means wait indefinitely
    timeout = httpx.Timeout(timeout_ms / 1000.0) if timeout_ms > 0 else httpx.Timeout(None)
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=timeout,
        headers=headers,
        transport=transport,
    )


class PageFetcher:
    """Fetches raw page bytes, one short-lived client per request.

    HTTP status codes are not inspected: a 404 page with a body is returned
    like any other page. Only transport failures raise ``FetchError``.
    """

    def __init__(self, user_agent: Optional[str] = None, timeout_ms: int = 0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.user_agent = user_agent
        self.timeout_ms = timeout_ms
        self.transport = transport

    async def __call__(self, url: str) -> Tuple[str, str, bytes, Dict[str, str]]:
        """Returns (final_url, content_type, body, headers)."""
        t0 = time.time()
        logger.info("fetch.start", url=url)
        try:
            async with _http_client(self.user_agent, self.timeout_ms, self.transport) as client:
                resp = await client.get(url)
                body = resp.content
        except httpx.TimeoutException as e:
            logger.warn("fetch.timeout", url=url)
            raise FetchError(f"timeout fetching {url}") from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            # DNS/refused/TLS/bad scheme
            logger.warn("fetch.request_error", url=url, error=str(e))
            raise FetchError(f"could not fetch {url}: {e}") from e

        ctype = resp.headers.get("content-type", "") or ""
        logger.info(
            "fetch.done",
            url=url,
            final_url=str(resp.url),
            status=resp.status_code,
            bytes=len(body),
            latency_ms=int((time.time() - t0) * 1000),
            content_type=ctype,
        )
        return str(resp.url), ctype, body, dict(resp.headers)
