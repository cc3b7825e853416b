import asyncio
import time
from contextlib import nullcontext
from typing import Any, List, Optional

from ..errors import InvalidUrlError, ValidationError
from ..fetcher import PageFetcher
from ..logging import logger
from ..model_client import CompletionClient
from ..normalize import DEFAULT_TOKEN_BUDGET
from ..resolver import Fetch, resolve_article
from ..schemas import SummaryResult

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.4


def normalize_urls(urls: Any) -> List[str]:
    """A bare string becomes a one-element list.

    Raises ValidationError for anything that is not a non-empty string or a
    non-empty list, and InvalidUrlError when any entry is blank or not a
    string. Nothing here touches the network.
    """
    if isinstance(urls, str):
        urls = [urls] if urls else []
    if not isinstance(urls, (list, tuple)) or len(urls) == 0:
        raise ValidationError()
    for url in urls:
        if not isinstance(url, str) or not url.strip():
            raise InvalidUrlError("Invalid URL provided.")
    return list(urls)


async def _summarize_one(
    url: str,
    *,
    completions: CompletionClient,
    fetch: Fetch,
    model: str,
    temperature: float,
    token_budget: int,
    limiter: Optional[asyncio.Semaphore],
) -> SummaryResult:
    async with limiter or nullcontext():
        article = await resolve_article(url.strip(), fetch=fetch, token_budget=token_budget)
        completion = await completions.complete(article.prompt, model=model, temperature=temperature)

    return SummaryResult(
        url=url,
        result=completion.text,
        prompt_tokens=completion.prompt_tokens,
        completion_tokens=completion.completion_tokens,
        total_tokens=completion.total_tokens,
        title=article.title,
    )


async def summarize_all(
    urls: Any,
    *,
    completions: CompletionClient,
    fetch: Optional[Fetch] = None,
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
    token_budget: int = DEFAULT_TOKEN_BUDGET,
    max_concurrency: int = 0,
) -> List[SummaryResult]:
    """Summarize every URL concurrently; results follow input order.

    All or nothing: the first failing URL fails the whole batch. URLs still in
    flight at that point are not cancelled, their results are dropped.
    Token totals across results are left to the caller.
    """
    batch = normalize_urls(urls)
    fetch = fetch or PageFetcher()
    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None

    t0 = time.time()
    logger.info("batch.start", urls=len(batch), model=model, max_concurrency=max_concurrency)
    try:
        results = await asyncio.gather(*(
            _summarize_one(
                url,
                completions=completions,
                fetch=fetch,
                model=model,
                temperature=temperature,
                token_budget=token_budget,
                limiter=limiter,
            )
            for url in batch
        ))
    except Exception as e:
        logger.error("batch.failed", urls=len(batch), error_type=e.__class__.__name__, error=str(e))
        raise

    logger.info(
        "batch.done",
        urls=len(batch),
        latency_ms=int((time.time() - t0) * 1000),
        total_tokens=sum(r.total_tokens for r in results),
    )
    return list(results)
