from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Tuple

from .charset_util import decode_body
from .extractor import extract_article
from .logging import logger
from .normalize import DEFAULT_TOKEN_BUDGET, html_to_markdown, remove_markdown_links, truncate_to_token_count
from .prompts import build_prompt

# (final_url, content_type, body, headers), see fetcher.PageFetcher
Fetch = Callable[[str], Awaitable[Tuple[str, str, bytes, Dict[str, str]]]]


@dataclass(frozen=True)
class ResolvedArticle:
    title: str
    prompt: List[Dict[str, str]]


async def resolve_article(url: str, *, fetch: Fetch, token_budget: int = DEFAULT_TOKEN_BUDGET) -> ResolvedArticle:
    """Fetch a page and turn its main article into a ready-to-send prompt.

    Raises FetchError or ExtractionError; everything after the fetch is
    synchronous.
    """
    _final_url, _ctype, body, _headers = await fetch(url)
    article = extract_article(decode_body(body))

    markdown = html_to_markdown(article.content_html)
    text = truncate_to_token_count(remove_markdown_links(markdown), token_budget)
    logger.debug("resolve.done", url=url, title=article.title, words=len(text.split()))

    return ResolvedArticle(title=article.title, prompt=build_prompt(article.title, text))
