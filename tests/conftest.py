import asyncio
from typing import Dict, List, Optional

import pytest

from urlsummarizer.config import Config
from urlsummarizer.errors import FetchError
from urlsummarizer.model_client import Completion

ARTICLE_HTML = """<html><head><title>Async Patterns</title></head><body>
<nav><a href="/">Home</a> <a href="/about">About</a></nav>
<article>
<h1>Async Patterns</h1>
<p>Python's asyncio library lets a single thread juggle many network calls, which makes it a good fit for crawlers, API clients, and chat bots.</p>
<p>See the <a href="https://docs.python.org/3/library/asyncio.html">official docs</a> for the full reference, including tasks, events, queues, and streams.</p>
<p>Gathering coroutines runs them concurrently, and the results come back in the order the coroutines were passed in, not the order in which they finished.</p>
</article>
<footer>Copyright 2024</footer>
</body></html>"""

SECOND_ARTICLE_HTML = """<html><head><title>Parsing HTML</title></head><body>
<div class="content">
<p>Real pages are full of broken markup, unclosed tags, stray attributes, and scripts, so a parser has to be forgiving when it builds a tree.</p>
<p>Once the tree exists, scoring paragraphs by length, commas, and class names is usually enough to find the main body of an article.</p>
</div>
</body></html>"""

EMPTY_HTML = "<html><head><title>Nothing here</title></head><body></body></html>"


def make_config(**overrides) -> Config:
    values = dict(
        openai_api_key="sk-test",
        openai_api_base=None,
        model="gpt-3.5-turbo",
        temperature=0.4,
        token_budget=1000,
        max_concurrency=0,
        fetch_timeout_ms=0,
        llm_timeout=0,
        user_agent="urlsummarizer-tests/1.0",
        log_level="error",
        host="127.0.0.1",
        port=8000,
    )
    values.update(overrides)
    return Config(**values)


class FakeFetch:
    """Serves canned HTML per URL; unknown URLs fail like a refused connection."""

    def __init__(self, pages: Dict[str, str], delays: Optional[Dict[str, float]] = None):
        self.pages = pages
        self.delays = delays or {}
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, url: str):
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0))
            if url not in self.pages:
                raise FetchError(f"could not fetch {url}")
            return url, "text/html; charset=utf-8", self.pages[url].encode("utf-8"), {}
        finally:
            self.in_flight -= 1


class FakeCompletions:
    """Stands in for CompletionClient; answers with the article title."""

    def __init__(self, error: Optional[Exception] = None, prompt_tokens: int = 120, completion_tokens: int = 30):
        self.error = error
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.calls: List[dict] = []

    async def complete(self, messages, model, temperature):
        self.calls.append({"messages": messages, "model": model, "temperature": temperature})
        if self.error is not None:
            raise self.error
        title_turn = messages[3]["content"]
        return Completion(
            text=f"Summary for: {title_turn}",
            prompt_tokens=self.prompt_tokens,
            completion_tokens=self.completion_tokens,
            total_tokens=self.prompt_tokens + self.completion_tokens,
        )

    async def aclose(self):
        pass


@pytest.fixture()
def pages() -> Dict[str, str]:
    return {
        "https://example.com/async": ARTICLE_HTML,
        "https://example.com/parsing": SECOND_ARTICLE_HTML,
        "https://example.com/empty": EMPTY_HTML,
    }


@pytest.fixture()
def fake_fetch(pages) -> FakeFetch:
    return FakeFetch(pages)


@pytest.fixture()
def completions() -> FakeCompletions:
    return FakeCompletions()
