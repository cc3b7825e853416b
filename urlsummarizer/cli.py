"""Summarize URLs from the command line without running the HTTP service.

    urlsummarizer-cli https://example.com/post https://example.com/other
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from .config import load_config
from .errors import GENERIC_ERROR_MESSAGE, ConfigurationError, ModelError, SummarizerError, ValidationError
from .fetcher import PageFetcher
from .logging import logger
from .model_client import CompletionClient
from .schemas import SummaryResult
from .services.summarizer import summarize_all
from .usage import DEFAULT_PRICE_PER_1K, aggregate_usage, estimate_cost


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="urlsummarizer-cli", description="Summarize one or more web pages.")
    p.add_argument("urls", nargs="*", help="page URLs to summarize")
    p.add_argument("--price-per-1k", type=float, default=DEFAULT_PRICE_PER_1K,
                   help="USD per 1K tokens used for the cost estimate")
    return p.parse_args(argv)


def render(results: List[SummaryResult], price_per_1k: float = DEFAULT_PRICE_PER_1K) -> str:
    lines = []
    for r in results:
        lines.append(f"# {r.title}")
        lines.append(r.url)
        lines.append("")
        lines.append(r.result)
        lines.append("")
    totals = aggregate_usage(results)
    if totals.total_tokens > 0:
        lines.append(
            f"Prompt tokens: {totals.prompt_tokens} | "
            f"Completion tokens: {totals.completion_tokens} | "
            f"Total tokens: {totals.total_tokens} | "
            f"Total Cost: ${estimate_cost(totals.total_tokens, price_per_1k):.6f}"
        )
    return "\n".join(lines)


async def _run(urls: List[str], price_per_1k: float) -> int:
    cfg = load_config()
    if not cfg.openai_api_key:
        raise ConfigurationError()
    completions = CompletionClient(api_key=cfg.openai_api_key, base_url=cfg.openai_api_base, timeout=cfg.llm_timeout)
    try:
        results = await summarize_all(
            urls,
            completions=completions,
            fetch=PageFetcher(user_agent=cfg.user_agent, timeout_ms=cfg.fetch_timeout_ms),
            model=cfg.model,
            temperature=cfg.temperature,
            token_budget=cfg.token_budget,
            max_concurrency=cfg.max_concurrency,
        )
    finally:
        await completions.aclose()
    print(render(results, price_per_1k))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if all(not u.strip() for u in args.urls):
        print("Please enter at least one valid URL to summarize", file=sys.stderr)
        return 2
    # keep stdout for the summaries
    previous = logger.use_stderr
    logger.use_stderr = True
    try:
        return asyncio.run(_run(args.urls, args.price_per_1k))
    except (ConfigurationError, ValidationError) as e:
        print(str(e), file=sys.stderr)
        return 2
    except ModelError as e:
        detail = e.body if e.has_upstream_response else GENERIC_ERROR_MESSAGE
        print(f"completion failed: {detail}", file=sys.stderr)
        return 1
    except SummarizerError:
        print(GENERIC_ERROR_MESSAGE, file=sys.stderr)
        return 1
    except Exception as e:
        logger.error("cli.unexpected_error", error_type=e.__class__.__name__, error=str(e))
        print(GENERIC_ERROR_MESSAGE, file=sys.stderr)
        return 1
    finally:
        logger.use_stderr = previous


if __name__ == "__main__":
    sys.exit(main())
