from typing import Iterable

from .schemas import SummaryResult, UsageTotals

# USD per 1K tokens, gpt-3.5-turbo list price
DEFAULT_PRICE_PER_1K = 0.002


def aggregate_usage(results: Iterable[SummaryResult]) -> UsageTotals:
    totals = UsageTotals()
    for r in results:
        totals.prompt_tokens += r.prompt_tokens
        totals.completion_tokens += r.completion_tokens
        totals.total_tokens += r.total_tokens
    return totals


def estimate_cost(total_tokens: int, price_per_1k: float = DEFAULT_PRICE_PER_1K) -> float:
    return round(total_tokens / 1000 * price_per_1k, 6)
