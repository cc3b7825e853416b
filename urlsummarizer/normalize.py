import re

from markdownify import markdownify

DEFAULT_TOKEN_BUDGET = 1000

_MD_LINK = re.compile(r"\[([^\]]+)]\(([^)]+)\)")


def html_to_markdown(html: str) -> str:
    return markdownify(html or "", heading_style="ATX")


def remove_markdown_links(text: str) -> str:
    """``[text](target)`` -> ``text``; all other markdown is left alone."""
    out = text or ""
    # [[a](b)](c) only loses one level per pass
    while True:
        stripped = _MD_LINK.sub(r"\1", out)
        if stripped == out:
            return out
        out = stripped


def truncate_to_token_count(text: str, max_tokens: int = DEFAULT_TOKEN_BUDGET) -> str:
    """Keep the first ``max_tokens`` whitespace-separated words.

    Words are a rough stand-in for model tokens. Whitespace runs collapse to
    a single space even when nothing is cut.
    """
    if not isinstance(max_tokens, int) or isinstance(max_tokens, bool) or max_tokens < 1:
        raise ValueError(f"max_tokens must be a positive integer, got {max_tokens!r}")
    words = (text or "").split()
    return " ".join(words[:max_tokens])
