import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, FeatureNotFound
from lxml.etree import ParserError
from readability import Document
from readability.readability import Unparseable

from .errors import ExtractionError
from .logging import logger

# readability reports malformed markup through stdlib logging; keep it off the console
logging.getLogger("readability").setLevel(logging.CRITICAL)


# what readability-lxml reports for a page without <title>
_NO_TITLE = "[no-title]"


@dataclass(frozen=True)
class ExtractedArticle:
    title: str
    content_html: str


def _visible_text(html: str) -> str:
    try:
        soup = BeautifulSoup(html, "lxml")
    except FeatureNotFound:
        soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return soup.get_text(" ", strip=True)


def extract_article(html: str) -> ExtractedArticle:
    """Pull the main readable article out of a page.

    Raises ExtractionError when the page can't be parsed or readability finds
    nothing with visible text in it.
    """
    if not html or not html.strip():
        raise ExtractionError("empty document")
    try:
        doc = Document(html)
        content_html = doc.summary(html_partial=True)
        title = doc.title()
        if title == _NO_TITLE:
            title = ""
    except (Unparseable, ParserError, ValueError) as e:
        logger.warn("extract.unparseable", error=str(e))
        raise ExtractionError(f"unparseable document: {e}") from e

    if not content_html or not _visible_text(content_html):
        logger.warn("extract.empty", title=title)
        raise ExtractionError("no readable article found")

    logger.debug("extract.done", title=title, html_chars=len(content_html))
    return ExtractedArticle(title=title, content_html=content_html)
