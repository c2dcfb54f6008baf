"""
Content normalization for feed articles.

Pure functions, no I/O:
- sanitize(): drop script/style blocks and HTML comments, keep the rest
- summarize(): bounded plain-text excerpt cut at a word boundary
- infer_locality(): first known city name found in the text

The locality match is a plain case-sensitive substring search over an
ordered gazetteer. There is no word-boundary check, so "Nice" also
matches inside "Nicest"; earlier gazetteer entries win when several
cities appear.
"""

import re
from collections.abc import Sequence

CONTENT_PLACEHOLDER = "Contenu à venir"
SUMMARY_PLACEHOLDER = "Résumé à venir"

SUMMARY_MAX_LENGTH = 200
SUMMARY_MIN_CUT = 150
ELLIPSIS = "..."

# French cities, most common first. Order matters: first match wins.
GAZETTEER: tuple[str, ...] = (
    "Paris",
    "Lyon",
    "Marseille",
    "Toulouse",
    "Nice",
    "Nantes",
    "Strasbourg",
    "Montpellier",
    "Bordeaux",
    "Lille",
    "Rennes",
    "Reims",
    "Le Havre",
    "Saint-Étienne",
    "Toulon",
    "Angers",
    "Grenoble",
    "Dijon",
    "Nîmes",
    "Aix-en-Provence",
)

_SCRIPT_RE = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)
_STYLE_RE = re.compile(
    r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>",
    re.IGNORECASE,
)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s")


def sanitize(raw_html: str | None) -> str:
    """
    Remove script blocks, style blocks and comments from article HTML.

    Other markup is kept as-is so the app can render the article body.

    Args:
        raw_html: Article HTML from the feed

    Returns:
        Cleaned HTML, or CONTENT_PLACEHOLDER when the input is empty
    """
    if not raw_html:
        return CONTENT_PLACEHOLDER

    text = _SCRIPT_RE.sub("", raw_html)
    text = _STYLE_RE.sub("", text)
    text = _COMMENT_RE.sub("", text)
    return text.strip()


def strip_tags(text: str) -> str:
    """Remove every markup tag from text."""
    return _TAG_RE.sub("", text)


def summarize(
    content: str | None,
    max_length: int = SUMMARY_MAX_LENGTH,
    min_cut: int = SUMMARY_MIN_CUT,
) -> str:
    """
    Build a plain-text summary of at most max_length characters plus ellipsis.

    Text longer than max_length is cut at max_length, then moved back to
    the last whitespace if that whitespace lies beyond min_cut. Either
    way the result ends with an ellipsis.

    Args:
        content: HTML or plain text
        max_length: Maximum summary length before the ellipsis
        min_cut: Earliest position a word-boundary cut is accepted at

    Returns:
        Summary text, or SUMMARY_PLACEHOLDER when the input is empty
    """
    if not content:
        return SUMMARY_PLACEHOLDER

    text = strip_tags(content).strip()
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    boundary = _last_whitespace(truncated)
    if boundary > min_cut:
        return truncated[:boundary] + ELLIPSIS
    return truncated + ELLIPSIS


def _last_whitespace(text: str) -> int:
    """Index of the last whitespace character in text, -1 if none."""
    last = -1
    for match in _WHITESPACE_RE.finditer(text):
        last = match.start()
    return last


def infer_locality(
    content: str | None,
    gazetteer: Sequence[str] = GAZETTEER,
) -> str | None:
    """
    Guess the city an article is about.

    Args:
        content: HTML or plain text
        gazetteer: Ordered city names to look for

    Returns:
        The first gazetteer entry found in the text, or None
    """
    if not content:
        return None

    text = strip_tags(content)
    for city in gazetteer:
        if city in text:
            return city

    return None
