"""
Text helpers for the research pipeline: keyword extraction, boilerplate
cleaning, fixed-size chunking and plain-text rendering of reports.
"""
import re
from typing import List

MAX_KEYWORDS = 8
FALLBACK_KEYWORDS = "general research"

_KEYWORD_RE = re.compile(r'\b[a-z]{4,}\b', re.ASCII)
_TAG_RE = re.compile(r'<[^>]+>')
_WHITESPACE_RE = re.compile(r'\s+')
_BOILERPLATE_RE = re.compile(r'(cookies|privacy policy|subscribe|terms)', re.IGNORECASE)


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """
    Pull lowercase words of four or more letters from a query.

    Matches keep their order of first appearance and are not deduplicated.

    Example:
        >>> extract_keywords("Market trends for electric vehicles")
        ['market', 'trends', 'electric', 'vehicles']
    """
    if not text:
        return []
    return _KEYWORD_RE.findall(text.lower())[:limit]


def keywords_label(text: str) -> str:
    """Comma-joined keywords, or the fallback label when none match"""
    return ", ".join(extract_keywords(text)) or FALLBACK_KEYWORDS


def _clean_once(text: str) -> str:
    text = _TAG_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    text = _BOILERPLATE_RE.sub("", text)
    return text.strip()


def clean_text(text: str) -> str:
    """
    Strip markup, collapse whitespace and delete boilerplate words.

    The words "cookies", "privacy policy", "subscribe" and "terms" are removed
    wherever they occur, so legitimate sentences using them lose those words too.
    The passes repeat until the text stops changing, which keeps the cleaner
    idempotent when a deletion joins fragments or leaves a double space.
    """
    if not text:
        return ""
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def split_into_chunks(text: str, chunk_size: int) -> List[str]:
    """
    Split text into contiguous slices of at most ``chunk_size`` characters.

    Args:
        text: Text to split
        chunk_size: Maximum characters per chunk

    Returns:
        Ordered chunks whose concatenation is the original text
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]


def plain_text_summary(summary: str) -> str:
    """Render a Markdown report as plain readable text for terminals"""
    if not summary:
        return ""
    text = re.sub(r'^#{1,6} ', '', summary, flags=re.MULTILINE)
    text = re.sub(r'^(\s*)[-*] ', r'\1• ', text, flags=re.MULTILINE)
    text = re.sub(r'\*\*(.*?)\*\*', r'\1', text)
    text = re.sub(r'\*(.*?)\*', r'\1', text)
    text = re.sub(r'\n{2,}', '\n', text)
    return text.strip()
