"""
Text extraction from scrape provider payloads.

Providers return pages under different field names, and crawl-style
responses nest several pages under ``pages``. Payloads are classified
into one of the known shapes first, and the extraction function is
total over those shapes.
"""
import json
import logging
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .text_processing import clean_text

logger = logging.getLogger(__name__)

# Checked in order; the first non-blank string wins
TEXT_FIELDS = ('markdown', 'content', 'text', 'data', 'html', 'raw_content')


class DocumentPage(BaseModel):
    """Single page carrying text in one or more top-level fields"""
    model_config = ConfigDict(frozen=True)

    kind: Literal['document'] = 'document'
    text_fields: Dict[str, str]
    url: Optional[str] = None


class MultiPage(BaseModel):
    """Crawl-style payload with a list of sub-pages"""
    model_config = ConfigDict(frozen=True)

    kind: Literal['multi'] = 'multi'
    pages: List[DocumentPage] = Field(default_factory=list)


class EmptyPage(BaseModel):
    """Payload without any recognizable text"""
    model_config = ConfigDict(frozen=True)

    kind: Literal['empty'] = 'empty'
    raw: Any = None


PageResult = Union[DocumentPage, MultiPage, EmptyPage]


def _as_mapping(payload: Any) -> Optional[Mapping]:
    """Best-effort conversion of SDK objects to a plain mapping"""
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, BaseModel):
        return payload.model_dump()
    if hasattr(payload, '__dict__'):
        return vars(payload)
    return None


def _text_fields(mapping: Mapping) -> Dict[str, str]:
    return {
        name: mapping[name]
        for name in TEXT_FIELDS
        if isinstance(mapping.get(name), str) and mapping[name].strip()
    }


def _document(mapping: Mapping) -> DocumentPage:
    url = mapping.get('url')
    return DocumentPage(text_fields=_text_fields(mapping), url=url if isinstance(url, str) else None)


def _describe(payload: Any) -> str:
    try:
        return json.dumps(payload, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(payload)


def classify_page(payload: Any) -> PageResult:
    """
    Sort a provider payload into one of the known page shapes.

    Top-level text fields take precedence over nested pages.
    """
    mapping = _as_mapping(payload)
    if mapping is None:
        return EmptyPage(raw=payload)

    fields = _text_fields(mapping)
    if fields:
        return _document(mapping)

    nested = mapping.get('pages')
    if isinstance(nested, (list, tuple)):
        pages = []
        for item in nested:
            item_mapping = _as_mapping(item)
            if item_mapping is not None:
                pages.append(_document(item_mapping))
        if pages:
            return MultiPage(pages=pages)

    return EmptyPage(raw=payload)


def document_text(page: DocumentPage) -> str:
    """Cleaned text of the highest-priority non-blank field"""
    for name in TEXT_FIELDS:
        if name in page.text_fields:
            return clean_text(page.text_fields[name])
    return ""


def extract_page_text(payload: Any) -> str:
    """
    Extract cleaned text from a scrape payload of any shape.

    Never raises: unknown or empty payloads are logged and yield "".
    """
    try:
        page = classify_page(payload)
    except Exception as e:
        logger.warning(f"Could not classify page payload: {e}")
        page = EmptyPage(raw=payload)

    if isinstance(page, DocumentPage):
        text = document_text(page)
        if text.strip():
            return text
    elif isinstance(page, MultiPage):
        text = "\n\n".join(document_text(p) for p in page.pages)
        if text.strip():
            return text

    logger.warning(f"Page returned no text: {_describe(payload)}")
    return ""
