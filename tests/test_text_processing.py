"""
Tests for keyword extraction, boilerplate cleaning, chunking and plain-text rendering
"""
import pytest
from src.idea_research.text_processing import (
    FALLBACK_KEYWORDS,
    clean_text,
    extract_keywords,
    keywords_label,
    plain_text_summary,
    split_into_chunks,
)

def test_extract_keywords_keeps_order():
    """Words of four or more letters come back lowercase in order of appearance"""
    assert extract_keywords("Market trends for electric vehicles") == [
        "market", "trends", "electric", "vehicles"
    ]

def test_extract_keywords_caps_at_eight():
    text = "alpha bravo charlie delta echo foxtrot golf hotel india juliet"
    keywords = extract_keywords(text)
    assert len(keywords) == 8
    assert keywords[0] == "alpha"
    assert keywords[-1] == "india"

def test_extract_keywords_keeps_duplicates():
    assert extract_keywords("Data data DATA") == ["data", "data", "data"]

def test_extract_keywords_skips_short_and_mixed_tokens():
    # "note-taking" splits on the hyphen; "ai" is too short
    assert extract_keywords("AI note-taking apps") == ["note", "taking", "apps"]

def test_extract_keywords_ascii_letters_only():
    assert extract_keywords("übermarkets caféteria") == ["bermarkets", "teria"]
    assert extract_keywords("web3 tools") == ["tools"]

@pytest.mark.parametrize("text", ["", "a an the", "123 4567", None])
def test_extract_keywords_empty(text):
    assert extract_keywords(text) == []

def test_keywords_label_fallback():
    assert keywords_label("AI for me") == FALLBACK_KEYWORDS
    assert keywords_label("Solar powered drones") == "solar, powered, drones"

def test_clean_text_strips_markup_and_whitespace():
    html = "<div><h1>Top   rivals</h1>\n\n<p>Acme\tleads</p></div>"
    assert clean_text(html) == "Top rivals Acme leads"

def test_clean_text_removes_boilerplate_words():
    text = "Accept Cookies and our Privacy Policy. Subscribe now! Terms apply."
    cleaned = clean_text(text)
    lowered = cleaned.lower()
    for phrase in ("cookies", "privacy policy", "subscribe", "terms"):
        assert phrase not in lowered
    assert cleaned.startswith("Accept")

def test_clean_text_mangles_legitimate_words():
    """Literal deletion applies inside ordinary words too"""
    assert clean_text("Customers subscribe monthly") == "Customers monthly"
    assert clean_text("determs") == "de"

@pytest.mark.parametrize("text", [
    "<p>Hello   world</p>",
    "subcookiesscribe to the newsletter",
    "word cookies word",
    "  terms\n\n and <b>privacy policy</b>  ",
    "te<i>rm</i>s",
    "plain text",
    "",
])
def test_clean_text_idempotent(text):
    once = clean_text(text)
    assert clean_text(once) == once

def test_split_into_chunks_round_trip():
    text = "abcdefghij" * 37 + "xyz"
    for size in (1, 3, 10, 64, 1000):
        chunks = split_into_chunks(text, size)
        assert "".join(chunks) == text
        assert all(len(chunk) <= size for chunk in chunks)
        assert all(len(chunk) == size for chunk in chunks[:-1])

def test_split_into_chunks_short_input():
    assert split_into_chunks("short", 8000) == ["short"]

def test_split_into_chunks_exact_multiple():
    assert split_into_chunks("abcdef", 3) == ["abc", "def"]

def test_split_into_chunks_empty():
    assert split_into_chunks("", 10) == []

def test_split_into_chunks_rejects_bad_size():
    with pytest.raises(ValueError):
        split_into_chunks("text", 0)

def test_plain_text_summary():
    summary = "# Report\n\n### Market\n\n- **Big** market\n- *growing* fast\n\nDone"
    assert plain_text_summary(summary) == "Report\nMarket\n• Big market\n• growing fast\nDone"

def test_plain_text_summary_empty():
    assert plain_text_summary("") == ""
