import pytest
from src.idea_research.config import Settings, MAX_CHARS_PER_PAGE, MAX_TOTAL_CHARS, CHUNK_SIZE
from src.idea_research.exceptions import ConfigurationError

def test_defaults(monkeypatch):
    for name in ('MAX_PAGES', 'MAX_CHARS_PER_PAGE', 'MAX_TOTAL_CHARS', 'CHUNK_SIZE', 'OPENAI_MODEL'):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.max_pages == 1
    assert settings.max_chars_per_page == MAX_CHARS_PER_PAGE == 12000
    assert settings.max_total_chars == MAX_TOTAL_CHARS == 20000
    assert settings.chunk_size == CHUNK_SIZE == 8000
    assert settings.openai_model == "gpt-4o-mini"

def test_caps_from_environment(monkeypatch):
    monkeypatch.setenv('CHUNK_SIZE', '4000')
    monkeypatch.setenv('MAX_PAGES', '2')
    settings = Settings.from_env()
    assert settings.chunk_size == 4000
    assert settings.max_pages == 2

@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_invalid_caps(monkeypatch, value):
    monkeypatch.setenv('CHUNK_SIZE', value)
    with pytest.raises(ConfigurationError):
        Settings.from_env()

def test_require_missing_key():
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        Settings(openai_api_key=None).require('openai_api_key')
    assert Settings(tavily_api_key="tvly-key").require('tavily_api_key') == "tvly-key"
