from pathlib import Path

import pytest
from pydantic import ValidationError

from paperchat.config import ChatConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("COMPLETION_URL", "API_KEY", "MODEL", "TEMPERATURE", "MAX_TOKENS", "PAPER_TEXT_EXT"):
        monkeypatch.delenv(f"PAPERCHAT_{name}", raising=False)


def test_defaults():
    config = ChatConfig(_env_file=None)

    assert config.model == "gpt-oss-20B"
    assert config.documents_feed == "papers.json"
    assert config.personal_context == "context.txt"
    assert config.paper_text_dir == "paper_text"
    assert config.paper_text_ext == "txt"
    assert config.auto_route is True
    assert config.max_attempts == 1
    assert config.completion_url is None
    assert config.content_root.is_absolute()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PAPERCHAT_COMPLETION_URL", "http://llm.test/v1/chat/completions")
    monkeypatch.setenv("PAPERCHAT_TEMPERATURE", "0.2")
    monkeypatch.setenv("PAPERCHAT_MAX_TOKENS", "512")
    monkeypatch.setenv("PAPERCHAT_PAPER_TEXT_EXT", ".md")

    config = ChatConfig(_env_file=None)

    assert config.completion_url == "http://llm.test/v1/chat/completions"
    assert config.temperature == 0.2
    assert config.max_tokens == 512
    assert config.paper_text_ext == "md"


def test_blank_optional_values_become_none():
    config = ChatConfig(_env_file=None, completion_url="  ", api_key="")

    assert config.completion_url is None
    assert config.api_key is None


def test_content_root_is_resolved(tmp_path):
    config = ChatConfig(_env_file=None, content_root=tmp_path / "site" / "..")

    assert config.content_root == Path(tmp_path).resolve()


@pytest.mark.parametrize("overrides", [{"temperature": 3.5}, {"max_tokens": 0}, {"max_attempts": 0}])
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        ChatConfig(_env_file=None, **overrides)


def test_build_http_session_sets_user_agent():
    session = ChatConfig(_env_file=None, user_agent="paperchat-tests").build_http_session()

    assert session.headers["User-Agent"] == "paperchat-tests"
