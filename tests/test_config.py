import pytest
from sanity_mcp.core.client import SanityClient
from sanity_mcp.core.config import (
    create_client_from_env,
    load_env_config,
    load_log_level,
)

SANITY_ENV = (
    "SANITY_PROJECT_ID",
    "SANITY_DATASET",
    "SANITY_API_VERSION",
    "SANITY_TOKEN",
    "SANITY_USE_CDN",
    "SANITY_API_HOST",
    "SANITY_MCP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # Prevent load_dotenv from repopulating values from .env
    monkeypatch.setattr("sanity_mcp.core.client.load_dotenv", lambda *a, **k: None)
    for name in SANITY_ENV:
        monkeypatch.delenv(name, raising=False)


def test_create_client_from_env_missing_project_id():
    with pytest.raises(ValueError) as exc:
        create_client_from_env()

    assert "SANITY_PROJECT_ID environment variable is required" in str(exc.value)


def test_defaults_applied(monkeypatch):
    monkeypatch.setenv("SANITY_PROJECT_ID", "abc123")

    config = load_env_config()

    assert config.project_id == "abc123"
    assert config.dataset == "production"
    assert config.api_version == "2024-01-20"
    assert config.token is None
    assert config.use_cdn is None
    assert config.api_host == "sanity.io"


def test_all_settings_read(monkeypatch):
    monkeypatch.setenv("SANITY_PROJECT_ID", " abc123 ")
    monkeypatch.setenv("SANITY_DATASET", "staging")
    monkeypatch.setenv("SANITY_API_VERSION", "2025-02-19")
    monkeypatch.setenv("SANITY_TOKEN", "sk-token")
    monkeypatch.setenv("SANITY_API_HOST", "sanity.work")

    client = create_client_from_env()

    assert isinstance(client, SanityClient)
    assert client.config.project_id == "abc123"
    assert client.use_cdn is False
    assert client.query_url == (
        "https://abc123.api.sanity.work/v2025-02-19/data/query/staging"
    )


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False)],
)
def test_use_cdn_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("SANITY_PROJECT_ID", "abc123")
    monkeypatch.setenv("SANITY_USE_CDN", raw)

    assert load_env_config().use_cdn is expected


def test_unrecognized_use_cdn_falls_back_to_token_rule(monkeypatch):
    monkeypatch.setenv("SANITY_PROJECT_ID", "abc123")
    monkeypatch.setenv("SANITY_USE_CDN", "sometimes")
    monkeypatch.setenv("SANITY_TOKEN", "sk-token")

    client = create_client_from_env()

    assert client.config.use_cdn is None
    assert client.use_cdn is False


def test_blank_token_treated_as_anonymous(monkeypatch):
    monkeypatch.setenv("SANITY_PROJECT_ID", "abc123")
    monkeypatch.setenv("SANITY_TOKEN", "   ")

    client = create_client_from_env()

    assert client.config.token is None
    assert client.use_cdn is True


def test_from_env_uses_same_settings(monkeypatch):
    monkeypatch.setenv("SANITY_PROJECT_ID", "abc123")
    monkeypatch.setenv("SANITY_DATASET", "blog")

    client = SanityClient.from_env(request_id="rid-1")

    assert client.config.dataset == "blog"
    assert client.request_id == "rid-1"


def test_log_level(monkeypatch):
    assert load_log_level() == "INFO"
    monkeypatch.setenv("SANITY_MCP_LOG_LEVEL", "debug")
    assert load_log_level() == "debug"
