import pytest

from videocaptions.core.config import Settings


def test_settings_load_from_env(monkeypatch):
    monkeypatch.setenv("PROJECT_NAME", "Test Project From Env")
    monkeypatch.setenv("FLAG_SECRET", "from-env")
    monkeypatch.setenv("VIDEOS_PATH", "/tmp/videos")

    settings = Settings(_env_file=None)

    assert settings.PROJECT_NAME == "Test Project From Env"
    assert settings.FLAG_SECRET == "from-env"
    assert settings.VIDEOS_PATH == "/tmp/videos"


def test_settings_default_values(monkeypatch):
    for name in ("FLAG_SECRET", "VIDEOS_PATH", "CONTENT_REPO", "RECORD_STORE_BACKEND"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.FLAG_SECRET is None
    assert settings.VIDEOS_PATH is None
    assert settings.CONTENT_REPO == "creatorsgarten/videos"
    assert settings.CONTENT_REF == "refs/heads/main"
    assert settings.FLAGS_TABLE == "Flags"
    assert settings.RECORD_STORE_BACKEND == "grist"


def test_parsed_cors_origins():
    assert Settings(_env_file=None, CORS_ALLOW_ORIGINS="*").parsed_cors_origins == ["*"]
    settings = Settings(
        _env_file=None, CORS_ALLOW_ORIGINS="http://localhost:8080/, https://a.example ,"
    )
    assert settings.parsed_cors_origins == ["http://localhost:8080", "https://a.example"]


def test_bool_tokens_with_inline_comments(monkeypatch):
    monkeypatch.setenv("LOKI_ENABLED", "true   # ship logs")
    assert Settings(_env_file=None).LOKI_ENABLED is True


def test_invalid_record_store_backend(monkeypatch):
    monkeypatch.setenv("RECORD_STORE_BACKEND", "postgres")
    with pytest.raises(ValueError):
        Settings(_env_file=None)
