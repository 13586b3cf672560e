"""Unit tests for application settings configuration."""

from pathlib import Path

from user_directory.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_directory_settings_can_be_overridden_from_environment(monkeypatch):
    monkeypatch.setenv("USERS_COLLECTION", "members")
    monkeypatch.setenv("PAGE_SIZE", "10")

    settings = Settings()

    assert settings.users_collection == "members"
    assert settings.page_size == 10
