"""应用设置单元测试."""

import pytest
from pydantic import ValidationError

from src.models.app_settings import Settings
from src.utils.constants import DEFAULT_EXPORT_DIR, LOCAL_STORAGE_PATH


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """隔离环境变量和 .env 文件."""
    for name in ("API_BASE_URL", "LOG_LEVEL", "STORAGE_PATH", "EXPORT_DIR", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    """Settings 测试."""

    def test_defaults(self):
        settings = Settings()
        assert settings.api_base_url == "http://localhost:5000"
        assert settings.log_level == "INFO"
        assert settings.local_storage_path == LOCAL_STORAGE_PATH
        assert settings.export_directory == DEFAULT_EXPORT_DIR
        assert settings.debug is False

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("API_BASE_URL", "https://api.example.com/")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "out"))
        settings = Settings()
        assert settings.api_base_url == "https://api.example.com"
        assert settings.log_level == "DEBUG"
        assert settings.export_directory == tmp_path / "out"

    def test_from_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("DEBUG=true\n", encoding="utf-8")
        assert Settings().debug is True

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")
