from pathlib import Path

from photodesk.config import ALLOWED_TYPES, MAX_UPLOAD_SIZE, Config


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("PHOTODESK_ADMIN_HASH", " abc123 ")
    monkeypatch.setenv("PHOTODESK_UPLOAD_DIR", str(tmp_path / "up"))
    monkeypatch.setenv("PHOTODESK_UPLOAD_URL_PREFIX", "/media/uploads/")
    monkeypatch.setenv("PHOTODESK_MAX_UPLOAD_SIZE", "1024")
    monkeypatch.setenv("PHOTODESK_LOG_LEVEL", "debug")
    monkeypatch.delenv("PHOTODESK_DATA_FILE", raising=False)

    config = Config.from_env()

    assert config.admin_hash == "abc123"
    assert config.upload_dir == tmp_path / "up"
    assert config.data_file == tmp_path / "up" / "photos.json"
    assert config.upload_url_prefix == "media/uploads"
    assert config.max_upload_size == 1024
    assert config.log_level == "DEBUG"


def test_defaults():
    config = Config()
    assert config.max_upload_size == MAX_UPLOAD_SIZE == 5 * 1024 * 1024
    assert config.allowed_types == ALLOWED_TYPES
    assert config.default_tag == "Classic Cut"
    assert config.data_file.name == "photos.json"
    assert isinstance(config.upload_dir, Path)
