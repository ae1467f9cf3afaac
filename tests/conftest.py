import io
import json

import pytest
from PIL import Image

from photodesk import create_app
from photodesk.config import Config
from photodesk.services.auth_service import hash_secret

ADMIN_SECRET = "razr2025"


def image_bytes(fmt="PNG", size=(8, 8)):
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()


def read_store(config):
    return json.loads(config.data_file.read_text())


@pytest.fixture
def config(tmp_path):
    upload_dir = tmp_path / "uploads"
    return Config(
        admin_hash=hash_secret(ADMIN_SECRET),
        upload_dir=upload_dir,
        data_file=upload_dir / "photos.json",
    )


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"X-Auth-Token": ADMIN_SECRET}


@pytest.fixture
def seeded(config):
    """Store with three photos a, b, c whose files exist."""
    config.upload_dir.mkdir(parents=True, exist_ok=True)
    photos = []
    for photo_id in ("a", "b", "c"):
        name = f"photo_{photo_id}.png"
        (config.upload_dir / name).write_bytes(image_bytes())
        photos.append({"id": photo_id, "src": f"uploads/{name}", "title": photo_id, "tag": "Fade", "date": "01/02/2025"})
    config.data_file.write_text(json.dumps(photos))
    return photos
