import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
UPLOADS_DIR = BASE_DIR / "uploads"

MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MiB
ALLOWED_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")
DEFAULT_TAG = "Classic Cut"
MARKER_FILE = ".htaccess"


@dataclass(frozen=True)
class Config:
    """Settings for one photodesk app instance."""

    admin_hash: str = ""
    upload_dir: Path = UPLOADS_DIR
    data_file: Path = UPLOADS_DIR / "photos.json"
    upload_url_prefix: str = "uploads"
    max_upload_size: int = MAX_UPLOAD_SIZE
    allowed_types: tuple = field(default=ALLOWED_TYPES)
    filename_prefix: str = "photo_"
    default_tag: str = DEFAULT_TAG
    date_format: str = "%d/%m/%Y"
    cors_origin: str = "*"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        load_dotenv()
        upload_dir = Path(os.getenv("PHOTODESK_UPLOAD_DIR", str(UPLOADS_DIR)))
        return cls(
            admin_hash=os.getenv("PHOTODESK_ADMIN_HASH", "").strip(),
            upload_dir=upload_dir,
            data_file=Path(os.getenv("PHOTODESK_DATA_FILE", str(upload_dir / "photos.json"))),
            upload_url_prefix=os.getenv("PHOTODESK_UPLOAD_URL_PREFIX", "uploads").strip("/"),
            max_upload_size=int(os.getenv("PHOTODESK_MAX_UPLOAD_SIZE", MAX_UPLOAD_SIZE)),
            filename_prefix=os.getenv("PHOTODESK_FILENAME_PREFIX", "photo_"),
            default_tag=os.getenv("PHOTODESK_DEFAULT_TAG", DEFAULT_TAG),
            date_format=os.getenv("PHOTODESK_DATE_FORMAT", "%d/%m/%Y"),
            cors_origin=os.getenv("PHOTODESK_CORS_ORIGIN", "*"),
            log_level=os.getenv("PHOTODESK_LOG_LEVEL", "INFO").upper(),
        )
