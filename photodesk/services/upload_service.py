import logging
import os

from PIL import Image

from photodesk.errors import StorageError, ValidationError
from photodesk.services import photo_service
from photodesk.utils.helpers import filename_stem, generate_filename, generate_id, sanitize, today

logger = logging.getLogger(__name__)

# Classic upload error numbering
UPLOAD_ERR_PARTIAL = 3
UPLOAD_ERR_NO_FILE = 4

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

# Multi-picture JPEGs from phone cameras
FORMAT_ALIASES = {"MPO": "image/jpeg"}


def _stream_size(stream):
    pos = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(pos)
    return size


def sniff_type(stream):
    """Return the MIME type Pillow detects from the bytes, or None.

    Raises Image.DecompressionBombError for images with too many pixels.
    """
    stream.seek(0)
    try:
        with Image.open(stream) as img:
            fmt = img.format
    except (OSError, SyntaxError, ValueError):
        return None
    finally:
        stream.seek(0)
    return FORMAT_ALIASES.get(fmt) or Image.MIME.get(fmt)


def validate_upload(config, file):
    """Run the upload checks in order and return the sniffed MIME type."""
    if file is None:
        raise ValidationError("no file received")
    if not file.filename:
        raise ValidationError(f"upload error: {UPLOAD_ERR_NO_FILE}")
    if _stream_size(file.stream) > config.max_upload_size:
        raise ValidationError("file too large")

    try:
        mime_type = sniff_type(file.stream)
    except Image.DecompressionBombError:
        logger.info("Rejected upload %r with oversized dimensions", file.filename)
        raise ValidationError("image dimensions too large")
    if mime_type not in config.allowed_types or mime_type not in EXTENSIONS:
        logger.info("Rejected upload %r sniffed as %s", file.filename, mime_type)
        raise ValidationError("file type not allowed")
    return mime_type


def _store_file(config, file, filename):
    dest = config.upload_dir / filename
    try:
        file.stream.seek(0)
        file.save(dest)
    except OSError as e:
        logger.exception("Failed to store upload at %s", dest)
        try:
            dest.unlink()
        except FileNotFoundError:
            pass
        raise StorageError("could not store file, check directory permissions") from e
    return dest


def handle_upload(config, file, title="", tag=""):
    """Validate, store and record one uploaded photo. Returns the new record."""
    mime_type = validate_upload(config, file)

    filename = generate_filename(config.filename_prefix, EXTENSIONS[mime_type])
    _store_file(config, file, filename)

    title = sanitize(title) or sanitize(filename_stem(file.filename))
    tag = sanitize(tag) or config.default_tag

    photo = {
        "id": generate_id(),
        "src": f"{config.upload_url_prefix}/{filename}" if config.upload_url_prefix else filename,
        "title": title,
        "tag": tag,
        "date": today(config.date_format),
    }
    photo_service.append_photo(config, photo)

    logger.info("Stored upload %s as %s (%s)", photo["id"], filename, mime_type)
    return photo
