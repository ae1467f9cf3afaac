import logging
from pathlib import PurePosixPath

from photodesk.config import MARKER_FILE
from photodesk.errors import NotFoundError, StorageError, ValidationError
from photodesk.utils.file_lock import locked_json_write, read_json, write_json

logger = logging.getLogger(__name__)


def read_all(config):
    return read_json(config.data_file)


def write_all(config, photos):
    try:
        write_json(config.data_file, photos)
    except OSError as e:
        logger.exception("Failed to write %s", config.data_file)
        raise StorageError("could not save photo list") from e


def append_photo(config, photo):
    try:
        with locked_json_write(config.data_file) as photos:
            photos.append(photo)
    except OSError as e:
        logger.exception("Failed to append to %s", config.data_file)
        raise StorageError("could not save photo list") from e
    return photo


def stored_path(config, src):
    """Resolve a record's src to its file inside the upload directory."""
    name = PurePosixPath(str(src).replace("\\", "/")).name
    if not name:
        return None
    path = config.upload_dir / name
    if name == MARKER_FILE or path == config.data_file:
        return None
    return path


def _remove_file(config, src):
    path = stored_path(config, src)
    if path is None:
        return
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Backing file %s already gone", path)
    except OSError:
        # Record is already gone; unlinking is best-effort
        logger.exception("Could not remove backing file %s", path)


def delete_photo(config, photo_id):
    """Remove every record with the given id along with its file."""
    if not photo_id:
        raise ValidationError("no id supplied")
    if not isinstance(photo_id, str):
        raise NotFoundError("photo not found")

    try:
        with locked_json_write(config.data_file) as photos:
            matches = [p for p in photos if isinstance(p, dict) and p.get("id") == photo_id]
            if not matches:
                raise NotFoundError("photo not found")
            photos[:] = [p for p in photos if not (isinstance(p, dict) and p.get("id") == photo_id)]
    except OSError as e:
        logger.exception("Failed to delete photo %s", photo_id)
        raise StorageError("could not delete photo") from e

    # Files go only once the shortened list is on disk
    for photo in matches:
        _remove_file(config, photo.get("src", ""))

    logger.info("Deleted photo %s (%d record(s))", photo_id, len(matches))
    return len(matches)


def reorder(photos, ids):
    """Order photos by ids; photos not named keep their relative order at the end."""
    indexed = {}
    for p in photos:
        indexed.setdefault(p.get("id"), []).append(p)

    reordered = []
    placed = set()
    for photo_id in ids:
        if not isinstance(photo_id, str) or photo_id in placed or photo_id not in indexed:
            continue
        reordered.extend(indexed[photo_id])
        placed.add(photo_id)

    reordered.extend(p for p in photos if p.get("id") not in placed)
    return reordered


def reorder_photos(config, ids):
    if not isinstance(ids, list):
        raise ValidationError("invalid order data")

    try:
        with locked_json_write(config.data_file) as photos:
            photos[:] = reorder([p for p in photos if isinstance(p, dict)], ids)
    except OSError as e:
        logger.exception("Failed to reorder %s", config.data_file)
        raise StorageError("could not save photo list") from e

    logger.info("Reordered photos (%d id(s) supplied)", len(ids))
