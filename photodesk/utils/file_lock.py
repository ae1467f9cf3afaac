import json
import logging
import sys
from pathlib import Path
from contextlib import contextmanager

logger = logging.getLogger(__name__)

# Cross-platform file locking
if sys.platform == "win32":
    import msvcrt

    def _lock_shared(f):
        msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)

    def _lock_exclusive(f):
        msvcrt.locking(f.fileno(), msvcrt.LK_LOCK, 1)

    def _unlock(f):
        try:
            f.seek(0)
            msvcrt.locking(f.fileno(), msvcrt.LK_UNLCK, 1)
        except OSError:
            pass
else:
    import fcntl

    def _lock_shared(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)

    def _lock_exclusive(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)

    def _unlock(f):
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


def _parse_list(content, filepath):
    """Decode a JSON array, falling back to an empty list."""
    content = content.strip()
    if not content:
        return []
    try:
        data = json.loads(content)
    except ValueError:
        logger.warning("Store document %s is not valid JSON, treating as empty", filepath)
        return []
    if not isinstance(data, list):
        logger.warning("Store document %s does not hold an array, treating as empty", filepath)
        return []
    return data


@contextmanager
def locked_json_write(filepath):
    """Read-modify-write a JSON array file with an exclusive lock.

    Usage:
        with locked_json_write('photos.json') as photos:
            photos.append(new_item)
        # File is written on context exit

    If the body raises, the file is left as it was.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    if not filepath.exists():
        filepath.write_text("[]")

    with open(filepath, "r+") as f:
        _lock_exclusive(f)
        try:
            data = _parse_list(f.read(), filepath)
            yield data
            content = json.dumps(data, indent=2, ensure_ascii=False)
            f.seek(0)
            f.truncate()
            f.write(content)
            f.flush()
        finally:
            _unlock(f)


def write_json(filepath, data):
    """Write a JSON array to a file with an exclusive lock."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "a+") as f:
        _lock_exclusive(f)
        try:
            content = json.dumps(list(data), indent=2, ensure_ascii=False)
            f.seek(0)
            f.truncate()
            f.write(content)
            f.flush()
        finally:
            _unlock(f)


def read_json(filepath):
    """Read a JSON array file with a shared lock.

    Missing, empty or unparsable documents read as an empty list.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return []
    with open(filepath, "r") as f:
        _lock_shared(f)
        try:
            return _parse_list(f.read(), filepath)
        finally:
            _unlock(f)
