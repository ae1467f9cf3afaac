import uuid
import bleach
from datetime import datetime
from pathlib import PurePath


def generate_id():
    return str(uuid.uuid4())


def generate_filename(prefix, extension):
    """Build a storage name that never depends on client input."""
    return f"{prefix}{uuid.uuid4().hex}.{extension}"


def today(date_format):
    return datetime.now().strftime(date_format)


def sanitize(text):
    """Sanitize user input to prevent XSS."""
    if text is None:
        return ""
    cleaned = bleach.clean(str(text).strip(), tags=set(), attributes={})
    return cleaned.replace('"', "&quot;").replace("'", "&#x27;")


def filename_stem(filename):
    """Return the client filename without directories or extension."""
    if not filename:
        return ""
    # Browsers on Windows may send the full path
    name = PurePath(filename.replace("\\", "/")).name
    return PurePath(name).stem
