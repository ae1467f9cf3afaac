"""Photo upload and management endpoint for a small business website."""

import logging
from flask import Flask

from photodesk.config import MARKER_FILE, Config
from photodesk.utils.file_lock import write_json

logger = logging.getLogger(__name__)

# Keeps the web server from executing anything dropped into the upload dir
HTACCESS = "php_flag engine off\nOptions -ExecCGI\nRemoveHandler .php .phtml .cgi .pl .py\n"

# Room for multipart framing and text fields on top of the file itself
FORM_OVERHEAD = 1024 * 1024


def init_storage(config):
    """Create the upload directory, its marker file and an empty store."""
    config.upload_dir.mkdir(parents=True, exist_ok=True)
    marker = config.upload_dir / MARKER_FILE
    if not marker.exists():
        marker.write_text(HTACCESS)
    if not config.data_file.exists():
        write_json(config.data_file, [])


def create_app(config=None):
    config = config or Config.from_env()

    app = Flask(__name__)
    app.config["PHOTODESK"] = config
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_size + FORM_OVERHEAD

    init_storage(config)
    if not config.admin_hash:
        logger.warning("PHOTODESK_ADMIN_HASH is not set; all admin actions will be rejected")

    from photodesk.api.routes import api_bp
    app.register_blueprint(api_bp)

    return app
