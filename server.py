#!/usr/bin/env python3
"""Photo API server. Host and port configurable via HOST and PORT in .env."""

import os

from photodesk import create_app
from photodesk.config import Config
from photodesk.logging_config import configure_logging

config = Config.from_env()
configure_logging(config.log_level)

app = create_app(config)

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")), debug=False)
