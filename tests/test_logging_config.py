import logging

from photodesk.logging_config import configure_logging


def test_configure_logging_sets_root_level():
    configure_logging("WARNING")
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)
    configure_logging("INFO")
