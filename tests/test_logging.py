import logging

import pytest

from headless_cms_api.app.core import logging_config
from headless_cms_api.app.core.logging_config import setup_logging


@pytest.fixture
def bare_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_file_handler_has_its_own_level(bare_root_logger, tmp_path):
    log_file = tmp_path / "cms.log"

    setup_logging("WARNING", str(log_file), file_level="DEBUG")
    logging.getLogger("headless_cms_api.test").debug("purged 3 tokens")
    for handler in bare_root_logger.handlers:
        handler.flush()

    console, file_handler = bare_root_logger.handlers
    assert console.level == logging.WARNING
    assert file_handler.level == logging.DEBUG
    assert bare_root_logger.level == logging.DEBUG
    assert "[DEBUG] headless_cms_api.test: purged 3 tokens" in log_file.read_text(encoding="utf-8")


def test_setup_runs_once_but_ignores_foreign_handlers(bare_root_logger):
    foreign = logging.NullHandler()
    bare_root_logger.addHandler(foreign)

    setup_logging("INFO")
    setup_logging("DEBUG")

    ours = [h for h in bare_root_logger.handlers if getattr(h, logging_config._HANDLER_TAG, False)]
    assert len(ours) == 1
    assert foreign in bare_root_logger.handlers
