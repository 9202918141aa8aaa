import logging

import pytest

from richview.utils.log_utils import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestConfigureLogging:

    def test_explicit_level(self, root_logger):
        configure_logging("debug", force=True)
        assert root_logger.level == logging.DEBUG

    def test_level_from_environment(self, root_logger, monkeypatch):
        monkeypatch.setenv("RICHVIEW_LOG_LEVEL", "WARNING")
        configure_logging(force=True)
        assert root_logger.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, root_logger):
        configure_logging("chatty", force=True)
        assert root_logger.level == logging.INFO
