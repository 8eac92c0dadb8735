import json
import logging

import pytest

from minifier.log import HANDLER_NAME, StructuredFormatter, configure_logging


@pytest.fixture
def restore_logger():
    logger = logging.getLogger("minifier")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def _record(**extra):
    record = logging.LogRecord(
        "minifier", logging.WARNING, __file__, 1, "skipped %s", ("node",), None
    )
    record.__dict__.update(extra)
    return record


class TestStructuredFormatter:
    def test_base_fields(self):
        data = json.loads(StructuredFormatter().format(_record()))

        assert data["level"] == "WARNING"
        assert data["logger"] == "minifier"
        assert data["message"] == "skipped node"
        assert "path" not in data

    def test_extra_fields_copied(self):
        data = json.loads(
            StructuredFormatter().format(_record(path="a.css", matcher="|=", other=1))
        )

        assert data["path"] == "a.css"
        assert data["matcher"] == "|="
        assert "other" not in data


class TestConfigureLogging:
    def test_handler_installed_once(self, restore_logger):
        configure_logging("DEBUG")
        logger = configure_logging("WARNING")

        names = [h.get_name() for h in logger.handlers]
        assert names.count(HANDLER_NAME) == 1
        assert logger.level == logging.WARNING
        assert logger.propagate is False
