import io
import logging

import pytest

from trajectorytuner.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_console_respects_level():
    stream = io.StringIO()
    setup_logging(logging.WARNING, stream=stream)
    child = logging.getLogger(f"{PACKAGE_LOGGER}.model.state")
    child.info("hidden")
    child.warning("shown")
    text = stream.getvalue()
    assert "hidden" not in text
    assert f"{PACKAGE_LOGGER}.model.state - WARNING - shown" in text


def test_file_receives_debug_records(tmp_path):
    stream = io.StringIO()
    log_file = tmp_path / "run.log"
    setup_logging(logging.WARNING, log_file=str(log_file), stream=stream)
    logging.getLogger(f"{PACKAGE_LOGGER}.trajectories").debug("integrating")
    assert "integrating" in log_file.read_text(encoding="utf-8")
    assert "integrating" not in stream.getvalue()


def test_repeated_setup_replaces_handlers(tmp_path):
    first = setup_logging(logging.INFO, log_file=str(tmp_path / "a.log"), stream=io.StringIO())
    old_handlers = list(first.handlers)
    second = setup_logging(logging.INFO, stream=io.StringIO())
    assert second is first
    assert len(second.handlers) == 1
    # closed file handlers drop their stream
    assert all(getattr(h, "stream", None) is None for h in old_handlers if isinstance(h, logging.FileHandler))
