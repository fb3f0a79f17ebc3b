import sys
from io import StringIO

import pytest
from loguru import logger

from refloom.log_config import LIBRARY, configure_logging, disable_logging
from refloom.query import Journals


def _last_handler():
    handler_id = list(logger._core.handlers.keys())[-1]
    return logger._core.handlers[handler_id]


def _compile_journal_search():
    Journals.search("economic geography").to_url("https://api.crossref.org")


def test_configure_logging_default_level():
    """configure_logging defaults to INFO on stderr."""
    logger.remove()

    configure_logging()

    assert len(logger._core.handlers) == 1
    assert _last_handler()._levelno == logger.level("INFO").no


def test_configure_logging_level_is_case_insensitive():
    logger.remove()
    configure_logging(level="debug")
    assert _last_handler()._levelno == logger.level("DEBUG").no


def test_configure_logging_removes_existing_handlers():
    """Pre-existing handlers are replaced by the configured one."""
    logger.remove()
    logger.add(lambda _: None, level="ERROR")
    logger.add(lambda _: None, level="ERROR")
    assert len(logger._core.handlers) == 2

    configure_logging(level="WARNING")

    assert len(logger._core.handlers) == 1
    assert _last_handler()._levelno == logger.level("WARNING").no


def test_library_debug_output_reaches_custom_sink():
    """Route compilation logs at DEBUG through the shared logger."""
    sink = StringIO()
    configure_logging(level="DEBUG", sink=sink)

    _compile_journal_search()

    output = sink.getvalue()
    assert "Compiled Journals route: /journals?query=economic+geography" in output


def test_debug_output_is_filtered_at_info_level():
    sink = StringIO()
    configure_logging(level="INFO", sink=sink)

    _compile_journal_search()

    assert "Compiled Journals route" not in sink.getvalue()


def test_library_is_silent_until_configured():
    """An application handler sees nothing from refloom by default."""
    sink = StringIO()
    logger.add(sink, level="DEBUG")

    _compile_journal_search()

    assert sink.getvalue() == ""


def test_enable_keeps_application_handlers():
    sink = StringIO()
    logger.add(sink, level="DEBUG")

    logger.enable(LIBRARY)
    _compile_journal_search()

    assert "Compiled Journals route" in sink.getvalue()


def test_disable_logging_silences_the_library_again():
    sink = StringIO()
    configure_logging(level="DEBUG", sink=sink)
    disable_logging()

    _compile_journal_search()

    assert "Compiled Journals route" not in sink.getvalue()


def test_application_messages_are_not_disabled():
    sink = StringIO()
    logger.add(sink, level="INFO")

    logger.info("application message")

    assert "application message" in sink.getvalue()


@pytest.fixture(autouse=True)
def reset_logger_after_test():
    """Restore the library default: stderr handler, refloom disabled."""
    disable_logging()
    yield
    logger.remove()
    logger.add(sys.stderr, level="INFO")
    disable_logging()
