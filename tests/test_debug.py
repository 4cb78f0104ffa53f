"""Tests for the logging facade."""

import logging

from connect_four.debug import ConsoleHandler, DebugLevel, DebugManager, LOGGER_NAME, debug


def test_component_prefix_and_level(caplog):
    debug.configure(level=DebugLevel.INFO)
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        debug.info("hello", "engine")
        debug.debug("hidden", "engine")
    messages = [record.getMessage() for record in caplog.records]
    assert "[engine] hello" in messages
    assert "[engine] hidden" not in messages


def test_component_filter(caplog):
    debug.configure(level=DebugLevel.INFO, components=["stats"])
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        debug.info("kept", "stats")
        debug.info("dropped", "engine")
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["[stats] kept"]


def test_disabled_manager_is_silent(caplog):
    debug.configure(level=DebugLevel.TRACE, enabled=False)
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        debug.error("nothing")
    assert not caplog.records


def test_set_from_string():
    assert debug.set_from_string("debug")
    assert debug.level == DebugLevel.DEBUG
    assert not debug.set_from_string("shouting")
    assert debug.level == DebugLevel.DEBUG


def test_timer():
    debug.start_timer("t")
    assert debug.end_timer("t") >= 0
    assert debug.end_timer("t") is None


def test_console_handler_added_once():
    DebugManager()
    DebugManager()
    logger = logging.getLogger(LOGGER_NAME)
    consoles = [h for h in logger.handlers if isinstance(h, ConsoleHandler)]
    assert len(consoles) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "game.log"
    debug.configure(level=DebugLevel.INFO, log_file=str(log_file))
    debug.info("written", "session")
    debug.configure(log_file="")
    assert "[session] written" in log_file.read_text()
