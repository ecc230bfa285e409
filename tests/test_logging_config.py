import logging

import pytest

from http_echo.logging_config import ACCESS_LOGGER, configure_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_access_lines_go_to_stdout_and_the_rest_to_stderr(restore_root_logging, capsys):
    listener = configure_logging()
    logging.getLogger(ACCESS_LOGGER).info('{"path":"/"}')
    logging.getLogger("http_echo.server").info("server is listening on %s", ":5678")
    listener.stop()

    captured = capsys.readouterr()
    assert captured.out == '{"path":"/"}\n'
    assert "[INFO] http_echo.server: server is listening on :5678" in captured.err
    assert "path" not in captured.err


def test_stop_flushes_queued_records(restore_root_logging, capsys):
    listener = configure_logging()
    for i in range(100):
        logging.getLogger(ACCESS_LOGGER).info("line %d", i)
    listener.stop()

    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"line {i}" for i in range(100)]
