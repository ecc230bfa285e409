import pytest

from http_echo import HUMAN_VERSION, cli
from http_echo.errors import BindError


@pytest.fixture
def no_server(monkeypatch):
    """Fail the test if the CLI tries to start a listener."""

    class Forbidden:
        def __init__(self, *args, **kwargs):
            raise AssertionError("listener must not be started")

    monkeypatch.setattr(cli, "Lifecycle", Forbidden)


@pytest.fixture
def quiet_logging(monkeypatch):
    """Keep the CLI from reconfiguring the root logger during tests."""
    stopped = []

    class Listener:
        def stop(self):
            stopped.append(True)

    monkeypatch.setattr(cli, "configure_logging", Listener)
    return stopped


def test_version_goes_to_stderr(no_server, capsys):
    assert cli.main(["-version"]) == 0
    captured = capsys.readouterr()
    assert captured.err.strip() == HUMAN_VERSION
    assert captured.out == ""


def test_positional_arguments_rejected(no_server, capsys):
    assert cli.main(["extra"]) == 127
    assert "Too many arguments!" in capsys.readouterr().err


def test_invalid_delay_rejected(no_server, capsys):
    assert cli.main(["-delay", "-10"]) == 127
    assert "delay_ms" in capsys.readouterr().err


def test_flags_parsed():
    args = cli.build_parser().parse_args(["-listen", "127.0.0.1:8000", "-id", "canary", "-delay=150"])
    config = cli.parse_config(args)
    assert config.listen == "127.0.0.1:8000"
    assert config.server_id == "canary"
    assert config.delay_ms == 150


def test_double_dash_flags_parsed():
    args = cli.build_parser().parse_args(["--listen", ":9000", "--id", "2"])
    config = cli.parse_config(args)
    assert config.port == 9000
    assert config.server_id == "2"


def test_defaults():
    config = cli.parse_config(cli.build_parser().parse_args([]))
    assert config.listen == ":5678"
    assert config.server_id == "1"
    assert config.delay_ms == 0


def test_fatal_listener_error_exits_nonzero(monkeypatch, quiet_logging):
    class FailingLifecycle:
        def __init__(self, config):
            pass

        def run(self):
            raise BindError("address already in use")

    monkeypatch.setattr(cli, "Lifecycle", FailingLifecycle)
    assert cli.main(["-listen", "127.0.0.1:1"]) == 1
    assert quiet_logging == [True]


def test_interrupt_exit_status_passed_through(monkeypatch, quiet_logging):
    class InterruptedLifecycle:
        def __init__(self, config):
            pass

        def run(self):
            return 2

    monkeypatch.setattr(cli, "Lifecycle", InterruptedLifecycle)
    assert cli.main([]) == 2
