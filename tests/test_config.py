import io
import logging

import pytest

from mrprime.audit import HANDLER_NAME, configure_logging, log_event
from mrprime.config import load_settings
from mrprime.errors import InvalidArgument


def test_defaults():
    s = load_settings({})
    assert (s.default_rounds, s.keygen_rounds, s.log_level) == (20, 40, "INFO")


def test_environment_overrides():
    s = load_settings({
        "MRPRIME_ROUNDS": "32",
        "MRPRIME_KEYGEN_ROUNDS": " 64 ",
        "MRPRIME_LOG_LEVEL": "debug",
    })
    assert (s.default_rounds, s.keygen_rounds, s.log_level) == (32, 64, "DEBUG")


def test_blank_values_fall_back():
    assert load_settings({"MRPRIME_ROUNDS": ""}).default_rounds == 20


@pytest.mark.parametrize("env", [
    {"MRPRIME_ROUNDS": "0"},
    {"MRPRIME_ROUNDS": "many"},
    {"MRPRIME_KEYGEN_ROUNDS": "-4"},
    {"MRPRIME_LOG_LEVEL": "chatty"},
])
def test_invalid_values(env):
    with pytest.raises(InvalidArgument):
        load_settings(env)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("MRPRIME_ROUNDS", "24")
    assert load_settings().default_rounds == 24


def test_audit_line_goes_through_logging(caplog):
    configure_logging("INFO")
    with caplog.at_level(logging.INFO, logger="mrprime.audit"):
        log_event("test", "bits=17", "verdict=True")
    assert "test | bits=17 | verdict=True" in caplog.text


def test_configure_logging_installs_one_handler():
    root = configure_logging("WARNING")
    configure_logging("WARNING")
    assert sum(1 for h in root.handlers if h.get_name() == HANDLER_NAME) == 1


def test_audit_handler_is_a_plain_stream_handler():
    root = configure_logging("INFO")
    (handler,) = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
    assert type(handler) is logging.StreamHandler
    buf = io.StringIO()
    handler.setStream(buf)
    log_event("genprime", "bits=64", "rounds=40")
    line = buf.getvalue().strip()
    assert line.startswith("[audit] ") and line.endswith("Z | genprime | bits=64 | rounds=40")
