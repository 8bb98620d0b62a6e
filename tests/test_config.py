import logging

import pytest

from lispy import config
from lispy.errors import LispyConfigError


def test_defaults():
    assert config.get_int_bits() == 64
    assert config.get_int_range() == (-(2 ** 63), 2 ** 63 - 1)
    assert config.get_prompt() == "lispy> "
    assert config.get_log_level() == logging.WARNING


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LISPY_INT_BITS", "16")
    monkeypatch.setenv("LISPY_PROMPT", ">> ")
    monkeypatch.setenv("LISPY_LOG_LEVEL", "debug")
    assert config.get_int_range() == (-32768, 32767)
    assert config.get_prompt() == ">> "
    assert config.get_log_level() == logging.DEBUG


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("LISPY_INT_BITS", "  ")
    assert config.get_int_bits() == 64


@pytest.mark.parametrize(
    "var,value",
    [
        ("LISPY_INT_BITS", "sixty-four"),
        ("LISPY_INT_BITS", "4"),
        ("LISPY_INT_BITS", "100000"),
        ("LISPY_LOG_LEVEL", "chatty"),
    ]
)
def test_invalid_values(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(LispyConfigError):
        config.get_int_bits() if var == "LISPY_INT_BITS" else config.get_log_level()
