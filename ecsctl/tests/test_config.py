import pytest

from ecsctl.config import Config, _number

def test_malformed_number_keeps_default():
    assert _number("soon", float, 1.0) == 1.0
    assert _number("fifty", int, 50) == 50
    assert _number("2.5", float, 1.0) == 2.5

def test_defaults_validate():
    Config.validate()

@pytest.mark.parametrize(
    "attribute, raw, variable",
    [
        ("POLL_INTERVAL_RAW", "soon", "ECSCTL_POLL_INTERVAL"),
        ("LOG_RETRY_LIMIT_RAW", "1.5", "ECSCTL_LOG_RETRY_LIMIT"),
    ],
)
def test_malformed_number_fails_validation(monkeypatch, attribute, raw, variable):
    monkeypatch.setattr(Config, attribute, raw)
    with pytest.raises(ValueError, match=variable):
        Config.validate()

def test_out_of_range_values_fail_validation(monkeypatch):
    monkeypatch.setattr(Config, "LOG_RETRY_LIMIT", 0)
    with pytest.raises(ValueError, match="at least 1"):
        Config.validate()
