import importlib

from busywatch.constants import _get_env_float


def test_get_env_float_valid_value(monkeypatch):
    """Test parsing a valid float from environment variable."""
    monkeypatch.setenv("TEST_VAR", "0.25")
    assert _get_env_float("TEST_VAR", 9.0) == 0.25


def test_get_env_float_integer_string(monkeypatch):
    """Test that integer strings parse as floats."""
    monkeypatch.setenv("TEST_VAR", "3")
    assert _get_env_float("TEST_VAR", 9.0) == 3.0


def test_get_env_float_invalid_string(monkeypatch, capsys):
    """Test handling of invalid string value in environment variable."""
    monkeypatch.setenv("TEST_VAR", "abc")
    assert _get_env_float("TEST_VAR", 9.0) == 9.0
    assert "Invalid float value for TEST_VAR='abc'" in capsys.readouterr().out


def test_get_env_float_empty_string(monkeypatch):
    """Test handling of empty string value in environment variable."""
    monkeypatch.setenv("TEST_VAR", "")
    assert _get_env_float("TEST_VAR", 9.0) == 9.0


def test_get_env_float_unset(monkeypatch):
    """Test default when the variable is not set."""
    monkeypatch.delenv("TEST_VAR", raising=False)
    assert _get_env_float("TEST_VAR", 9.0) == 9.0


def test_harness_constants_overridable(monkeypatch):
    """Test module constants pick up environment overrides on import."""
    import busywatch.constants as constants

    monkeypatch.setenv("BUSYWATCH_POLL_INTERVAL", "0.5")
    monkeypatch.setenv("BUSYWATCH_WAIT_TIMEOUT", "12")
    try:
        reloaded = importlib.reload(constants)
        assert reloaded.BUSYWATCH_POLL_INTERVAL == 0.5
        assert reloaded.BUSYWATCH_WAIT_TIMEOUT == 12.0
    finally:
        monkeypatch.delenv("BUSYWATCH_POLL_INTERVAL")
        monkeypatch.delenv("BUSYWATCH_WAIT_TIMEOUT")
        importlib.reload(constants)


def test_harness_constant_defaults(monkeypatch):
    import busywatch.constants as constants

    monkeypatch.delenv("BUSYWATCH_POLL_INTERVAL", raising=False)
    monkeypatch.delenv("BUSYWATCH_WAIT_TIMEOUT", raising=False)
    reloaded = importlib.reload(constants)
    assert reloaded.BUSYWATCH_POLL_INTERVAL == 0.05
    assert reloaded.BUSYWATCH_WAIT_TIMEOUT == 0.0
