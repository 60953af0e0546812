import pytest

from src.biometric_attendance.biometric_attendance.devices.window import RecentEventWindow


def test_oldest_key_is_evicted_first():
    window = RecentEventWindow(2)

    window.remember("a")
    window.remember("b")
    window.remember("c")

    assert "a" not in window
    assert "b" in window and "c" in window
    assert len(window) == 2


def test_remember_reports_known_keys():
    window = RecentEventWindow(5)

    assert window.remember(("dev", "1", "100")) is True
    assert window.remember(("dev", "1", "100")) is False
    assert len(window) == 1


def test_reset_forgets_everything():
    window = RecentEventWindow(5)
    window.remember("a")

    window.reset()

    assert "a" not in window
    assert len(window) == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        RecentEventWindow(0)
