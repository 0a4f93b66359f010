import threading

import pytest

from cropscout.domain.alerts import Alert
from cropscout.domain.exceptions import ConfigurationError
from cropscout.enums import AlertType
from cropscout.services.debouncer import AlertDebouncer


def _alert(rule_id: str = "RULE_003", alert_type: AlertType = AlertType.CRITICAL) -> Alert:
    return Alert(
        id=f"{rule_id}_1",
        rule_id=rule_id,
        rule_name="Critical Drought Stress",
        priority=1,
        type=alert_type,
        title="Severe Drought Detected",
        message="",
        action="",
        timeline="",
        icon="",
        timestamp="",
    )


def test_show_suppress_show_after_window(fake_clock):
    debouncer = AlertDebouncer(window_seconds=30, clock=fake_clock)
    alert = _alert()

    assert debouncer.should_show_alert(alert) is True
    fake_clock.advance(10)
    assert debouncer.should_show_alert(alert) is False
    fake_clock.advance(25)
    assert debouncer.should_show_alert(alert) is True


def test_window_is_measured_from_last_emission(fake_clock):
    debouncer = AlertDebouncer(window_seconds=30, clock=fake_clock)
    alert = _alert()

    assert debouncer.should_show_alert(alert)
    fake_clock.advance(20)
    # Suppressed calls do not extend the window
    assert not debouncer.should_show_alert(alert)
    fake_clock.advance(11)
    assert debouncer.should_show_alert(alert)


def test_exactly_at_window_is_still_suppressed(fake_clock):
    debouncer = AlertDebouncer(window_seconds=30, clock=fake_clock)
    debouncer.should_show_alert(_alert())
    fake_clock.advance(30)
    assert not debouncer.should_show_alert(_alert())
    fake_clock.advance(0.001)
    assert debouncer.should_show_alert(_alert())


def test_keys_are_independent(fake_clock):
    debouncer = AlertDebouncer(clock=fake_clock)
    assert debouncer.should_show_alert(_alert("RULE_003"))
    assert debouncer.should_show_alert(_alert("RULE_004"))
    assert debouncer.should_show_alert(_alert("RULE_003", AlertType.WARNING))
    assert debouncer.tracked_keys() == ["RULE_003_CRITICAL", "RULE_003_WARNING", "RULE_004_CRITICAL"]


def test_reset_forgets_history(fake_clock):
    debouncer = AlertDebouncer(clock=fake_clock)
    debouncer.should_show_alert(_alert())
    debouncer.reset()
    assert debouncer.tracked_keys() == []
    assert debouncer.should_show_alert(_alert())


def test_filter_keeps_passing_alerts(fake_clock):
    debouncer = AlertDebouncer(clock=fake_clock)
    first = debouncer.filter([_alert("RULE_003"), _alert("RULE_004")])
    second = debouncer.filter([_alert("RULE_003"), _alert("RULE_005")])
    assert [a.rule_id for a in first] == ["RULE_003", "RULE_004"]
    assert [a.rule_id for a in second] == ["RULE_005"]


def test_zero_window_only_suppresses_same_instant(fake_clock):
    debouncer = AlertDebouncer(window_seconds=0, clock=fake_clock)
    assert debouncer.should_show_alert(_alert())
    assert not debouncer.should_show_alert(_alert())
    fake_clock.advance(0.001)
    assert debouncer.should_show_alert(_alert())


def test_negative_window_rejected():
    with pytest.raises(ConfigurationError):
        AlertDebouncer(window_seconds=-1)


def test_concurrent_callers_emit_once(fake_clock):
    debouncer = AlertDebouncer(clock=fake_clock)
    results = []
    lock = threading.Lock()

    def _worker():
        shown = debouncer.should_show_alert(_alert())
        with lock:
            results.append(shown)

    threads = [threading.Thread(target=_worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
