from datetime import datetime, timedelta, timezone

from cropscout.utils.time import coerce_datetime, epoch_millis, utc_now


def test_coerce_datetime_parses_z_suffix():
    dt = coerce_datetime("2026-01-01T00:00:00Z")
    assert dt is not None
    assert dt.utcoffset() == timedelta(0)
    assert dt.isoformat().endswith("+00:00")


def test_coerce_datetime_parses_offset():
    dt = coerce_datetime("2026-01-01T02:00:00+02:00")
    assert dt is not None
    assert dt.utcoffset() == timedelta(0)
    assert dt.hour == 0


def test_coerce_datetime_parses_naive_as_utc():
    dt = coerce_datetime("2026-01-01T00:00:00")
    assert dt is not None
    assert dt.utcoffset() == timedelta(0)
    assert isinstance(utc_now() - dt, timedelta)


def test_coerce_datetime_rejects_garbage():
    assert coerce_datetime("yesterday") is None
    assert coerce_datetime(12345) is None
    assert coerce_datetime(None) is None


def test_epoch_millis_treats_naive_as_utc():
    aware = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert epoch_millis(aware) == 1767225600000
    assert epoch_millis(aware.replace(tzinfo=None)) == 1767225600000
