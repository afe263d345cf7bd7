from datetime import date, datetime, timedelta

from window_watcher.accumulator import UsageAccumulator, UsageLedger

DAY = date(2024, 3, 5)
START = datetime(2024, 3, 5, 9, 0, 0)


def test_credits_previous_app_and_returns_now(store):
    accumulator = UsageAccumulator(store)
    now = START + timedelta(seconds=2)

    assert accumulator.on_focus_changed("Firefox", START, now, DAY) == now
    assert accumulator.ledger["Firefox"] == timedelta(seconds=2)
    assert store.upserts == [("Firefox", DAY, timedelta(seconds=2))]


def test_upserts_cumulative_total(store):
    accumulator = UsageAccumulator(store)
    t1 = accumulator.on_focus_changed("Firefox", START, START + timedelta(seconds=3), DAY)
    t2 = accumulator.on_focus_changed("Kitty", t1, t1 + timedelta(seconds=1), DAY)
    accumulator.on_focus_changed("Firefox", t2, t2 + timedelta(seconds=4), DAY)

    firefox = [usage for app, _, usage in store.upserts if app == "Firefox"]
    assert firefox == [timedelta(seconds=3), timedelta(seconds=7)]
    assert store.get_daily_usage("Firefox", DAY) == timedelta(seconds=7)


def test_empty_identity_is_never_credited(store):
    accumulator = UsageAccumulator(store)
    now = START + timedelta(seconds=5)

    assert accumulator.on_focus_changed("", START, now, DAY) == now
    assert store.upserts == []
    assert "" not in accumulator.ledger


def test_negative_elapsed_is_clamped(store, caplog):
    accumulator = UsageAccumulator(store)
    earlier = START - timedelta(seconds=10)

    accumulator.on_focus_changed("Firefox", START, earlier, DAY)

    assert store.upserts == [("Firefox", DAY, timedelta(0))]
    assert "Clock went backwards" in caplog.text


def test_store_failure_keeps_ledger_and_next_flush_heals(store):
    accumulator = UsageAccumulator(store)
    store.failing = True
    t1 = accumulator.on_focus_changed("Firefox", START, START + timedelta(seconds=2), DAY)
    assert accumulator.ledger["Firefox"] == timedelta(seconds=2)
    assert store.upserts == []

    store.failing = False
    accumulator.on_focus_changed("Firefox", t1, t1 + timedelta(seconds=1), DAY)
    assert store.upserts == [("Firefox", DAY, timedelta(seconds=3))]


def test_new_day_starts_a_fresh_ledger(store):
    ledger = UsageLedger()
    accumulator = UsageAccumulator(store, ledger)
    late = datetime(2024, 3, 5, 23, 59, 0)
    accumulator.on_focus_changed("Firefox", late - timedelta(minutes=5), late, DAY)

    next_day = date(2024, 3, 6)
    after_midnight = datetime(2024, 3, 6, 0, 1, 0)
    accumulator.on_focus_changed("Firefox", late, after_midnight, next_day)

    assert ledger.day == next_day
    assert store.upserts[-1] == ("Firefox", next_day, timedelta(minutes=2))
    assert store.get_daily_usage("Firefox", DAY) == timedelta(minutes=5)
