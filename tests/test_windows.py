from __future__ import annotations

from datetime import datetime, timedelta, timezone

from smsgate.utils.windows import AccountWindow, IdentifierWindow

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_trailing_counts_purge_entries_older_than_a_minute():
    window = IdentifierWindow.fresh("A", limit=10, now=T0)
    for offset in (0, 2, 4):
        window.record(T0 + timedelta(seconds=offset))

    now = T0 + timedelta(seconds=4)
    assert window.count_last_minute(now) == 3
    assert window.count_last_5_seconds(now) == 3

    later = T0 + timedelta(seconds=62.5)
    assert window.count_last_minute(later) == 1
    assert window.count_last_5_seconds(later) == 0
    assert list(window.history) == [T0 + timedelta(seconds=4)]


def test_entry_exactly_sixty_seconds_old_is_kept():
    window = IdentifierWindow.fresh("A", limit=10, now=T0)
    window.record(T0)
    assert window.count_last_minute(T0 + timedelta(seconds=60)) == 1
    assert window.count_last_minute(T0 + timedelta(seconds=60, microseconds=1)) == 0


def test_touch_never_moves_last_used_backwards():
    window = IdentifierWindow.fresh("A", limit=1, now=T0)
    window.touch(T0 - timedelta(seconds=5))
    assert window.last_used == T0
    window.touch(T0 + timedelta(seconds=5))
    assert window.last_used == T0 + timedelta(seconds=5)


def test_account_window_resets_after_one_second():
    account = AccountWindow(limit=2, window_start=T0, total_count=2)
    assert account.exhausted
    assert account.reset_if_elapsed(T0 + timedelta(milliseconds=999)) is False
    assert account.reset_if_elapsed(T0 + timedelta(seconds=1)) is True
    assert account.total_count == 0
    assert account.window_start == T0 + timedelta(seconds=1)
    assert not account.exhausted
