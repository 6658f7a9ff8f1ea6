from __future__ import annotations


def test_unknown_number_returns_zero_stats_without_registering(service):
    stats = service.get_phone_number_stats("+19999999999")
    assert stats.phone_number == "+19999999999"
    assert stats.message_count == 0
    assert stats.messages_last_minute == 0
    assert stats.messages_last_5_seconds == 0
    assert stats.message_timestamps == []
    assert stats.last_used is None
    assert service.get_all_active_numbers() == []
    assert len(service.registry) == 0


def test_account_snapshot(make_service, clock):
    service = make_service(phone_limit=2, account_limit=5)
    service.can_send_message("A")
    service.can_send_message("A")
    service.can_send_message("B")

    stats = service.get_stats()
    assert stats.total_messages == 3
    assert stats.account_limit == 5
    assert stats.last_reset == clock.now
    assert stats.active_phone_numbers == 2
    assert stats.messages_per_second == {"A": 2, "B": 1}


def test_phone_stats_track_trailing_windows(make_service, clock):
    service = make_service(phone_limit=1, account_limit=5)
    start = clock.now
    service.can_send_message("A")
    clock.advance(seconds=3)
    service.can_send_message("A")
    clock.advance(seconds=3)
    service.can_send_message("A")

    stats = service.get_phone_number_stats("A")
    assert stats.message_count == 1
    assert stats.messages_last_minute == 3
    assert stats.messages_last_5_seconds == 2
    assert stats.last_used == clock.now
    assert stats.last_reset == clock.now
    assert stats.message_timestamps[0] == start

    clock.advance(seconds=56)
    stats = service.get_phone_number_stats("A")
    assert stats.messages_last_minute == 2
    assert stats.messages_last_5_seconds == 0


def test_all_active_reflects_registry(make_service):
    service = make_service(phone_limit=1, account_limit=5)
    for phone in ("A", "B", "C"):
        service.can_send_message(phone)
    numbers = sorted(stats.phone_number for stats in service.get_all_active_numbers())
    assert numbers == ["A", "B", "C"]
