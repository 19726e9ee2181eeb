from tritium_defense.events import EventBus, ROUND_STARTED


def test_emit_reaches_every_listener() -> None:
    bus = EventBus()
    got = []
    bus.subscribe(ROUND_STARTED, lambda n: got.append(("a", n)))
    bus.subscribe(ROUND_STARTED, lambda n: got.append(("b", n)))

    bus.emit(ROUND_STARTED, 3)

    assert sorted(got) == [("a", 3), ("b", 3)]


def test_failing_listener_does_not_block_others(logger) -> None:
    bus = EventBus(logger)
    got = []

    def broken(_n):
        raise RuntimeError("boom")

    bus.subscribe(ROUND_STARTED, broken)
    bus.subscribe(ROUND_STARTED, got.append)

    bus.emit(ROUND_STARTED, 1)

    assert got == [1]
    with open(logger.log_file, encoding="utf-8") as f:
        assert "boom" in f.read()


def test_unsubscribe() -> None:
    bus = EventBus()
    got = []
    bus.subscribe(ROUND_STARTED, got.append)
    bus.unsubscribe(ROUND_STARTED, got.append)
    bus.unsubscribe("never_subscribed", got.append)

    bus.emit(ROUND_STARTED, 1)

    assert got == []


def test_emit_without_listeners() -> None:
    EventBus().emit("nobody_listens", 1, 2)
