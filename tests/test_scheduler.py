from tritium_defense.scheduler import Scheduler


def test_action_waits_for_due_time() -> None:
    scheduler = Scheduler()
    fired = []
    scheduler.schedule(100, fired.append, "a")

    scheduler.update(99)
    assert fired == []
    scheduler.update(100)
    assert fired == ["a"]
    scheduler.update(500)
    assert fired == ["a"]


def test_due_order_then_insertion_order() -> None:
    scheduler = Scheduler()
    fired = []
    scheduler.schedule(300, fired.append, "late")
    scheduler.schedule(100, fired.append, "first")
    scheduler.schedule(100, fired.append, "second")

    assert scheduler.update(1000) == 3
    assert fired == ["first", "second", "late"]


def test_delay_is_relative_to_clock() -> None:
    scheduler = Scheduler()
    scheduler.update(1000)
    action = scheduler.schedule(50, lambda: None)
    assert action.due_ms == 1050


def test_cancelled_action_never_fires() -> None:
    scheduler = Scheduler()
    fired = []
    action = scheduler.schedule(10, fired.append, "x")
    action.cancel()

    scheduler.update(100)
    assert fired == []
    assert not action.pending


def test_cancel_all() -> None:
    scheduler = Scheduler()
    fired = []
    first = scheduler.schedule(10, fired.append, 1)
    scheduler.schedule(20, fired.append, 2)
    assert scheduler.pending == 2

    scheduler.cancel_all()
    scheduler.update(100)

    assert fired == []
    assert scheduler.pending == 0
    assert first.cancelled


def test_zero_delay_from_callback_runs_same_update() -> None:
    scheduler = Scheduler()
    fired = []

    def chain() -> None:
        fired.append("outer")
        scheduler.schedule(0, fired.append, "inner")

    scheduler.schedule(10, chain)
    scheduler.update(10)
    assert fired == ["outer", "inner"]


def test_clock_never_goes_back() -> None:
    scheduler = Scheduler()
    scheduler.update(500)
    scheduler.update(100)
    assert scheduler.now_ms == 500
