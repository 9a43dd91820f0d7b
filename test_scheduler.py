from arcade_checkers.session.scheduler import ManualScheduler, TaskGroup, TkScheduler


class FakeWidget:
    """Stands in for a Tk widget: records `after` calls and fires them on demand."""

    def __init__(self):
        self.pending = {}
        self._next = 0

    def after(self, ms, func):
        self._next += 1
        after_id = f"after#{self._next}"
        self.pending[after_id] = (ms, func)
        return after_id

    def after_cancel(self, after_id):
        self.pending.pop(after_id, None)

    def fire_all(self):
        for after_id in list(self.pending):
            _, func = self.pending.pop(after_id)
            func()


def test_manual_scheduler_fires_in_due_order():
    sched = ManualScheduler()
    fired = []
    sched.call_later(300, lambda: fired.append("c"))
    sched.call_later(100, lambda: fired.append("a"))
    sched.call_later(200, lambda: fired.append("b"))

    assert sched.advance(150) == 1
    assert fired == ["a"]
    sched.advance(1000)
    assert fired == ["a", "b", "c"]
    assert sched.now_ms == 1150


def test_manual_scheduler_same_time_keeps_insertion_order():
    sched = ManualScheduler()
    fired = []
    sched.call_later(100, lambda: fired.append(1))
    sched.call_later(100, lambda: fired.append(2))
    sched.advance(100)
    assert fired == [1, 2]


def test_cancelled_task_does_not_fire():
    sched = ManualScheduler()
    fired = []
    task = sched.call_later(100, lambda: fired.append(1))
    task.cancel()
    assert sched.advance(500) == 0
    assert fired == []
    assert task.cancelled and not task.done


def test_task_scheduled_from_callback_runs_when_due():
    sched = ManualScheduler()
    fired = []

    def first():
        fired.append("first")
        sched.call_later(50, lambda: fired.append("second"))

    sched.call_later(100, first)
    sched.advance(120)
    assert fired == ["first"]
    sched.advance(30)
    assert fired == ["first", "second"]


def test_run_all_drains_queue():
    sched = ManualScheduler()
    fired = []
    sched.call_later(10, lambda: sched.call_later(10, lambda: fired.append(2)))
    sched.call_later(5, lambda: fired.append(1))
    assert sched.run_all() == 3
    assert fired == [1, 2]
    assert sched.pending_count == 0


def test_task_group_replaces_named_task():
    sched = ManualScheduler()
    group = TaskGroup(sched)
    fired = []
    group.schedule("ai", 100, lambda: fired.append("old"))
    group.schedule("ai", 100, lambda: fired.append("new"))
    sched.advance(100)
    assert fired == ["new"]
    assert not group.is_pending("ai")


def test_task_group_cancel_all():
    sched = ManualScheduler()
    group = TaskGroup(sched)
    fired = []
    group.schedule("a", 10, lambda: fired.append("a"))
    group.schedule("b", 20, lambda: fired.append("b"))
    assert group.is_pending("a") and group.is_pending("b")
    group.cancel_all()
    sched.advance(100)
    assert fired == []
    assert sched.pending_count == 0


def test_tk_scheduler_uses_after():
    widget = FakeWidget()
    sched = TkScheduler(widget)
    fired = []
    sched.call_later(800, lambda: fired.append("x"))
    assert [ms for ms, _ in widget.pending.values()] == [800]
    widget.fire_all()
    assert fired == ["x"]


def test_tk_scheduler_cancel_calls_after_cancel():
    widget = FakeWidget()
    sched = TkScheduler(widget)
    fired = []
    task = sched.call_later(800, lambda: fired.append("x"))
    task.cancel()
    assert widget.pending == {}
    widget.fire_all()
    assert fired == []
