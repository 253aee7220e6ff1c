import time

import pytest

from mcuasync.aio import (
    Async,
    loop_when,
    set_once_async,
    sleep_ms,
    sleep_sec,
    spawn,
    start_task_async,
)
from mcuasync.poll import Scheduler, default_scheduler
from mcuasync.promise import Promise


def test_coroutine_without_await_finishes_at_once():
    async def body():
        return 9

    job = spawn(body(), Scheduler())
    assert job.done() is True
    assert job.result == 9


def test_sleep_waits_at_least_the_time():
    s = Scheduler()

    async def body():
        await sleep_ms(20)
        return "slept"

    start = time.monotonic()
    job = spawn(body(), s)
    assert job.done() is False
    s.run(until=job.done)
    assert time.monotonic() - start >= 0.02
    assert job.result == "slept"


def test_sleep_sec_zero():
    s = Scheduler()

    async def body():
        await sleep_sec(0)
        return 1

    job = spawn(body(), s)
    s.run(until=job.done)
    assert job.result == 1


def test_negative_sleep_rejected():
    with pytest.raises(ValueError):
        sleep_ms(-1)


def test_loop_when_runs_until_false():
    s = Scheduler()
    calls = []

    def keep_going():
        calls.append(len(calls))
        return len(calls) < 5

    async def body():
        await loop_when(keep_going)
        return len(calls)

    job = spawn(body(), s)
    assert calls == []
    s.run(until=job.done)
    assert job.result == 5


def test_await_promise():
    s = Scheduler()
    resolvers = []
    promise = Promise(resolvers.append, s)

    async def body():
        return await promise

    job = spawn(body(), s)
    s.step()
    assert job.done() is False
    resolvers[0](97)
    s.run(until=job.done)
    assert job.result == 97


def test_await_resolved_promise_does_not_suspend():
    s = Scheduler()
    promise = Promise(lambda resolve: resolve(4), s)

    async def body():
        return await promise

    job = spawn(body(), s)
    assert job.done() is True
    assert job.result == 4


def test_await_nested_async():
    s = Scheduler()
    order = []

    async def inner():
        order.append("inner start")
        await sleep_ms(1)
        order.append("inner end")
        return "b"

    async def outer():
        value = await spawn(inner(), s)
        order.append("outer got " + value)
        return value

    job = spawn(outer(), s)
    s.run(until=job.done)
    assert job.result == "b"
    assert order == ["inner start", "inner end", "outer got b"]


def test_unhandled_exception_is_reported(capsys):
    s = Scheduler()

    async def body():
        await sleep_ms(0)
        raise ValueError("boom")

    job = spawn(body(), s)
    s.run(until=job.done)
    assert isinstance(job.exception, ValueError)
    assert "what(): boom" in capsys.readouterr().out


def test_awaiting_foreign_object_raises_inside_coroutine():
    class Foreign:
        def __await__(self):
            yield 42

    async def body():
        try:
            await Foreign()
        except TypeError:
            return "rejected"

    job = spawn(body(), Scheduler())
    assert job.result == "rejected"


def test_task_ends_when_coroutine_finishes():
    s = Scheduler()
    log = []

    async def body():
        await sleep_ms(1)
        log.append("done")

    task = s.start_task(lambda t: spawn(body(), s))
    s.step()
    assert task.is_running() is True
    s.run(until=lambda: not task.is_running())
    assert log == ["done"]


def test_terminated_task_closes_coroutine():
    s = Scheduler()
    cleaned = []

    async def body():
        try:
            await loop_when(lambda: True)
        finally:
            cleaned.append(True)

    task = s.start_task(lambda t: spawn(body(), s))
    s.step()
    task.terminate()
    s.step()
    s.step()
    assert cleaned == [True]
    assert task.is_running() is False


def test_start_task_async_passes_task():
    seen = []

    async def body(task):
        await sleep_ms(0)
        seen.append(task.task_id)

    task = start_task_async(body)
    default_scheduler().run(until=lambda: bool(seen))
    assert seen == [task.task_id]


def test_set_once_async_runs_on_next_step():
    seen = []

    async def body():
        seen.append("ran")

    set_once_async(body)
    assert seen == []
    default_scheduler().run(until=lambda: bool(seen))
    assert seen == ["ran"]


def test_async_class_starts_immediately():
    started = []

    async def body():
        started.append(1)
        await sleep_ms(0)

    job = Async(body(), Scheduler())
    assert started == [1]
    assert job.done() is False