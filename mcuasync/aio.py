"""Coroutines driven by the poll scheduler."""

from __future__ import annotations

import time
from typing import Any, Callable, Coroutine, Generator, Generic, TypeVar

from mcuasync.poll import Poll, Scheduler, Task, default_scheduler, set_once, start_task

T = TypeVar("T")

Resume = Callable[[Any], None]
Suspend = Callable[[Scheduler, Resume], None]


class Async(Generic[T]):
    """A running coroutine; it starts at once and advances from scheduler polls.

    Awaitables used inside it yield a function ``suspend(scheduler, resume)``
    that arranges for ``resume(value)`` to be called later. When created inside
    a task, the coroutine is closed when that task ends.
    """

    def __init__(self, coro: Coroutine[Any, Any, T],
                 scheduler: Scheduler | None = None) -> None:
        self._coro = coro
        self._scheduler = scheduler if scheduler is not None else default_scheduler()
        self._done = False
        self._result: T | None = None
        self._exception: BaseException | None = None
        task = self._scheduler.current_task
        if task is not None:
            task.install_deletor(self._coro.close)
        self._advance()

    @property
    def result(self) -> T | None:
        return self._result

    @property
    def exception(self) -> BaseException | None:
        """The exception that ended the coroutine, if any."""
        return self._exception

    def done(self) -> bool:
        return self._done

    def _advance(self, value: Any = None, error: BaseException | None = None) -> None:
        try:
            if error is not None:
                suspend = self._coro.throw(error)
            else:
                suspend = self._coro.send(value)
        except StopIteration as stop:
            self._result = stop.value
            self._done = True
            return
        except Exception as exc:
            print(f"Async: [unhandled_exception] what(): {exc}")
            self._exception = exc
            self._done = True
            return
        if not callable(suspend):
            self._advance(error=TypeError(f"cannot await {suspend!r} here"))
            return
        suspend(self._scheduler, self._advance)

    def _suspend(self, scheduler: Scheduler, resume: Resume) -> None:
        def check(handle: Poll) -> None:
            if self._done:
                handle.remove()
                resume(None)

        scheduler.set_poll(check, with_handle=True)

    def __await__(self) -> Generator[Suspend, Any, T | None]:
        if not self._done:
            yield self._suspend
        task = self._scheduler.current_task
        if task is not None:
            task.terminate()
        return self._result


def spawn(coro: Coroutine[Any, Any, T], scheduler: Scheduler | None = None) -> Async[T]:
    """Start ``coro`` on ``scheduler`` (the default one when omitted)."""
    return Async(coro, scheduler)


class _LoopWhile:
    def __init__(self, cb: Callable[[], bool]) -> None:
        self._cb = cb

    def _suspend(self, scheduler: Scheduler, resume: Resume) -> None:
        cb = self._cb

        def check(handle: Poll) -> None:
            if not cb():
                handle.remove()
                resume(None)

        scheduler.set_poll(check, with_handle=True)

    def __await__(self) -> Generator[Suspend, Any, None]:
        yield self._suspend


class _Sleep:
    def __init__(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("sleep time must not be negative")
        self._seconds = ms / 1000.0

    def _suspend(self, scheduler: Scheduler, resume: Resume) -> None:
        deadline = time.monotonic() + self._seconds

        def check(handle: Poll) -> None:
            if time.monotonic() >= deadline:
                handle.remove()
                resume(None)

        scheduler.set_poll(check, with_handle=True)

    def __await__(self) -> Generator[Suspend, Any, None]:
        yield self._suspend


def loop_when(cb: Callable[[], bool]) -> _LoopWhile:
    """Awaitable that calls ``cb`` on every step and finishes once it returns False."""
    return _LoopWhile(cb)


def sleep_ms(ms: int) -> _Sleep:
    """Awaitable that finishes after ``ms`` milliseconds."""
    return _Sleep(ms)


def sleep_sec(sec: int) -> _Sleep:
    """Awaitable that finishes after ``sec`` seconds."""
    return _Sleep(sec * 1000)


def set_once_async(factory: Callable[[], Coroutine[Any, Any, Any]]) -> None:
    """On the next step of the default scheduler, start the coroutine ``factory()``."""
    set_once(lambda: spawn(factory()))


def start_task_async(factory: Callable[[Task], Coroutine[Any, Any, Any]]) -> Task | None:
    """Start a task on the default scheduler whose body is the coroutine ``factory(task)``."""
    return start_task(lambda task: spawn(factory(task)))