"""Promises resolved by callbacks and observed through the poll scheduler."""

from __future__ import annotations

import weakref
from typing import Any, Callable, Generator, Generic, TypeVar

from mcuasync.poll import Poll, Scheduler, default_scheduler

T = TypeVar("T")

ResolveFunc = Callable[..., None]


class _Future:
    __slots__ = ("result", "resolved", "__weakref__")

    def __init__(self) -> None:
        self.result: Any = None
        self.resolved = False


class Promise(Generic[T]):
    """A value that an ``init`` callback resolves later.

    ``init`` is called at once with a ``resolve`` function; calling
    ``resolve(value)`` (or ``resolve()`` for a promise without a value)
    settles the promise. Callbacks given to :meth:`then` run from the
    scheduler on the first step after the promise is resolved.
    """

    def __init__(self, init: Callable[[ResolveFunc], None],
                 scheduler: Scheduler | None = None) -> None:
        self._scheduler = scheduler if scheduler is not None else default_scheduler()
        self._future = _Future()
        future_ref = weakref.ref(self._future)

        def resolve(result: Any = None) -> None:
            future = future_ref()
            if future is not None:
                future.result = result
                future.resolved = True

        init(resolve)

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def result(self) -> Any:
        """The resolved value, or None while unresolved."""
        return self._future.result

    def resolved(self) -> bool:
        return self._future.resolved

    def then(self, cb: Callable[[Any], None]) -> Promise[T]:
        """Call ``cb(result)`` once, from the scheduler, after resolution."""
        future = self._future

        def check(handle: Poll) -> None:
            if future.resolved:
                cb(future.result)
                handle.remove()

        self._scheduler.set_poll(check, with_handle=True)
        return self

    def _suspend(self, scheduler: Scheduler, resume: Callable[[Any], None]) -> None:
        self.then(resume)

    def __await__(self) -> Generator[Any, Any, T]:
        if self._future.resolved:
            return self._future.result
        value = yield self._suspend
        return value


def promise_all(*args: Promise[Any]) -> Promise[tuple]:
    """A promise resolved with a tuple of every argument's result, in order."""
    scheduler = args[0].scheduler if args else default_scheduler()
    count = len(args)

    def init(resolve: ResolveFunc) -> None:
        results: list[Any] = [None] * count
        settled = 0

        def make_handler(index: int) -> Callable[[Any], None]:
            def handler(result: Any) -> None:
                nonlocal settled
                results[index] = result
                settled += 1
                if settled == count:
                    resolve(tuple(results))
            return handler

        for index, promise in enumerate(args):
            promise.then(make_handler(index))

    return Promise(init, scheduler)