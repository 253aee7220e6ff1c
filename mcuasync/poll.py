"""Cooperative polling scheduler with lightweight tasks."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import Callable, Union

_MAX_ID = 0xFFFFFFFFFFFFFFFF


class PollFlag(enum.IntFlag):
    NONE = 0
    ONCE = 1 << 0
    DELETE = 1 << 1


@dataclass(eq=False)
class _PollNode:
    id: int
    flags: PollFlag
    cb: Callable[[], None]
    task: Task | None


@dataclass(frozen=True)
class PollEntry:
    """Snapshot of one registered poll callback."""

    poll_id: int
    task: Task | None
    flags: PollFlag

    @property
    def is_main(self) -> bool:
        """True for the node that supervises its task."""
        return self.task is not None and self.task.task_id == self.poll_id


@dataclass(frozen=True)
class Poll:
    """Handle to a registered poll callback; id 0 is the null handle."""

    id: int = 0
    scheduler: Scheduler | None = field(default=None, compare=False, repr=False)

    def is_null(self) -> bool:
        return self.id == 0

    def is_active(self) -> bool:
        """True while the callback is registered and not marked for removal."""
        if self.id == 0 or self.scheduler is None:
            return False
        node = self.scheduler._find(self.id)
        return node is not None and not node.flags & PollFlag.DELETE

    def remove(self) -> None:
        """Mark the callback for removal; it will not run again."""
        if self.id == 0 or self.scheduler is None:
            return
        node = self.scheduler._find(self.id)
        if node is not None:
            node.flags |= PollFlag.DELETE


class Task:
    """A unit of work whose polls are grouped and supervised together.

    Subclasses override :meth:`init`, which runs once when the task first gets
    scheduled. The task stays running while any poll it registered is alive.
    """

    def __init__(self, name: str = "noname") -> None:
        self.name = name
        self.task_id = 0
        self._scheduler: Scheduler | None = None
        self._run = False
        self._deletors: list[Callable[[], None]] = []

    def init(self) -> None:
        """Called once when the task starts."""

    def terminate(self) -> None:
        """Remove every poll of this task; its supervisor then ends it."""
        if self._scheduler is not None:
            self._scheduler._terminate_subpolls(self)

    def is_running(self) -> bool:
        return self._scheduler is not None and Poll(self.task_id, self._scheduler).is_active()

    def install_deletor(self, deletor: Callable[[], None]) -> None:
        """Register a cleanup callback that runs when the task ends."""
        self._deletors.append(deletor)

    def _release(self) -> None:
        deletors, self._deletors = self._deletors, []
        for deletor in deletors:
            deletor()


class _FunctionTask(Task):
    def __init__(self, cb: Callable[[Task], None]) -> None:
        super().__init__()
        self._cb = cb

    def init(self) -> None:
        self._cb(self)


TaskKey = Union[int, str]


class Scheduler:
    """Holds poll callbacks and runs them in registration order."""

    def __init__(self) -> None:
        self._nodes: list[_PollNode] = []
        self._last_id = 0
        self.current_task: Task | None = None

    def _new_id(self) -> int:
        if self._last_id >= _MAX_ID:
            raise OverflowError("poll id space exhausted")
        self._last_id += 1
        return self._last_id

    def _find(self, poll_id: int) -> _PollNode | None:
        return next((node for node in self._nodes if node.id == poll_id), None)

    def _subpolls(self, task: Task):
        return (node for node in self._nodes if node.task is task and node.id != task.task_id)

    def _terminate_subpolls(self, task: Task) -> None:
        for node in self._subpolls(task):
            node.flags |= PollFlag.DELETE

    def set_poll(self, cb: Callable[..., None], with_handle: bool = False) -> Poll:
        """Register ``cb`` to run on every step; with ``with_handle`` it receives its Poll."""
        handle = Poll(self._new_id(), self)
        fn = functools.partial(cb, handle) if with_handle else cb
        self._nodes.append(_PollNode(handle.id, PollFlag.NONE, fn, self.current_task))
        return handle

    def set_once(self, cb: Callable[[], None]) -> None:
        """Register ``cb`` to run on the next step only."""
        self._nodes.append(_PollNode(self._new_id(), PollFlag.ONCE, cb, self.current_task))

    def start_task(self, task: Task | Callable[[Task], None] | None,
                   name: str | None = None) -> Task | None:
        """Schedule a Task, or a function taking the task, and return the task."""
        if task is None:
            return None
        if not isinstance(task, Task):
            task = _FunctionTask(task)
        if name is not None:
            task.name = name
        main = Poll(self._new_id(), self)
        task.task_id = main.id
        task._scheduler = self
        started = task

        def supervise() -> None:
            if not started._run:
                started._run = True
                started.init()
            elif not any(not node.flags & PollFlag.DELETE for node in self._subpolls(started)):
                main.remove()
                started._run = False

        self._nodes.append(_PollNode(main.id, PollFlag.NONE, supervise, task))
        return task

    def get_task(self, key: TaskKey) -> Task | None:
        """Find a scheduled task by id (int) or by name (str)."""
        for node in self._nodes:
            task = node.task
            if task is None:
                continue
            if (task.name == key) if isinstance(key, str) else (task.task_id == key):
                return task
        return None

    def kill_task(self, task_id: int) -> bool:
        """Remove every poll of the task with ``task_id``; False if none was found."""
        found = False
        for node in self._nodes:
            if node.task is not None and node.task.task_id == task_id:
                node.flags |= PollFlag.DELETE
                found = True
        return found

    def kill_by_name(self, name: str) -> int:
        """Remove the polls of every task called ``name``; return how many were marked."""
        marked = 0
        for node in self._nodes:
            task = node.task
            if task is not None and task.name == name and task.task_id != node.id:
                node.flags |= PollFlag.DELETE
                marked += 1
        return marked

    def entries(self) -> list[PollEntry]:
        """Snapshot of every registered poll, in run order."""
        return [PollEntry(node.id, node.task, node.flags) for node in self._nodes]

    def step(self) -> None:
        """Run one pass over the registered polls."""
        previous = self.current_task
        # Iterating the live list lets polls added during the pass run in it too.
        for node in self._nodes:
            if node.flags & PollFlag.DELETE:
                continue
            self.current_task = node.task
            try:
                node.cb()
            finally:
                self.current_task = previous
            if node.flags & PollFlag.ONCE:
                node.flags |= PollFlag.DELETE
        self._compact()

    def _compact(self) -> None:
        kept: list[_PollNode] = []
        finished: list[Task] = []
        for node in self._nodes:
            if not node.flags & PollFlag.DELETE:
                kept.append(node)
            elif node.task is not None and node.task.task_id == node.id:
                finished.append(node.task)
        self._nodes = kept
        for task in finished:
            task._release()

    def run(self, until: Callable[[], bool] | None = None) -> None:
        """Step until ``until()`` is true, or, without it, until nothing is left."""
        while True:
            if until is not None:
                if until():
                    return
            elif not self._nodes:
                return
            self.step()


_default = Scheduler()


def default_scheduler() -> Scheduler:
    """The process-wide scheduler used by the module-level helpers."""
    return _default


def set_poll(cb: Callable[..., None], with_handle: bool = False) -> Poll:
    return _default.set_poll(cb, with_handle)


def set_once(cb: Callable[[], None]) -> None:
    _default.set_once(cb)


def start_task(task: Task | Callable[[Task], None] | None, name: str | None = None) -> Task | None:
    return _default.start_task(task, name)


def get_task(key: TaskKey) -> Task | None:
    return _default.get_task(key)


def get_current_task() -> Task | None:
    return _default.current_task