"""Interactive line-editing command console driven by the poll scheduler."""

from __future__ import annotations

import inspect
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Sequence

from mcuasync.aio import spawn
from mcuasync.poll import Scheduler, Task, default_scheduler
from mcuasync.printf import Printf

_CTRL_C = 0x03
_BACKSPACE = 0x08
_ESC = 0x1B
_DEL = 0x7F
_SPACE = frozenset(" \t\n\v\f\r")


class _ConsoleIO(Protocol):
    def getc(self) -> int: ...

    def write(self, text: str) -> object: ...


class _Terminal(Printf):
    """Character stream around the console's I/O object."""

    def __init__(self, io: _ConsoleIO) -> None:
        self._io = io
        self.lf2crlf = False

    def write_char(self, c: str) -> None:
        self._io.write("\r\n" if c == "\n" and self.lf2crlf else c)

    def putc(self, c: str) -> None:
        self.write_char(c)

    def puts(self, text: str) -> None:
        for ch in text:
            self.write_char(ch)

    def flush(self) -> None:
        flush = getattr(self._io, "flush", None)
        if flush is not None:
            flush()

    def getc(self) -> int:
        return self._io.getc()

    def clear_rx(self) -> None:
        while self._io.getc() != -1:
            pass


CommandFunc = Optional[Callable[["Env"], Any]]


@dataclass(frozen=True)
class CommandEntry:
    """A named console command with its one-line help text."""

    name: str
    cmd: CommandFunc
    help: str = ""


@dataclass
class Env:
    """What a running command sees: its arguments and its console."""

    args: list[str]
    console: Console

    def io(self) -> _Terminal:
        return self.console._terminal

    def user_cmd_list(self) -> tuple[CommandEntry, ...]:
        return self.console._user_cmd_list

    def builtin_cmd_list(self) -> tuple[CommandEntry, ...]:
        return BUILTIN_COMMANDS

    def exit(self, status_code: int) -> None:
        """Record the status and stop the running command."""
        self.console.status_code = status_code
        task = self.console._cmd_task
        if task is not None:
            task.terminate()

    def _scheduler(self) -> Scheduler:
        return self.console._sched()


def _invoke(cmd: CommandFunc, env: Env) -> None:
    if cmd is None:
        env.exit(1)
        return
    result = cmd(env)
    if inspect.iscoroutine(result):
        spawn(result, env._scheduler())


def parse_command(cmd: str) -> list[str]:
    """Split a command line into arguments, honouring single and double quotes."""
    args: list[str] = []
    in_quotes = False
    quote_char = ""
    start: int | None = None

    def push(begin: int | None, end: int) -> None:
        if begin is not None and end > begin:
            args.append(cmd[begin:end])

    for i, c in enumerate(cmd):
        if not in_quotes:
            if c in "\"'":
                in_quotes = True
                quote_char = c
                if start is None:
                    start = i + 1
            elif c in _SPACE:
                push(start, i)
                start = None
            elif start is None:
                start = i
        elif c == quote_char:
            in_quotes = False
            push(start, i)
            start = None
    if start is not None:
        push(start, len(cmd))
    return args


def find_command(name: str, entries: Sequence[CommandEntry]) -> CommandEntry | None:
    """The first entry called ``name``, or None."""
    return next((entry for entry in entries if entry.name == name), None)


def cmd_help(env: Env) -> None:
    io = env.io()
    io.puts("Available commands:\n")
    for entry in (*env.builtin_cmd_list(), *env.user_cmd_list()):
        io.printf("  %-12s %s\n", entry.name, entry.help)
    io.flush()
    env.exit(0)


@dataclass
class _TaskInfo:
    task_id: int
    polls: int
    flags: int
    name: str


def cmd_ps(env: Env) -> None:
    io = env.io()
    args = env.args
    if len(args) > 1 and args[1] in ("-h", "--help"):
        io.printf("Usage: ps [-p]\n")
        io.printf("Options:\n")
        io.printf("  -p: Print poll list\n")
        return

    entries = env._scheduler().entries()
    infos: dict[int, _TaskInfo] = {}
    for entry in entries:
        task = entry.task
        if task is None:
            continue
        if entry.is_main:
            if task.task_id not in infos:
                infos[task.task_id] = _TaskInfo(task.task_id, 1, int(entry.flags), task.name)
        else:
            info = infos.get(task.task_id)
            if info is not None:
                info.polls += 1
                info.flags |= int(entry.flags)

    io.printf("%8s %6s %6s %s\n", "ThreadId", "Flags", "Polls", "NAME")
    for info in infos.values():
        io.printf("%llu %6u %6u %s\n", info.task_id, info.flags, info.polls, info.name)

    if len(args) > 1 and args[1] == "-p":
        io.printf("Poll List:\n")
        for entry in entries:
            task_id = entry.task.task_id if entry.task is not None else 0
            name = entry.task.name if entry.task is not None else ""
            io.printf("ThreadId: %llu, PollId: %llu, Flags: %u, Name: %s\n",
                      task_id, entry.poll_id, int(entry.flags), name)
    io.flush()
    env.exit(0)


def cmd_kill(env: Env) -> None:
    io = env.io()
    if len(env.args) < 2:
        io.printf("Usage: kill <thread_id>\n")
        return
    try:
        task_id = int(env.args[1])
    except ValueError:
        task_id = 0
    if env._scheduler().kill_task(task_id):
        io.printf("Thread %llu killed.\n", task_id)
    else:
        io.printf("Thread %llu not found.\n", task_id)
    io.flush()
    env.exit(0)


def cmd_killall(env: Env) -> None:
    if len(env.args) < 2:
        env.io().printf("Usage: killall <thread_name>\n")
        return
    env._scheduler().kill_by_name(env.args[1])


def _cmd_pref(env: Env) -> None:
    count = 0
    last = time.monotonic()

    def tick() -> None:
        nonlocal count, last
        count += 1
        now = time.monotonic()
        if now - last >= 1.0:
            env.io().printf("poll freq: %d times/sec\n", count)
            count = 0
            last = now

    env._scheduler().set_poll(tick)


BUILTIN_COMMANDS: tuple[CommandEntry, ...] = (
    CommandEntry("?", cmd_help, "Show help"),
    CommandEntry("help", cmd_help, "Show help"),
    CommandEntry("ps", cmd_ps, "Show thread status"),
    CommandEntry("kill", cmd_kill, "Kill thread"),
    CommandEntry("killall", cmd_killall, "Kill all threads"),
    CommandEntry("pref", _cmd_pref, "Show poll frequency"),
)


class Console(Task):
    """A task that reads command lines, edits them in place and runs commands.

    ``io`` needs ``getc()`` returning a character code or -1 when nothing is
    waiting, ``write(text)``, and optionally ``flush()``.
    """

    PROMPT = "> "
    ISSUE = "Wellcome Console!\n"
    MAX_HISTORY = 20

    def __init__(self, io: _ConsoleIO, cmd_list: Sequence[CommandEntry] = ()) -> None:
        super().__init__()
        self._terminal = _Terminal(io)
        self._terminal.lf2crlf = True
        self._user_cmd_list = tuple(cmd_list)
        self._cmd_task: Task | None = None
        self._args: list[str] = []
        self.cmdline = ""
        self.status_code = 0
        self.history: list[str] = []
        self._history_index = -1
        self._cursor = 0
        self._escape_state = 0
        self._escape_len = 0

    def _sched(self) -> Scheduler:
        return self._scheduler if self._scheduler is not None else default_scheduler()

    def _reset_line(self) -> None:
        self.cmdline = ""
        self._cursor = 0
        self._escape_state = 0
        self._escape_len = 0

    def _prompt(self) -> None:
        self._terminal.puts(self.PROMPT)
        self._terminal.flush()

    def init(self) -> None:
        term = self._terminal
        term.clear_rx()
        version = find_command("version", self._user_cmd_list)
        if version is not None:
            _invoke(version.cmd, Env(["version"], self))
        term.puts(self.ISSUE)
        self._prompt()
        self._cmd_task = None
        self._reset_line()
        self._sched().set_poll(self._poll)

    def _poll(self) -> None:
        term = self._terminal
        if self._cmd_task is not None:
            if self._cmd_task.is_running():
                # While a command runs only Ctrl-C is taken from the input.
                if term.getc() == _CTRL_C:
                    self._cmd_task.terminate()
            else:
                self._cmd_task = None
                self._reset_line()
                term.clear_rx()
                self._prompt()
            return

        c = term.getc()
        if c == -1:
            return
        if self._escape_state > 0:
            self._handle_escape(c)
            return
        if c == _CTRL_C:
            term.puts("^C\n")
            self._prompt()
            self.cmdline = ""
            self._cursor = 0
            self._history_index = -1
        elif c == _ESC:
            self._escape_state = 1
            self._escape_len = 0
        elif c in (_BACKSPACE, _DEL):
            self._delete(backward=True)
        elif c in (0x0D, 0x0A):
            self._submit()
        else:
            self._insert_char(c)

    def _submit(self) -> None:
        term = self._terminal
        term.puts("\n")
        if not self.cmdline:
            self._prompt()
            return
        term.flush()
        self._add_to_history(self.cmdline)
        self._history_index = -1
        self._args = parse_command(self.cmdline.strip())
        if self._args:
            args = list(self._args)
            self._cmd_task = self._sched().start_task(
                lambda task: self._run_command(args), name=args[0])
        else:
            self._prompt()

    def _run_command(self, args: list[str]) -> None:
        env = Env(args, self)
        entry = find_command(args[0], BUILTIN_COMMANDS)
        if entry is not None:
            _invoke(entry.cmd, env)
            return
        entry = find_command(args[0], self._user_cmd_list)
        if entry is not None:
            self.status_code = 0
            _invoke(entry.cmd, env)
        else:
            self.status_code = 1
            self._terminal.puts("Command not found.\n")
            self._terminal.flush()

    def _add_to_history(self, cmd: str) -> None:
        if not cmd:
            return
        if self.history and self.history[-1] == cmd:
            return
        self.history.append(cmd)
        if len(self.history) > self.MAX_HISTORY:
            del self.history[0]

    def _navigate_history(self, direction: int) -> None:
        if not self.history:
            return
        if self._history_index == -1:
            self._history_index = len(self.history)
        if direction > 0:
            if self._history_index > 0:
                self._history_index -= 1
                self.cmdline = self.history[self._history_index]
        elif direction < 0:
            if self._history_index < len(self.history) - 1:
                self._history_index += 1
                self.cmdline = self.history[self._history_index]
            else:
                self._history_index = -1
                self.cmdline = ""
        self._cursor = len(self.cmdline)
        self._redisplay()

    def _redisplay(self) -> None:
        term = self._terminal
        term.puts("\r")
        width = len(self.PROMPT)
        if 0 <= self._history_index < len(self.history):
            width += len(self.history[self._history_index])
        else:
            width += len(self.cmdline)
        term.puts(" " * (width + 5))
        term.puts("\r")
        term.puts(self.PROMPT)
        term.puts(self.cmdline)
        if self._cursor < len(self.cmdline):
            term.puts("\b" * (len(self.cmdline) - self._cursor))
        term.flush()

    def _move_cursor(self, direction: int) -> None:
        term = self._terminal
        if direction > 0:
            if self._cursor < len(self.cmdline):
                self._cursor += 1
                term.putc(self.cmdline[self._cursor - 1])
                term.flush()
        elif direction < 0:
            if self._cursor > 0:
                self._cursor -= 1
                term.puts("\b")
                term.flush()

    def _handle_escape(self, code: int) -> None:
        c = chr(code & 0xFF)
        self._escape_len += 1
        if self._escape_state == 1:
            self._escape_state = 2 if c == "[" else 0
            return
        if self._escape_state == 2:
            if c == "A":
                self._escape_state = 0
                self._navigate_history(1)
            elif c == "B":
                self._escape_state = 0
                self._navigate_history(-1)
            elif c == "C":
                self._escape_state = 0
                self._move_cursor(1)
            elif c == "D":
                self._escape_state = 0
                self._move_cursor(-1)
            elif c == "3":
                self._escape_state = 3
            elif "0" <= c <= "9":
                return
            else:
                self._escape_state = 0
        if self._escape_state == 3 and c == "~":
            self._escape_state = 0
            self._delete(backward=False)
        if self._escape_len >= 8:
            self._escape_state = 0

    def _insert_char(self, code: int) -> None:
        if not 32 <= code < 127:
            return
        term = self._terminal
        ch = chr(code)
        if self._cursor == len(self.cmdline):
            term.putc(ch)
            term.flush()
            self.cmdline += ch
        else:
            self.cmdline = self.cmdline[:self._cursor] + ch + self.cmdline[self._cursor:]
            tail = self.cmdline[self._cursor + 1:]
            term.putc(ch)
            term.puts(tail)
            term.puts("\b" * len(tail))
            term.flush()
        self._cursor += 1

    def _delete(self, backward: bool) -> None:
        term = self._terminal
        if backward:
            if self._cursor == 0 or not self.cmdline:
                return
            self.cmdline = self.cmdline[:self._cursor - 1] + self.cmdline[self._cursor:]
            self._cursor -= 1
            term.puts("\b")
        else:
            if self._cursor >= len(self.cmdline):
                return
            self.cmdline = self.cmdline[:self._cursor] + self.cmdline[self._cursor + 1:]
        tail = self.cmdline[self._cursor:]
        term.puts(tail)
        term.putc(" ")
        term.puts("\b" * (len(tail) + 1))
        term.flush()


def console_start(io: _ConsoleIO, cmd_list: Sequence[CommandEntry] = (),
                  scheduler: Scheduler | None = None) -> Console:
    """Create a console on ``io`` and start it as a task on ``scheduler``."""
    sched = scheduler if scheduler is not None else default_scheduler()
    console = Console(io, cmd_list)
    sched.start_task(console)
    return console