# mcuasync

A small cooperative runtime in the style of a firmware main loop: everything
runs from one poll loop, in one thread. On top of it sit promises, coroutines,
an interactive command console, a printf/scanf pair and a few containers.

## Modules

- `mcuasync.poll`: the poll loop. A `Scheduler` keeps poll callbacks
  (`set_poll`, `set_once`) and groups them into tasks (`start_task`,
  `get_task`, `kill_task`, `kill_by_name`). `step()` runs one pass over the
  callbacks; `run(until)` keeps stepping until `until()` is true or, without
  it, until no callback is left. A `Task` runs its `init()` once and stays
  running while any poll it registered is alive; `Task.terminate()` removes
  those polls and `install_deletor` adds cleanup run when the task ends.
  `set_poll(cb, with_handle=True)` passes the callback its `Poll` handle
  (`is_active()`, `remove()`). Module-level `set_poll`, `set_once`,
  `start_task`, `get_task` and `get_current_task` use `default_scheduler()`.
- `mcuasync.promise`: `Promise(init, scheduler)` calls `init(resolve)` at
  once; `then(cb)` calls `cb(result)` from the scheduler after resolution.
  Promises can be awaited inside coroutines. `promise_all(*promises)`
  resolves with a tuple of all results.
- `mcuasync.aio`: coroutines driven by the scheduler. `spawn(coro, scheduler)`
  starts a coroutine at once and returns an `Async` (`done()`, `result`,
  `exception`). Awaitables: `sleep_ms`, `sleep_sec`, `loop_when(cb)` (waits
  until `cb()` returns False), promises and other `Async` objects. Awaiting
  an `Async` from inside a task terminates that task's polls when it resumes.
  `set_once_async` and `start_task_async` start coroutines on the default
  scheduler.
- `mcuasync.console`: `console_start(io, cmd_list, scheduler)` starts a
  `Console` task with line editing (cursor keys, backspace, delete, Ctrl-C),
  a 20-entry history, quoted arguments (`parse_command`) and built-in
  commands `?`, `help`, `ps` (`-p` lists every poll), `kill <id>`,
  `killall <name>` and `pref` (poll frequency). Commands are
  `CommandEntry(name, cmd, help)`; `cmd(env)` receives an `Env` with `args`,
  `io()` (a printf-capable writer with `puts`, `putc`, `flush`), `exit(code)`
  and the command lists. A command may be a coroutine function; it is
  spawned. A user command called `version` runs when the console starts.
- `mcuasync.printf`: `Printf`, a printf engine that emits one character at a
  time through `write_char`, supporting `d i u x X o b f F c s p %` with
  flags, width, precision and length modifiers; `format_printf(fmt, *args)`
  returns the text.
- `mcuasync.scanf`: `Scanf` reading characters from `read_char`, with
  `%d`, `%f` and `%s`; `scan_string(text, fmt)` returns the matched values.
- `mcuasync.log`: `Log(output, tag)`, a `Printf` that writes to
  `output.write` and starts each line with `[tag] `.
- `mcuasync.ringbuf`: `RingBuffer(size)`, a FIFO holding `size - 1` items
  (`push`, `push_many`, `front`, `pop`, `peek`, `clear`).
- `mcuasync.enums`: `enum_str`, `enum_cast`, `enum_values`, `enum_names`,
  `enum_entries`, `enum_count` for `enum.Enum` classes.
- `mcuasync.sequences`: `Array` (fixed length) with `make_array`, and `List`
  (`insert_at`, `erase_at`, `merge`, `splice`, `unique`, ...), both with
  `filter` and `map`.
- `mcuasync.mappings`: sorted `Map` (`put`, `remove`, `keys`, `values`,
  `filter`, `map_values`) and `Set` (`union_with`, `intersection_with`,
  `difference_with`, `is_subset_of`, ...).

## Install

```
pip install .
```

## Examples

A coroutine on the poll loop:

```python
from mcuasync.poll import Scheduler
from mcuasync.aio import spawn, sleep_ms
from mcuasync.printf import format_printf

sched = Scheduler()

async def blink():
    for i in range(3):
        print(format_printf("tick %02d", i))
        await sleep_ms(10)

spawn(blink(), sched)
sched.run(until=lambda: not sched.entries())
```

A console over an object with `getc()` (a character code, or -1 when
nothing is waiting) and `write(text)`:

```python
from collections import deque
from mcuasync.console import CommandEntry, console_start
from mcuasync.poll import Scheduler

class Terminal:
    def __init__(self):
        self.rx = deque()
    def getc(self):
        return self.rx.popleft() if self.rx else -1
    def write(self, text):
        print(text, end="")

def cmd_hello(env):
    env.io().printf("hello %s\n", env.args[1] if len(env.args) > 1 else "world")
    env.exit(0)

sched = Scheduler()
term = Terminal()
console_start(term, [CommandEntry("hello", cmd_hello, "say hello")], sched)
term.rx.extend(b"hello there\r")
for _ in range(20):
    sched.step()
```

## What it does not do

There is no serial-port or UART driver and no command-line program: the
console reads and writes only through the `io` object you give it, and you
drive the loop yourself with `Scheduler.step()` or `Scheduler.run()`. The
console has no command for reporting free memory.

## Running the tests

```
pip install .[test]
pytest
```