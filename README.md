# starkit

A few small building blocks that need only the standard library:

- `starkit.logger` is a logger with levels, handlers, formatters and filters.
- `starkit.timer` is a queue of one-shot callbacks ordered by expiry time.
- `starkit.netio` holds helpers for reading and writing sockets.
- `starkit.select_server` is a `select`-based TCP server.
- `starkit.client` is an interactive client for that server.

Install with the test extra to run the tests:

```
pip install .[test]
pytest
```

## Logger (`starkit.logger`)

```python
from starkit.logger import LogLevel, SimpleFormatter, ConsoleHandler, FileHandler, get_logger

log = get_logger("app")
log.set_level(LogLevel.DEBUG)
log.add_handler(ConsoleHandler(SimpleFormatter()))
log.add_handler(FileHandler("app.log", SimpleFormatter()))

log.info("service started")
log.error("something went wrong")
```

The levels, in order, are `DEBUG`, `INFO`, `WARNING`, `ERROR`, `FATAL` and
`UNKNOWN`. A new `Logger` starts at `INFO`. A message is dropped when its
level is below the logger's level, or when any filter rejects it.

Logger methods:

- `debug`, `info`, `warning`, `error`, `fatal` and `unknown` log a message at that level.
- `log(message, level)` logs a message at any level.
- `should_log(message, level)` reports whether a message would be logged.
- `add_handler`, `add_filter` and `set_level` configure the logger.

`SimpleFormatter` writes lines like this:

```
[2025-06-16 12:00:00][ERROR][app]: "something went wrong"
```

The timestamp is local time. `WARNING` has no label, so its level field is
empty: `[...][][app]: "..."`.

Handlers:

- `ConsoleHandler(formatter, stdout=None, stderr=None)` sends `ERROR`, `FATAL` and
  `UNKNOWN` records to standard error and all other records to standard output.
  You can pass your own streams in place of these.
- `FileHandler(filename, formatter)` appends records to a file. If the file
  cannot be opened, it prints a notice to standard error and drops every
  record. Use `close()` or a `with` block to close it.

To write your own parts, subclass `Formatter` (`format`), `Handler` (`emit`) or
`Filter`. A `Filter` whose `filter(message, level, logger_name)` method returns
`False` drops the record.

`get_logger(name)`, which is the same as
`LoggerManager.get_instance().get_logger(name)`, returns the same `Logger`
every time it is called with the same name.

## Timer (`starkit.timer`)

```python
from starkit.timer import Timer

timer = Timer()
node = timer.add_timer(1000, lambda n: print("fired", n.id))
timer.del_timer(node)          # True if it was still pending
timer.time_to_sleep()          # ms until the next expiry: -1 if empty, 0 if overdue
while timer.check_timer():     # run the earliest due timer, one per call
    pass
len(timer)                     # number of pending timers
```

Timers are ordered by expiry tick, then by id. The ids come from one counter
shared by the whole process (`Timer.gen_id()`). `Timer.get_tick()` is a
monotonic clock in milliseconds. `add_timer` returns a frozen `TimerNode` with
`expire`, `id` and `func` fields, and the callback receives that node.

To run the demo, which schedules three timers, cancels a fourth and waits
until the others have fired:

```
starkit-timer-demo
```

## Socket helpers (`starkit.netio`)

- `read_n(sock, n)` reads `n` bytes. It returns fewer only if the peer closes
  the connection.
- `write_all(sock, data)` sends every byte and returns the count.
- `LineReader(sock, chunk_size=100)` buffers reads:
  - `read_byte()` returns the next byte, or `b""` at end of stream.
  - `read_line(maxlen)` returns at most `maxlen - 1` bytes, stopping after a newline.

## Select server (`starkit.select_server`)

```python
from starkit.select_server import SelectServer

with SelectServer(port=8888) as server:
    server.start()             # serve_forever() in a background daemon thread
    host, port = server.address
    ...
```

The constructor is `SelectServer(port=8888, handler=None, host="", backlog=128)`.

The server works like this:

- It cuts each chunk a client sends at the first NUL byte and passes the rest
  to `handler`.
- It sends the handler's result back to that client. If the result is empty,
  it sends nothing.
- The default handler is `uppercase`, which upper-cases ASCII letters.

`serve_forever()` runs the loop in the calling thread. `close()` stops the loop
and closes the listening socket and every connection.

## Client (`starkit.client`)

`run_client(host, port, first_message, input_stream, output_stream)` works like this:

1. It sends `first_message`, which defaults to `hello,socket`.
2. It prints each reply on its own line.
3. After each reply, it sends the next whitespace-separated word from the input.
4. It stops when the server closes the connection or the input runs out.

It returns the number of replies it received.

By default the command starts a server in the background and talks to it:

```
starkit-client
starkit-client --no-server --host 127.0.0.1 --port 8888
```

With `--no-server`, it connects to a server that is already running. On a
connection error, it prints the error and exits with status 1.

## Limits

- There is no command that runs the server on its own. Run one from Python
  with `SelectServer(...).serve_forever()`.
- Handlers do not rotate or size-limit log files.