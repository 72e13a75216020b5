# zaplite

Small building blocks for structured logging, with no dependencies
outside the standard library.

- `zaplite.core` holds `Level`, `Field` (built with `field` and
  `namespace`), `Entry`, `CheckedEntry` and `Core`, together with
  `NopCore` and `MultiCore`. It also has `new_tee`, a `Logger` and a
  loosely typed `SugaredLogger`.
- `zaplite.write_syncer` lets you wrap plain writers: `add_sync` gives a
  writer a no-op `sync`, `lock` makes writes and syncs thread-safe, and
  `new_multi_write_syncer` duplicates every write and sync.
- `zaplite.observer` keeps entries in memory, so tests can check what was
  logged without parsing any output.
- `zaplite.iowriter.Writer` is a file-like object. Each line written to it
  becomes one log entry.
- `zaplite.grpclog.GrpcLogger` provides the method set that gRPC-style
  logging expects.
- `zaplite.testwriters` offers writers for tests: `Syncer`, `Discarder`,
  `FailWriter`, `ShortWriter` and `Buffer`.

## Installing

```
pip install zaplite
```

## Levels and loggers

Levels go from `DEBUG` through `INFO`, `WARN`, `ERROR`, `DPANIC` and
`PANIC` up to `FATAL`. A level acts as its own enabler:
`Level.WARN.enabled(Level.ERROR)` is `True`.

`Logger(core)` has `debug`, `info`, `warn`, `error`, `fatal` and `log`.
Each takes a message followed by fields. Use `with_fields(...)` to get a
child logger that carries context fields. `check(level, message)` returns a
`CheckedEntry` when some core accepts the entry, and `None` otherwise.

Some levels end the call:

- A `PANIC` entry raises `RuntimeError` after it is written.
- A `FATAL` entry raises `SystemExit`.

If a core fails to write, the error goes to the logger's `error_output`,
which defaults to standard error.

`logger.sugar()` returns a `SugaredLogger`. Its `info(*args)` and similar
methods join the values into the message. Its `infof(template, *args)` and
similar methods format the message with `%`.

## Observing log output

```python
from zaplite.core import Level, Logger, field
from zaplite.observer import new

core, logs = new(Level.INFO)
logger = Logger(core).with_fields(field("request", 42))
logger.info("handled")
logger.debug("dropped, below INFO")

assert len(logs) == 1
entry = logs.all()[0]
assert entry.message == "handled"
assert entry.context_map() == {"request": 42}
```

To narrow the results, use `filter_message`, `filter_message_snippet`,
`filter_field`, `filter_field_key` or `filter_level_exact`, or pass any
predicate to `filter`. Each of these returns a new `ObservedLogs`.

- `all_untimed()` clears the timestamps, so entries compare cleanly.
- `take_all()` returns every entry and empties the collection.

## Sending entries to several cores

```python
from zaplite.core import Level, new_tee
from zaplite.observer import new

debug_core, debug_logs = new(Level.DEBUG)
warn_core, warn_logs = new(Level.WARN)
tee = new_tee(debug_core, warn_core)
```

With no cores, `new_tee()` returns a `NopCore`. With a single core, it
returns that core unchanged.

`write` and `sync` on a tee reach every core, even when one of them fails.
If one core fails, its error is raised. If several fail, their errors are
raised together as a single `MultiError`. A `MultiWriteSyncer` behaves the
same way.

## Logging each line of a stream

```python
from zaplite.core import Level, Logger
from zaplite.iowriter import Writer
from zaplite.observer import new

core, logs = new(Level.INFO)
with Writer(Logger(core), Level.WARN) as out:
    out.write(b"first line\nsecond ")
    out.write(b"line\n")

assert [e.message for e in logs.all()] == ["first line", "second line"]
```

Text that has no newline after it yet stays in the buffer. It is logged
when `sync()` or `close()` is called, or when the `with` block ends.

Empty lines in the middle of the stream are logged as empty messages. A
final trailing newline does not produce an extra entry.

## gRPC-style logging

```python
from zaplite.grpclog import GrpcLogger, with_debug

grpc_logger = GrpcLogger(Logger(core), with_debug())
grpc_logger.infoln("connected", "to", "peer")
grpc_logger.v(1)  # True when WARN is enabled
```

`v(level)` maps gRPC levels to this package's levels:

| gRPC level | Level |
|---|---|
| 0 | INFO |
| 1 | WARN |
| 2 | ERROR |
| 3 | FATAL |

`print`, `printf` and `println` log at INFO by default. With `with_debug()`
they log at DEBUG instead.

## What it does not do

There are no encoders here: no JSON or console output format. There are
also no ready-made cores that write to files or streams, and no sampling or
configuration loading.

To record entries you have two options:

- use the observer core;
- subclass `Core` and override `write`.