# layerlog

Small, composable logging building blocks with no third-party dependencies.

| Module | What it offers |
| --- | --- |
| `layerlog.printf` | `sprintf` and `snprintf`: C-style formatting |
| `layerlog.fmtspec` | `tokenize` and `parse_spec`, yielding `Literal` and `ConversionSpec` |
| `layerlog.stringutil` | `vform`, `trim`, `split` |
| `layerlog.event` | `LoggingEvent`, the abstract `Layout`, and `MessageLayout` |
| `layerlog.filter` | chained `Filter`s returning a `Decision` |
| `layerlog.ndc` | per-thread nested diagnostic contexts |
| `layerlog.threadlocal` | `ThreadLocalDataHolder`, `get_thread_id` |
| `layerlog.timestamp` | `TimeStamp`, `start_time` |
| `layerlog.evaluators` | `LevelEvaluator`, `TriggeringEventEvaluatorFactory`, `create_level_evaluator` |
| `layerlog.appenders` | the `Appender` registry, `StringQueueAppender`, `AbortAppender` |
| `layerlog.network_appenders` | `SyslogAppender`, `SmtpAppender`, `to_syslog_priority`, `shutdown_sender` |

## Install

```
pip install layerlog
```

## Formatting

```python
from layerlog.printf import sprintf, snprintf

sprintf("%-5s|%05d|%#x", "ab", 42, 255)   # 'ab   |00042|0xff'
snprintf(4, "%s", "abcdef")               # ('abc', 6)
```

Supported conversions are `s c d i u o x X p` and `%%`, with the synonyms
`D`, `U` and `O`; flags `-`, `+`, space, `0` and `#`; and `*` for width and
precision. Integers wrap to the C type chosen by the length modifier (32-bit
by default, 16-bit for `h`, 64-bit for `l` and `ll`). A `None` string argument
prints as nothing and a `None` pointer as `(nil)`. An unknown conversion keeps
only its conversion character. A missing or wrongly typed argument raises
`TypeError`; surplus arguments are ignored.

`snprintf(size, fmt, *args)` returns the text cut to at most `size - 1`
characters together with the length the full result would have had.

## String helpers

```python
from layerlog.stringutil import trim, split, vform

trim("  hello\t\n")          # 'hello'
split("a.b.c", ".", 2)       # ['a', 'b.c']
vform("%d-%s", [7, "x"])     # '7-x'
```

## Events, layouts and filters

`LoggingEvent(category_name, message, ndc, priority)` records the current
thread's name and the time on creation. Lower priority values are more
severe. Subclass `Layout` and implement `format(event)`; `MessageLayout`
returns the message unchanged.

Subclass `Filter` and implement `_decide(event)`. `decide(event)` walks the
chain built with `append_chained_filter` until a filter answers
`Decision.DENY` or `Decision.ACCEPT`, and answers `Decision.NEUTRAL` if none
does.

## Appenders

```python
from layerlog.appenders import Appender, StringQueueAppender
from layerlog.event import LoggingEvent

appender = StringQueueAppender("memory")
appender.do_append(LoggingEvent("app", "started", "", 600))
appender.queue_size()        # 1
appender.pop_message()       # 'started'; '' once the queue is empty
Appender.get_appender("memory") is appender   # True
```

Every appender registers itself by name. `do_append` passes an event on only
if its priority is at or below the appender's `threshold` (when one is set)
and its `filter` chain does not deny it. `Appender.reopen_all()` and
`Appender.close_all()` act on every registered appender. `AbortAppender`
aborts the process on the first event it receives.

`SyslogAppender(name, syslog_name, facility=0, layout=None, backend=None)`
writes to syslog through the standard `syslog` module, or through any object
offering `openlog`, `syslog` and `closelog`. `to_syslog_priority` maps
priority values 0..700 onto syslog levels 0..7.

`SmtpAppender(name, host, from_, to, subject, port=25)` queues each event's
message for a shared background thread that delivers it over a plain SMTP
dialogue; delivery errors are printed. `shutdown_sender()` delivers what is
still queued and stops the thread; it also runs at interpreter exit.

## Triggering evaluators

```python
from layerlog.evaluators import TriggeringEventEvaluatorFactory

factory = TriggeringEventEvaluatorFactory.get_instance()
evaluator = factory.create("level", {"level": 300})
```

A `LevelEvaluator` triggers on events whose priority is at or below its
level. Registering a creator name twice, or creating an unknown type, raises
`ValueError`.

## Nested diagnostic context

```python
from layerlog import ndc

ndc.push("request-1")
ndc.push("db")
ndc.get()      # 'request-1 db'
ndc.pop()      # 'db'
ndc.depth()    # 1
```

Each thread has its own stack; `clone_stack` and `inherit` hand one to
another thread.

## What is not included

There are no categories or category hierarchy, no configuration-file
loading, no file, console or remote-syslog appenders and no pattern layout.
Events are built and passed to appenders directly.