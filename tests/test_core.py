import io

import pytest

from zaplite.core import (
    CheckedEntry,
    Core,
    Entry,
    Field,
    Level,
    Logger,
    MultiCore,
    MultiError,
    NopCore,
    add_core,
    field,
    namespace,
    new_tee,
    sprint,
    sprintln,
)


class RecordingCore(Core):
    def __init__(self, enabler, records=None, context=()):
        super().__init__(enabler)
        self.records = [] if records is None else records
        self.context = tuple(context)

    def with_fields(self, fields):
        return RecordingCore(self.enabler, self.records, self.context + tuple(fields))

    def write(self, entry, fields):
        self.records.append((entry, [*self.context, *(fields or ())]))


class FailingCore(Core):
    def __init__(self, error):
        super().__init__(Level.DEBUG)
        self.error = error

    def write(self, entry, fields):
        raise self.error

    def sync(self):
        raise self.error


def make_tee():
    debug_core = RecordingCore(Level.DEBUG)
    warn_core = RecordingCore(Level.WARN)
    return new_tee(debug_core, warn_core), debug_core, warn_core


def test_tee_one_input_returned_unchanged():
    core = RecordingCore(Level.DEBUG)
    assert new_tee(core) is core


def test_tee_no_input_is_nop():
    tee = new_tee()
    assert tee == NopCore()
    assert tee.enabled(Level.FATAL) is False


def test_tee_check():
    tee, debug_core, warn_core = make_tee()
    entries = [
        Entry(Level.DEBUG, "log-at-debug"),
        Entry(Level.INFO, "log-at-info"),
        Entry(Level.WARN, "log-at-warn"),
        Entry(Level.ERROR, "log-at-error"),
    ]
    for entry in entries:
        checked = tee.check(entry, None)
        if checked is not None:
            checked.write()
    assert debug_core.records == [(e, []) for e in entries]
    assert warn_core.records == [(e, []) for e in entries[2:]]


def test_tee_write_ignores_levels():
    tee, debug_core, warn_core = make_tee()
    entries = [Entry(Level.DEBUG, "log-at-debug"), Entry(Level.WARN, "log-at-warn")]
    for entry in entries:
        tee.write(entry, None)
    for core in (debug_core, warn_core):
        assert core.records == [(e, []) for e in entries]


def test_tee_with_fields():
    tee, debug_core, warn_core = make_tee()
    f = field("k", 42)
    tee = tee.with_fields([f])
    entry = Entry(Level.WARN, "log-at-warn")
    checked = tee.check(entry, None)
    checked.write()
    for core in (debug_core, warn_core):
        assert core.records == [(entry, [f])]


@pytest.mark.parametrize(
    "level, enabled",
    [
        (Level.DEBUG, False),
        (Level.INFO, True),
        (Level.WARN, True),
        (Level.ERROR, True),
        (Level.DPANIC, True),
        (Level.PANIC, True),
        (Level.FATAL, True),
    ],
)
def test_tee_enabled(level, enabled):
    tee = new_tee(RecordingCore(Level.INFO), RecordingCore(Level.WARN))
    assert tee.enabled(level) is enabled


def test_tee_sync():
    tee = new_tee(RecordingCore(Level.INFO), RecordingCore(Level.WARN))
    assert tee.sync() is None and isinstance(tee, MultiCore)

    error = OSError("failed")
    tee = new_tee(tee, FailingCore(error))
    with pytest.raises(OSError) as info:
        tee.sync()
    assert info.value is error


def test_tee_write_combines_errors():
    tee = new_tee(FailingCore(ValueError("a")), FailingCore(ValueError("b")))
    with pytest.raises(MultiError) as info:
        tee.write(Entry(Level.INFO, "x"), [])
    assert [str(e) for e in info.value.errors] == ["a", "b"]
    assert str(info.value) == "a; b"


def test_multi_error_flattens():
    inner = MultiError([ValueError("a"), ValueError("b")])
    outer = MultiError([inner, ValueError("c")])
    assert [str(e) for e in outer.errors] == ["a", "b", "c"]


def test_add_core_creates_checked_entry():
    entry = Entry(Level.INFO, "m")
    core = RecordingCore(Level.DEBUG)
    checked = add_core(None, entry, core)
    assert checked.entry == entry
    assert checked.cores == [core]
    again = add_core(checked, entry, core)
    assert again is checked and len(checked.cores) == 2


def test_checked_entry_write_raises_without_error_output():
    checked = CheckedEntry(Entry(Level.INFO, "m"), [FailingCore(OSError("failed"))])
    with pytest.raises(OSError, match="failed"):
        checked.write()


def test_level_names_and_enabling():
    assert str(Level.DPANIC) == "dpanic"
    assert f"{Level.WARN}" == "warn"
    assert Level.WARN.enabled(Level.ERROR) is True
    assert Level.WARN.enabled(Level.INFO) is False


def test_field_constructors():
    assert field("k", 1) == Field("k", 1)
    ns = namespace("ns")
    assert ns.key == "ns" and ns.is_namespace is True


def test_sprint_and_sprintln():
    args = ("s1", "s2", 1, 2, 3, "s3", 4, "s5", 6)
    assert sprint(*args) == "s1s21 2 3s34s56"
    assert sprintln(*args) == "s1 s2 1 2 3 s3 4 s5 6"
    assert sprintln() == ""
    assert sprintln("foo", "bar") == "foo bar"
    assert sprint(True, None) == "true <nil>"


def test_logger_filters_levels_and_keeps_fields():
    core = RecordingCore(Level.INFO)
    log = Logger(core)
    log.debug("d")
    log.info("i", field("k", 1))
    log.warn("w")
    log.error("e")
    assert [(e.level, e.message) for e, _ in core.records] == [
        (Level.INFO, "i"),
        (Level.WARN, "w"),
        (Level.ERROR, "e"),
    ]
    assert core.records[0][1] == [Field("k", 1)]
    assert core.records[0][0].time.year >= 2000


def test_logger_with_fields():
    core = RecordingCore(Level.DEBUG)
    log = Logger(core).with_fields(field("a", 1))
    log.info("m", field("b", 2))
    assert core.records[0][1] == [Field("a", 1), Field("b", 2)]


def test_logger_check_disabled_returns_none():
    log = Logger(RecordingCore(Level.WARN))
    assert log.check(Level.INFO, "m") is None


def test_logger_fatal_logs_then_exits():
    core = RecordingCore(Level.DEBUG)
    with pytest.raises(SystemExit):
        Logger(core).fatal("boom")
    assert [e.message for e, _ in core.records] == ["boom"]


def test_logger_fatal_exits_even_when_disabled():
    with pytest.raises(SystemExit):
        Logger(NopCore()).fatal("boom")


def test_logger_panic_level_raises():
    core = RecordingCore(Level.DEBUG)
    with pytest.raises(RuntimeError, match="oops"):
        Logger(core).log(Level.PANIC, "oops")
    assert core.records[0][0].level == Level.PANIC


def test_logger_write_errors_go_to_error_output():
    out = io.StringIO()
    Logger(FailingCore(OSError("failed")), error_output=out).info("x")
    assert "write error: failed" in out.getvalue()


def test_sugared_logger_messages():
    core = RecordingCore(Level.INFO)
    sugar = Logger(core).sugar()
    sugar.info("hello")
    sugar.info("s1", "s2", 1, 2, 3, "s3", 4, "s5", 6)
    sugar.infof("%s world", "hello")
    sugar.warn()
    sugar.errorf("100%")
    sugar.debug("hidden")
    sugar.debugf("%s", "hidden")
    assert [(e.level, e.message) for e, _ in core.records] == [
        (Level.INFO, "hello"),
        (Level.INFO, "s1s21 2 3s34s56"),
        (Level.INFO, "hello world"),
        (Level.WARN, ""),
        (Level.ERROR, "100%"),
    ]


def test_sugared_fatal_exits():
    core = RecordingCore(Level.DEBUG)
    with pytest.raises(SystemExit):
        Logger(core).sugar().fatalf("%d down", 3)
    assert core.records[0][0].message == "3 down"