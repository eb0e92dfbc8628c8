import json
import logging

from conftest import BrokenStore, DictStore, QuotaStore
from healthdash.core.timer import TimerConfig, TimerPhase
from healthdash.core.timer_store import CONFIG_KEY, END_TIME_KEY, PHASE_KEY, TOTAL_SECONDS_KEY, TimerStore
from healthdash.data.storage import Storage


def test_save_and_load_live_fields() -> None:
    store = TimerStore(DictStore())
    store.save_live(1_700_000_060_000, TimerPhase.BREAK, 300)

    assert store.load_end_time() == 1_700_000_060_000
    assert store.load_phase() == TimerPhase.BREAK
    assert store.load_total_seconds() == 300


def test_config_round_trip_as_json() -> None:
    backend = DictStore()
    store = TimerStore(backend)
    config = TimerConfig(work_minutes=50, break_minutes=10, auto_repeat=True)

    store.save_config(config)

    assert json.loads(backend.data[CONFIG_KEY]) == {"work_minutes": 50, "break_minutes": 10, "auto_repeat": True}
    assert store.load_config() == config


def test_clear_end_time_keeps_phase_and_total() -> None:
    backend = DictStore()
    store = TimerStore(backend)
    store.save_live(1000, TimerPhase.WORK, 1500)

    store.clear_end_time()

    assert END_TIME_KEY not in backend.data
    assert backend.data[PHASE_KEY] == "work"
    assert backend.data[TOTAL_SECONDS_KEY] == "1500"


def test_clear_live_keeps_config() -> None:
    backend = DictStore()
    store = TimerStore(backend)
    store.save_config(TimerConfig())
    store.save_live(1000, TimerPhase.WORK, 1500)

    store.clear_live()

    assert set(backend.data) == {CONFIG_KEY}


def test_out_of_range_config_is_ignored() -> None:
    backend = DictStore()
    backend.data[CONFIG_KEY] = json.dumps({"work_minutes": 90, "break_minutes": 5, "auto_repeat": False})
    store = TimerStore(backend)

    assert store.load_config() is None

    backend.data[CONFIG_KEY] = json.dumps({"work_minutes": 25, "break_minutes": 5, "auto_repeat": "yes"})
    assert store.load_config() is None

    backend.data[CONFIG_KEY] = json.dumps([25, 5, False])
    assert store.load_config() is None


def test_missing_backend_is_a_no_op() -> None:
    store = TimerStore(None)
    store.save_config(TimerConfig())
    store.save_live(1000, TimerPhase.WORK, 1500)
    store.clear_live()

    assert store.load_config() is None
    assert store.load_end_time() is None


def test_failing_backend_degrades_with_warning(caplog) -> None:
    store = TimerStore(BrokenStore())

    with caplog.at_level(logging.WARNING, logger="healthdash.core.timer_store"):
        store.save_live(1000, TimerPhase.WORK, 1500)
        store.clear_end_time()
        assert store.load_end_time() is None

    assert "write of pomodoro_end_time failed" in caplog.text
    assert "remove of pomodoro_end_time failed" in caplog.text


def test_sqlite_storage_as_backend(tmp_path) -> None:
    storage = Storage(tmp_path / "app.db")
    storage.init_db()
    store = TimerStore(storage)

    store.save_live(1_700_000_000_000, TimerPhase.WORK, 1500)
    again = TimerStore(Storage(tmp_path / "app.db"))

    assert again.load_end_time() == 1_700_000_000_000
    assert again.load_phase() == TimerPhase.WORK


def test_any_backend_error_degrades_with_warning(caplog) -> None:
    backend = QuotaStore()
    backend.data[PHASE_KEY] = "break"
    store = TimerStore(backend)

    with caplog.at_level(logging.WARNING, logger="healthdash.core.timer_store"):
        store.save_config(TimerConfig())
        store.save_live(1000, TimerPhase.WORK, 1500)
        store.clear_live()

    assert store.load_phase() == TimerPhase.BREAK
    assert "write of pomodoro_config failed: quota exceeded" in caplog.text
    assert "remove of pomodoro_end_time failed: quota exceeded" in caplog.text
