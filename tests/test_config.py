import json

from healthdash.core.timer import DEFAULT_CONFIG, TimerConfig
from healthdash.data.config import TICK_INTERVAL_MS, AppConfig


def test_missing_file_gives_defaults(tmp_path) -> None:
    config = AppConfig.load(tmp_path / "config.json")
    assert config == AppConfig()
    assert config.default_timer_config() == DEFAULT_CONFIG


def test_save_and_load_round_trip(tmp_path) -> None:
    path = tmp_path / "sub" / "config.json"
    AppConfig(log_level="debug", default_work_minutes=50, default_break_minutes=10, default_auto_repeat=True).save(path)

    loaded = AppConfig.load(path)

    assert loaded.log_level == "DEBUG"
    assert loaded.default_timer_config() == TimerConfig(work_minutes=50, break_minutes=10, auto_repeat=True)


def test_invalid_values_are_normalized(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "log_level": "LOUD",
                "tick_interval_ms": -5,
                "default_work_minutes": 90,
                "default_break_minutes": 0,
                "unexpected": 1,
            }
        )
    )

    loaded = AppConfig.load(path)

    assert loaded.log_level == "INFO"
    assert loaded.tick_interval_ms == TICK_INTERVAL_MS
    assert loaded.default_work_minutes == DEFAULT_CONFIG.work_minutes
    assert loaded.default_break_minutes == DEFAULT_CONFIG.break_minutes


def test_corrupt_file_gives_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert AppConfig.load(path) == AppConfig()
    path.write_text("[1, 2]")
    assert AppConfig.load(path) == AppConfig()
