import pytest
from pydantic import ValidationError

from arcade_checkers import config as config_module
from arcade_checkers.config import (
    AISettings,
    CheckersConfig,
    LoggingSettings,
    TimingSettings,
    get_config,
    load_config_from_file,
    reset_config,
)
from arcade_checkers.types import Difficulty


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def test_defaults():
    cfg = CheckersConfig()
    assert cfg.timing.ai_move_delay_ms == 800
    assert cfg.timing.message_delay_ms == 1000
    assert cfg.timing.hint_duration_ms == 3000
    assert cfg.ai.default_difficulty is Difficulty.MEDIUM
    assert cfg.ai.hard_depth == 3
    assert cfg.ai.seed is None
    assert cfg.logging.log_level == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setenv("CHECKERS_AI_DELAY_MS", "10")
    monkeypatch.setenv("CHECKERS_HINT_MS", "50")
    monkeypatch.setenv("CHECKERS_DIFFICULTY", "HARD")
    monkeypatch.setenv("CHECKERS_HARD_DEPTH", "2")
    monkeypatch.setenv("CHECKERS_SEED", "99")
    monkeypatch.setenv("CHECKERS_LOG_LEVEL", "debug")
    cfg = CheckersConfig.from_env()
    assert cfg.timing.ai_move_delay_ms == 10
    assert cfg.timing.hint_duration_ms == 50
    assert cfg.timing.message_delay_ms == 1000
    assert cfg.ai.default_difficulty is Difficulty.HARD
    assert cfg.ai.hard_depth == 2
    assert cfg.ai.seed == 99
    assert cfg.logging.log_level == "DEBUG"


def test_validation_errors():
    with pytest.raises(ValidationError):
        TimingSettings(ai_move_delay_ms=-1)
    with pytest.raises(ValidationError):
        AISettings(hard_depth=0)
    with pytest.raises(ValidationError):
        AISettings(default_difficulty="nightmare")
    with pytest.raises(ValidationError):
        LoggingSettings(log_level="LOUD")


def test_save_and_load(tmp_path):
    path = str(tmp_path / "checkers.json")
    cfg = CheckersConfig()
    cfg.update_from_dict({"ai": {"seed": 5, "default_difficulty": "easy"}})
    cfg.save_to_file(path)

    loaded = load_config_from_file(path)
    assert loaded.ai.seed == 5
    assert loaded.ai.default_difficulty is Difficulty.EASY
    assert loaded.config_file == path
    assert get_config() is loaded


def test_update_from_dict_revalidates():
    cfg = CheckersConfig()
    cfg.update_from_dict({"timing": {"hint_duration_ms": 100}})
    assert cfg.timing.hint_duration_ms == 100
    assert cfg.timing.ai_move_delay_ms == 800
    with pytest.raises(ValidationError):
        cfg.update_from_dict({"timing": {"hint_duration_ms": -5}})


def test_to_dict_is_json_ready():
    data = CheckersConfig().to_dict()
    assert data["ai"]["default_difficulty"] == "medium"
    assert set(data) >= {"timing", "ai", "logging", "version"}


def test_get_config_is_cached():
    assert get_config() is get_config()
    assert isinstance(config_module.get_config(), CheckersConfig)
