"""Tests for gate configuration loading."""

import pytest

from parental_gate.config import (
    GateConfig,
    build_coordinator,
    build_pool,
    load_config,
)
from parental_gate.core.challenges import DEFAULT_CHALLENGES
from parental_gate.core.scheduler import ManualScheduler
from parental_gate.errors import GateConfigError

POOL_YAML = (
    "challenges:\n"
    "  - prompt: 'What is 2 + 2?'\n"
    "    options: [3, 4, 5, 6]\n"
    "    correct_answer: 4\n"
)


@pytest.mark.unit
def test_defaults():
    config = load_config(use_dotenv=False)

    assert config == GateConfig()
    assert config.cooldown_seconds == 0.5
    assert config.challenges_file is None
    assert config.seed is None


@pytest.mark.unit
def test_yaml_file(tmp_path):
    pool = tmp_path / "pool.yml"
    pool.write_text(POOL_YAML, encoding="utf-8")
    path = tmp_path / "gate.yml"
    path.write_text(
        f"cooldown_seconds: 1.5\nchallenges_file: {pool}\nseed: 3\n", encoding="utf-8"
    )

    config = load_config(path, use_dotenv=False)

    assert config.cooldown_seconds == 1.5
    assert config.challenges_file == pool
    assert config.seed == 3


@pytest.mark.unit
def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "gate.yml"
    path.write_text("cooldown_seconds: 1.5\nseed: 3\n", encoding="utf-8")
    monkeypatch.setenv("PARENTAL_GATE_COOLDOWN", "0.25")
    monkeypatch.setenv("PARENTAL_GATE_SEED", "9")

    config = load_config(path, use_dotenv=False)

    assert config.cooldown_seconds == 0.25
    assert config.seed == 9


@pytest.mark.unit
def test_dotenv_file_is_read(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("PARENTAL_GATE_COOLDOWN=2\n", encoding="utf-8")

    config = load_config()

    assert config.cooldown_seconds == 2.0


@pytest.mark.unit
@pytest.mark.parametrize(
    "content",
    [
        "cooldown_seconds: 0\n",
        "cooldown_seconds: soon\n",
        "cooldown_seconds: [1\n",
        "- a\n- b\n",
    ],
)
def test_invalid_values(tmp_path, content):
    path = tmp_path / "gate.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(GateConfigError):
        load_config(path, use_dotenv=False)


@pytest.mark.unit
def test_missing_file(tmp_path):
    with pytest.raises(GateConfigError, match="Could not read"):
        load_config(tmp_path / "nope.yml", use_dotenv=False)


@pytest.mark.unit
def test_build_pool_default_and_file(tmp_path):
    assert len(build_pool(GateConfig())) == len(DEFAULT_CHALLENGES)

    pool_path = tmp_path / "pool.yml"
    pool_path.write_text(POOL_YAML, encoding="utf-8")
    pool = build_pool(GateConfig(challenges_file=pool_path))

    assert [c.prompt for c in pool] == ["What is 2 + 2?"]


@pytest.mark.unit
def test_build_coordinator_uses_config():
    scheduler = ManualScheduler()
    gate = build_coordinator(GateConfig(cooldown_seconds=2.0, seed=1), scheduler=scheduler)

    assert gate.cooldown == 2.0
    assert gate.scheduler is scheduler
