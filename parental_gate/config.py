"""Configuration for hosting a gate coordinator.

Values are resolved in this order, later wins:

1. model defaults
2. an optional YAML file (``cooldown_seconds``, ``challenges_file``, ``seed``)
3. environment variables, including those loaded from ``.env``:
   ``PARENTAL_GATE_COOLDOWN``, ``PARENTAL_GATE_CHALLENGES``, ``PARENTAL_GATE_SEED``
"""

from __future__ import annotations

import os
import random
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from parental_gate.core.challenges import ChallengePool
from parental_gate.core.coordinator import DEFAULT_COOLDOWN_SECONDS, GateCoordinator
from parental_gate.core.scheduler import Scheduler
from parental_gate.errors import GateConfigError
from parental_gate.utils.file import load_yaml

ENV_COOLDOWN = "PARENTAL_GATE_COOLDOWN"
ENV_CHALLENGES = "PARENTAL_GATE_CHALLENGES"
ENV_SEED = "PARENTAL_GATE_SEED"


class GateConfig(BaseModel):
    """Settings for a gate coordinator."""

    cooldown_seconds: float = Field(
        DEFAULT_COOLDOWN_SECONDS,
        gt=0,
        description="Delay between resolving one gate and showing the next",
    )
    challenges_file: Optional[Path] = Field(
        None, description="YAML challenge pool; the built-in pool when unset"
    )
    seed: Optional[int] = Field(
        None, description="Seed for challenge draws (reproducible demos and tests)"
    )


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if os.environ.get(ENV_COOLDOWN):
        overrides["cooldown_seconds"] = os.environ[ENV_COOLDOWN]
    if os.environ.get(ENV_CHALLENGES):
        overrides["challenges_file"] = os.environ[ENV_CHALLENGES]
    if os.environ.get(ENV_SEED):
        overrides["seed"] = os.environ[ENV_SEED]
    return overrides


def load_config(path: Optional[Path] = None, use_dotenv: bool = True) -> GateConfig:
    """Build a GateConfig from an optional YAML file and the environment.

    Raises:
        GateConfigError: If the file cannot be read or a value is invalid.
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    data: Dict[str, Any] = {}
    if path is not None:
        try:
            data.update(load_yaml(Path(path)))
        except (OSError, ValueError) as e:
            raise GateConfigError(f"Could not read gate config {path}: {e}") from e

    data.update(_env_overrides())

    try:
        config = GateConfig(**data)
    except ValidationError as e:
        raise GateConfigError(f"Invalid gate config: {e}") from e

    logger.debug(f"Resolved gate config: {config}")
    return config


def build_pool(config: GateConfig) -> ChallengePool:
    """Create the challenge pool a config describes."""
    rng = random.Random(config.seed)
    if config.challenges_file is not None:
        return ChallengePool.from_yaml(config.challenges_file, rng=rng)
    return ChallengePool(rng=rng)


def build_coordinator(
    config: GateConfig, scheduler: Optional[Scheduler] = None
) -> GateCoordinator:
    """Wire a coordinator from a config."""
    return GateCoordinator(
        pool=build_pool(config),
        scheduler=scheduler,
        cooldown=config.cooldown_seconds,
    )
