"""Challenge pool the coordinator draws gate puzzles from."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from loguru import logger

from parental_gate.core.models import Challenge
from parental_gate.errors import ChallengeError, ChallengePoolError
from parental_gate.utils.file import load_yaml

DEFAULT_CHALLENGES: tuple[Challenge, ...] = (
    Challenge("What is 9 + 4?", (11, 13, 14, 15), 13),
    Challenge("What is 7 + 8?", (13, 14, 15, 16), 15),
    Challenge("What is 12 - 5?", (5, 6, 7, 8), 7),
    Challenge("What is 6 × 2?", (10, 11, 12, 13), 12),
    Challenge("What is 20 ÷ 4?", (4, 5, 6, 7), 5),
    Challenge("What is 4 x 4?", (4, 19, 16, 8), 16),
    Challenge("What is 10 + 3?", (13, 14, 17, 12), 13),
    Challenge("What is 10 - 4?", (4, 6, 9, 3), 6),
    Challenge("What is 12 ÷ 4?", (4, 9, 3, 8), 3),
)


class ChallengePool:
    """Fixed, non-empty set of challenges drawn uniformly at random.

    Draws are independent, so the same challenge may come up twice in a row.

    Raises:
        ChallengePoolError: If the pool is empty.
    """

    def __init__(
        self,
        challenges: Iterable[Challenge] = DEFAULT_CHALLENGES,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._challenges: List[Challenge] = list(challenges)
        if not self._challenges:
            raise ChallengePoolError("Challenge pool must not be empty.")
        self._rng = rng or random.Random()

    def draw(self) -> Challenge:
        """Pick one challenge uniformly at random."""
        return self._rng.choice(self._challenges)

    def __len__(self) -> int:
        return len(self._challenges)

    def __iter__(self) -> Iterator[Challenge]:
        return iter(self._challenges)

    @classmethod
    def from_yaml(
        cls, path: str | Path, rng: Optional[random.Random] = None
    ) -> "ChallengePool":
        """Load a pool from a YAML file.

        Expected shape::

            challenges:
              - prompt: "What is 2 + 2?"
                options: [3, 4, 5, 6]
                correct_answer: 4

        Raises:
            ChallengePoolError: If the file is missing, malformed or empty.
        """
        path = Path(path)
        logger.debug(f"Loading challenge pool from {path}")
        try:
            data = load_yaml(path)
        except (OSError, ValueError) as e:
            raise ChallengePoolError(f"Could not read challenge pool {path}: {e}") from e

        entries = data.get("challenges")
        if not isinstance(entries, list):
            raise ChallengePoolError(
                f"Challenge pool {path} must define a 'challenges' list."
            )

        challenges = []
        for idx, entry in enumerate(entries, start=1):
            try:
                challenges.append(
                    Challenge(
                        prompt=str(entry["prompt"]),
                        options=tuple(int(o) for o in entry["options"]),
                        correct_answer=int(entry["correct_answer"]),
                    )
                )
            except (KeyError, TypeError, ValueError, ChallengeError) as e:
                raise ChallengePoolError(
                    f"Invalid challenge #{idx} in {path}: {e}"
                ) from e

        logger.info(f"Loaded {len(challenges)} challenges from {path}")
        return cls(challenges, rng=rng)
