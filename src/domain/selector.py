"""Pick one present member at random."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Final

from domain.common import Member

RandomSource = Callable[[], float]


@dataclass(frozen=True)
class NoCandidates:
    """Selection outcome when nobody is present."""

    reason: str = "No one is present!"


NO_CANDIDATES: Final = NoCandidates()


def present_members(members: Iterable[Member]) -> list[Member]:
    """Return present members, preserving their order."""
    return [member for member in members if member.is_present]


def seeded_rng(seed: int | None) -> RandomSource:
    """Build an injectable [0, 1) source; a fixed seed reproduces its sequence."""
    return random.Random(seed).random


def select_random(
    members: Iterable[Member],
    rng: RandomSource = random.random,
) -> Member | NoCandidates:
    """Return a uniformly random present member, or ``NO_CANDIDATES``."""
    candidates = present_members(members)
    if not candidates:
        return NO_CANDIDATES

    draw = rng()
    if not 0.0 <= draw < 1.0:
        raise ValueError(f"rng returned {draw!r}; expected a value in [0, 1)")

    index = math.floor(draw * len(candidates))
    return candidates[index]


__all__ = [
    "NO_CANDIDATES",
    "NoCandidates",
    "RandomSource",
    "present_members",
    "seeded_rng",
    "select_random",
]
