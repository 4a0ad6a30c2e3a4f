"""Distractor sampling shared by the adapters."""

import random
from collections.abc import Callable, Iterable


def sample_distinct(
    candidates: Iterable[str],
    exclude: str,
    count: int,
    rng: random.Random | None = None,
    key: Callable[[str], str] = str,
) -> list[str]:
    """
    Pick up to ``count`` distinct candidates, none equal to ``exclude``.

    Equality is decided on ``key(value)`` so adapters can treat answers that
    differ only in case or spacing as the same answer.
    """
    if count <= 0:
        return []

    excluded = key(exclude)
    seen: set[str] = set()
    eligible: list[str] = []
    for candidate in candidates:
        normalized = key(candidate)
        if not candidate or normalized == excluded or normalized in seen:
            continue
        seen.add(normalized)
        eligible.append(candidate)

    if len(eligible) <= count:
        picked = list(eligible)
        (rng or random).shuffle(picked)
        return picked
    return (rng or random).sample(eligible, count)
