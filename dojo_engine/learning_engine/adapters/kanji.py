"""Kanji adapter: show the character, answer with an English meaning."""

import random
from collections.abc import Sequence

from dojo_engine.learning_engine.adapters.sampling import sample_distinct
from dojo_engine.models.content import Kanji


def _normalize(text: str) -> str:
    return " ".join(text.lower().split())


class KanjiAdapter:
    """
    Adapter for kanji meaning drills.

    The canonical answer is the first listed meaning. Answer policy: case and
    repeated whitespace are ignored and any listed meaning is accepted.
    Distractors are the first meanings of other kanji, skipping any that
    match one of this kanji's own meanings.
    """

    def build_prompt(self, item: Kanji) -> str:
        return item.kanji_char

    def correct_answer(self, item: Kanji) -> str:
        return item.meanings[0] if item.meanings else ""

    def distractors(
        self,
        item: Kanji,
        pool: Sequence[Kanji],
        count: int,
        rng: random.Random | None = None,
    ) -> list[str]:
        own_meanings = {_normalize(meaning) for meaning in item.meanings}
        candidates = (
            self.correct_answer(candidate)
            for candidate in pool
            if candidate.kanji_char != item.kanji_char
        )
        return sample_distinct(
            (meaning for meaning in candidates if _normalize(meaning) not in own_meanings),
            exclude=self.correct_answer(item),
            count=count,
            rng=rng,
            key=_normalize,
        )

    def is_correct(self, user_answer: str, item: Kanji) -> bool:
        answer = _normalize(user_answer)
        if not answer:
            return False
        return any(answer == _normalize(meaning) for meaning in item.meanings)
