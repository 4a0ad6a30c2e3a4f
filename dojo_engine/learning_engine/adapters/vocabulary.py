"""Vocabulary adapter: show the word, answer with an English meaning."""

import random
from collections.abc import Sequence

from dojo_engine.learning_engine.adapters.sampling import sample_distinct
from dojo_engine.models.content import Word


def _normalize(text: str) -> str:
    normalized = " ".join(text.lower().split())
    # Verb glosses are listed as "to eat"; "eat" is accepted too
    if normalized.startswith("to "):
        normalized = normalized[3:]
    return normalized


class VocabularyAdapter:
    """
    Adapter for vocabulary meaning drills.

    The canonical answer is the first listed meaning. Answer policy: case,
    repeated whitespace and a leading infinitive "to " are ignored, and any
    listed meaning is accepted. The kana reading is not accepted as an answer.
    """

    def build_prompt(self, item: Word) -> str:
        return item.word

    def correct_answer(self, item: Word) -> str:
        return item.meanings[0] if item.meanings else ""

    def distractors(
        self,
        item: Word,
        pool: Sequence[Word],
        count: int,
        rng: random.Random | None = None,
    ) -> list[str]:
        own_meanings = {_normalize(meaning) for meaning in item.meanings}
        candidates = (
            self.correct_answer(candidate)
            for candidate in pool
            if candidate.word != item.word
        )
        return sample_distinct(
            (meaning for meaning in candidates if _normalize(meaning) not in own_meanings),
            exclude=self.correct_answer(item),
            count=count,
            rng=rng,
            key=_normalize,
        )

    def is_correct(self, user_answer: str, item: Word) -> bool:
        answer = _normalize(user_answer)
        if not answer:
            return False
        return any(answer == _normalize(meaning) for meaning in item.meanings)
