"""Kana adapter: show the character, answer with its romanization."""

import random
from collections.abc import Sequence

from dojo_engine.learning_engine.adapters.sampling import sample_distinct
from dojo_engine.models.content import KanaCharacter

# Kunrei-shiki and other common spellings accepted for the Hepburn romanji
ALTERNATE_ROMANIZATIONS: dict[str, frozenset[str]] = {
    "shi": frozenset({"si"}),
    "chi": frozenset({"ti"}),
    "tsu": frozenset({"tu"}),
    "fu": frozenset({"hu"}),
    "ji": frozenset({"zi", "di"}),
    "zu": frozenset({"du"}),
    "wo": frozenset({"o"}),
    "n": frozenset({"nn"}),
    "sha": frozenset({"sya"}),
    "shu": frozenset({"syu"}),
    "sho": frozenset({"syo"}),
    "cha": frozenset({"tya"}),
    "chu": frozenset({"tyu"}),
    "cho": frozenset({"tyo"}),
    "ja": frozenset({"zya", "jya"}),
    "ju": frozenset({"zyu", "jyu"}),
    "jo": frozenset({"zyo", "jyo"}),
}


def _normalize(text: str) -> str:
    return text.strip().lower()


class KanaAdapter:
    """
    Adapter for hiragana/katakana drills.

    Answer policy: surrounding whitespace and case are ignored, and the
    Kunrei-shiki spellings in ``ALTERNATE_ROMANIZATIONS`` are accepted for
    their Hepburn counterparts ("si" for "shi", "tu" for "tsu").
    Distractors skip any romanization this policy would accept.
    """

    def build_prompt(self, item: KanaCharacter) -> str:
        return item.kana

    def correct_answer(self, item: KanaCharacter) -> str:
        return item.romanji

    def distractors(
        self,
        item: KanaCharacter,
        pool: Sequence[KanaCharacter],
        count: int,
        rng: random.Random | None = None,
    ) -> list[str]:
        return sample_distinct(
            (candidate.romanji for candidate in pool if not self.is_correct(candidate.romanji, item)),
            exclude=item.romanji,
            count=count,
            rng=rng,
            key=_normalize,
        )

    def is_correct(self, user_answer: str, item: KanaCharacter) -> bool:
        answer = _normalize(user_answer)
        expected = _normalize(item.romanji)
        if answer == expected:
            return True
        return answer in ALTERNATE_ROMANIZATIONS.get(expected, frozenset())
