from dojo_engine.models.content import KanaCharacter, Kanji, Word

__all__ = ["KanaCharacter", "Kanji", "Word"]
