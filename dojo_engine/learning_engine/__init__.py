"""
Adaptive training engine building blocks.

- Content adapters make kana, kanji and vocabulary interchangeable
- The difficulty controller tunes the number of answer choices
- Contracts define the questions and events that flow between them
"""
