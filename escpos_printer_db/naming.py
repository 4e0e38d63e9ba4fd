"""Identifier case conversion for generated names."""

from __future__ import annotations

import keyword
import re

_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def split_words(name: str) -> list[str]:
    """Split a database key into words.

    Words break at punctuation, at a lower-to-upper case change and before
    the last capital of an acronym ("HTTPServer" -> "HTTP", "Server").
    Digits never start a new word, so "TM-T88V" gives "TM", "T88V".
    """
    words: list[str] = []
    for chunk in _SEPARATORS.split(name):
        word = ""
        last_lower = False
        for i, ch in enumerate(chunk):
            if ch.isupper() and word:
                next_lower = i + 1 < len(chunk) and chunk[i + 1].islower()
                if last_lower or (next_lower and word[-1].isupper()):
                    words.append(word)
                    word = ""
            word += ch
            if ch.isalpha():
                last_lower = ch.islower()
        if word:
            words.append(word)
    return words


def shouty_snake(name: str) -> str:
    return "_".join(w.upper() for w in split_words(name))


def snake(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name))


def is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)
