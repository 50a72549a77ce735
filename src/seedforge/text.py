"""
Pronounceable filler text: syllables, words, sentences, paragraphs.
"""

import re
from typing import Optional

from .errors import test_range
from .primitives import capitalize, character, natural, string

CONSONANTS = "bcdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"


def syllable(ctx, capitalize_all: bool = False) -> str:
    """Two or three letters alternating consonant and vowel."""
    length = natural(ctx, 2, 3)
    text = "".join(
        character(ctx, pool=CONSONANTS if i % 2 == 0 else VOWELS)
        for i in range(length)
    )
    return text.upper() if capitalize_all else text


def word(
    ctx,
    syllables: Optional[int] = None,
    length: Optional[int] = None,
    capitalized: bool = False,
) -> str:
    """A word built from syllables, or trimmed/padded to an exact length."""
    test_range(bool(syllables and length), "Cannot specify both syllables AND length.")

    if length:
        syllables = max(1, round(length / 3))
    elif not syllables:
        syllables = natural(ctx, 1, 3)

    text = "".join(syllable(ctx) for _ in range(syllables))

    if length and len(text) != length:
        if len(text) < length:
            text += string(ctx, length=length - len(text), pool=VOWELS)
        else:
            text = text[:length]

    return capitalize(text) if capitalized else text


def sentence(ctx, words: Optional[int] = None, punctuation: bool = True) -> str:
    count = words or natural(ctx, 12, 18)
    text = capitalize(" ".join(word(ctx) for _ in range(count)))
    if punctuation and not re.search(r"[.!?;:]$", text):
        text += "."
    return text


def paragraph(ctx, sentences: Optional[int] = None, linebreak: bool = False) -> str:
    count = sentences or natural(ctx, 3, 7)
    separator = "\n" if linebreak else " "
    return separator.join(sentence(ctx) for _ in range(count))


GENERATORS = {
    "syllable": syllable,
    "word": word,
    "sentence": sentence,
    "paragraph": paragraph,
}
