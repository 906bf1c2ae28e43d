"""Character classes and literal formats used by the field rules.

Compiled with the ``regex`` package, which (unlike ``re``) understands
Unicode script properties such as ``\\p{sc=Hiragana}``.
"""

from __future__ import annotations

import regex

__all__ = [
    "FORBIDDEN_CHARACTERS",
    "FORBIDDEN_CHARACTERS_WITH_SLASH",
    "ENVIRONMENT_DEPENDENT_CHARACTERS",
    "JAPANESE_TEXT",
    "JAPANESE_TEXT_WITH_MARKS",
    "DIGITS",
    "ISO_DATE",
    "contains",
    "matches",
]

FORBIDDEN_CHARACTERS = regex.compile(r"""[<>"'&]""")
FORBIDDEN_CHARACTERS_WITH_SLASH = regex.compile(r"""[<>"'&/]""")

# Circled numerals, Roman numerals, enclosed CJK, CJK compatibility units
# (e.g. ㍉ ㈱) and the enclosed alphanumeric supplement.
ENVIRONMENT_DEPENDENT_CHARACTERS = regex.compile(
    "[\u2460-\u24ff\u2150-\u218f\u3200-\u32ff\u3300-\u33ff\U0001f100-\U0001f1ff]"
)

JAPANESE_TEXT = regex.compile(
    r"[\p{sc=Hiragana}\p{sc=Katakana}\p{sc=Han}\p{sc=Latin}\p{Nd}\s]+"
)

# Adds the prolonged sound mark and the katakana middle dot, both of which
# belong to the Common script.
JAPANESE_TEXT_WITH_MARKS = regex.compile(
    "[\\p{sc=Hiragana}\\p{sc=Katakana}\\p{sc=Han}\\p{sc=Latin}\\p{Nd}\\s\u30fc\u30fb]+"
)

# ASCII only: \d would also accept full-width and other Nd digits.
DIGITS = regex.compile(r"[0-9]+")
ISO_DATE = regex.compile(r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})")


def contains(pattern: regex.Pattern, value: str) -> bool:
    """True if any character of ``value`` matches ``pattern``."""
    return pattern.search(value) is not None


def matches(pattern: regex.Pattern, value: str) -> bool:
    """True if the whole of ``value`` matches ``pattern``."""
    return pattern.fullmatch(value) is not None
