"""
Loose comparison of author names and affiliations.

Names are compared case-insensitively with punctuation treated as whitespace. Two names match when
either contains the other, or when they share a family name (the last token) and each given-name
token of the shorter name is a prefix of the corresponding token of the longer one, which covers
initials: ``J. Smith`` matches ``John Smith`` and ``J. R. Smith`` matches ``John Robert Smith``.
"""

import re
from typing import Optional

_PUNCTUATION = re.compile(r"[^\w\s]+")


def name_tokens(name: Optional[str]) -> list[str]:
    if not name:
        return []
    return _PUNCTUATION.sub(" ", name.casefold()).split()


def family_name(name: Optional[str]) -> Optional[str]:
    tokens = name_tokens(name)
    return tokens[-1] if tokens else None


def names_match(name: Optional[str], other: Optional[str]) -> bool:
    tokens, other_tokens = name_tokens(name), name_tokens(other)
    if not tokens or not other_tokens:
        return False

    joined, other_joined = " ".join(tokens), " ".join(other_tokens)
    if joined in other_joined or other_joined in joined:
        return True

    if tokens[-1] != other_tokens[-1]:
        return False

    given, other_given = tokens[:-1], other_tokens[:-1]
    if not given or not other_given:
        return False

    return all(a.startswith(b) or b.startswith(a) for a, b in zip(given, other_given))


def affiliations_match(affiliation: Optional[str], other: Optional[str]) -> bool:
    if not affiliation or not other:
        return False

    normalized = " ".join(affiliation.casefold().split())
    other_normalized = " ".join(other.casefold().split())
    if not normalized or not other_normalized:
        return False

    return normalized in other_normalized or other_normalized in normalized
