from __future__ import annotations

import re

BLANK = "___"


def mask_term(sentence: str, term: str) -> str | None:
    """
    Replace whole-word, case-insensitive occurrences of `term` with BLANK.

    Returns None when the term does not occur in the sentence.
    """
    if not term:
        return None
    pattern = re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)
    masked, hits = pattern.subn(BLANK, sentence)
    return masked if hits else None
