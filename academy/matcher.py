"""Code Matcher: decides whether practice input reproduces the reference snippet.

Comparison ignores all whitespace, so re-indenting or wrapping lines does
not matter. Short fragments never count: the normalized input must be
longer than MATCH_THRESHOLD characters.
"""

from __future__ import annotations

import re

MATCH_THRESHOLD = 15

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Strip every whitespace character."""
    return _WHITESPACE.sub("", text)


def matches(user_input: str, canonical: str) -> bool:
    """True when the input is a long enough contiguous piece of the canonical code."""
    typed = normalize(user_input)
    return len(typed) > MATCH_THRESHOLD and typed in normalize(canonical)


class PracticeBuffer:
    """The learner's practice text plus edge-triggered match detection.

    ``update`` returns True once per transition into the matching state,
    so the UI can raise a single notification instead of one per keystroke.
    """

    def __init__(self) -> None:
        self.text = ""
        self.matched = False

    def update(self, text: str, canonical: str) -> bool:
        self.text = text
        now_matched = matches(text, canonical)
        notify = now_matched and not self.matched
        self.matched = now_matched
        return notify

    def reset(self) -> None:
        self.text = ""
        self.matched = False

    def fill(self, canonical: str) -> None:
        """Copy the solution in. Armed, so the copy itself never notifies."""
        self.text = canonical
        self.matched = matches(canonical, canonical)
