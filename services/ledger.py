# services/ledger.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

SEPARATOR = " "
SEPARATOR_DISPLAY = "\u00a0"


class CharState(Enum):
    UNSET = "unset"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class ExpectedChar:
    display: str
    expected: str
    word_index: int
    is_separator: bool = False


@dataclass(frozen=True)
class WordSpan:
    start_offset: int
    char_count: int  # includes the trailing separator

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.char_count


@dataclass(frozen=True)
class Ledger:
    words: Tuple[str, ...]
    chars: Tuple[ExpectedChar, ...]
    spans: Tuple[WordSpan, ...]

    def __len__(self) -> int:
        return len(self.chars)

    def __getitem__(self, idx: int) -> ExpectedChar:
        return self.chars[idx]


def build(words: Sequence[str]) -> Ledger:
    """
    Flatten words into expected characters.
    Every word contributes one entry per code point followed by one separator
    that renders as a non-breaking space but compares as a plain space.
    """
    chars: List[ExpectedChar] = []
    spans: List[WordSpan] = []
    for wi, word in enumerate(words):
        start = len(chars)
        for ch in word:
            chars.append(ExpectedChar(display=ch, expected=ch, word_index=wi))
        chars.append(ExpectedChar(display=SEPARATOR_DISPLAY, expected=SEPARATOR, word_index=wi, is_separator=True))
        spans.append(WordSpan(start_offset=start, char_count=len(chars) - start))
    return Ledger(words=tuple(words), chars=tuple(chars), spans=tuple(spans))


def compare(ledger: Ledger, typed: str) -> List[CharState]:
    states = [CharState.UNSET] * len(ledger)
    for i in range(min(len(typed), len(ledger))):
        states[i] = CharState.CORRECT if typed[i] == ledger[i].expected else CharState.INCORRECT
    return states


def count_states(states: Sequence[CharState]) -> Tuple[int, int]:
    """(correct, incorrect) over a compared range."""
    correct = incorrect = 0
    for s in states:
        if s is CharState.CORRECT:
            correct += 1
        elif s is CharState.INCORRECT:
            incorrect += 1
    return correct, incorrect
