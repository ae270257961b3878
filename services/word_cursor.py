# services/word_cursor.py
from dataclasses import dataclass, field
from typing import FrozenSet, Sequence

from services.ledger import CharState, WordSpan


@dataclass(frozen=True)
class CursorLocation:
    current_word_index: int = 0
    completed_words: FrozenSet[int] = field(default_factory=frozenset)


def current_word(caret_pos: int, spans: Sequence[WordSpan]) -> int:
    """Index of the word whose span holds the caret; past the end means the last word."""
    if not spans:
        return 0
    for wi, span in enumerate(spans):
        if span.start_offset <= caret_pos < span.end_offset:
            return wi
    if caret_pos < spans[0].start_offset:
        return 0
    return len(spans) - 1


def is_completed(span: WordSpan, states: Sequence[CharState]) -> bool:
    # the trailing separator does not count
    body = range(span.start_offset, span.end_offset - 1)
    return all(i < len(states) and states[i] is CharState.CORRECT for i in body)


def locate(caret_pos: int, spans: Sequence[WordSpan], states: Sequence[CharState]) -> CursorLocation:
    completed = frozenset(wi for wi, span in enumerate(spans) if is_completed(span, states))
    return CursorLocation(current_word_index=current_word(caret_pos, spans), completed_words=completed)
