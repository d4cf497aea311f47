"""Edit scripts over token sequences."""
from __future__ import annotations

from dataclasses import dataclass
# NOTE: difflib.SequenceMatcher supports list-of-tokens matching with opcodes;
# rapidfuzz only compares strings.
from difflib import SequenceMatcher
from typing import Iterator, List, Literal, Sequence, Tuple

SegmentTag = Literal["unchanged", "added", "removed"]


@dataclass(frozen=True)
class EditSegment:
    """
    One contiguous run of an edit script.

    ``left_start:left_end`` and ``right_start:right_end`` are token ranges;
    an added segment has an empty left range anchored where the tokens land,
    a removed segment an empty right range.
    """
    tag: SegmentTag
    left_start: int
    left_end: int
    right_start: int
    right_end: int
    replaced: bool = False  # half of a removed+added pair

    @property
    def left_length(self) -> int:
        return self.left_end - self.left_start

    @property
    def right_length(self) -> int:
        return self.right_end - self.right_start


Opcode = Tuple[str, int, int, int, int]

_MIRRORED_TAGS = {"equal": "equal", "delete": "insert", "insert": "delete", "replace": "replace"}


def _opcodes(left: Sequence[str], right: Sequence[str]) -> List[Opcode]:
    """
    SequenceMatcher opcodes that do not depend on argument order.

    SequenceMatcher breaks ties between equally long matches by position in
    its first sequence, so matching (a, b) and (b, a) can pick different
    blocks. The pair is always matched in one canonical order and the result
    mirrored when the caller's order is the other one.
    """
    if tuple(left) <= tuple(right):
        return SequenceMatcher(None, left, right, autojunk=False).get_opcodes()
    mirrored = SequenceMatcher(None, right, left, autojunk=False).get_opcodes()
    return [(_MIRRORED_TAGS[tag], j1, j2, i1, i2) for tag, i1, i2, j1, j2 in mirrored]


def compute_edit_script(left: Sequence[str], right: Sequence[str]) -> List[EditSegment]:
    """
    Compute an ordered edit script between two token sequences.

    Replacements are split into a removed segment followed by an added
    segment. ``autojunk`` is disabled so frequent tokens (blank lines, common
    words) still take part in matching and results stay stable for long
    documents. Swapping ``left`` and ``right`` yields the mirrored script.
    """
    script: List[EditSegment] = []
    for tag, i1, i2, j1, j2 in _opcodes(left, right):
        if tag == "equal":
            script.append(EditSegment("unchanged", i1, i2, j1, j2))
        elif tag == "delete":
            script.append(EditSegment("removed", i1, i2, j1, j1))
        elif tag == "insert":
            script.append(EditSegment("added", i1, i1, j1, j2))
        else:
            script.append(EditSegment("removed", i1, i2, j1, j1, replaced=True))
            script.append(EditSegment("added", i2, i2, j1, j2, replaced=True))
    return script


def replacement_pairs(script: Sequence[EditSegment]) -> Iterator[Tuple[EditSegment, EditSegment]]:
    """Yield (removed, added) segment pairs that came from the same replacement."""
    for current, following in zip(script, script[1:]):
        if (
            current.replaced
            and following.replaced
            and current.tag == "removed"
            and following.tag == "added"
        ):
            yield current, following
