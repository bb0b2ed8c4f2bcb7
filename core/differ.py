from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class DiffKind(str, Enum):
    SAME = "same"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiffLine:
    kind: DiffKind
    line: str


_PREFIX = {DiffKind.SAME: "  ", DiffKind.ADDED: "+ ", DiffKind.REMOVED: "- "}


def diff(old_text: str, new_text: str) -> List[DiffLine]:
    """Greedy single-pass line diff.

    A new line is reported as added only when it does not occur anywhere in
    the remaining old lines; otherwise the old line is reported as removed and
    matching resumes. Not a minimal edit script.
    """
    old = old_text.split("\n")
    new = new_text.split("\n")
    result = []
    i = j = 0

    while i < len(old) or j < len(new):
        if i < len(old) and j < len(new) and old[i] == new[j]:
            result.append(DiffLine(DiffKind.SAME, old[i]))
            i += 1
            j += 1
        elif j < len(new) and new[j] not in old[i:]:
            result.append(DiffLine(DiffKind.ADDED, new[j]))
            j += 1
        elif i < len(old):
            result.append(DiffLine(DiffKind.REMOVED, old[i]))
            i += 1
        else:
            j += 1
    return result


def format_diff(entries: List[DiffLine]) -> str:
    return "\n".join(_PREFIX[e.kind] + e.line for e in entries)


def diff_stats(entries: List[DiffLine]) -> Dict[str, int]:
    counts = Counter(e.kind for e in entries)
    return {kind.value: counts.get(kind, 0) for kind in DiffKind}


def has_changes(old_text: str, new_text: str) -> bool:
    return any(e.kind is not DiffKind.SAME for e in diff(old_text, new_text))
