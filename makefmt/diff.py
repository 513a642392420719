"""
Unified diff generation.

Line-granularity diffs computed with the Myers shortest-edit-script
algorithm, rendered as unified diff hunks with three lines of context.
"""

from enum import Enum
from typing import List, NamedTuple

# Unchanged lines shown around each change.
CONTEXT_LINES = 3


class EditKind(str, Enum):
    """Diff operation kinds."""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


class Edit(NamedTuple):
    """One diff operation; the index on the side it does not touch is -1."""

    kind: EditKind
    old_idx: int
    new_idx: int


class Region(NamedTuple):
    """Inclusive range of edit indices."""

    start: int
    end: int


class Hunk(NamedTuple):
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    edits: List[Edit]


def unified_diff(name: str, old_text: str, new_text: str) -> str:
    """
    Produce a unified diff between two texts.

    Args:
        name: File name shown in the ``---``/``+++`` headers
        old_text: Original text
        new_text: Updated text

    Returns:
        Unified diff text, or an empty string when the texts are identical
    """
    if old_text == new_text:
        return ""

    old_lines = _split_lines(old_text)
    new_lines = _split_lines(new_text)

    hunks = build_hunks(myers(old_lines, new_lines))
    if not hunks:
        return ""

    out = [f"--- a/{name}\n", f"+++ b/{name}\n"]
    for hunk in hunks:
        out.append(_render_hunk(hunk, old_lines, new_lines))
    return "".join(out)


def _split_lines(text: str) -> List[str]:
    """Split into lines that keep their ``\\n``; an empty text has none."""
    lines = [line + "\n" for line in text.split("\n")]
    # The last piece never had a newline after it
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def myers(a: List[str], b: List[str]) -> List[Edit]:
    """
    Compute a shortest edit script from ``a`` to ``b``.

    Keeps a copy of the furthest-reaching endpoints for every edit distance
    so the path can be recovered by backtracking from the end.

    Args:
        a: Old lines
        b: New lines

    Returns:
        Edits in forward order
    """
    n, m = len(a), len(b)
    total = n + m
    if total == 0:
        return []

    # v[k + total] is the furthest x reached on diagonal k = x - y
    v = [0] * (2 * total + 1)
    trace: List[List[int]] = []

    for d in range(total + 1):
        trace.append(list(v))

        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1 + total] < v[k + 1 + total]):
                x = v[k + 1 + total]
            else:
                x = v[k - 1 + total] + 1
            y = x - k

            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1

            v[k + total] = x

            if x >= n and y >= m:
                return _backtrack(trace, n, m, d, total)

    return []


def _backtrack(trace: List[List[int]], n: int, m: int, d: int, total: int) -> List[Edit]:
    x, y = n, m
    edits: List[Edit] = []

    for step in range(d, 0, -1):
        v = trace[step]
        k = x - y

        down = k == -step or (k != step and v[k - 1 + total] < v[k + 1 + total])
        prev_k = k + 1 if down else k - 1
        prev_x = v[prev_k + total]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            edits.append(Edit(EditKind.EQUAL, x, y))

        if down:
            y -= 1
            edits.append(Edit(EditKind.INSERT, -1, y))
        else:
            x -= 1
            edits.append(Edit(EditKind.DELETE, x, -1))

    while x > 0 and y > 0:
        x -= 1
        y -= 1
        edits.append(Edit(EditKind.EQUAL, x, y))

    edits.reverse()
    return edits


def build_hunks(edits: List[Edit]) -> List[Hunk]:
    """
    Group edits into hunks with surrounding context.

    Args:
        edits: Edit script in forward order

    Returns:
        Hunks in document order
    """
    if not edits:
        return []

    regions = merge_regions(find_change_regions(edits))

    hunks = []
    for region in regions:
        start = max(region.start - CONTEXT_LINES, 0)
        end = min(region.end + CONTEXT_LINES, len(edits) - 1)
        hunk_edits = edits[start:end + 1]

        old_start = _first_index(e.old_idx for e in hunk_edits)
        new_start = _first_index(e.new_idx for e in hunk_edits)
        old_count = sum(1 for e in hunk_edits if e.kind != EditKind.INSERT)
        new_count = sum(1 for e in hunk_edits if e.kind != EditKind.DELETE)

        hunks.append(Hunk(old_start, old_count, new_start, new_count, hunk_edits))
    return hunks


def find_change_regions(edits: List[Edit]) -> List[Region]:
    """Find maximal runs of consecutive non-equal edits."""
    regions: List[Region] = []
    for i, edit in enumerate(edits):
        if edit.kind == EditKind.EQUAL:
            continue
        if regions and i == regions[-1].end + 1:
            regions[-1] = regions[-1]._replace(end=i)
        else:
            regions.append(Region(i, i))
    return regions


def merge_regions(regions: List[Region]) -> List[Region]:
    """Merge regions whose context windows would touch or overlap."""
    merged: List[Region] = []
    for region in regions:
        if merged and region.start - merged[-1].end <= 2 * CONTEXT_LINES:
            merged[-1] = merged[-1]._replace(end=region.end)
        else:
            merged.append(region)
    return merged


def _first_index(indices) -> int:
    for idx in indices:
        if idx >= 0:
            return idx
    return 0


def _render_hunk(hunk: Hunk, old_lines: List[str], new_lines: List[str]) -> str:
    out = [
        f"@@ -{hunk.old_start + 1},{hunk.old_count} "
        f"+{hunk.new_start + 1},{hunk.new_count} @@\n"
    ]
    for edit in hunk.edits:
        if edit.kind == EditKind.EQUAL:
            out.append(" " + _ensure_newline(old_lines[edit.old_idx]))
        elif edit.kind == EditKind.DELETE:
            out.append("-" + _ensure_newline(old_lines[edit.old_idx]))
        else:
            out.append("+" + _ensure_newline(new_lines[edit.new_idx]))
    return "".join(out)


def _ensure_newline(line: str) -> str:
    return line if line.endswith("\n") else line + "\n"
