"""hyprdrover.split_tree
~~~~~~~~~~~~~~~~~~~~~~~~

Infer a binary split tree from saved window rectangles.

Hyprland does not report its tiling tree, only where each window ended up.
Recursive bisection over the window centres gives a tree that, replayed
split by split, reproduces the same arrangement for binary layouts and a
close approximation for everything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Sequence, Union

from .constants import SplitAxis
from .models import WindowRecord


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    @classmethod
    def from_window(cls, window: WindowRecord) -> "Rect":
        return cls(window.at[0], window.at[1], window.size[0], window.size[1])


@dataclass(slots=True, frozen=True)
class Leaf:
    index: int


@dataclass(slots=True, frozen=True)
class Node:
    axis: SplitAxis
    first: "SplitTree"
    second: "SplitTree"


SplitTree = Union[Leaf, Node]


def build_split_tree(
    rects: Sequence[Rect], indices: Sequence[int] | None = None
) -> SplitTree:
    """
    Bisect *indices* (default: all of *rects*) into a SplitTree.

    The axis with the wider spread of centres is split (X on ties); windows
    are ordered by centre on that axis, index breaking ties, and the group
    is cut at ``len // 2``.  Every index ends up in exactly one leaf.
    """
    group = list(range(len(rects))) if indices is None else list(indices)
    if not group:
        raise ValueError("cannot build a split tree over no windows")
    return _bisect(rects, group)


def _bisect(rects: Sequence[Rect], group: list[int]) -> SplitTree:
    if len(group) == 1:
        return Leaf(group[0])

    centers = {i: rects[i].center for i in group}
    xs = [c[0] for c in centers.values()]
    ys = [c[1] for c in centers.values()]
    axis = SplitAxis.X if max(xs) - min(xs) >= max(ys) - min(ys) else SplitAxis.Y
    coord = 0 if axis is SplitAxis.X else 1

    ordered = sorted(group, key=lambda i: (centers[i][coord], i))
    mid = len(ordered) // 2
    first, second = ordered[:mid], ordered[mid:]

    # Unreachable for len >= 2; a one-sided cut recurses on the non-empty half.
    if not first or not second:
        return _bisect(rects, first or second)

    return Node(axis, _bisect(rects, first), _bisect(rects, second))


def leaves(tree: SplitTree) -> Iterator[int]:
    """Yield the leaf indices of *tree* from left to right."""
    if isinstance(tree, Leaf):
        yield tree.index
        return
    yield from leaves(tree.first)
    yield from leaves(tree.second)
