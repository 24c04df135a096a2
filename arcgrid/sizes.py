"""Guessing output sizes from candidate size sequences."""

from __future__ import annotations

from typing import Iterable, Sequence

from arcgrid.image import Image, Point


def solve_single(seeds: Sequence[Sequence[int]],
                 target: Sequence[int]) -> tuple[list[int], float]:
    """Best one-dimensional size sequence for training targets plus the test.

    Each candidate has one entry per training target and a final entry for
    the test; the final entry must lie in 1..30. Returns the sequence and its
    score (higher is better).
    """
    n = len(target) + 1
    ans = [1] * n
    best: tuple[int, float] = (-1, 1e9)

    def add(szs: list[int], loss: float) -> None:
        nonlocal ans, best
        oks = sum(1 for s, t in zip(szs, target) if s == t)
        cand = (oks, -loss - 10)
        if 1 <= szs[-1] <= 30 and cand > best:
            best = cand
            ans = szs

    for w in range(1, 31):
        add([w] * n, w)

    for i, seed in enumerate(seeds):
        a = i + 1
        for w in range(1, 6):
            for x in range(-3, 4):
                add([seed[k] * w + x for k in range(n)], a * w * (abs(x) + 1))

    return ans, best[1]


def solve_size(seeds: Sequence[Sequence[Point]], target: Sequence[Point]) -> Point:
    """Best guess for the test output size given candidate size sequences."""
    ans = Point(1, 1)
    best: tuple[int, float] = (-1, 1e9)

    def add(szs: list[Point], loss: float) -> None:
        nonlocal ans, best
        oks = sum(1 for s, t in zip(szs, target) if s == t)
        cand = (oks, -loss)
        sz = szs[-1]
        if 1 <= sz.x <= 30 and 1 <= sz.y <= 30 and cand > best:
            best = cand
            ans = sz

    n = len(target) + 1

    for i, seed in enumerate(seeds):
        a = i + 1
        for h in range(1, 6):
            for w in range(1, 6):
                for y in range(-3, 4):
                    for x in range(-3, 4):
                        szs = [Point(seed[k].x * w + x, seed[k].y * h + y) for k in range(n)]
                        add(szs, a * w * h * (abs(x) + 1) * (abs(y) + 1))

    for i, seed in enumerate(seeds):
        a = i + 1
        for j, other in enumerate(seeds[:i]):
            b = j + 1
            for d in range(3):
                szs = [
                    Point(seed[k].x + (other[k].x if d in (0, 2) else 0),
                          seed[k].y + (other[k].y if d in (1, 2) else 0))
                    for k in range(n)
                ]
                add(szs, a * b)

    bestx, scorex = solve_single([[p.x for p in seed] for seed in seeds],
                                 [p.x for p in target])
    besty, scorey = solve_single([[p.y for p in seed] for seed in seeds],
                                 [p.y for p in target])
    add([Point(x, y) for x, y in zip(bestx, besty)], scorex * scorey)

    return ans


def cheat_size(test_out: Image, train: Iterable[tuple[Image, Image]]) -> list[Point]:
    """Output sizes of the training pairs followed by the known test output size."""
    return [out.sz for _, out in train] + [test_out.sz]