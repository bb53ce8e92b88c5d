from __future__ import annotations

from collections.abc import Iterator


def iter_orders(n: int) -> Iterator[tuple[int, ...]]:
    if n < 0:
        raise ValueError(f"Cannot enumerate orderings of {n} items")

    order = list(range(n))
    while True:
        yield tuple(order)

        pivot = n - 2
        while pivot >= 0 and order[pivot] > order[pivot + 1]:
            pivot -= 1
        if pivot < 0:
            return

        successor = n - 1
        while order[successor] < order[pivot]:
            successor -= 1
        order[pivot], order[successor] = order[successor], order[pivot]

        left, right = pivot + 1, n - 1
        while left < right:
            order[left], order[right] = order[right], order[left]
            left += 1
            right -= 1
