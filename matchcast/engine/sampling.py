# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""Weighted random selection shared by every player pick in the engine."""

from __future__ import annotations

import random
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")


def weighted_choice(
    items: Sequence[T],
    weight: Callable[[T], float],
    rng: random.Random,
) -> Optional[T]:
    """Pick one item with probability proportional to ``weight(item)``.

    A single uniform draw is walked down the cumulative weights; the first
    item that exhausts the draw wins and the last item absorbs rounding.
    When every weight is zero the first item is returned.

    Parameters
    ----------
    items : Sequence[T]
        Candidates in a stable order.
    weight : Callable[[T], float]
        Scoring function returning a non-negative weight for each candidate.
    rng : random.Random
        Random source used for the draw.

    Returns
    -------
    T | None
        The selected item, or ``None`` when ``items`` is empty.
    """
    if not items:
        return None

    weights = [max(0.0, weight(item)) for item in items]
    remaining = rng.random() * sum(weights)
    for item, item_weight in zip(items, weights):
        remaining -= item_weight
        if remaining <= 0:
            return item
    return items[-1]
