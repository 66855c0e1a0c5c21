from __future__ import annotations

from typing import Optional, Tuple

import numpy as np


class PositionSampler:
    """
    Draws initial node coordinates uniformly from a fixed box.

    Seeded samplers produce the same sequence of positions, which keeps
    tests and scripted sessions reproducible.
    """

    def __init__(
        self,
        *,
        x_range: Tuple[float, float],
        y_range: Tuple[float, float],
        seed: Optional[int] = None,
    ) -> None:
        if x_range[0] > x_range[1] or y_range[0] > y_range[1]:
            raise ValueError(
                f"Invalid allocation box: x={x_range}, y={y_range}"
            )
        self.x_range = x_range
        self.y_range = y_range
        self._rng = np.random.default_rng(seed)

    def sample(self) -> Tuple[float, float]:
        x = self._rng.uniform(*self.x_range)
        y = self._rng.uniform(*self.y_range)
        return float(x), float(y)
