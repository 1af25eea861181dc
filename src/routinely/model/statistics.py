# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class Statistics(TypedDict):
    streak: int
    completed: int
    expected: int
    success_rate_percent: float
    average: Optional[float]  # None for checkbox fields
    total: float
