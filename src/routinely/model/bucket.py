# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

import pendulum

Granularity = Literal["day", "week", "month", "year"]

GRANULARITIES: list[str] = ["day", "week", "month", "year"]


class Bucket(TypedDict):
    period_start: pendulum.Date  # Natural start of the period (Monday, 1st, Jan 1)
    span_start: pendulum.Date  # Period clipped to the query range
    span_end: pendulum.Date
    day_count: int  # Days covered by the clipped span
    value: float  # 0/1 or completion count for checkbox, sum for number
    label: str
