# SPDX-License-Identifier: MIT

from typing import TypedDict

from routinely.model.bucket import Bucket, Granularity
from routinely.model.field import Field
from routinely.model.statistics import Statistics


class RangeSpec(TypedDict):
    granularity: Granularity
    window_size: int  # Counted in the granularity's unit


class TrendSeries(TypedDict):
    field: Field
    buckets: list[Bucket]
    statistics: Statistics
