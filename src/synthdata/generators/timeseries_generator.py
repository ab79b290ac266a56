"""Time Series Generator - evenly spaced points following a random walk."""

from datetime import datetime

from synthdata.generators import fields
from synthdata.generators.base import Generator, GeneratorState
from synthdata.generators.models import TimeSeriesPoint
from synthdata.params.base import INTERVAL_STEPS, EntityKind, GenerationConfig


class TimeSeriesGenerator(Generator):
    """Generator for time series points.

    The first ``build`` call emits the configured start (or a random instant
    in the past year when none was given); each later call moves one interval
    on. Values drift by a gaussian step and never go below zero.
    """

    kind = EntityKind.TIMESERIES

    INITIAL_MIN = 50.0
    INITIAL_MAX = 150.0
    VOLATILITY = 5.0

    def __init__(self, state: GeneratorState):
        super().__init__(state)
        self._time: datetime | None = None
        self._value: float | None = None

    def build(self, config: GenerationConfig) -> TimeSeriesPoint:
        if self._time is None:
            self._time = config.start or fields.past_year_timestamp(self.state)
            self._value = round(self._rng.uniform(self.INITIAL_MIN, self.INITIAL_MAX), 2)
        else:
            self._time += INTERVAL_STEPS[config.interval]
            step = self._rng.gauss(0, self.VOLATILITY)
            self._value = round(max(0.0, self._value + step), 2)

        return TimeSeriesPoint(
            timestamp=fields.format_timestamp(self._time),
            value=self._value,
        )
