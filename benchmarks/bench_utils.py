"""
Timing helpers shared by the codec benchmarks.

:func:`timed_trials` runs a callable repeatedly after a warmup and
summarises the wall-clock times (mean, sample stddev, 95% CI).
"""

from __future__ import annotations

import math
import statistics
import time
from dataclasses import dataclass
from typing import Any, Callable


DEFAULT_TRIALS = 30
DEFAULT_WARMUP = 3

# Two-tailed 95% t critical values by degrees of freedom
_T_95 = {
    1: 12.706, 2: 4.303, 3: 3.182, 4: 2.776, 5: 2.571, 6: 2.447,
    7: 2.365, 8: 2.306, 9: 2.262, 10: 2.228, 15: 2.131, 20: 2.086,
    29: 2.045, 40: 2.021, 60: 2.000, 120: 1.980,
}


@dataclass
class TrialStats:
    """Summary of one timed measurement, in seconds."""

    mean: float
    std: float
    ci95: tuple[float, float]
    fastest: float
    slowest: float
    n: int

    def ms(self) -> str:
        """``"mean ± std"`` in milliseconds."""
        return f"{self.mean * 1000:.3f} ± {self.std * 1000:.3f}"

    def per_second(self, items: int) -> float:
        """Throughput for *items* processed per call."""
        return items / self.mean if self.mean > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "mean_ms": round(self.mean * 1000, 4),
            "std_ms": round(self.std * 1000, 4),
            "ci95_ms": [round(x * 1000, 4) for x in self.ci95],
            "min_ms": round(self.fastest * 1000, 4),
            "max_ms": round(self.slowest * 1000, 4),
            "n_trials": self.n,
        }


def timed_trials(
    fn: Callable[[], Any],
    n: int = DEFAULT_TRIALS,
    warmup: int = DEFAULT_WARMUP,
) -> TrialStats:
    """Call *fn* ``warmup`` times untimed, then *n* times timed."""
    if n < 1:
        raise ValueError(f"n must be >= 1, got: {n}")
    for _ in range(warmup):
        fn()

    times = []
    for _ in range(n):
        start = time.perf_counter()
        fn()
        times.append(time.perf_counter() - start)

    mean = statistics.fmean(times)
    std = statistics.stdev(times) if n > 1 else 0.0
    margin = _t_critical(n - 1) * std / math.sqrt(n) if n > 1 else 0.0
    return TrialStats(
        mean=mean,
        std=std,
        ci95=(mean - margin, mean + margin),
        fastest=min(times),
        slowest=max(times),
        n=n,
    )


def _t_critical(df: int) -> float:
    if df >= 120:
        return 1.96
    # Nearest tabulated df at or below, which errs on the wide side.
    return _T_95[max(k for k in _T_95 if k <= df)]
