# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# variates.py
# -----------------------------------------------------------------------------
# Purpose:
#   Random variates that drive the store: Poisson customer counts, uniform
#   arrival offsets and checkout (service) durations.
#
# Design notes:
#   - The random source is injected, never the module-level `random` state,
#     so that every run is reproducible from its seed and runs can execute
#     side by side.
#   - Poisson sampling follows the classic split: Knuth's multiplication
#     method for small means, the PTRS-style logistic rejection method
#     (Atkinson 1979) for large ones. The accept test compares against
#     ln(n!) computed with math.lgamma.
#
# Usage:
#   gen = VariateGenerator(random.Random(7))
#   n = gen.poisson(600)
# -----------------------------------------------------------------------------

from __future__ import annotations
import math, random
from typing import Optional

# Means below this use Knuth's method, at or above it the rejection method.
POISSON_SMALL_MEAN_LIMIT = 30.0

SERVICE_DISTRIBUTIONS = ("exponential", "legacy")


def _log1p_exp(y: float) -> float:
    """ln(1 + e^y) without overflowing for large y."""
    if y > 0:
        return y + math.log1p(math.exp(-y))
    return math.log1p(math.exp(y))


class VariateGenerator:
    """Samples the random quantities of one simulation run.

    Parameters
    ----------
    rng : random.Random
        Seeded uniform source owned by the caller.
    service_distribution : str
        "exponential" (default) or "legacy"; see `service_duration`.
    """

    def __init__(self, rng: Optional[random.Random] = None, service_distribution: str = "exponential"):
        if service_distribution not in SERVICE_DISTRIBUTIONS:
            raise ValueError(
                f"service_distribution must be one of {SERVICE_DISTRIBUTIONS}, got {service_distribution!r}"
            )
        self.rng = rng if rng is not None else random.Random()
        self.service_distribution = service_distribution

    def uniform(self) -> float:
        """Uniform sample in [0, 1)."""
        return self.rng.random()

    def poisson(self, mean: float) -> int:
        """Poisson-distributed count with the given mean (>= 0)."""
        if mean < 0:
            raise ValueError("Poisson mean must be >= 0")
        if mean < POISSON_SMALL_MEAN_LIMIT:
            return self._poisson_small(mean)
        return self._poisson_large(mean)

    def _poisson_small(self, mean: float) -> int:
        # Knuth: multiply uniforms until the product drops to e^-mean.
        limit = math.exp(-mean)
        k = 0
        p = 1.0
        while True:
            k += 1
            p *= self.uniform()
            if p <= limit:
                return k - 1

    def _poisson_large(self, mean: float) -> int:
        c = 0.767 - 3.36 / mean
        beta = math.pi / math.sqrt(3.0 * mean)
        alpha = beta * mean
        k = math.log(c) - mean - math.log(beta)
        log_mean = math.log(mean)
        while True:
            u = self.uniform()
            if u <= 0.0:
                continue
            x = (alpha - math.log((1.0 - u) / u)) / beta
            n = int(math.floor(x + 0.5))
            if n < 0:
                continue
            v = self.uniform()
            if v <= 0.0:
                continue
            y = alpha - beta * x
            lhs = y + math.log(v) - 2.0 * _log1p_exp(y)
            # ln(n!) == ln(Gamma(n + 1))
            rhs = k + n * log_mean - math.lgamma(n + 1.0)
            if lhs <= rhs:
                return n

    def arrival_time(self, opening: float, closing: float) -> float:
        """Uniform arrival timestamp in [opening, closing)."""
        t = opening + self.uniform() * (closing - opening)
        if t >= closing:
            # u * span can round up to the span itself
            t = math.nextafter(closing, opening)
        return t

    def service_duration(self, mean: float) -> float:
        """
        Checkout duration for one customer, >= 0.

        With service_distribution="exponential" this is a true negative
        exponential sample with the given mean, via the inverse CDF
        -ln(1 - u) / rate where rate = 1 / mean.

        With service_distribution="legacy" it reproduces the older
        formula  mean * (1 - u * (1 - e^-mean)).  That transform is NOT an
        exponential distribution: for any realistic mean it is uniform on
        (0, mean], so its average is mean / 2 and it has no exponential
        tail. It is kept only for side-by-side comparison with
        runs made with the old formula.
        """
        if mean <= 0:
            raise ValueError("expected service duration must be > 0")
        u = self.uniform()
        if self.service_distribution == "legacy":
            return mean * (1.0 - u * (1.0 - math.exp(-mean)))
        return -math.log1p(-u) * mean
