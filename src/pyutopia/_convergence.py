"""Convergence step shared by the continuous simulators."""

from __future__ import annotations


def area_rate(base_per_ten_sqm: float, area: float, *, factor: float = 1.0) -> float:
    """Scale a per-10 m² rate to a room of *area* m².

    *factor* applies mode slowdowns (0.5 for quiet operation).
    """
    if area <= 0:
        raise ValueError(f"room area must be positive, got {area}")
    return base_per_ten_sqm * 10.0 / area * factor


def step_toward(current: float, target: float, rate: float) -> float:
    """Move *current* one step of *rate* toward *target*.

    Snaps exactly onto the target once the remaining gap is smaller than
    one step, so repeated steps never oscillate around it.
    """
    if abs(target - current) < rate:
        return target
    if current < target:
        return current + rate
    if current > target:
        return current - rate
    return current
