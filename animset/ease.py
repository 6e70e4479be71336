"""Easing functions used as animation interpolators.

An interpolator maps the normalized time of an animation (0..1) to the
fraction of the change that is applied. Every function here takes t in
[0, 1] and returns a value in the same range, except Back, which overshoots.

Terminology:
- IN: slow start, accelerating towards the end
- OUT: fast start, decelerating towards the end
- IN_OUT: slow start and end, fast middle
"""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Callable, Union


Interpolator = Callable[[float], float]


class Ease(Enum):
    """
    Easing kinds.

    Power curves (higher power, sharper transition):
    - QUAD: t²
    - CUBIC: t³

    Other:
    - SINE: the softest, most natural curve
    - EXPO: very sharp transition
    - BACK: pulls back before / overshoots after the motion
    - BOUNCE: bounces like a dropped ball
    """

    LINEAR = auto()

    IN_QUAD = auto()
    OUT_QUAD = auto()
    IN_OUT_QUAD = auto()

    IN_CUBIC = auto()
    OUT_CUBIC = auto()
    IN_OUT_CUBIC = auto()

    IN_SINE = auto()
    OUT_SINE = auto()
    IN_OUT_SINE = auto()

    IN_EXPO = auto()
    OUT_EXPO = auto()
    IN_OUT_EXPO = auto()

    IN_BACK = auto()
    OUT_BACK = auto()
    IN_OUT_BACK = auto()

    IN_BOUNCE = auto()
    OUT_BOUNCE = auto()
    IN_OUT_BOUNCE = auto()

    @classmethod
    def from_name(cls, name: str) -> "Ease":
        """
        Parse an easing name.

        Accepts enum names in any case ("in_out_quad", "OUT_BACK") and the
        classic interpolator aliases ("linear", "accelerate", "decelerate",
        "accelerate_decelerate", "anticipate", "overshoot", "bounce").

        Raises:
            KeyError: unknown name.
        """
        key = name.strip().replace("-", "_")
        alias = _ALIASES.get(key.lower())
        if alias is not None:
            return alias
        return cls[key.upper()]


# ============================================================================
# Easing implementations
# ============================================================================


def linear(t: float) -> float:
    """Uniform motion without acceleration."""
    return t


# --- Quad ---

def in_quad(t: float) -> float:
    return t * t


def out_quad(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


def in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


# --- Cubic ---

def in_cubic(t: float) -> float:
    return t * t * t


def out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def in_out_cubic(t: float) -> float:
    return 4 * t * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


# --- Sine ---

def in_sine(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def out_sine(t: float) -> float:
    return math.sin(t * math.pi / 2)


def in_out_sine(t: float) -> float:
    """Cosine-shaped curve, the classic accelerate-decelerate."""
    return -(math.cos(math.pi * t) - 1) / 2


# --- Expo ---

def in_expo(t: float) -> float:
    return 0 if t == 0 else 2 ** (10 * t - 10)


def out_expo(t: float) -> float:
    return 1 if t == 1 else 1 - 2 ** (-10 * t)


def in_out_expo(t: float) -> float:
    if t == 0:
        return 0
    if t == 1:
        return 1
    if t < 0.5:
        return 2 ** (20 * t - 10) / 2
    return (2 - 2 ** (-20 * t + 10)) / 2


# --- Back ---

def in_back(t: float) -> float:
    """Pulls back before moving forward."""
    c1 = 1.70158
    c3 = c1 + 1
    return c3 * t * t * t - c1 * t * t


def out_back(t: float) -> float:
    """Overshoots the target and comes back."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * (t - 1) ** 3 + c1 * (t - 1) ** 2


def in_out_back(t: float) -> float:
    c1 = 1.70158
    c2 = c1 * 1.525
    if t < 0.5:
        return ((2 * t) ** 2 * ((c2 + 1) * 2 * t - c2)) / 2
    return ((2 * t - 2) ** 2 * ((c2 + 1) * (t * 2 - 2) + c2) + 2) / 2


# --- Bounce ---

def out_bounce(t: float) -> float:
    """Bounces at the end, like a dropped ball."""
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    elif t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    elif t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    else:
        t -= 2.625 / d1
        return n1 * t * t + 0.984375


def in_bounce(t: float) -> float:
    return 1 - out_bounce(1 - t)


def in_out_bounce(t: float) -> float:
    if t < 0.5:
        return (1 - out_bounce(1 - 2 * t)) / 2
    return (1 + out_bounce(2 * t - 1)) / 2


# ============================================================================
# Ease enum -> function
# ============================================================================

_EASE_FUNCTIONS: dict[Ease, Interpolator] = {
    Ease.LINEAR: linear,
    Ease.IN_QUAD: in_quad,
    Ease.OUT_QUAD: out_quad,
    Ease.IN_OUT_QUAD: in_out_quad,
    Ease.IN_CUBIC: in_cubic,
    Ease.OUT_CUBIC: out_cubic,
    Ease.IN_OUT_CUBIC: in_out_cubic,
    Ease.IN_SINE: in_sine,
    Ease.OUT_SINE: out_sine,
    Ease.IN_OUT_SINE: in_out_sine,
    Ease.IN_EXPO: in_expo,
    Ease.OUT_EXPO: out_expo,
    Ease.IN_OUT_EXPO: in_out_expo,
    Ease.IN_BACK: in_back,
    Ease.OUT_BACK: out_back,
    Ease.IN_OUT_BACK: in_out_back,
    Ease.IN_BOUNCE: in_bounce,
    Ease.OUT_BOUNCE: out_bounce,
    Ease.IN_OUT_BOUNCE: in_out_bounce,
}

_ALIASES: dict[str, Ease] = {
    "linear": Ease.LINEAR,
    "accelerate": Ease.IN_QUAD,
    "decelerate": Ease.OUT_QUAD,
    "accelerate_decelerate": Ease.IN_OUT_SINE,
    "anticipate": Ease.IN_BACK,
    "overshoot": Ease.OUT_BACK,
    "bounce": Ease.OUT_BOUNCE,
}


def evaluate(ease: Ease, t: float) -> float:
    """Evaluate the easing function at normalized time t (0..1)."""
    return _EASE_FUNCTIONS[ease](t)


def resolve(interpolator: Union[Ease, Interpolator, None]) -> Interpolator:
    """Turn an Ease member or a plain callable into a callable; None is linear."""
    if interpolator is None:
        return linear
    if isinstance(interpolator, Ease):
        return _EASE_FUNCTIONS[interpolator]
    return interpolator
