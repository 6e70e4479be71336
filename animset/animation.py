"""Base Animation class: per-animation timing state machine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Union

from animset.ease import Ease, Interpolator, resolve as resolve_interpolator
from animset.errors import AnimationError
from animset.transformation import Transformation


START_ON_FIRST_FRAME = -1
"""Start time meaning "resolve on the first get_transformation call"."""

INFINITE = -1
"""Repeat count meaning "repeat forever"."""


class RepeatMode(Enum):
    """What happens when a cycle ends and repeats remain."""

    RESTART = 1
    REVERSE = 2


class DimensionKind(Enum):
    ABSOLUTE = auto()
    RELATIVE_TO_SELF = auto()
    RELATIVE_TO_PARENT = auto()


@dataclass(frozen=True)
class Dimension:
    """
    A length that may depend on the animated object's bounds.

    RELATIVE_TO_SELF and RELATIVE_TO_PARENT values are fractions
    (0.5 means half of the width/height).
    """

    kind: DimensionKind = DimensionKind.ABSOLUTE
    value: float = 0.0

    def resolve(self, size: float, parent_size: float) -> float:
        if self.kind is DimensionKind.RELATIVE_TO_SELF:
            return self.value * size
        if self.kind is DimensionKind.RELATIVE_TO_PARENT:
            return self.value * parent_size
        return self.value

    @classmethod
    def coerce(cls, value: Union["Dimension", float, int]) -> "Dimension":
        if isinstance(value, Dimension):
            return value
        return cls(DimensionKind.ABSOLUTE, float(value))


class Animation(ABC):
    """
    Base class for every animation.

    Subclasses must implement:
    - apply_transformation(interpolated_time, t): write the pose for the
      interpolated time (0..1, may overshoot) into t

    Times are in milliseconds. The timeline of an animation begins at
    start_time + start_offset and lasts duration per cycle.
    """

    def __init__(
        self,
        duration: float = 0,
        interpolator: Union[Ease, Interpolator, None] = None,
        start_offset: float = 0,
    ):
        if duration < 0:
            raise AnimationError(f"duration must be non-negative, got {duration}")
        self._duration: float = duration
        self._start_offset: float = start_offset
        self._start_time: float = START_ON_FIRST_FRAME
        self._fill_before: bool = True
        self._fill_after: bool = False
        self._fill_enabled: bool = False
        self._repeat_mode: RepeatMode = RepeatMode.RESTART
        self._repeat_count: int = 0
        self._interpolator: Union[Ease, Interpolator, None] = interpolator
        self._interpolate: Interpolator = resolve_interpolator(interpolator)

        self._repeated: int = 0
        self._cycle_flip: bool = False
        self._started: bool = False
        self._ended: bool = False
        self._initialized: bool = False
        self._bounds: tuple[float, float, float, float] = (0, 0, 0, 0)

        self._on_start: Callable[["Animation"], None] | None = None
        self._on_end: Callable[["Animation"], None] | None = None
        self._on_repeat: Callable[["Animation"], None] | None = None

    # ------------------------------------------------------------------
    # Timing properties
    # ------------------------------------------------------------------

    @property
    def duration(self) -> float:
        """Duration of one cycle in milliseconds."""
        return self._duration

    @duration.setter
    def duration(self, value: float) -> None:
        if value < 0:
            raise AnimationError(f"duration must be non-negative, got {value}")
        self._duration = value

    @property
    def start_offset(self) -> float:
        return self._start_offset

    @start_offset.setter
    def start_offset(self, value: float) -> None:
        self._start_offset = value

    @property
    def start_time(self) -> float:
        return self._start_time

    @start_time.setter
    def start_time(self, value: float) -> None:
        """Set the start time; restarts the cycle bookkeeping."""
        self._start_time = value
        self._started = False
        self._ended = False
        self._cycle_flip = False
        self._repeated = 0

    @property
    def fill_before(self) -> bool:
        """Hold the first pose before the animation starts."""
        return self._fill_before

    @fill_before.setter
    def fill_before(self, value: bool) -> None:
        self._fill_before = bool(value)

    @property
    def fill_after(self) -> bool:
        """Hold the last pose after the animation ends."""
        return self._fill_after

    @fill_after.setter
    def fill_after(self, value: bool) -> None:
        self._fill_after = bool(value)

    @property
    def fill_enabled(self) -> bool:
        return self._fill_enabled

    @fill_enabled.setter
    def fill_enabled(self, value: bool) -> None:
        self._fill_enabled = bool(value)

    @property
    def repeat_mode(self) -> RepeatMode:
        return self._repeat_mode

    @repeat_mode.setter
    def repeat_mode(self, value: RepeatMode) -> None:
        self._repeat_mode = RepeatMode(value)

    @property
    def repeat_count(self) -> int:
        """Number of extra cycles; INFINITE repeats forever."""
        return self._repeat_count

    @repeat_count.setter
    def repeat_count(self, value: int) -> None:
        self._repeat_count = INFINITE if value < 0 else int(value)

    @property
    def interpolator(self) -> Union[Ease, Interpolator, None]:
        return self._interpolator

    @interpolator.setter
    def interpolator(self, value: Union[Ease, Interpolator, None]) -> None:
        self._interpolator = value
        self._interpolate = resolve_interpolator(value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start on the next frame."""
        self.start_time = START_ON_FIRST_FRAME

    def start_now(self, now: float) -> None:
        self.start_time = now

    def reset(self) -> None:
        """Forget progress; the next frame starts the animation again."""
        self.start_time = START_ON_FIRST_FRAME

    def has_started(self) -> bool:
        return self._started

    def has_ended(self) -> bool:
        return self._ended

    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self, width: float, height: float, parent_width: float, parent_height: float) -> None:
        """Remember the bounds used to resolve size-relative values."""
        self._bounds = (width, height, parent_width, parent_height)
        self._initialized = True

    def on_start(self, callback: Callable[["Animation"], None]) -> "Animation":
        """Set callback to invoke when the animation starts."""
        self._on_start = callback
        return self

    def on_end(self, callback: Callable[["Animation"], None]) -> "Animation":
        """Set callback to invoke when the animation ends."""
        self._on_end = callback
        return self

    def on_repeat(self, callback: Callable[["Animation"], None]) -> "Animation":
        """Set callback to invoke on every repeat."""
        self._on_repeat = callback
        return self

    def _fire(self, callback: Callable[["Animation"], None] | None) -> None:
        if callback is not None:
            callback(self)

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def has_alpha(self) -> bool:
        return False

    def will_change_transformation_matrix(self) -> bool:
        return True

    def will_change_bounds(self) -> bool:
        return True

    def compute_duration_hint(self) -> float:
        """Start offset plus every cycle; -1 when repeating forever."""
        if self._repeat_count < 0:
            return -1
        return self._start_offset + self._duration * (self._repeat_count + 1)

    def scale_current_duration(self, scale: float) -> None:
        self._duration *= scale
        self._start_offset *= scale

    # ------------------------------------------------------------------
    # Frame evaluation
    # ------------------------------------------------------------------

    def _normalized_time(self, current_time: float) -> float:
        begin = self._start_time + self._start_offset
        if self._duration != 0:
            return (current_time - begin) / self._duration
        return 0.0 if current_time < begin else 1.0

    def _repeats_left(self) -> bool:
        if self._duration <= 0:
            return False
        return self._repeat_count < 0 or self._repeated < self._repeat_count

    def get_transformation(
        self, current_time: float, out: Transformation | None = None
    ) -> tuple[Transformation, bool]:
        """
        Apply the pose for current_time.

        Returns:
            (transformation, more): more is False once the last cycle
            is over.
        """
        if out is None:
            out = Transformation()

        if self._start_time == START_ON_FIRST_FRAME:
            self._start_time = current_time

        normalized = self._normalized_time(current_time)

        # Large time steps may skip several cycles
        while normalized >= 1.0 and self._repeats_left():
            self._repeated += 1
            if self._repeat_mode is RepeatMode.REVERSE:
                self._cycle_flip = not self._cycle_flip
            self._start_time += self._duration
            self._fire(self._on_repeat)
            normalized = self._normalized_time(current_time)

        expired = normalized >= 1.0

        if (normalized >= 0.0 or self._fill_before) and (normalized < 1.0 or self._fill_after):
            if not self._started:
                self._started = True
                self._fire(self._on_start)
            normalized = min(max(normalized, 0.0), 1.0)
            if self._cycle_flip:
                normalized = 1.0 - normalized
            self.apply_transformation(self._interpolate(normalized), out)

        if expired and not self._ended:
            self._started = True
            self._ended = True
            self._fire(self._on_end)

        return out, not expired

    @abstractmethod
    def apply_transformation(self, interpolated_time: float, t: Transformation) -> None:
        """Write the pose at interpolated_time into t."""
        pass
