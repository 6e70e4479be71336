"""Concrete leaf animations: translate, rotate, scale and alpha."""

from __future__ import annotations

from typing import Union

from animset.animation import Animation, Dimension
from animset.ease import Ease, Interpolator
from animset.transformation import Transformation

DimensionLike = Union[Dimension, float, int]


class TranslateAnimation(Animation):
    """Moves the object from (from_x, from_y) to (to_x, to_y)."""

    def __init__(
        self,
        from_x: DimensionLike = 0.0,
        to_x: DimensionLike = 0.0,
        from_y: DimensionLike = 0.0,
        to_y: DimensionLike = 0.0,
        duration: float = 0,
        interpolator: Union[Ease, Interpolator, None] = None,
        start_offset: float = 0,
    ):
        super().__init__(duration, interpolator, start_offset)
        self.from_x = Dimension.coerce(from_x)
        self.to_x = Dimension.coerce(to_x)
        self.from_y = Dimension.coerce(from_y)
        self.to_y = Dimension.coerce(to_y)
        self._resolve()

    def initialize(self, width, height, parent_width, parent_height) -> None:
        super().initialize(width, height, parent_width, parent_height)
        self._resolve()

    def _resolve(self) -> None:
        w, h, pw, ph = self._bounds
        self._from = (self.from_x.resolve(w, pw), self.from_y.resolve(h, ph))
        self._to = (self.to_x.resolve(w, pw), self.to_y.resolve(h, ph))

    def will_change_bounds(self) -> bool:
        return False

    def apply_transformation(self, interpolated_time: float, t: Transformation) -> None:
        (fx, fy), (tx, ty) = self._from, self._to
        t.matrix = Transformation.translation(
            fx + (tx - fx) * interpolated_time,
            fy + (ty - fy) * interpolated_time,
        ).matrix


class RotateAnimation(Animation):
    """Rotates the object around a pivot, angles in degrees."""

    def __init__(
        self,
        from_degrees: float = 0.0,
        to_degrees: float = 0.0,
        pivot_x: DimensionLike = 0.0,
        pivot_y: DimensionLike = 0.0,
        duration: float = 0,
        interpolator: Union[Ease, Interpolator, None] = None,
        start_offset: float = 0,
    ):
        super().__init__(duration, interpolator, start_offset)
        self.from_degrees = float(from_degrees)
        self.to_degrees = float(to_degrees)
        self.pivot_x = Dimension.coerce(pivot_x)
        self.pivot_y = Dimension.coerce(pivot_y)
        self._resolve()

    def initialize(self, width, height, parent_width, parent_height) -> None:
        super().initialize(width, height, parent_width, parent_height)
        self._resolve()

    def _resolve(self) -> None:
        w, h, pw, ph = self._bounds
        self._pivot = (self.pivot_x.resolve(w, pw), self.pivot_y.resolve(h, ph))

    def apply_transformation(self, interpolated_time: float, t: Transformation) -> None:
        degrees = self.from_degrees + (self.to_degrees - self.from_degrees) * interpolated_time
        t.matrix = Transformation.rotation(degrees, *self._pivot).matrix


class ScaleAnimation(Animation):
    """Scales the object around a pivot."""

    def __init__(
        self,
        from_x: float = 1.0,
        to_x: float = 1.0,
        from_y: float = 1.0,
        to_y: float = 1.0,
        pivot_x: DimensionLike = 0.0,
        pivot_y: DimensionLike = 0.0,
        duration: float = 0,
        interpolator: Union[Ease, Interpolator, None] = None,
        start_offset: float = 0,
    ):
        super().__init__(duration, interpolator, start_offset)
        self.from_x = float(from_x)
        self.to_x = float(to_x)
        self.from_y = float(from_y)
        self.to_y = float(to_y)
        self.pivot_x = Dimension.coerce(pivot_x)
        self.pivot_y = Dimension.coerce(pivot_y)
        self._resolve()

    def initialize(self, width, height, parent_width, parent_height) -> None:
        super().initialize(width, height, parent_width, parent_height)
        self._resolve()

    def _resolve(self) -> None:
        w, h, pw, ph = self._bounds
        self._pivot = (self.pivot_x.resolve(w, pw), self.pivot_y.resolve(h, ph))

    def apply_transformation(self, interpolated_time: float, t: Transformation) -> None:
        sx = self.from_x + (self.to_x - self.from_x) * interpolated_time
        sy = self.from_y + (self.to_y - self.from_y) * interpolated_time
        t.matrix = Transformation.scaling(sx, sy, *self._pivot).matrix


class AlphaAnimation(Animation):
    """Fades the object; leaves the matrix untouched."""

    def __init__(
        self,
        from_alpha: float = 1.0,
        to_alpha: float = 1.0,
        duration: float = 0,
        interpolator: Union[Ease, Interpolator, None] = None,
        start_offset: float = 0,
    ):
        super().__init__(duration, interpolator, start_offset)
        self.from_alpha = float(from_alpha)
        self.to_alpha = float(to_alpha)

    def has_alpha(self) -> bool:
        return True

    def will_change_transformation_matrix(self) -> bool:
        return False

    def will_change_bounds(self) -> bool:
        return False

    def apply_transformation(self, interpolated_time: float, t: Transformation) -> None:
        t.alpha = self.from_alpha + (self.to_alpha - self.from_alpha) * interpolated_time
