"""Transformation - 2D affine matrix plus alpha produced by animations."""

from __future__ import annotations

import math

import numpy as np


class Transformation:
    """
    Accumulator for one frame of an animation.

    Holds a 3x3 affine matrix (row-major, column vectors: p' = M @ p)
    and an alpha multiplier.
    """

    __slots__ = ("matrix", "alpha")

    def __init__(self, matrix: np.ndarray | None = None, alpha: float = 1.0):
        if matrix is None:
            self.matrix = np.identity(3, dtype=np.float64)
        else:
            self.matrix = np.array(matrix, dtype=np.float64).reshape(3, 3)
        self.alpha = float(alpha)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls) -> "Transformation":
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> "Transformation":
        t = cls()
        t.matrix[0, 2] = dx
        t.matrix[1, 2] = dy
        return t

    @classmethod
    def rotation(cls, degrees: float, px: float = 0.0, py: float = 0.0) -> "Transformation":
        """Rotation by degrees around pivot (px, py)."""
        rad = math.radians(degrees)
        c = math.cos(rad)
        s = math.sin(rad)
        rot = np.array(
            [[c, -s, 0.0],
             [s, c, 0.0],
             [0.0, 0.0, 1.0]],
            dtype=np.float64,
        )
        return cls(_about_pivot(rot, px, py))

    @classmethod
    def scaling(cls, sx: float, sy: float, px: float = 0.0, py: float = 0.0) -> "Transformation":
        """Scale by (sx, sy) around pivot (px, py)."""
        scale = np.diag([sx, sy, 1.0]).astype(np.float64)
        return cls(_about_pivot(scale, px, py))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Reset to identity matrix and opaque alpha."""
        self.matrix[...] = np.identity(3)
        self.alpha = 1.0

    def set(self, other: "Transformation") -> None:
        self.matrix[...] = other.matrix
        self.alpha = other.alpha

    def compose(self, other: "Transformation") -> None:
        """
        Pre-concatenate other: self = self * other.

        Other is applied to points before self.
        """
        self.matrix = self.matrix @ other.matrix
        self.alpha *= other.alpha

    def post_compose(self, other: "Transformation", alpha: bool = True) -> None:
        """
        Post-concatenate other: self = other * self.

        Other is applied to points after self. Alpha is multiplied only
        when requested.
        """
        self.matrix = other.matrix @ self.matrix
        if alpha:
            self.alpha *= other.alpha

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def copy(self) -> "Transformation":
        return Transformation(self.matrix.copy(), self.alpha)

    def is_identity(self, eps: float = 1e-9) -> bool:
        return (
            np.allclose(self.matrix, np.identity(3), atol=eps)
            and abs(self.alpha - 1.0) <= eps
        )

    def allclose(self, other: "Transformation", eps: float = 1e-9) -> bool:
        return (
            np.allclose(self.matrix, other.matrix, atol=eps)
            and abs(self.alpha - other.alpha) <= eps
        )

    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        p = self.matrix @ np.array([x, y, 1.0])
        return float(p[0]), float(p[1])

    def __repr__(self) -> str:
        m = self.matrix
        return (
            f"Transformation(alpha={self.alpha:.3f}, "
            f"matrix=[[{m[0, 0]:.3f}, {m[0, 1]:.3f}, {m[0, 2]:.3f}], "
            f"[{m[1, 0]:.3f}, {m[1, 1]:.3f}, {m[1, 2]:.3f}]])"
        )


def _about_pivot(m: np.ndarray, px: float, py: float) -> np.ndarray:
    if px == 0.0 and py == 0.0:
        return m
    to_origin = np.array([[1.0, 0.0, -px], [0.0, 1.0, -py], [0.0, 0.0, 1.0]])
    back = np.array([[1.0, 0.0, px], [0.0, 1.0, py], [0.0, 0.0, 1.0]])
    return back @ m @ to_origin
