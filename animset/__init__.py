"""
animset - composition of time-based 2D animations.

Usage:
    from animset import AnimationSet, RotateAnimation, TranslateAnimation

    anim_set = AnimationSet()
    anim_set.add_animation(RotateAnimation(0, 90, duration=300))
    anim_set.add_animation(TranslateAnimation(0, 100, duration=500, start_offset=100))
    anim_set.initialize(width, height, parent_width, parent_height)

    # In the frame loop
    t, more = anim_set.get_transformation(now_ms)
"""

from animset.transformation import Transformation
from animset.ease import Ease
from animset.animation import (
    INFINITE,
    START_ON_FIRST_FRAME,
    Animation,
    Dimension,
    DimensionKind,
    RepeatMode,
)
from animset.animations import AlphaAnimation, RotateAnimation, ScaleAnimation, TranslateAnimation
from animset.animation_set import AnimationSet, PropertyFlag, SetState
from animset.errors import AnimationConfigError, AnimationError
from animset.inflate import inflate_animation

__all__ = [
    # Values
    "Transformation",
    "Ease",
    "Dimension",
    "DimensionKind",
    # Base classes
    "Animation",
    "RepeatMode",
    "INFINITE",
    "START_ON_FIRST_FRAME",
    # Leaves
    "TranslateAnimation",
    "RotateAnimation",
    "ScaleAnimation",
    "AlphaAnimation",
    # Composition
    "AnimationSet",
    "PropertyFlag",
    "SetState",
    # Loading
    "inflate_animation",
    # Errors
    "AnimationError",
    "AnimationConfigError",
]
