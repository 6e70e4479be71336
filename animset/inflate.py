"""
Build animations from declarative descriptions.

Usage:
    from animset.inflate import inflate_animation

    anim = inflate_animation('''
        <set shareInterpolator="false" duration="400ms" fillAfter="true">
            <rotate fromDegrees="0" toDegrees="90" pivotX="50%" pivotY="50%"/>
            <translate fromXDelta="0" toXDelta="50%p" startOffset="100"/>
            <alpha fromAlpha="1" toAlpha="0.25"/>
        </set>
    ''')

Time values are milliseconds with an optional "ms" or "s" suffix.
Dimensions are absolute ("12"), relative to self ("50%") or relative to
the parent ("50%p").
"""

from __future__ import annotations

from typing import Callable, Mapping
from xml.etree import ElementTree as ET

from animset import log
from animset.animation import INFINITE, Animation, Dimension, DimensionKind, RepeatMode
from animset.animation_set import AnimationSet
from animset.animations import AlphaAnimation, RotateAnimation, ScaleAnimation, TranslateAnimation
from animset.ease import Ease
from animset.errors import AnimationConfigError


# ============================================================================
# Value parsers
# ============================================================================


def parse_bool(name: str, value: str) -> bool:
    text = value.strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise AnimationConfigError(name, value, "expected true or false")


def parse_time(name: str, value: str) -> float:
    """Parse "300", "300ms" or "0.3s" into milliseconds."""
    text = value.strip().lower()
    scale = 1.0
    if text.endswith("ms"):
        text = text[:-2]
    elif text.endswith("s"):
        text = text[:-1]
        scale = 1000.0
    try:
        ms = float(text) * scale
    except ValueError as e:
        raise AnimationConfigError(name, value, "expected a time value") from e
    if ms < 0:
        raise AnimationConfigError(name, value, "time must be non-negative")
    return ms


def parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise AnimationConfigError(name, value, "expected a number") from e


def parse_dimension(name: str, value: str) -> Dimension:
    """Parse "12", "50%" or "50%p"."""
    text = value.strip().lower()
    kind = DimensionKind.ABSOLUTE
    if text.endswith("%p"):
        kind = DimensionKind.RELATIVE_TO_PARENT
        text = text[:-2]
    elif text.endswith("%"):
        kind = DimensionKind.RELATIVE_TO_SELF
        text = text[:-1]
    number = parse_float(name, text)
    if kind is not DimensionKind.ABSOLUTE:
        number /= 100.0
    return Dimension(kind, number)


def parse_repeat_mode(name: str, value: str) -> RepeatMode:
    text = value.strip().lower()
    if text in ("restart", "1"):
        return RepeatMode.RESTART
    if text in ("reverse", "2"):
        return RepeatMode.REVERSE
    raise AnimationConfigError(name, value, "expected restart or reverse")


def parse_repeat_count(name: str, value: str) -> int:
    text = value.strip().lower()
    if text == "infinite":
        return INFINITE
    try:
        return int(text)
    except ValueError as e:
        raise AnimationConfigError(name, value, "expected an integer or 'infinite'") from e


def parse_interpolator(name: str, value: str) -> Ease:
    try:
        return Ease.from_name(value)
    except KeyError as e:
        raise AnimationConfigError(name, value, "unknown interpolator") from e


# ============================================================================
# Attribute tables
# ============================================================================

# attribute name -> (parser, property name)
_COMMON_ATTRIBUTES: dict[str, tuple[Callable[[str, str], object], str]] = {
    "duration": (parse_time, "duration"),
    "startOffset": (parse_time, "start_offset"),
    "fillBefore": (parse_bool, "fill_before"),
    "fillAfter": (parse_bool, "fill_after"),
    "fillEnabled": (parse_bool, "fill_enabled"),
    "repeatMode": (parse_repeat_mode, "repeat_mode"),
    "repeatCount": (parse_repeat_count, "repeat_count"),
    "interpolator": (parse_interpolator, "interpolator"),
}

_SET_ATTRIBUTES = ("duration", "fillBefore", "fillAfter", "repeatMode", "startOffset", "interpolator")

_LEAF_ARGUMENTS: dict[str, dict[str, tuple[Callable[[str, str], object], str]]] = {
    "translate": {
        "fromXDelta": (parse_dimension, "from_x"),
        "toXDelta": (parse_dimension, "to_x"),
        "fromYDelta": (parse_dimension, "from_y"),
        "toYDelta": (parse_dimension, "to_y"),
    },
    "rotate": {
        "fromDegrees": (parse_float, "from_degrees"),
        "toDegrees": (parse_float, "to_degrees"),
        "pivotX": (parse_dimension, "pivot_x"),
        "pivotY": (parse_dimension, "pivot_y"),
    },
    "scale": {
        "fromXScale": (parse_float, "from_x"),
        "toXScale": (parse_float, "to_x"),
        "fromYScale": (parse_float, "from_y"),
        "toYScale": (parse_float, "to_y"),
        "pivotX": (parse_dimension, "pivot_x"),
        "pivotY": (parse_dimension, "pivot_y"),
    },
    "alpha": {
        "fromAlpha": (parse_float, "from_alpha"),
        "toAlpha": (parse_float, "to_alpha"),
    },
}

_LEAF_CLASSES: dict[str, type[Animation]] = {
    "translate": TranslateAnimation,
    "rotate": RotateAnimation,
    "scale": ScaleAnimation,
    "alpha": AlphaAnimation,
}


# ============================================================================
# Builders
# ============================================================================


def set_from_attributes(attrs: Mapping[str, str]) -> AnimationSet:
    """Create an AnimationSet from its attributes (children not included)."""
    share = parse_bool("shareInterpolator", attrs["shareInterpolator"]) if "shareInterpolator" in attrs else False
    anim_set = AnimationSet(share_interpolator=share)
    apply_set_attributes(anim_set, attrs)
    return anim_set


def apply_set_attributes(anim_set: AnimationSet, attrs: Mapping[str, str]) -> None:
    """
    Apply set attributes to an existing set.

    shareInterpolator is fixed at construction and skipped here; attributes
    that do not apply to a set are logged and ignored.
    """
    for name, value in attrs.items():
        if name == "shareInterpolator":
            continue
        if name not in _SET_ATTRIBUTES:
            log.warn(f"[inflate] attribute '{name}' ignored on <set>")
            continue
        parser, prop = _COMMON_ATTRIBUTES[name]
        setattr(anim_set, prop, parser(name, value))


def leaf_from_attributes(tag: str, attrs: Mapping[str, str]) -> Animation:
    """Create a leaf animation ("translate", "rotate", "scale", "alpha")."""
    cls = _LEAF_CLASSES.get(tag)
    if cls is None:
        raise AnimationConfigError("tag", tag, "unknown animation element")

    arguments = _LEAF_ARGUMENTS[tag]
    kwargs = {}
    for name, (parser, arg) in arguments.items():
        if name in attrs:
            kwargs[arg] = parser(name, attrs[name])
    anim = cls(**kwargs)

    for name, value in attrs.items():
        if name in arguments:
            continue
        entry = _COMMON_ATTRIBUTES.get(name)
        if entry is None:
            log.warn(f"[inflate] attribute '{name}' ignored on <{tag}>")
            continue
        parser, prop = entry
        setattr(anim, prop, parser(name, value))
    return anim


def inflate_element(element: ET.Element) -> Animation:
    """Build an animation tree from a parsed XML element."""
    if element.tag == "set":
        anim_set = set_from_attributes(element.attrib)
        for child in element:
            anim_set.add_animation(inflate_element(child))
        return anim_set
    return leaf_from_attributes(element.tag, element.attrib)


def inflate_animation(xml_text: str) -> Animation:
    """Build an animation tree from XML text."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise AnimationConfigError("xml", xml_text[:40], str(e)) from e
    return inflate_element(root)
