"""Tests for building animations from XML and attribute dictionaries."""

import logging

import pytest

from animset import (
    INFINITE,
    AlphaAnimation,
    AnimationConfigError,
    AnimationSet,
    Ease,
    PropertyFlag,
    RepeatMode,
    RotateAnimation,
    TranslateAnimation,
    inflate_animation,
)
from animset.animation import Dimension, DimensionKind
from animset.inflate import (
    apply_set_attributes,
    leaf_from_attributes,
    parse_dimension,
    parse_time,
    set_from_attributes,
)


SET_XML = """
<set shareInterpolator="false" duration="400ms" fillAfter="true" startOffset="50">
    <rotate fromDegrees="0" toDegrees="90" pivotX="50%" pivotY="50%"/>
    <translate fromXDelta="0" toXDelta="50%p" startOffset="100"/>
    <alpha fromAlpha="1" toAlpha="0.25" interpolator="accelerate"/>
</set>
"""


class TestValueParsers:

    def test_time(self):
        assert parse_time("duration", "300") == 300
        assert parse_time("duration", "300ms") == 300
        assert parse_time("duration", "0.3s") == pytest.approx(300)

    def test_time_malformed(self):
        with pytest.raises(AnimationConfigError) as exc_info:
            parse_time("duration", "soon")
        assert exc_info.value.attribute == "duration"
        assert isinstance(exc_info.value, ValueError)

    def test_negative_time(self):
        with pytest.raises(AnimationConfigError):
            parse_time("startOffset", "-10")

    def test_dimension(self):
        assert parse_dimension("toXDelta", "12") == Dimension(DimensionKind.ABSOLUTE, 12.0)
        assert parse_dimension("toXDelta", "50%") == Dimension(DimensionKind.RELATIVE_TO_SELF, 0.5)
        assert parse_dimension("toXDelta", "25%p") == Dimension(DimensionKind.RELATIVE_TO_PARENT, 0.25)
        with pytest.raises(AnimationConfigError):
            parse_dimension("toXDelta", "wide")


class TestSetAttributes:

    def test_all_set_attributes(self):
        s = set_from_attributes({
            "shareInterpolator": "true",
            "duration": "250",
            "fillBefore": "false",
            "fillAfter": "true",
            "repeatMode": "reverse",
            "startOffset": "40",
        })
        assert s.share_interpolator
        assert s.is_explicit(PropertyFlag.DURATION | PropertyFlag.FILL_BEFORE
                             | PropertyFlag.FILL_AFTER | PropertyFlag.REPEAT_MODE)
        assert s.duration == 250
        assert s.fill_before is False
        assert s.fill_after is True
        assert s.repeat_mode is RepeatMode.REVERSE
        assert s.start_offset == 40

    def test_share_interpolator_default(self):
        s = set_from_attributes({})
        assert not s.share_interpolator
        assert s.flags == PropertyFlag.NONE

    def test_apply_to_existing_set_pushes_down(self):
        s = AnimationSet()
        member = TranslateAnimation(0, 1, duration=10)
        s.add_animation(member)
        apply_set_attributes(s, {"duration": "1s", "repeatMode": "restart"})
        assert member.duration == 1000
        assert member.repeat_mode is RepeatMode.RESTART

    def test_bad_repeat_mode(self):
        with pytest.raises(AnimationConfigError) as exc_info:
            set_from_attributes({"repeatMode": "sideways"})
        assert exc_info.value.attribute == "repeatMode"

    def test_unknown_attribute_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="animset"):
            s = set_from_attributes({"repeatCount": "3", "duration": "10"})
        assert s.duration == 10
        assert "repeatCount" in caplog.text

    def test_set_interpolator(self):
        s = set_from_attributes({"shareInterpolator": "true", "interpolator": "accelerate"})
        assert s.interpolator is Ease.IN_QUAD
        member = TranslateAnimation(0, 1, duration=10)
        s.add_animation(member)
        s.initialize(1, 1, 1, 1)
        assert member.interpolator is Ease.IN_QUAD


class TestLeafAttributes:

    def test_translate(self):
        a = leaf_from_attributes("translate", {"fromXDelta": "0", "toXDelta": "50%p", "duration": "100"})
        assert isinstance(a, TranslateAnimation)
        assert a.to_x == Dimension(DimensionKind.RELATIVE_TO_PARENT, 0.5)
        assert a.duration == 100

    def test_repeat_count(self):
        a = leaf_from_attributes("alpha", {"repeatCount": "infinite"})
        assert a.repeat_count == INFINITE
        b = leaf_from_attributes("alpha", {"repeatCount": "2"})
        assert b.repeat_count == 2

    def test_unknown_tag(self):
        with pytest.raises(AnimationConfigError):
            leaf_from_attributes("wiggle", {})


class TestInflate:

    def test_set_tree(self):
        s = inflate_animation(SET_XML)
        assert isinstance(s, AnimationSet)
        rotate, translate, alpha = s.members
        assert isinstance(rotate, RotateAnimation)
        assert isinstance(translate, TranslateAnimation)
        assert isinstance(alpha, AlphaAnimation)

        for m in s.members:
            assert m.duration == 400
            assert m.fill_after is True
        # startOffset applies to the set only
        assert rotate.start_offset == 0
        assert translate.start_offset == 100
        assert s.start_offset == 50
        assert s.duration == 500
        assert alpha.interpolator is Ease.IN_QUAD
        assert s.has_alpha()

    def test_inflated_set_plays(self):
        s = inflate_animation(SET_XML)
        s.initialize(100, 100, 400, 400)
        s.start_now(0)
        t, more = s.get_transformation(1000)
        assert not more
        assert t.alpha == pytest.approx(0.25)
        # rotate 90 about (50, 50), then translate by 200
        assert t.transform_point(0, 0) == pytest.approx((300, 0), abs=1e-9)

    def test_nested_sets(self):
        s = inflate_animation('<set duration="10"><set><alpha/></set></set>')
        inner = s.members[0]
        assert isinstance(inner, AnimationSet)
        assert inner.members[0].duration == 10

    def test_malformed_xml(self):
        with pytest.raises(AnimationConfigError):
            inflate_animation("<set><rotate></set>")

    def test_malformed_attribute(self):
        with pytest.raises(AnimationConfigError) as exc_info:
            inflate_animation('<set fillAfter="maybe"><alpha/></set>')
        assert exc_info.value.attribute == "fillAfter"
