"""AnimationSet - a group of animations played together as one."""

from __future__ import annotations

from enum import Enum, IntFlag, auto
from typing import Iterator

from animset import log
from animset.animation import START_ON_FIRST_FRAME, Animation, RepeatMode
from animset.errors import AnimationError
from animset.transformation import Transformation


class PropertyFlag(IntFlag):
    """
    Properties set directly on an AnimationSet.

    Bit values match the ones used by persisted animation descriptions.
    """

    NONE = 0
    FILL_AFTER = 0x1
    FILL_BEFORE = 0x2
    REPEAT_MODE = 0x4
    SHARE_INTERPOLATOR = 0x10
    DURATION = 0x20
    MORPH_MATRIX = 0x40
    CHANGE_BOUNDS = 0x80


class SetState(Enum):
    """Playback state of an AnimationSet."""

    NOT_STARTED = auto()
    RUNNING = auto()
    FINISHED = auto()


class AnimationSet(Animation):
    """
    Group of animations whose transformations are composed into one.

    The set exposes the same surface as a single Animation. Properties set
    on the set behave as follows:

    - duration, repeat_mode, fill_before, fill_after: stored on the set and
      pushed down to every member, including members added later.
    - repeat_count, fill_enabled: ignored.
    - start_offset, share_interpolator: apply to the set itself.

    Member transformations are applied in the order the members were added:
    the first member's transformation acts on points first.

    Usage:
        anim_set = AnimationSet()
        anim_set.add_animation(RotateAnimation(0, 90, duration=300))
        anim_set.add_animation(TranslateAnimation(0, 100, duration=500, start_offset=100))
        anim_set.fill_after = True
        anim_set.initialize(w, h, parent_w, parent_h)

        # each frame
        t, more = anim_set.get_transformation(now_ms)
    """

    def __init__(self, share_interpolator: bool = False):
        super().__init__()
        self._flags: PropertyFlag = PropertyFlag.NONE
        if share_interpolator:
            self._flags |= PropertyFlag.SHARE_INTERPOLATOR

        self._animations: list[Animation] = []
        self._explicit_duration: float = 0
        self._member_starts: list[float] = []
        self._member_bases: list[float] = []
        self._last_end: float = 0

        self._state: SetState = SetState.NOT_STARTED
        self._dirty: bool = True
        self._has_alpha: bool = False

        self._temp = Transformation()
        self._terminal: Transformation | None = None

    # ------------------------------------------------------------------
    # Flags and state
    # ------------------------------------------------------------------

    @property
    def flags(self) -> PropertyFlag:
        return self._flags

    def is_explicit(self, flag: PropertyFlag) -> bool:
        """True if every bit of flag was set on the set."""
        return (self._flags & flag) == flag

    @property
    def share_interpolator(self) -> bool:
        return self.is_explicit(PropertyFlag.SHARE_INTERPOLATOR)

    @property
    def state(self) -> SetState:
        return self._state

    @property
    def started(self) -> bool:
        return self._state is not SetState.NOT_STARTED

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def last_end(self) -> float:
        """Absolute end time of the latest member as of the last baseline."""
        return self._last_end

    @property
    def members(self) -> tuple[Animation, ...]:
        return tuple(self._animations)

    def __len__(self) -> int:
        return len(self._animations)

    def __iter__(self) -> Iterator[Animation]:
        return iter(tuple(self._animations))

    def _note_running_change(self, name: str) -> None:
        if self._state is SetState.RUNNING:
            log.debug(f"[AnimationSet] '{name}' changed while running")

    # ------------------------------------------------------------------
    # Pushed-down properties
    # ------------------------------------------------------------------

    @property
    def duration(self) -> float:
        """Longest member end (start offset + duration), cached."""
        return self._duration

    @duration.setter
    def duration(self, value: float) -> None:
        if value < 0:
            raise AnimationError(f"duration must be non-negative, got {value}")
        self._note_running_change("duration")
        self._flags |= PropertyFlag.DURATION
        self._explicit_duration = value
        for a in self._animations:
            a.duration = value
        if self._animations:
            self._duration = max(a.start_offset + a.duration for a in self._animations)
        else:
            self._duration = value
        self._dirty = True

    @property
    def fill_before(self) -> bool:
        return self._fill_before

    @fill_before.setter
    def fill_before(self, value: bool) -> None:
        self._note_running_change("fill_before")
        self._flags |= PropertyFlag.FILL_BEFORE
        self._fill_before = bool(value)
        for a in self._animations:
            a.fill_before = self._fill_before

    @property
    def fill_after(self) -> bool:
        return self._fill_after

    @fill_after.setter
    def fill_after(self, value: bool) -> None:
        self._note_running_change("fill_after")
        self._flags |= PropertyFlag.FILL_AFTER
        self._fill_after = bool(value)
        for a in self._animations:
            a.fill_after = self._fill_after

    @property
    def repeat_mode(self) -> RepeatMode:
        return self._repeat_mode

    @repeat_mode.setter
    def repeat_mode(self, value: RepeatMode) -> None:
        self._note_running_change("repeat_mode")
        self._flags |= PropertyFlag.REPEAT_MODE
        self._repeat_mode = RepeatMode(value)
        for a in self._animations:
            a.repeat_mode = self._repeat_mode

    # ------------------------------------------------------------------
    # Ignored properties
    # ------------------------------------------------------------------

    @property
    def repeat_count(self) -> int:
        return 0

    @repeat_count.setter
    def repeat_count(self, value: int) -> None:
        log.debug(f"[AnimationSet] repeat_count={value} ignored")

    @property
    def fill_enabled(self) -> bool:
        return False

    @fill_enabled.setter
    def fill_enabled(self, value: bool) -> None:
        log.debug(f"[AnimationSet] fill_enabled={value} ignored")

    # ------------------------------------------------------------------
    # Set-only properties
    # ------------------------------------------------------------------

    @property
    def start_offset(self) -> float:
        return self._start_offset

    @start_offset.setter
    def start_offset(self, value: float) -> None:
        self._note_running_change("start_offset")
        self._start_offset = value
        self._dirty = True

    @property
    def start_time(self) -> float:
        return self._start_time

    @start_time.setter
    def start_time(self, value: float) -> None:
        """Set the start time; the set plays again from NOT_STARTED."""
        self._start_time = value
        self._state = SetState.NOT_STARTED
        self._started = False
        self._ended = False
        self._terminal = None
        self._dirty = True

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def add_animation(self, a: Animation) -> None:
        """
        Add a member animation.

        Transformations of the members are applied in the order they were
        added. Properties already set on the set are applied to the new
        member immediately.
        """
        if a is None:
            raise AnimationError("cannot add None to an AnimationSet")
        if a is self:
            raise AnimationError("an AnimationSet cannot contain itself")

        self._animations.append(a)
        self._push_explicit(a)

        if a.will_change_transformation_matrix():
            self._flags |= PropertyFlag.MORPH_MATRIX
        if a.will_change_bounds():
            self._flags |= PropertyFlag.CHANGE_BOUNDS
        if a.has_alpha():
            self._has_alpha = True

        end = a.start_offset + a.duration
        if len(self._animations) == 1:
            self._duration = end
        else:
            self._duration = max(self._duration, end)
        self._dirty = True

    def _push_explicit(self, a: Animation) -> None:
        if self._flags & PropertyFlag.DURATION:
            a.duration = self._explicit_duration
        if self._flags & PropertyFlag.FILL_BEFORE:
            a.fill_before = self._fill_before
        if self._flags & PropertyFlag.FILL_AFTER:
            a.fill_after = self._fill_after
        if self._flags & PropertyFlag.REPEAT_MODE:
            a.repeat_mode = self._repeat_mode

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def has_alpha(self) -> bool:
        return self._has_alpha

    def will_change_transformation_matrix(self) -> bool:
        return self.is_explicit(PropertyFlag.MORPH_MATRIX)

    def will_change_bounds(self) -> bool:
        return self.is_explicit(PropertyFlag.CHANGE_BOUNDS)

    def compute_duration_hint(self) -> float:
        """Maximum of the members' duration hints."""
        return max((a.compute_duration_hint() for a in self._animations), default=0)

    def scale_current_duration(self, scale: float) -> None:
        if scale < 0:
            raise AnimationError(f"scale must be non-negative, got {scale}")
        for a in self._animations:
            a.scale_current_duration(scale)
        self._duration *= scale
        self._explicit_duration *= scale
        self._start_offset *= scale
        self._dirty = True

    def initialize(self, width, height, parent_width, parent_height) -> None:
        """Forward bounds to every member; the next frame recomputes the baseline."""
        super().initialize(width, height, parent_width, parent_height)
        share = self.share_interpolator
        for a in self._animations:
            if share:
                a.interpolator = self._interpolator
            a.initialize(width, height, parent_width, parent_height)
        self._dirty = True

    def reset(self) -> None:
        super().reset()
        for a in self._animations:
            a.reset()

    # ------------------------------------------------------------------
    # Frame evaluation
    # ------------------------------------------------------------------

    def _enter_running(self, current_time: float) -> None:
        """Fix start times of all members relative to the set's own start."""
        fresh = self._state is SetState.NOT_STARTED
        if self._start_time == START_ON_FIRST_FRAME:
            self._start_time = current_time

        base = self._start_time + self._start_offset
        starts = []
        last_end = base
        # Members keep their own repeat progress unless the base moved
        bases = self._member_bases
        for i, a in enumerate(self._animations):
            if fresh or i >= len(bases) or bases[i] != base:
                a.start_time = base
            begin = base + a.start_offset
            starts.append(begin)
            last_end = max(last_end, begin + a.duration)

        self._member_starts = starts
        self._member_bases = [base] * len(self._animations)
        self._last_end = last_end
        self._has_alpha = any(a.has_alpha() for a in self._animations)
        self._dirty = False

        if fresh:
            self._state = SetState.RUNNING
            self._started = True
            log.debug(f"[AnimationSet] started at {self._start_time}, members={len(starts)}")
            self._fire(self._on_start)

    def _finish(self, t: Transformation) -> None:
        self._terminal = t.copy()
        self._state = SetState.FINISHED
        self._ended = True
        log.debug(f"[AnimationSet] finished, last_end={self._last_end}")
        self._fire(self._on_end)

    def get_transformation(
        self, current_time: float, out: Transformation | None = None
    ) -> tuple[Transformation, bool]:
        """
        Compose the transformations of all reached members.

        Returns:
            (transformation, more): more is False once every member is over.
            After that every call returns the same transformation.
        """
        if out is None:
            out = Transformation()

        if self._state is SetState.FINISHED:
            out.set(self._terminal)
            return out, False

        if self._state is SetState.NOT_STARTED or self._dirty:
            self._enter_running(current_time)

        out.clear()
        temp = self._temp
        more = False
        for a, begin in zip(self._animations, self._member_starts):
            if current_time < begin:
                more = True
                continue
            temp.clear()
            _, active = a.get_transformation(current_time, temp)
            out.post_compose(temp, alpha=self._has_alpha)
            more = more or active

        if not more:
            self._finish(out)
        return out, more

    def apply_transformation(self, interpolated_time: float, t: Transformation) -> None:
        raise AnimationError("AnimationSet is evaluated through get_transformation")
