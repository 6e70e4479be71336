"""Exceptions raised by animset."""


class AnimationError(Exception):
    """Misuse of the animation API (absent member, negative duration, ...)."""


class AnimationConfigError(AnimationError, ValueError):
    """Malformed declarative description of an animation."""

    def __init__(self, attribute: str, value, reason: str = ""):
        self.attribute = attribute
        self.value = value
        message = f"invalid value {value!r} for '{attribute}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
