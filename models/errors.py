"""Exceptions raised by the annotation engine."""


class AnnotationError(ValueError):
    """Base class for annotation state errors."""


class InvalidArgument(AnnotationError):
    """Offsets and labels do not line up, or an offset is unusable."""


class OutOfRange(AnnotationError):
    """A label does not fit in the 24-bit label domain."""


class InvalidSegmentId(AnnotationError):
    """A segment map cell references an id outside [0, num_segments)."""
