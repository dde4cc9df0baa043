"""
Errors raised by the carving engine and its image collaborators.

Every engine error is a caller mistake (a violated precondition), so they
are raised immediately and never caught inside the engine.
"""


class CarvingError(ValueError):
    """Base class for precondition violations in the carving engine."""


class CapacityViolation(CarvingError):
    """width * height exceeds the storage reserved when the engine was built."""


class BufferTooSmall(CarvingError):
    """The pixel buffer holds fewer than width * height pixels."""


class MalformedDimensions(CarvingError):
    """Width/height (or a seam) the algorithm cannot work with."""


class ImageIOError(Exception):
    """Decoding or encoding an image file failed."""
