"""
errors.py - Error taxonomy for the batch resizer.

Fatal kinds abort the run before any worker is started. Per-item kinds are
confined to one directory entry or one work item; they are logged and the
run carries on.
"""

__all__ = [
    "ResizeError",
    "ConfigMissingError",
    "InvalidScaleError",
    "InvalidWorkersError",
    "InvalidFilterError",
    "InputNotDirError",
    "OutputSetupError",
    "DirReadError",
    "DecodeError",
    "EncodeError",
    "BadNameError",
]


class ResizeError(RuntimeError):
    """Base class for every error raised by batchresize."""
    kind: str = "Resize"
    fatal: bool = True


# ---------------------------------------------------------------------------
# Fatal: configuration and setup
# ---------------------------------------------------------------------------
class ConfigMissingError(ResizeError):
    kind = "ConfigMissing"

    def __init__(self, message: str = "Either a scale or an absolute width or height must be given"):
        super().__init__(message)


class InvalidScaleError(ResizeError):
    kind = "InvalidScale"


class InvalidWorkersError(ResizeError):
    kind = "InvalidWorkers"


class InvalidFilterError(ResizeError):
    """Raised for a filter name outside the supported set."""
    kind = "InvalidFilter"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"invalid filter type: {name!r}")


class InputNotDirError(ResizeError):
    kind = "InputNotDir"


class OutputSetupError(ResizeError):
    kind = "OutputSetup"


class DirReadError(ResizeError):
    kind = "DirRead"


# ---------------------------------------------------------------------------
# Per-file
# ---------------------------------------------------------------------------
class DecodeError(ResizeError):
    kind = "Decode"
    fatal = False


class EncodeError(ResizeError):
    kind = "Encode"
    fatal = False


class BadNameError(ResizeError):
    kind = "BadName"
    fatal = False
