from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Optional


@dataclass
class InsomniaError(Exception):
    """
    Base exception for insomnia.

    Adds optional context so errors are informative in the run logs.
    """
    message: str
    cause: Optional[BaseException] = None
    context: Optional[dict] = None

    def __str__(self) -> str:
        ctx = f" | context={self.context}" if self.context else ""
        if self.cause:
            return f"{self.message}{ctx} | cause={repr(self.cause)}"
        return f"{self.message}{ctx}"


# ---------------------------------------------------------------------------
# WAVE header reading
# ---------------------------------------------------------------------------
class WaveReadError(InsomniaError):
    """Any failure while reading the metadata of a WAVE file."""


class WaveIOError(WaveReadError):
    """The file could not be opened or was shorter than its header."""


class WaveFormatError(WaveReadError):
    """The header bytes do not describe the expected RIFF/WAVE layout."""


class NotARiffFileError(WaveFormatError):
    pass


class NotAWaveFileError(WaveFormatError):
    pass


class NoFormatChunkError(WaveFormatError):
    pass


class NoDataChunkError(WaveFormatError):
    pass


class DegenerateFormatError(WaveReadError):
    """Channel count, bit depth or sample rate is zero."""


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
class AnnotationError(InsomniaError):
    pass


class AudioDeviceError(InsomniaError):
    pass


class RecordingError(InsomniaError):
    pass


class ConfigurationError(InsomniaError):
    pass


def wrap_exception(message: str, exc: BaseException, context: Optional[dict] = None) -> InsomniaError:
    """
    Helper to wrap any exception with an InsomniaError, preserving traceback.
    """
    err = InsomniaError(message=message, cause=exc, context=context)
    # Attach original traceback for debugging (keeps full trace in logs)
    err.__cause__ = exc
    return err


def format_traceback(exc: BaseException) -> str:
    """
    Convert an exception traceback to string.
    """
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
