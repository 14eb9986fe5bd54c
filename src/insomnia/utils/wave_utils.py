"""
Read playback duration and format attributes straight from a WAVE header.

Only the canonical 44-byte layout is understood: ``RIFF``/``WAVE``, a 16-byte
``fmt `` chunk and the ``data`` chunk directly behind it. No samples are
decoded.
"""
from __future__ import annotations

import struct
from pathlib import Path
from typing import BinaryIO

from insomnia.constant.constants import DATA_TAG, FMT_TAG, RIFF_TAG, WAVE_TAG
from insomnia.entity.artifact_entity import WaveFormatInfo
from insomnia.exception.exception import (
    DegenerateFormatError,
    NoDataChunkError,
    NoFormatChunkError,
    NotARiffFileError,
    NotAWaveFileError,
    WaveIOError,
)
from insomnia.logging.logger import get_logger

logger = get_logger(__name__)

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


# ============================================================================
# Low-level primitives
# ============================================================================

def _read_exact(f: BinaryIO, n: int, path: Path, what: str) -> bytes:
    try:
        buf = f.read(n)
    except OSError as e:
        raise WaveIOError(f"Failed reading {what}", cause=e, context={"path": str(path)}) from e
    if len(buf) != n:
        raise WaveIOError(
            f"Unexpected end of file while reading {what}",
            context={"path": str(path), "expected": n, "got": len(buf)},
        )
    return buf


def _read_u16(f: BinaryIO, path: Path, what: str) -> int:
    return _U16.unpack(_read_exact(f, _U16.size, path, what))[0]


def _read_u32(f: BinaryIO, path: Path, what: str) -> int:
    return _U32.unpack(_read_exact(f, _U32.size, path, what))[0]


def _expect_tag(f: BinaryIO, tag: bytes, path: Path, error_cls, message: str) -> None:
    found = _read_exact(f, len(tag), path, f"{tag!r} tag")
    if found != tag:
        raise error_cls(message, context={"path": str(path), "found": found})


# ============================================================================
# Public API
# ============================================================================

def read_wave_format(path: str | Path) -> WaveFormatInfo:
    """Parse the header of ``path`` and derive its playback duration.

    Raises
    ------
    NotARiffFileError, NotAWaveFileError, NoFormatChunkError, NoDataChunkError
        The tag at the expected offset is wrong.
    DegenerateFormatError
        Zero channels, a bit depth below 8 or a zero sample rate.
    WaveIOError
        The file cannot be opened, or ends inside the header.
    """
    path = Path(path)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise WaveIOError("Could not open audio file", cause=e, context={"path": str(path)}) from e

    with f:
        _expect_tag(f, RIFF_TAG, path, NotARiffFileError, "not a RIFF file")
        _read_u32(f, path, "RIFF size")  # not checked against the real file size
        _expect_tag(f, WAVE_TAG, path, NotAWaveFileError, "not a WAVE file")
        _expect_tag(f, FMT_TAG, path, NoFormatChunkError, "no format chunk found")

        # fmt chunk size (4) + audio format (2)
        _read_exact(f, 6, path, "format chunk size and audio format")
        channels = _read_u16(f, path, "channel count")
        sample_rate = _read_u32(f, path, "sample rate")
        # byte rate (4) + block align (2)
        _read_exact(f, 6, path, "byte rate and block align")
        bits_per_sample = _read_u16(f, path, "bits per sample")

        _expect_tag(f, DATA_TAG, path, NoDataChunkError, "no data chunk found")
        data_len = _read_u32(f, path, "data chunk size")

    bytes_per_sample = bits_per_sample // 8
    if channels == 0 or bytes_per_sample == 0 or sample_rate == 0:
        raise DegenerateFormatError(
            "Degenerate WAVE format",
            context={
                "path": str(path),
                "channels": channels,
                "bits_per_sample": bits_per_sample,
                "sample_rate": sample_rate,
            },
        )

    number_of_samples = data_len // bytes_per_sample // channels
    duration = number_of_samples / sample_rate

    logger.debug(
        f"{path.name}: data={data_len} bytes, {bits_per_sample} bits/sample, "
        f"{sample_rate} Hz, {channels} channel(s) -> {number_of_samples} samples, {duration:.3f}s"
    )
    return WaveFormatInfo(
        channel_count=channels,
        sample_rate_hz=sample_rate,
        bits_per_sample=bits_per_sample,
        data_byte_length=data_len,
        duration_seconds=duration,
    )


class WaveMetaReader:
    """Object wrapper around :func:`read_wave_format`."""

    def __init__(self, info: WaveFormatInfo):
        self.info = info

    @classmethod
    def from_file(cls, path: str | Path) -> "WaveMetaReader":
        return cls(read_wave_format(path))

    def get_duration(self) -> float:
        return self.info.duration_seconds
