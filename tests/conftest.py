from __future__ import annotations

import struct
from pathlib import Path

import pytest


def wave_header(
    channels: int = 2,
    sample_rate: int = 44100,
    bits_per_sample: int = 16,
    data_len: int = 176400,
    riff: bytes = b"RIFF",
    wave: bytes = b"WAVE",
    fmt: bytes = b"fmt ",
    data: bytes = b"data",
) -> bytes:
    """Canonical 44-byte PCM WAVE header."""
    block_align = channels * (bits_per_sample // 8)
    return (
        riff
        + struct.pack("<I", 36 + data_len)
        + wave
        + fmt
        + struct.pack("<IHHIIHH", 16, 1, channels, sample_rate,
                      sample_rate * block_align, block_align, bits_per_sample)
        + data
        + struct.pack("<I", data_len)
    )


def pcm_wave_bytes(seconds: int, channels: int = 1, sample_rate: int = 8000, bits_per_sample: int = 16) -> bytes:
    """Header plus a silent payload of ``seconds`` length."""
    data_len = seconds * sample_rate * channels * (bits_per_sample // 8)
    return wave_header(channels, sample_rate, bits_per_sample, data_len) + b"\x00" * data_len


@pytest.fixture
def write_wave(tmp_path: Path):
    """Write a header-only or full WAVE file below tmp_path."""

    def _write(name: str, payload: bytes | None = None, **header_kwargs) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload if payload is not None else wave_header(**header_kwargs))
        return path

    return _write
