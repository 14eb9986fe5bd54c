"""Header parsing of WAVE files."""
from __future__ import annotations

import io
import wave

import pytest

from conftest import wave_header
from insomnia.exception.exception import (
    DegenerateFormatError,
    NoDataChunkError,
    NoFormatChunkError,
    NotARiffFileError,
    NotAWaveFileError,
    WaveFormatError,
    WaveIOError,
    WaveReadError,
)
from insomnia.utils import wave_utils
from insomnia.utils.wave_utils import WaveMetaReader, read_wave_format


def test_stereo_cd_quality_second(write_wave):
    path = write_wave("one_second.wav", channels=2, sample_rate=44100, bits_per_sample=16, data_len=176400)
    info = read_wave_format(path)

    assert info.duration_seconds == 1.0
    assert info.channel_count == 2
    assert info.sample_rate_hz == 44100
    assert info.bits_per_sample == 16
    assert info.data_byte_length == 176400
    assert info.number_of_samples == 44100


def test_mono_8bit_fractional_duration(write_wave):
    path = write_wave("short.wav", channels=1, sample_rate=8000, bits_per_sample=8, data_len=4000)
    assert read_wave_format(path).duration_seconds == pytest.approx(0.5)


def test_sample_count_uses_integer_division(write_wave):
    # 7 bytes of 16-bit mono -> 3 whole samples
    path = write_wave("odd.wav", channels=1, sample_rate=3, bits_per_sample=16, data_len=7)
    assert read_wave_format(path).duration_seconds == pytest.approx(1.0)


def test_file_written_by_wave_module(tmp_path):
    path = tmp_path / "std.wav"
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(16000)
        w.writeframes(b"\x00\x00" * 16000 * 3)

    info = read_wave_format(path)
    assert info.duration_seconds == pytest.approx(3.0)
    assert WaveMetaReader.from_file(path).get_duration() == pytest.approx(3.0)


def test_not_riff_stops_after_first_tag(monkeypatch):
    class CountingReader(io.BytesIO):
        reads = []

        def read(self, n=-1):
            CountingReader.reads.append(n)
            return super().read(n)

    data = wave_header(riff=b"RIFX")
    monkeypatch.setattr(wave_utils, "open", lambda *a, **k: CountingReader(data), raising=False)

    with pytest.raises(NotARiffFileError):
        read_wave_format("whatever.wav")
    assert CountingReader.reads == [4]


@pytest.mark.parametrize(
    "kwargs, error_cls",
    [
        ({"riff": b"RIFX"}, NotARiffFileError),
        ({"wave": b"AVI "}, NotAWaveFileError),
        ({"fmt": b"fmt_"}, NoFormatChunkError),
        ({"data": b"dat\x00"}, NoDataChunkError),
    ],
)
def test_tag_mismatch_kinds(write_wave, kwargs, error_cls):
    path = write_wave("bad.wav", **kwargs)
    with pytest.raises(error_cls) as exc_info:
        read_wave_format(path)
    assert isinstance(exc_info.value, WaveFormatError)


def test_extension_chunk_before_data_is_rejected(write_wave):
    header = wave_header()
    # a LIST chunk where the data chunk is expected
    payload = header[:36] + b"LIST" + header[40:]
    path = write_wave("list.wav", payload=payload)
    with pytest.raises(NoDataChunkError):
        read_wave_format(path)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"channels": 0},
        {"sample_rate": 0},
        {"bits_per_sample": 0},
        {"bits_per_sample": 4},
    ],
)
def test_degenerate_format(write_wave, kwargs):
    path = write_wave("zero.wav", **kwargs)
    with pytest.raises(DegenerateFormatError):
        read_wave_format(path)


@pytest.mark.parametrize("length", [0, 3, 12, 30, 43])
def test_truncated_header_is_io_error(write_wave, length):
    path = write_wave("cut.wav", payload=wave_header()[:length])
    with pytest.raises(WaveIOError):
        read_wave_format(path)


def test_missing_file_is_io_error(tmp_path):
    with pytest.raises(WaveIOError) as exc_info:
        read_wave_format(tmp_path / "missing.wav")
    assert isinstance(exc_info.value.cause, FileNotFoundError)
    assert isinstance(exc_info.value, WaveReadError)
