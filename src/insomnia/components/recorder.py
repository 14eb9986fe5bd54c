"""
Command: record

Thin wrappers around ``arecord`` (capture) and ``ffmpeg`` (mp3 encoding).
Recordings are started on the full minute and written as
``<YYYYmmddHHMMSS_ffffff>_cCCdDD.wav`` so the annotate command can recover
their start time from the name.
"""
from __future__ import annotations

import re
import subprocess
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from insomnia.constant.constants import (
    CARD_AND_DEVICE_PATTERN,
    ENCODING_TOOL,
    MAX_RECORDING_MINUTES,
    MIN_RECORDING_MINUTES,
    RECORDING_FILE_PREFIX_FORMAT,
    RECORDING_RETRY_DELAY_SECONDS,
    RECORDING_SAMPLE_FORMAT,
    RECORDING_SAMPLE_RATE,
    RECORDING_TOOL,
)
from insomnia.entity.artifact_entity import RecordingArtifact
from insomnia.entity.config_entity import RecordConfig
from insomnia.exception.exception import AudioDeviceError, RecordingError
from insomnia.logging.logger import get_logger
from insomnia.utils.io_utils import ensure_dir

logger = get_logger(__name__)


# ============================================================================
# Tool / device discovery
# ============================================================================

def is_recording_tool_available(tool: str = RECORDING_TOOL) -> bool:
    try:
        result = subprocess.run(
            [tool, "--version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return result.returncode == 0


def parse_card_listing(
    text: str, pattern: re.Pattern = CARD_AND_DEVICE_PATTERN
) -> Dict[int, Tuple[int, int]]:
    """Map card id -> (card id, device id) from ``arecord -l`` output.

    A card listed with several devices keeps the last one.
    """
    devices: Dict[int, Tuple[int, int]] = {}
    for m in pattern.finditer(text):
        card_id, device_id = int(m.group(1)), int(m.group(2))
        logger.debug(f"Found audio card {card_id} with device {device_id}")
        devices[card_id] = (card_id, device_id)
    return devices


def get_available_cards() -> Dict[int, Tuple[int, int]]:
    try:
        result = subprocess.run(
            [RECORDING_TOOL, "-l"], capture_output=True, check=False
        )
    except OSError as e:
        raise AudioDeviceError("Could not get list of audio devices", cause=e) from e

    devices = parse_card_listing(result.stdout.decode("utf-8", errors="replace"))
    if not devices:
        raise AudioDeviceError("No audio capture devices found")
    return devices


def is_valid_device_selection(
    available_devices: Dict[int, Tuple[int, int]], card: int, device: int
) -> bool:
    entry = available_devices.get(card)
    return entry is not None and entry[1] == device


# ============================================================================
# Timing
# ============================================================================

def seconds_until_full_minute(now: Optional[datetime] = None) -> int:
    now = now or datetime.now()
    return 60 - now.second


def wait_until_full_minute() -> None:
    time.sleep(seconds_until_full_minute())


# ============================================================================
# Recording / encoding
# ============================================================================

def build_record_command(
    card: int, device: int, duration_seconds: int, mono: bool, output_file: Path
) -> List[str]:
    return [
        RECORDING_TOOL,
        f"-Dhw:{card},{device}",
        f"-d{duration_seconds}",
        f"-f{RECORDING_SAMPLE_FORMAT}",
        f"-r{RECORDING_SAMPLE_RATE}",
        str(output_file),
        "-c1" if mono else "-c2",
    ]


def recording_file_name(card: int, device: int, now: Optional[datetime] = None) -> str:
    prefix = (now or datetime.now()).strftime(RECORDING_FILE_PREFIX_FORMAT)
    return f"{prefix}_c{card:02d}d{device:02d}.wav"


def record_audio(
    card: int, device: int, duration_seconds: int, mono: bool, output_folder: Path
) -> Path:
    """Record one file (blocking) and return its path."""
    output_file = Path(output_folder) / recording_file_name(card, device)
    cmd = build_record_command(card, device, duration_seconds, mono, output_file)
    try:
        result = subprocess.run(
            cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, check=False
        )
    except OSError as e:
        raise RecordingError("Could not start the recording tool", cause=e, context={"cmd": cmd}) from e
    if result.returncode != 0:
        raise RecordingError(
            f"Failed to record an audio stream from card {card} and device {device}",
            context={"cmd": cmd, "returncode": result.returncode},
        )
    return output_file


def convert_audio_file(wav_path: Path) -> Optional[Path]:
    """Encode ``x.wav`` to ``x.mp3``; the wav is removed on success."""
    mp3_path = wav_path.with_suffix(".mp3")
    logger.info(f"Converting {wav_path.name} to {mp3_path.name}")
    try:
        result = subprocess.run(
            [ENCODING_TOOL, "-i", str(wav_path), str(mp3_path)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        logger.error(f"Could not run {ENCODING_TOOL} for {wav_path.name}: {e}")
        return None
    if result.returncode != 0:
        logger.error(f"Encoding {wav_path.name} failed (exit code {result.returncode})")
        return None

    logger.debug(f"File conversion successful, removing {wav_path.name}")
    wav_path.unlink(missing_ok=True)
    return mp3_path


# ---------------------------------------------------------------------------
# Component class
# ---------------------------------------------------------------------------
class Recorder:
    """Record fixed-length files back to back from one capture device."""

    def __init__(self, config: RecordConfig):
        self.config = config
        self._encoders: List[threading.Thread] = []

    def _validate(self) -> None:
        cfg = self.config
        if not is_recording_tool_available():
            raise RecordingError(f"The {RECORDING_TOOL} tool seems not to be available on this computer")

        if not MIN_RECORDING_MINUTES <= cfg.duration_minutes <= MAX_RECORDING_MINUTES:
            raise RecordingError(
                f"Please select a recording duration between {MIN_RECORDING_MINUTES} "
                f"and {MAX_RECORDING_MINUTES} minutes",
                context={"duration_minutes": cfg.duration_minutes},
            )

        devices = get_available_cards()
        if not is_valid_device_selection(devices, cfg.card, cfg.device):
            raise AudioDeviceError(
                "An invalid combination of audio card and device was selected",
                context={"card": cfg.card, "device": cfg.device, "available": devices},
            )

    def _encode_in_background(self, wav_path: Path) -> None:
        # only unfinished encoders are kept, the loop may run for days
        self._encoders = [t for t in self._encoders if t.is_alive()]
        t = threading.Thread(target=convert_audio_file, args=(wav_path,), daemon=True)
        t.start()
        self._encoders.append(t)

    def run(self) -> RecordingArtifact:
        cfg = self.config
        self._validate()
        ensure_dir(cfg.output_folder)

        if not cfg.encode:
            logger.info("Encoding of the audio files was disabled by a runtime flag")

        if cfg.wait_for_full_minute:
            logger.info(
                f"The current time is {datetime.now():%H:%M:%S}. "
                f"Waiting for the next full minute to start."
            )
            wait_until_full_minute()

        recordings: List[Path] = []
        n_failed = 0
        duration_seconds = 60 * cfg.duration_minutes
        while cfg.max_recordings is None or len(recordings) + n_failed < cfg.max_recordings:
            try:
                wav_path = record_audio(cfg.card, cfg.device, duration_seconds, cfg.mono, cfg.output_folder)
            except RecordingError as e:
                n_failed += 1
                logger.error(f"{e}; retrying in {RECORDING_RETRY_DELAY_SECONDS} s")
                time.sleep(RECORDING_RETRY_DELAY_SECONDS)
                continue

            logger.info(f"The recording {wav_path.name} was finished")
            recordings.append(wav_path)
            if cfg.encode:
                self._encode_in_background(wav_path)

        for t in self._encoders:
            t.join()

        return RecordingArtifact(
            output_folder=cfg.output_folder,
            recordings=recordings,
            n_failed=n_failed,
        )
