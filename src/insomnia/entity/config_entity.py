from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class RecordingDeviceConfig:
    card: int = 0
    device: int = 0
    mono: bool = False


@dataclass(frozen=True)
class ProjectConfig:
    data_directory: Path                 # where recordings are written
    logs_root: Path                      # logs/<run_id>/*.log
    input: Dict[str, RecordingDeviceConfig] = field(default_factory=dict)


# =========================================================================
# Command: annotate
# =========================================================================
@dataclass(frozen=True)
class AnnotateConfig:
    input_folder: Path                   # folder with <YYYYmmddHHMMSS>_*.wav files
    output_file: Path                    # Audacity label track (appended)
    range_mode: bool = False             # "HH:MM:SS - HH:MM:SS" instead of a timestamp
    add_sub_markers: bool = False        # six labels per file instead of one
    textgrid_path: Optional[Path] = None # optional Praat TextGrid copy of the labels
    show_progress: bool = False


# =========================================================================
# Command: record
# =========================================================================
@dataclass(frozen=True)
class RecordConfig:
    output_folder: Path
    card: int = 0
    device: int = 0
    mono: bool = False
    duration_minutes: int = 1            # 1..60
    encode: bool = True                  # ffmpeg -> mp3, wav removed afterwards
    max_recordings: Optional[int] = None # None = record forever
    wait_for_full_minute: bool = True
