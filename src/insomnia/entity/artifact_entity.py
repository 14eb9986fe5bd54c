from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class WaveFormatInfo:
    channel_count: int
    sample_rate_hz: int
    bits_per_sample: int
    data_byte_length: int
    duration_seconds: float

    @property
    def number_of_samples(self) -> int:
        return self.data_byte_length // (self.bits_per_sample // 8) // self.channel_count


@dataclass(frozen=True)
class AnnotationLabel:
    start_offset_seconds: float
    end_offset_seconds: float            # equals start unless range mode is active
    text: str

    def to_line(self) -> str:
        """Audacity label-track line: ``start<TAB>end<TAB>text<LF>``."""
        return f"{self.start_offset_seconds:.2f}\t{self.end_offset_seconds:.2f}\t{self.text}\n"


@dataclass(frozen=True)
class AnnotationArtifact:
    output_file: Path
    textgrid_path: Optional[Path]
    n_files_seen: int
    n_files_annotated: int
    n_files_skipped: int
    n_labels: int
    total_duration_sec: int


@dataclass(frozen=True)
class RecordingArtifact:
    output_folder: Path
    recordings: List[Path]
    n_failed: int
