"""
Per-file annotation labels.

A FileAnnotator covers one WAVE file with either a single label or six
equally wide sub-markers. Its offsets start at the cumulative end time of the
files processed before it, so a batch driver can chain files into one
continuous label track.
"""
from __future__ import annotations

import math
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from insomnia.constant.constants import (
    FILE_NAME_TIMESTAMP_PATTERN,
    RANGE_TIME_FORMAT,
    SUB_MARKER_COUNT,
    TIMESTAMP_FORMAT,
)
from insomnia.entity.artifact_entity import AnnotationLabel
from insomnia.exception.exception import WaveReadError
from insomnia.logging.logger import get_logger
from insomnia.utils.wave_utils import WaveMetaReader

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# File name -> base time
# ---------------------------------------------------------------------------
class FileNameTimestampParser:
    """Recover the recording start time embedded in a file name.

    Build once and hand the same instance to every caller.
    """

    def __init__(self, pattern: re.Pattern = FILE_NAME_TIMESTAMP_PATTERN):
        self.pattern = pattern

    def matches(self, file_name: str) -> bool:
        return self.pattern.search(file_name) is not None

    def parse(self, file_name: str) -> Optional[datetime]:
        m = self.pattern.search(file_name)
        if m is None:
            return None
        year, month, day, hour, minute, second = (int(g) for g in m.groups())
        try:
            return datetime(year, month, day, hour, minute, second)
        except ValueError:
            # e.g. month 13 in an otherwise well-formed name
            return None


# ---------------------------------------------------------------------------
# Component class
# ---------------------------------------------------------------------------
class FileAnnotator:
    """Lazy, bounded sequence of labels for a single audio file."""

    def __init__(
        self,
        file_duration_seconds: float,
        file_base_time: datetime,
        file_start_offset_seconds: int = 0,
        add_sub_markers: bool = False,
        range_mode: bool = False,
    ):
        if add_sub_markers:
            self.slice_duration_seconds = math.floor(file_duration_seconds / SUB_MARKER_COUNT)
            self.max_label_count = SUB_MARKER_COUNT
        else:
            self.slice_duration_seconds = math.floor(file_duration_seconds)
            self.max_label_count = 1

        self.file_duration_seconds = math.floor(file_duration_seconds)
        self.file_start_time_seconds = int(file_start_offset_seconds)
        self.base_timestamp = file_base_time
        self.range_mode = range_mode

        self.next_label_index = 0
        self.cumulative_offset = float(self.file_start_time_seconds)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        file_base_time: datetime,
        file_start_offset_seconds: int = 0,
        add_sub_markers: bool = False,
        range_mode: bool = False,
    ) -> "FileAnnotator":
        """Build an annotator from the WAVE header of ``path``.

        Raises the :class:`WaveReadError` subclass describing why the header
        could not be used.
        """
        reader = WaveMetaReader.from_file(path)
        return cls(
            file_duration_seconds=reader.get_duration(),
            file_base_time=file_base_time,
            file_start_offset_seconds=file_start_offset_seconds,
            add_sub_markers=add_sub_markers,
            range_mode=range_mode,
        )

    @classmethod
    def create(
        cls,
        path: str | Path,
        file_base_time: datetime,
        file_start_offset_seconds: int = 0,
        add_sub_markers: bool = False,
        range_mode: bool = False,
    ) -> Optional["FileAnnotator"]:
        """Like :meth:`from_file`, but returns ``None`` for unreadable files."""
        try:
            return cls.from_file(
                path,
                file_base_time,
                file_start_offset_seconds,
                add_sub_markers=add_sub_markers,
                range_mode=range_mode,
            )
        except WaveReadError as e:
            logger.debug(f"No annotator for {path}: {e}")
            return None

    def get_end_time(self) -> int:
        """Offset (seconds) at which the next file of the batch starts."""
        return self.file_start_time_seconds + self.file_duration_seconds

    def get_max_labels(self) -> int:
        return self.max_label_count

    def __iter__(self) -> "FileAnnotator":
        return self

    def __next__(self) -> AnnotationLabel:
        if self.next_label_index >= self.max_label_count:
            raise StopIteration

        self.next_label_index += 1

        previous_offset = self.cumulative_offset
        if self.range_mode:
            self.cumulative_offset += self.slice_duration_seconds

        slice_end = self.base_timestamp + timedelta(
            seconds=self.slice_duration_seconds * self.next_label_index
        )
        if self.max_label_count > 1:
            slice_start = self.base_timestamp + timedelta(
                seconds=self.slice_duration_seconds * (self.next_label_index - 1)
            )
        else:
            slice_start = self.base_timestamp

        if self.range_mode:
            text = f"{slice_start.strftime(RANGE_TIME_FORMAT)} - {slice_end.strftime(RANGE_TIME_FORMAT)}"
        else:
            text = slice_start.strftime(TIMESTAMP_FORMAT)

        return AnnotationLabel(
            start_offset_seconds=previous_offset,
            end_offset_seconds=self.cumulative_offset,
            text=text,
        )
