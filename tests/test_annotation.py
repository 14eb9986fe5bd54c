"""FileAnnotator label generation and file name timestamps."""
from __future__ import annotations

from datetime import datetime

import pytest

from insomnia.components.annotation import FileAnnotator, FileNameTimestampParser
from insomnia.entity.artifact_entity import AnnotationLabel
from insomnia.exception.exception import NotARiffFileError

BASE = datetime(2021, 1, 1, 0, 0, 0)


def _drain(annotator: FileAnnotator):
    return list(annotator)


@pytest.mark.parametrize("duration", [0.0, 0.4, 5.0, 59.9, 3600.0])
def test_single_label_without_sub_markers(duration):
    annotator = FileAnnotator(duration, BASE, 0, add_sub_markers=False)
    assert annotator.get_max_labels() == 1
    assert len(_drain(annotator)) == 1


@pytest.mark.parametrize("duration", [0.0, 0.4, 5.0, 59.9, 3600.0])
def test_six_labels_with_sub_markers(duration):
    annotator = FileAnnotator(duration, BASE, 0, add_sub_markers=True, range_mode=True)
    assert annotator.get_max_labels() == 6
    assert len(_drain(annotator)) == 6


def test_exhausted_annotator_stays_exhausted():
    annotator = FileAnnotator(10.0, BASE)
    next(annotator)
    with pytest.raises(StopIteration):
        next(annotator)
    with pytest.raises(StopIteration):
        next(annotator)
    assert annotator.next_label_index == 1


def test_chaining_offsets_across_files():
    first = FileAnnotator(10.0, BASE, 0)
    second = FileAnnotator(20.0, BASE, first.get_end_time())

    assert first.get_end_time() == 10
    assert second.file_start_time_seconds == 10
    assert second.get_end_time() == 30


def test_end_time_truncates_fractional_duration():
    annotator = FileAnnotator(10.9, BASE, 5)
    assert annotator.get_end_time() == 15


def test_range_label_text_and_offsets():
    (label,) = _drain(FileAnnotator(10.0, BASE, 0, range_mode=True))

    assert label.text == "00:00:00 - 00:00:10"
    assert (label.start_offset_seconds, label.end_offset_seconds) == (0.0, 10.0)
    assert label.to_line() == "0.00\t10.00\t00:00:00 - 00:00:10\n"


def test_timestamp_label_keeps_offsets_fixed():
    (label,) = _drain(FileAnnotator(10.0, datetime(2021, 3, 7, 22, 15, 0), 120, range_mode=False))

    assert label.text == "07.03.2021 22:15:00"
    assert label.start_offset_seconds == label.end_offset_seconds == 120.0
    assert label.to_line() == "120.00\t120.00\t07.03.2021 22:15:00\n"


def test_sub_markers_in_range_mode():
    labels = _drain(FileAnnotator(65.0, datetime(2021, 1, 1, 23, 59, 30), 100, add_sub_markers=True, range_mode=True))

    assert [lab.text for lab in labels] == [
        "23:59:30 - 23:59:40",
        "23:59:40 - 23:59:50",
        "23:59:50 - 00:00:00",
        "00:00:00 - 00:00:10",
        "00:00:10 - 00:00:20",
        "00:00:20 - 00:00:30",
    ]
    assert [(lab.start_offset_seconds, lab.end_offset_seconds) for lab in labels] == [
        (100.0, 110.0),
        (110.0, 120.0),
        (120.0, 130.0),
        (130.0, 140.0),
        (140.0, 150.0),
        (150.0, 160.0),
    ]


def test_sub_markers_in_timestamp_mode():
    labels = _drain(FileAnnotator(60.0, BASE, 30, add_sub_markers=True, range_mode=False))

    assert [lab.text for lab in labels] == [
        "01.01.2021 00:00:00",
        "01.01.2021 00:00:10",
        "01.01.2021 00:00:20",
        "01.01.2021 00:00:30",
        "01.01.2021 00:00:40",
        "01.01.2021 00:00:50",
    ]
    assert all(lab.start_offset_seconds == lab.end_offset_seconds == 30.0 for lab in labels)


def test_zero_slice_yields_identical_labels():
    labels = _drain(FileAnnotator(5.0, BASE, 0, add_sub_markers=True, range_mode=True))

    assert len(labels) == 6
    assert {lab.to_line() for lab in labels} == {"0.00\t0.00\t00:00:00 - 00:00:00\n"}


def test_identical_inputs_give_identical_labels():
    a = [lab.to_line() for lab in FileAnnotator(3725.0, BASE, 42, add_sub_markers=True, range_mode=True)]
    b = [lab.to_line() for lab in FileAnnotator(3725.0, BASE, 42, add_sub_markers=True, range_mode=True)]
    assert a == b


def test_from_file_reads_duration(write_wave):
    path = write_wave("20210101000000_x.wav", channels=2, sample_rate=44100, bits_per_sample=16, data_len=176400 * 10)
    annotator = FileAnnotator.from_file(path, BASE, 0, range_mode=True)

    assert annotator.get_end_time() == 10
    assert list(annotator) == [AnnotationLabel(0.0, 10.0, "00:00:00 - 00:00:10")]


def test_from_file_raises_and_create_returns_none(write_wave):
    path = write_wave("20210101000000_x.wav", riff=b"JUNK")

    with pytest.raises(NotARiffFileError):
        FileAnnotator.from_file(path, BASE, 0)
    assert FileAnnotator.create(path, BASE, 0) is None


@pytest.mark.parametrize(
    "name, expected",
    [
        ("20210101000000_123456_c00d00.wav", datetime(2021, 1, 1, 0, 0, 0)),
        ("night_20211224233015_c01d00.wav", datetime(2021, 12, 24, 23, 30, 15)),
        ("20200101000000_20210102030405_c00d00.wav", datetime(2021, 1, 2, 3, 4, 5)),
        ("20211301000000_x.wav", None),
        ("20210101000000_x.mp3", None),
        ("20210101000000.wav", None),
        ("readme.txt", None),
    ],
)
def test_file_name_timestamp(name, expected):
    parser = FileNameTimestampParser()
    assert parser.parse(name) == expected
