"""Utility functions for Praat TextGrid export of annotation labels."""
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

from praatio import textgrid as tgio

from insomnia.entity.artifact_entity import AnnotationLabel
from insomnia.utils.io_utils import ensure_dir


# ============================================================================
# Helpers
# ============================================================================

def labels_to_intervals(labels: Sequence[AnnotationLabel]) -> List[Tuple[float, float, str]]:
    """Keep labels that span time and resolve overlaps (sorted by start)."""
    entries = sorted(
        ((float(lab.start_offset_seconds), float(lab.end_offset_seconds), lab.text)
         for lab in labels if lab.end_offset_seconds > lab.start_offset_seconds),
        key=lambda x: (x[0], x[1]),
    )
    cleaned: List[Tuple[float, float, str]] = []
    last_end = -1.0
    for s, e, text in entries:
        if s < last_end:
            s = last_end
        if e > s:
            cleaned.append((s, e, text))
            last_end = e
    return cleaned


def _make_interval_tier(name: str, entries, xmin: float, xmax: float) -> tgio.IntervalTier:
    # praatio >= 6: IntervalTier(name, entries, minT, maxT)
    return tgio.IntervalTier(str(name), entries, xmin, xmax)


# ============================================================================
# Public API
# ============================================================================

def write_label_textgrid(
    labels: Sequence[AnnotationLabel],
    out_path: Path,
    tier_name: str = "recordings",
) -> Path:
    """Write range labels as a single interval tier.

    Point labels (start == end) carry no span and are left out. The grid
    starts at 0 and ends at the last label end.
    """
    ensure_dir(out_path.parent)
    entries = labels_to_intervals(labels)
    xmin = 0.0
    xmax = max((e for _, e, _ in entries), default=0.0)

    tg = tgio.Textgrid()
    tg.minTimestamp = xmin
    tg.maxTimestamp = xmax

    tier = _make_interval_tier(tier_name, entries, xmin, xmax)
    tg.addTier(tier)

    tg.save(str(out_path), format="short_textgrid", includeBlankSpaces=True)
    return out_path
