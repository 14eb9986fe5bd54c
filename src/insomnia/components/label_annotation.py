"""
Command: annotate

Walks a folder of timestamped WAVE recordings in name order and appends one
continuous Audacity label track for all of them. Each file's label offsets
start where the previous readable file ended.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from tqdm.auto import tqdm

from insomnia.components.annotation import FileAnnotator, FileNameTimestampParser
from insomnia.entity.artifact_entity import AnnotationArtifact, AnnotationLabel
from insomnia.entity.config_entity import AnnotateConfig
from insomnia.exception.exception import AnnotationError, WaveReadError, wrap_exception
from insomnia.logging.logger import get_logger
from insomnia.utils.io_utils import ensure_dir
from insomnia.utils.textgrid_utils import write_label_textgrid

logger = get_logger(__name__)


class LabelAnnotation:
    """Batch driver chaining FileAnnotators across a folder."""

    def __init__(self, config: AnnotateConfig, parser: Optional[FileNameTimestampParser] = None):
        self.config = config
        self.parser = parser or FileNameTimestampParser()

    def _list_files(self) -> List[Path]:
        folder = self.config.input_folder
        if not folder.is_dir():
            raise AnnotationError(
                "Input folder not found", context={"input_folder": str(folder)}
            )
        # lexical order == chronological order for the fixed-width timestamp
        return sorted((p for p in folder.iterdir() if p.is_file()), key=lambda p: p.name)

    def run(self) -> AnnotationArtifact:
        cfg = self.config
        files = self._list_files()
        logger.info(f"Annotating {len(files)} file(s) from {cfg.input_folder} -> {cfg.output_file}")

        file_start_time = 0
        n_annotated, n_skipped, n_labels = 0, 0, 0
        collected: List[AnnotationLabel] = []

        try:
            ensure_dir(cfg.output_file.parent)
            with open(cfg.output_file, "a", encoding="utf-8") as label_file:
                for audio_path in tqdm(files, desc="Annotating", leave=False, disable=not cfg.show_progress):
                    base_time = self.parser.parse(audio_path.name)
                    if base_time is None:
                        logger.info(f"Skipping {audio_path.name}: name does not match the expected pattern")
                        n_skipped += 1
                        continue

                    try:
                        annotator = FileAnnotator.from_file(
                            audio_path,
                            base_time,
                            file_start_time,
                            add_sub_markers=cfg.add_sub_markers,
                            range_mode=cfg.range_mode,
                        )
                    except WaveReadError as e:
                        logger.warning(f"Skipping {audio_path.name}: {type(e).__name__}: {e}")
                        n_skipped += 1
                        continue

                    file_start_time = annotator.get_end_time()
                    for _, label in zip(range(annotator.get_max_labels()), annotator):
                        label_file.write(label.to_line())
                        if cfg.textgrid_path is not None:
                            collected.append(label)
                        n_labels += 1
                    n_annotated += 1
        except OSError as e:
            raise wrap_exception(
                "Could not write label file", e, context={"output_file": str(cfg.output_file)}
            )

        textgrid_out: Optional[Path] = None
        if cfg.textgrid_path is not None:
            if any(lab.end_offset_seconds > lab.start_offset_seconds for lab in collected):
                textgrid_out = write_label_textgrid(collected, cfg.textgrid_path)
                logger.info(f"Wrote TextGrid: {cfg.textgrid_path}")
            else:
                logger.warning("No range labels produced, TextGrid not written (use --range)")

        logger.info(
            f"Annotation DONE | files={len(files)} annotated={n_annotated} "
            f"skipped={n_skipped} labels={n_labels} total={file_start_time}s"
        )
        return AnnotationArtifact(
            output_file=cfg.output_file,
            textgrid_path=textgrid_out,
            n_files_seen=len(files),
            n_files_annotated=n_annotated,
            n_files_skipped=n_skipped,
            n_labels=n_labels,
            total_duration_sec=file_start_time,
        )
