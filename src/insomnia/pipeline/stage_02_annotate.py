"""
Stage 02 — Annotation labels

Builds an Audacity label track (and optionally a TextGrid) for a folder of
recordings produced by Stage 01.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from insomnia.components.label_annotation import LabelAnnotation
from insomnia.config.configuration import ConfigurationManager
from insomnia.constant.constants import DEFAULT_CONFIG_PATH
from insomnia.entity.artifact_entity import AnnotationArtifact
from insomnia.logging.logger import add_file_handler, get_logger

logger = get_logger(__name__)


def run_annotate(
    input_folder: str | Path,
    output_file: str | Path,
    config_path: str | Path = DEFAULT_CONFIG_PATH,
    range_mode: bool = False,
    add_sub_markers: bool = False,
    textgrid_path: str | Path | None = None,
    show_progress: bool = False,
    run_id: Optional[str] = None,
) -> AnnotationArtifact:
    cfg_mgr = ConfigurationManager(Path(config_path))
    run_id = run_id or cfg_mgr.make_run_id()
    add_file_handler(logger, cfg_mgr.get_logs_root() / run_id / "stage_02_annotate.log")

    an_cfg = cfg_mgr.get_annotate_config(
        input_folder=input_folder,
        output_file=output_file,
        range_mode=range_mode,
        add_sub_markers=add_sub_markers,
        textgrid_path=textgrid_path,
        show_progress=show_progress,
    )
    logger.info(f"Stage 02: Annotation started | run_id={run_id} input={an_cfg.input_folder}")
    artifact = LabelAnnotation(an_cfg).run()
    logger.info(f"Stage 02 completed: {artifact}")
    return artifact


def add_arguments(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("input_folder", type=str, help="Folder with the recorded wav files")
    ap.add_argument("output_file", type=str, help="Label file (appended to)")
    ap.add_argument("--range", dest="range_mode", action="store_true",
                    help="Use a 'HH:MM:SS - HH:MM:SS' range as label text instead of the start time")
    ap.add_argument("--add-sub-markers", dest="add_sub_markers", action="store_true",
                    help="Split every file into six labels")
    ap.add_argument("--textgrid", dest="textgrid_path", type=str, default=None,
                    help="Also write the range labels as a Praat TextGrid")
    ap.add_argument("--progress", dest="show_progress", action="store_true",
                    help="Show a progress bar")


def main():
    ap = argparse.ArgumentParser(description="Stage 02: Annotation labels")
    ap.add_argument("--project", default=DEFAULT_CONFIG_PATH, type=str, help="Project YAML file")
    ap.add_argument("--run_id", default=None, type=str)
    add_arguments(ap)
    args = ap.parse_args()
    artifact = run_annotate(
        input_folder=args.input_folder,
        output_file=args.output_file,
        config_path=args.project,
        range_mode=args.range_mode,
        add_sub_markers=args.add_sub_markers,
        textgrid_path=args.textgrid_path,
        show_progress=args.show_progress,
        run_id=args.run_id,
    )
    print(artifact)


if __name__ == "__main__":
    main()
