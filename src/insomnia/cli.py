"""
insomnia: record audio segments and label them for later review.

Usage
-----
insomnia config --save-sample
insomnia record --duration 10 --card 1 --device 0
insomnia annotate recordings/ labels.txt --range --add-sub-markers
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from insomnia.constant.constants import DEFAULT_CONFIG_PATH
from insomnia.exception.exception import InsomniaError, format_traceback
from insomnia.logging.logger import get_logger, set_package_level
from insomnia.pipeline import stage_01_record, stage_02_annotate
from insomnia.pipeline.stage_00_config import run_config
from insomnia.pipeline.stage_01_record import run_record
from insomnia.pipeline.stage_02_annotate import run_annotate

logger = get_logger("insomnia.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="insomnia", description=__doc__.strip().splitlines()[0])
    ap.add_argument("--project", default=DEFAULT_CONFIG_PATH, type=str,
                    help="Project YAML file (data directory, logs, input devices)")
    ap.add_argument("--run_id", default=None, type=str, help="Run id used for the log folder")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = ap.add_subparsers(dest="command", required=True)

    p_cfg = sub.add_parser("config", help="Show the project settings or store a sample project file")
    p_cfg.add_argument("--save-sample", dest="save_sample", action="store_true")

    p_rec = sub.add_parser("record", help="Record timed audio files")
    stage_01_record.add_arguments(p_rec)

    p_ann = sub.add_parser("annotate", help="Generate annotation labels for recorded files")
    stage_02_annotate.add_arguments(p_ann)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_package_level(logging.DEBUG)

    try:
        if args.command == "config":
            run_config(args.project, save_sample=args.save_sample)
        elif args.command == "record":
            run_record(
                config_path=args.project,
                duration_minutes=args.duration,
                card=args.card,
                device=args.device,
                mono=args.mono,
                input_name=args.input_name,
                encode=not args.no_encoding,
                max_recordings=args.max_recordings,
                run_id=args.run_id,
            )
        elif args.command == "annotate":
            run_annotate(
                input_folder=args.input_folder,
                output_file=args.output_file,
                config_path=args.project,
                range_mode=args.range_mode,
                add_sub_markers=args.add_sub_markers,
                textgrid_path=args.textgrid_path,
                show_progress=args.show_progress,
                run_id=args.run_id,
            )
    except InsomniaError as e:
        logger.error(f"{args.command} FAILED: {e}")
        logger.debug(format_traceback(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
