"""
Stage 01 — Record timed audio segments

Records fixed-length WAVE files into the project's data directory, starting
on the next full minute, and encodes finished files to mp3 in the background.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from insomnia.components.recorder import Recorder
from insomnia.config.configuration import ConfigurationManager
from insomnia.constant.constants import DEFAULT_CONFIG_PATH
from insomnia.entity.artifact_entity import RecordingArtifact
from insomnia.logging.logger import add_file_handler, get_logger

logger = get_logger(__name__)


def run_record(
    config_path: str | Path = DEFAULT_CONFIG_PATH,
    duration_minutes: int = 1,
    card: int = 0,
    device: int = 0,
    mono: bool = False,
    input_name: Optional[str] = None,
    encode: bool = True,
    max_recordings: Optional[int] = None,
    run_id: Optional[str] = None,
) -> RecordingArtifact:
    cfg_mgr = ConfigurationManager(Path(config_path))
    run_id = run_id or cfg_mgr.make_run_id()
    add_file_handler(logger, cfg_mgr.get_logs_root() / run_id / "stage_01_record.log")

    rec_cfg = cfg_mgr.get_record_config(
        duration_minutes=duration_minutes,
        card=card,
        device=device,
        mono=mono,
        input_name=input_name,
        encode=encode,
        max_recordings=max_recordings,
    )
    logger.info(
        f"Stage 01: Recording started | run_id={run_id} card={rec_cfg.card} "
        f"device={rec_cfg.device} mono={rec_cfg.mono} minutes={rec_cfg.duration_minutes}"
    )
    artifact = Recorder(rec_cfg).run()
    logger.info(f"Stage 01 completed: {artifact}")
    return artifact


def add_arguments(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--duration", type=int, default=1, help="Minutes per file (1-60)")
    ap.add_argument("--card", type=int, default=0, help="Audio card used for recording")
    ap.add_argument("--device", type=int, default=0, help="Audio device used for recording")
    ap.add_argument("--input", dest="input_name", type=str, default=None,
                    help="Named input from the project file (overrides card/device/mono)")
    ap.add_argument("--no-encoding", dest="no_encoding", action="store_true",
                    help="Keep the wav files instead of encoding them to mp3")
    ap.add_argument("--mono", action="store_true", help="Record mono instead of stereo")
    ap.add_argument("--max-recordings", dest="max_recordings", type=int, default=None,
                    help="Stop after N files (default: record forever)")


def main():
    ap = argparse.ArgumentParser(description="Stage 01: Record timed audio segments")
    ap.add_argument("--project", default=DEFAULT_CONFIG_PATH, type=str, help="Project YAML file")
    ap.add_argument("--run_id", default=None, type=str)
    add_arguments(ap)
    args = ap.parse_args()
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


if __name__ == "__main__":
    main()
