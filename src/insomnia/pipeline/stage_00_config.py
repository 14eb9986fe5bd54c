"""
Show the settings of a project file, or write a sample project file.
"""
from __future__ import annotations

import argparse
from pathlib import Path

from insomnia.config.configuration import ConfigurationManager
from insomnia.constant.constants import DEFAULT_CONFIG_PATH
from insomnia.logging.logger import get_logger

logger = get_logger(__name__)


def run_config(config_path: str | Path, save_sample: bool = False) -> None:
    config_path = Path(config_path)
    if save_sample:
        if config_path.exists():
            logger.warning(f"Not overwriting existing project file: {config_path}")
            return
        out = ConfigurationManager(config_path).save_sample()
        logger.info(f"Sample project file written: {out}")
        return

    cfg = ConfigurationManager(config_path).get_project_config()
    print(f"[*] Data directory:\t\t{cfg.data_directory}")
    print(f"[*] Logs root:\t\t\t{cfg.logs_root}")
    print(f"[*] Input device count:\t\t{len(cfg.input)}")
    for name, dev in cfg.input.items():
        print(f"    [-] Defined name:\t\t{name}")
        print(f"        [-] Card:\t\t{dev.card}")
        print(f"        [-] Device:\t\t{dev.device}")
        print(f"        [-] Mono:\t\t{dev.mono}")


def main():
    ap = argparse.ArgumentParser(description="Show or create an insomnia project file")
    ap.add_argument("--project", default=DEFAULT_CONFIG_PATH, type=str, help="Project YAML file")
    ap.add_argument("--save_sample", action="store_true", help="Write a sample project file")
    args = ap.parse_args()
    run_config(args.project, save_sample=args.save_sample)


if __name__ == "__main__":
    main()
