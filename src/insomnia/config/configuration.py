from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from insomnia.constant.constants import DEFAULT_CONFIG_PATH, DEFAULT_INPUT_NAME, DEFAULT_LOGS_ROOT
from insomnia.entity.config_entity import (
    AnnotateConfig,
    ProjectConfig,
    RecordConfig,
    RecordingDeviceConfig,
)
from insomnia.exception.exception import ConfigurationError
from insomnia.utils.io_utils import make_run_id, read_yaml, write_yaml

_PROJECT_KEYS = {"data_directory", "logs_root", "input"}
_DEVICE_KEYS = {"card", "device", "mono"}


def _check_keys(section: Dict[str, Any], allowed: set, where: str) -> None:
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in {where}: {', '.join(unknown)}",
            context={"allowed": sorted(allowed)},
        )


def default_project_dict() -> Dict[str, Any]:
    return {
        "data_directory": str(Path.cwd()),
        "logs_root": DEFAULT_LOGS_ROOT,
        "input": {DEFAULT_INPUT_NAME: {"card": 0, "device": 0, "mono": False}},
    }


@dataclass
class ConfigurationManager:
    config_path: Path = Path(DEFAULT_CONFIG_PATH)

    def __post_init__(self):
        self.config_path = Path(self.config_path)
        # a missing project file means "all defaults"
        try:
            self.config: Dict[str, Any] = read_yaml(self.config_path) if self.config_path.exists() else {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Project file is not valid YAML", cause=e, context={"config_path": str(self.config_path)}
            ) from e
        if not isinstance(self.config, dict):
            raise ConfigurationError(
                "Project file must contain a mapping", context={"config_path": str(self.config_path)}
            )
        _check_keys(self.config, _PROJECT_KEYS, str(self.config_path))
        self.project = self._build_project_config()

    # ---- helpers ----
    def _build_project_config(self) -> ProjectConfig:
        defaults = default_project_dict()
        raw_inputs = self.config.get("input", defaults["input"]) or {}
        if not isinstance(raw_inputs, dict):
            raise ConfigurationError(
                "'input' must map device names to settings", context={"input": raw_inputs}
            )

        inputs: Dict[str, RecordingDeviceConfig] = {}
        for name, dev in raw_inputs.items():
            dev = dev or {}
            if not isinstance(dev, dict):
                raise ConfigurationError(
                    f"Input '{name}' must be a mapping of card/device/mono", context={"input": dev}
                )
            _check_keys(dev, _DEVICE_KEYS, f"input '{name}'")
            try:
                inputs[str(name)] = RecordingDeviceConfig(
                    card=int(dev.get("card", 0)),
                    device=int(dev.get("device", 0)),
                    mono=bool(dev.get("mono", False)),
                )
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid values for input '{name}'", cause=e, context={"input": dev}
                ) from e

        return ProjectConfig(
            data_directory=self._get_path("data_directory", defaults["data_directory"]),
            logs_root=self._get_path("logs_root", defaults["logs_root"]),
            input=inputs,
        )

    def _get_path(self, key: str, default: str) -> Path:
        value = self.config.get(key, default)
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"'{key}' must be a non-empty path string", context={key: value})
        return Path(value)

    def get_project_config(self) -> ProjectConfig:
        return self.project

    def get_logs_root(self) -> Path:
        return self.project.logs_root

    def make_run_id(self) -> str:
        return make_run_id()

    # ---- Command: annotate ----
    def get_annotate_config(
        self,
        input_folder: str | Path,
        output_file: str | Path,
        range_mode: bool = False,
        add_sub_markers: bool = False,
        textgrid_path: str | Path | None = None,
        show_progress: bool = False,
    ) -> AnnotateConfig:
        return AnnotateConfig(
            input_folder=Path(input_folder),
            output_file=Path(output_file),
            range_mode=range_mode,
            add_sub_markers=add_sub_markers,
            textgrid_path=Path(textgrid_path) if textgrid_path else None,
            show_progress=show_progress,
        )

    # ---- Command: record ----
    def get_record_config(
        self,
        duration_minutes: int = 1,
        card: int = 0,
        device: int = 0,
        mono: bool = False,
        input_name: Optional[str] = None,
        encode: bool = True,
        max_recordings: Optional[int] = None,
    ) -> RecordConfig:
        """Recording settings; a named input overrides card/device/mono."""
        if input_name is not None:
            if input_name not in self.project.input:
                raise ConfigurationError(
                    f"Unknown input device '{input_name}'",
                    context={"defined": sorted(self.project.input)},
                )
            dev = self.project.input[input_name]
            card, device, mono = dev.card, dev.device, dev.mono

        return RecordConfig(
            output_folder=self.project.data_directory,
            card=card,
            device=device,
            mono=mono,
            duration_minutes=duration_minutes,
            encode=encode,
            max_recordings=max_recordings,
        )

    # ---- Command: config ----
    def save_sample(self, path: str | Path | None = None) -> Path:
        out = Path(path) if path else self.config_path
        write_yaml(default_project_dict(), out)
        return out
