"""Fixed values shared across the insomnia package."""
from __future__ import annotations

import re

# ---- RIFF/WAVE chunk tags ----
RIFF_TAG = b"RIFF"
WAVE_TAG = b"WAVE"
FMT_TAG = b"fmt "
DATA_TAG = b"data"

# ---- annotation ----
SUB_MARKER_COUNT = 6
RANGE_TIME_FORMAT = "%H:%M:%S"
TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"

# <anything><YYYY><mm><dd><HH><MM><SS>_<anything>.wav
# the leading greedy group makes the last timestamp in the name win
FILE_NAME_TIMESTAMP_PATTERN = re.compile(
    r".*(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})_.*\.wav$"
)

# ---- recording ----
RECORDING_TOOL = "arecord"
ENCODING_TOOL = "ffmpeg"
RECORDING_SAMPLE_FORMAT = "S16_LE"
RECORDING_SAMPLE_RATE = 44100
RECORDING_FILE_PREFIX_FORMAT = "%Y%m%d%H%M%S_%f"
MIN_RECORDING_MINUTES = 1
MAX_RECORDING_MINUTES = 60
RECORDING_RETRY_DELAY_SECONDS = 5

# `arecord -l` lines look like: "card 1: USB [USB Audio], device 0: USB Audio [USB Audio]"
CARD_AND_DEVICE_PATTERN = re.compile(r"card (\d+):.*device (\d+):")

# ---- configuration ----
DEFAULT_CONFIG_PATH = "insomnia.yaml"
DEFAULT_LOGS_ROOT = "logs"
DEFAULT_INPUT_NAME = "default_device"
