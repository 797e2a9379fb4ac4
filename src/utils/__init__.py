"""Shared utilities for modscope."""

from utils.env_utils import env_bool, env_value
from utils.file_io import read_text, read_toml

__all__ = [
    "env_bool",
    "env_value",
    "read_text",
    "read_toml",
]
