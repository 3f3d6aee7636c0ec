"""
Configuration loader for kubepool.

Keeps cluster access and output defaults out of the code so one installation
can be pointed at different clusters.
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_CONFIG_PATH = Path("/etc/kubepool/kubepool.conf")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class KubepoolConfig:
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    generate_name: str = "cstor"
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def _config_path() -> Path:
    env = os.environ.get("KUBEPOOL_CONFIG_PATH")
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path.exists():
        parser.read(path, encoding="utf-8")
    return parser


def load_config() -> KubepoolConfig:
    """
    Load config from `KUBEPOOL_CONFIG_PATH` or `/etc/kubepool/kubepool.conf`.

    Missing files are not an error; defaults are returned. An unknown log level
    falls back to WARNING.
    """
    parser = _read_ini(_config_path())
    section = parser["kubepool"] if parser.has_section("kubepool") else {}

    def _get(key: str, default: str) -> str:
        if isinstance(section, dict):
            return str(section.get(key, default)).strip()
        return str(section.get(key, fallback=default)).strip()

    def _get_choice(key: str, default: str, choices: tuple, upper: bool = False) -> str:
        raw = _get(key, default)
        raw = raw.upper() if upper else raw
        return raw if raw in choices else default

    kubeconfig = _get("kubeconfig", "")
    context = _get("context", "")

    return KubepoolConfig(
        kubeconfig=os.path.expanduser(kubeconfig) if kubeconfig else None,
        context=context or None,
        generate_name=_get("generate_name", "cstor") or "cstor",
        log_level=_get_choice("log_level", "WARNING", LOG_LEVELS, upper=True),
    )
