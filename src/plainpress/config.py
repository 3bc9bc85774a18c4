"""Application configuration loaded from a JSON side file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

from plainpress.errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.json")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def _get_str(values: Mapping[str, Any], key: str) -> str:
    value = values.get(key)
    return value if isinstance(value, str) else ""


def _get_bool(values: Mapping[str, Any], key: str) -> bool:
    value = values.get(key)
    return value if isinstance(value, bool) else False


def _split_host(address: str) -> tuple[str, int]:
    """Split ``host[:port]``, falling back to defaults for missing parts."""
    if not address:
        return DEFAULT_HOST, DEFAULT_PORT
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, DEFAULT_PORT
    try:
        return host or DEFAULT_HOST, int(port)
    except ValueError as exc:
        raise ConfigError(f"Invalid port in host setting: {address!r}") from exc


@dataclass(slots=True)
class AppConfig:
    content_root: Path = Path("data")
    use_summary: bool = False
    static_dir: Path | None = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "AppConfig":
        datadir = _get_str(values, "datadir")
        staticdir = _get_str(values, "staticdir")
        host, port = _split_host(_get_str(values, "host"))
        known = {"datadir", "staticdir", "host", "useSummary"}
        return cls(
            content_root=Path(datadir) if datadir else Path("data"),
            use_summary=_get_bool(values, "useSummary"),
            static_dir=Path(staticdir) if staticdir else None,
            host=host,
            port=port,
            extra={key: value for key, value in values.items() if key not in known},
        )

    def resolve_content_root(self, base_dir: Path | None = None) -> Path:
        if self.content_root.is_absolute() or base_dir is None:
            return self.content_root
        return base_dir / self.content_root

    def resolve_static_dir(self, base_dir: Path | None = None) -> Path | None:
        if self.static_dir is None:
            return None
        if self.static_dir.is_absolute() or base_dir is None:
            return self.static_dir
        return base_dir / self.static_dir

    def to_dict(self) -> Dict[str, Any]:
        return {
            "datadir": str(self.content_root),
            "staticdir": str(self.static_dir) if self.static_dir is not None else "",
            "host": f"{self.host}:{self.port}",
            "useSummary": self.use_summary,
            **self.extra,
        }


def load_config(path: Path | None = None) -> AppConfig:
    """Read the configuration file, returning defaults when it is absent."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        LOGGER.warning("Unable to read config %s: %s", config_path, exc)
        return AppConfig()

    try:
        values = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    if not isinstance(values, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")
    return AppConfig.from_mapping(values)
