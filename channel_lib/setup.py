"""Server configuration for Channel.

Provides CLI parsing for the server entrypoint and helpers to load, write
and template the YAML server configuration. Module state holds the
configuration loaded by `setup` so other modules can read it.
"""
from __future__ import annotations
import argparse
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import yaml

DEFAULT_CONFIG_PATH = Path("data/config/server_config.yml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Module-level place to hold the ServerConfig loaded by `setup`
_loaded_config: list[ServerConfig] = []


def get_loaded_config() -> Optional[ServerConfig]:
    """Return the loaded ServerConfig if available, otherwise None."""
    return _loaded_config[0] if _loaded_config else None


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--setup", action="store_true", help="Write a server config template if none exists")
    p.add_argument("--print-template", action="store_true", help="Print the default YAML template to stdout and exit")
    p.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path of the server configuration file")
    p.add_argument("--host", default="0.0.0.0", help="Interface to listen on")
    p.add_argument("--port", type=int, default=8000, help="Port to listen on")
    p.add_argument("--help", action="store_true", help="Show setup help")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """Parse server args from argv, ignoring unknown ones."""
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    args, _ = parser.parse_known_args(argv)
    return args


@dataclass
class ServerConfig:
    server_name: str = "Channel"
    log_level: str = "WARNING"
    # None keeps the application default of <data_dir>/uploads
    upload_dir: Optional[str] = None
    # 0 disables the upload size limit
    max_upload_bytes: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> ServerConfig:
        if not isinstance(data, dict):
            raise ValueError("invalid config format: expected mapping")
        cfg = cls()
        if data.get("server_name") is not None:
            cfg.server_name = str(data["server_name"])
        level = data.get("log_level")
        if level is not None:
            if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
                raise ValueError(f"invalid log_level: {level!r}")
            cfg.log_level = level.upper()
        if data.get("upload_dir") is not None:
            cfg.upload_dir = str(data["upload_dir"])
        limit = data.get("max_upload_bytes")
        if limit is not None:
            if not isinstance(limit, int) or isinstance(limit, bool) or limit < 0:
                raise ValueError(f"invalid max_upload_bytes: {limit!r}")
            cfg.max_upload_bytes = limit
        return cfg


class YamlConfigStore:
    """Read and write a ServerConfig as a YAML file."""

    def __init__(self, path: Union[str, Path] = DEFAULT_CONFIG_PATH):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, cfg: ServerConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = yaml.safe_dump(asdict(cfg), sort_keys=False)
        self.path.write_text(payload, encoding="utf-8")

    def load(self) -> ServerConfig:
        if not self.path.exists():
            raise KeyError(str(self.path))
        raw = self.path.read_text(encoding="utf-8")
        try:
            data: Any = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError("invalid config format: parse error") from e
        return ServerConfig.from_dict(data or {})


def load_server_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> ServerConfig:
    """Load the server config at `path`, falling back to defaults if absent."""
    try:
        return YamlConfigStore(path).load()
    except KeyError:
        return ServerConfig()


def template() -> str:
    return yaml.safe_dump(asdict(ServerConfig()), sort_keys=False)


def setup(argv: Optional[Iterable[str]], config_path: Optional[Union[str, Path]] = None) -> int:
    """High-level helper used by the application entrypoint.

    - `--print-template` writes the default YAML to stdout and returns 0.
    - An existing config is loaded into module state and 0 is returned;
      a malformed one is reported and 1 is returned.
    - A missing config is written from the template when `--setup` is given,
      otherwise the operator is told how to create one and 2 is returned.
    """
    args = parse_args(argv)
    store = YamlConfigStore(config_path or args.config)

    if args.print_template:
        sys.stdout.write(template())
        return 0

    if not store.exists():
        if not args.setup:
            print(
                f"Server configuration missing at {store.path}. Run: `python3 channel.py --setup` to create it."
            )
            return 2
        store.save(ServerConfig())
        print(f"Wrote template server config to {store.path}")

    try:
        cfg = store.load()
    except ValueError as e:
        print(f"Failed to load server config {store.path}: {e}")
        return 1
    _loaded_config.clear()
    _loaded_config.append(cfg)
    return 0
