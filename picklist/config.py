"""Configuration for picklist.

Reads a TOML config file into a typed :class:`Config` dataclass.
Default location: ``~/.config/picklist/config.toml``.
Override with the ``PICKLIST_CONFIG`` environment variable.

File layout::

    [catalog]
    size = 1000000

    [queue]
    fast_interval = 1.0    # seconds between select/deselect/sort flushes
    slow_interval = 10.0   # seconds between add flushes

    [server]
    host = "0.0.0.0"
    port = 3001
    page_size = 20
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from picklist.facade.pagination import DEFAULT_PAGE_SIZE
from picklist.queue.batcher import FAST_LANE_INTERVAL, SLOW_LANE_INTERVAL

_DEFAULT_CONFIG_DIR = Path("~/.config/picklist").expanduser()


def config_path() -> Path:
    env = os.environ.get("PICKLIST_CONFIG")
    if env:
        return Path(env).expanduser()
    return _DEFAULT_CONFIG_DIR / "config.toml"


def config_path_display() -> str:
    return str(config_path())


def config_exists() -> bool:
    return config_path().exists()


@dataclass
class Config:
    # Catalog is seeded with ids 1..catalog_size at start-up
    catalog_size: int = 1_000_000

    fast_interval: float = FAST_LANE_INTERVAL
    slow_interval: float = SLOW_LANE_INTERVAL

    host: str = "0.0.0.0"
    port: int = 3001
    page_size: int = DEFAULT_PAGE_SIZE


def load_config() -> Config:
    """Load config from disk, falling back to defaults + env overrides."""
    path = config_path()
    cfg = Config()

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        catalog_section = data.get("catalog", {})
        queue_section = data.get("queue", {})
        server_section = data.get("server", {})

        cfg.catalog_size = int(catalog_section.get("size", cfg.catalog_size))

        cfg.fast_interval = float(
            queue_section.get("fast_interval", cfg.fast_interval)
        )
        cfg.slow_interval = float(
            queue_section.get("slow_interval", cfg.slow_interval)
        )

        cfg.host = server_section.get("host", cfg.host)
        cfg.port = int(server_section.get("port", cfg.port))
        cfg.page_size = int(server_section.get("page_size", cfg.page_size))

    # Environment variables always take precedence
    cfg.catalog_size = int(
        os.environ.get("PICKLIST_CATALOG_SIZE", str(cfg.catalog_size))
    )
    cfg.fast_interval = float(
        os.environ.get("PICKLIST_FAST_INTERVAL", str(cfg.fast_interval))
    )
    cfg.slow_interval = float(
        os.environ.get("PICKLIST_SLOW_INTERVAL", str(cfg.slow_interval))
    )
    cfg.page_size = int(os.environ.get("PICKLIST_PAGE_SIZE", str(cfg.page_size)))
    cfg.host = os.environ.get("PICKLIST_HOST", cfg.host)
    cfg.port = int(os.environ.get("PORT", str(cfg.port)))

    if cfg.catalog_size < 0:
        raise ValueError(f"catalog size must be >= 0, got {cfg.catalog_size}")
    if cfg.page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {cfg.page_size}")

    return cfg


def save_config(cfg: Config) -> Path:
    """Write config to the TOML file. Returns the path written."""
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "[catalog]",
        f"size = {cfg.catalog_size}",
        "",
        "[queue]",
        f"fast_interval = {cfg.fast_interval}",
        f"slow_interval = {cfg.slow_interval}",
        "",
        "[server]",
        f'host = "{cfg.host}"',
        f"port = {cfg.port}",
        f"page_size = {cfg.page_size}",
        "",
    ]

    path.write_text("\n".join(lines), encoding="utf-8")
    return path
