#!/usr/bin/env python
# pyright: reportMissingImports=false
"""Standalone MCP server entry point for picklist.

Usage::

    python -m picklist.ext.mcp_use.run
    python -m picklist.ext.mcp_use.run --transport stdio
    python -m picklist.ext.mcp_use.run --host 127.0.0.1 --port 3001

Reads the same TOML config as the ``picklist`` CLI.
"""

from __future__ import annotations

import argparse
import logging

from picklist.config import Config, load_config

logger = logging.getLogger(__name__)


def serve(
    cfg: Config,
    *,
    transport: str = "streamable-http",
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Build the facade and MCP server from *cfg* and block serving requests."""
    from picklist.ext.mcp_use.server import create_server
    from picklist.facade.core import PickList

    picklist = PickList.create(cfg, autostart=False)
    server = create_server(picklist)

    kwargs: dict = {"transport": transport}
    if transport == "streamable-http":
        kwargs.update(host=host or cfg.host, port=port or cfg.port)
        logger.info("Serving on %s:%s", kwargs["host"], kwargs["port"])

    try:
        server.run(**kwargs)
    finally:
        picklist.queue.stop()


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="python -m picklist.ext.mcp_use.run",
        description="Start the picklist MCP server.",
    )
    parser.add_argument(
        "--transport",
        choices=["streamable-http", "stdio"],
        default="streamable-http",
    )
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args()

    serve(load_config(), transport=args.transport, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
