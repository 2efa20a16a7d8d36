from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

from picklist.cli import output as out
from picklist.config import (
    Config,
    config_exists,
    config_path_display,
    load_config,
    save_config,
)

if TYPE_CHECKING:
    from picklist.facade.core import PickList

DESCRIPTION = """\
picklist: pick, order and grow a large catalog of elements

Browse a catalog of numeric ids, move them between an unselected and a
selected list, reorder the selection, and add new ids. Mutations are
queued and applied in batches: select/deselect/sort on a fast tick,
additions on a slow one."""


# ── serve ───────────────────────────────────────────────────────────


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the MCP server (blocks until interrupted).

    Synchronous: the MCP server runs its own event loop.
    """
    from picklist.ext.mcp_use.run import serve

    cfg = load_config()

    out.header("picklist server")
    out.kv("Catalog size", f"{cfg.catalog_size:,}")
    out.kv("Transport", args.transport)
    if args.transport == "streamable-http":
        out.kv("Address", f"{args.host or cfg.host}:{args.port or cfg.port}")
    print()

    try:
        serve(cfg, transport=args.transport, host=args.host, port=args.port)
    except ImportError as exc:
        out.error(str(exc))
        sys.exit(1)


# ── demo ────────────────────────────────────────────────────────────


async def cmd_demo(args: argparse.Namespace) -> None:
    """Drive a short scripted session against a small in-process catalog."""
    from picklist.facade.core import PickList

    cfg = Config(
        catalog_size=args.size,
        fast_interval=args.fast_interval,
        slow_interval=args.slow_interval,
    )

    if cfg.catalog_size < 5:
        out.error("Demo needs a catalog of at least 5 elements")
        sys.exit(1)

    loop = asyncio.get_running_loop()
    async with PickList.create(cfg) as picklist:
        started = loop.time()
        new_id = cfg.catalog_size + 1

        out.header(f"Catalog of {cfg.catalog_size} elements")
        unselected = picklist.list_elements(limit=cfg.catalog_size).data
        out.kv("Unselected", out.ids(unselected))

        for element_id in (2, 4, 5):
            picklist.select(element_id)
        picklist.add(new_id)
        out.info(f"Queued select 2, 4, 5 and add {new_id}")
        _print_queue(picklist)

        await asyncio.sleep(cfg.fast_interval * 1.5)
        out.header("After fast-lane flush")
        out.kv("Selected", out.ids(picklist.list_selected().data))
        _print_queue(picklist)

        picklist.sort([5, 2])
        picklist.deselect(4)
        out.info("Queued sort [5, 2] and deselect 4")

        await asyncio.sleep(cfg.fast_interval * 1.5)
        out.header("After second fast-lane flush")
        out.kv("Selected", out.ids(picklist.list_selected().data))

        wait = started + cfg.slow_interval + cfg.fast_interval / 2 - loop.time()
        if wait > 0:
            out.info(f"Waiting {wait:.1f}s for the slow lane...")
            await asyncio.sleep(wait)
        out.header("After slow-lane flush")
        out.kv(f"Element {new_id} exists", picklist.store.exists(new_id))
        out.kv("Catalog size", picklist.store.count())
        out.kv("State", picklist.state().model_dump(by_alias=True))
        _print_queue(picklist)

    print()
    out.success("Demo complete")


def _print_queue(picklist: PickList) -> None:
    sizes = picklist.queue_status()
    out.kv("Pending", f"fast={sizes.fast_lane_size} slow={sizes.slow_lane_size}")


# ── config ──────────────────────────────────────────────────────────


async def cmd_config_show(args: argparse.Namespace) -> None:
    """Display current configuration."""
    cfg = load_config()

    out.header(f"Configuration ({config_path_display()})")
    print()
    if not config_exists():
        out.info(out.dim("No config file; showing defaults and env overrides."))
        print()

    out.kv("Catalog size", f"{cfg.catalog_size:,}")
    out.kv("Fast lane interval", f"{cfg.fast_interval:g}s")
    out.kv("Slow lane interval", f"{cfg.slow_interval:g}s")
    out.kv("Page size", cfg.page_size)
    out.kv("Server", f"{cfg.host}:{cfg.port}")

    print()
    out.info("To write these settings to a file:")
    out.next_step("picklist config init")


async def cmd_config_init(args: argparse.Namespace) -> None:
    """Write the current settings (defaults + env) to the config file."""
    if config_exists() and not args.force:
        out.error(f"Config already exists at {config_path_display()}")
        out.next_step("picklist config init --force", "overwrite it")
        sys.exit(1)

    path = save_config(load_config())
    out.success(f"Config written to {path}")


async def cmd_config_path(args: argparse.Namespace) -> None:
    print(config_path_display())


# ── Parser ──────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picklist",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Server:\n"
            "  picklist serve                          "
            "Start the MCP server (streamable-http)\n"
            "  picklist serve --transport stdio        "
            "Serve over stdio for MCP clients\n"
            "\n"
            "Try it:\n"
            "  picklist demo                           "
            "Scripted session against a small catalog\n"
            "\n"
            "Configuration:\n"
            "  picklist config show                    "
            "Show current settings\n"
            "  picklist config init                    "
            "Write a config file\n"
            "  picklist config path                    "
            "Print config file location\n"
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed logs (queue flushes, additions)",
    )
    sub = parser.add_subparsers(dest="command", title="commands")

    # serve
    p_serve = sub.add_parser(
        "serve",
        help="Start the MCP server (requires the 'mcp' extra)",
    )
    p_serve.add_argument(
        "--transport",
        choices=["streamable-http", "stdio"],
        default="streamable-http",
    )
    p_serve.add_argument("--host", default=None, help="Bind address")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port")

    # demo
    p_demo = sub.add_parser(
        "demo",
        help="Run a scripted select/sort/add session in-process",
    )
    p_demo.add_argument(
        "--size", type=int, default=10, help="Catalog size (default: 10)"
    )
    p_demo.add_argument(
        "--fast-interval",
        type=float,
        default=1.0,
        help="Fast lane interval in seconds (default: 1)",
    )
    p_demo.add_argument(
        "--slow-interval",
        type=float,
        default=10.0,
        help="Slow lane interval in seconds (default: 10)",
    )

    # config
    p_cfg = sub.add_parser("config", help="View and change settings")
    cfg_sub = p_cfg.add_subparsers(dest="config_command", title="config commands")

    cfg_sub.add_parser("show", help="Show current settings")
    p_cfg_init = cfg_sub.add_parser("init", help="Write a config file")
    p_cfg_init.add_argument(
        "--force", action="store_true", help="Overwrite an existing file"
    )
    cfg_sub.add_parser("path", help="Print config file location")

    return parser


# ── Dispatch ────────────────────────────────────────────────────────

_CommandHandler = Callable[[argparse.Namespace], Coroutine[Any, Any, None]]

_COMMAND_MAP: dict[str, _CommandHandler] = {
    "demo": cmd_demo,
}

_CONFIG_MAP: dict[str, _CommandHandler] = {
    "show": cmd_config_show,
    "init": cmd_config_init,
    "path": cmd_config_path,
}


def main() -> None:
    import logging

    parser = _build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="  %(name)s: %(message)s",
        )

    if not args.command:
        parser.print_help()
        return

    if args.command == "serve":
        try:
            cmd_serve(args)
        except KeyboardInterrupt:
            print()
        return

    if args.command == "config":
        if not args.config_command:
            parser.parse_args(["config", "--help"])
            return
        handler = _CONFIG_MAP.get(args.config_command)
    else:
        handler = _COMMAND_MAP.get(args.command)

    if handler is None:
        parser.print_help()
        return

    try:
        asyncio.run(handler(args))
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
