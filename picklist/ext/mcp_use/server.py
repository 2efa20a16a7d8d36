# pyright: reportMissingImports=false, reportCallIssue=false, reportGeneralTypeIssues=false
"""MCP server factory for picklist (requires the ``mcp`` extra).

Usage::

    from picklist import PickList
    from picklist.ext.mcp_use.server import create_server

    picklist = PickList.create(load_config(), autostart=False)
    server = create_server(picklist)
    server.run(transport="streamable-http")

The queue's tickers need the server's event loop, so they are started
lazily by the first tool call rather than at construction time.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from picklist.errors import PickListError
from picklist.facade.core import PickList

if TYPE_CHECKING:
    from mcp_use.server import MCPServer


def _error(exc: PickListError) -> dict[str, Any]:
    return {"error": exc.message, "status": exc.status_code}


def call_tool(picklist: PickList, op: Callable[[], Any]) -> dict[str, Any]:
    """Run a facade call and shape its result (or business error) as a dict."""
    if not picklist.queue.running and not picklist.queue.stopped:
        picklist.queue.start()
    try:
        result = op()
    except PickListError as exc:
        return _error(exc)
    if isinstance(result, dict):
        return result
    if hasattr(result, "model_dump"):
        return result.model_dump(by_alias=True)
    return asdict(result)


def create_server(
    picklist: PickList,
    *,
    name: str = "picklist",
    version: str = "0.1.0",
) -> MCPServer:
    """Build an MCPServer exposing the picklist request layer as tools.

    Requires the ``mcp`` extra (``pip install picklist[mcp]``).

    Args:
        picklist: Facade whose store and queue back every tool.
        name: Server name exposed to MCP clients.
        version: Server version exposed to MCP clients.
    """
    try:
        from mcp.types import ToolAnnotations
        from mcp_use.server import MCPServer as _MCPServer
    except ImportError:
        raise ImportError(
            "mcp-use is required for MCP server support. "
            "Install it with: pip install picklist[mcp]"
        ) from None

    server = _MCPServer(
        name=name,
        version=version,
        instructions=(
            "Element picker. Browse unselected elements with list_elements, "
            "selected ones with list_selected. Mutations are queued and "
            "applied in batches: select/deselect/sort within about "
            f"{picklist.queue.fast_interval:g}s, add within "
            f"{picklist.queue.slow_interval:g}s."
        ),
    )

    read_only = ToolAnnotations(readOnlyHint=True, idempotentHint=True)

    @server.tool(title="List Unselected Elements", annotations=read_only)
    async def list_elements(
        page: int = 1, limit: int | None = None, filter: str | None = None
    ) -> dict:
        """Page through unselected element ids, optionally filtered by substring."""
        return call_tool(picklist, lambda: picklist.list_elements(page, limit, filter))

    @server.tool(title="List Selected Elements", annotations=read_only)
    async def list_selected(
        page: int = 1, limit: int | None = None, filter: str | None = None
    ) -> dict:
        """Page through selected element ids in their display order."""
        return call_tool(picklist, lambda: picklist.list_selected(page, limit, filter))

    @server.tool(title="Select Element")
    async def select_element(id: int) -> dict:
        """Queue moving an element into the selected list."""
        return call_tool(picklist, lambda: picklist.select(id))

    @server.tool(title="Deselect Element")
    async def deselect_element(id: int) -> dict:
        """Queue moving an element back to the unselected list."""
        return call_tool(picklist, lambda: picklist.deselect(id))

    @server.tool(title="Sort Selected Elements")
    async def sort_selected(order: list[int]) -> dict:
        """Queue a new display order for the selected list."""
        return call_tool(picklist, lambda: picklist.sort(order))

    @server.tool(title="Add Element")
    async def add_element(id: int) -> dict:
        """Queue adding a new element id to the catalog."""
        return call_tool(picklist, lambda: picklist.add(id))

    @server.tool(title="Get State", annotations=read_only)
    async def get_state() -> dict:
        """Return ``{selectedIds, sortOrder}`` for external persistence."""
        return call_tool(picklist, picklist.state)

    @server.tool(title="Get Queue Status", annotations=read_only)
    async def get_queue_status() -> dict:
        """Return the number of pending intents in each lane."""
        return call_tool(picklist, picklist.queue_status)

    @server.tool(title="Health", annotations=read_only)
    async def health() -> dict:
        return call_tool(picklist, picklist.health)

    return server
