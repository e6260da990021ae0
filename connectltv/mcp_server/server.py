"""
Directory MCP Server for ConnectLTV.

Transport: stdio.

Expected MCP Tool Return Format:
{
    "ok": bool,
    ...                      # Tool-specific fields if ok is True
    "error": str            # Present if ok is False
}
"""

import argparse
import asyncio
import logging
import signal
from typing import Any, Dict, Optional, Annotated

from dotenv import load_dotenv
from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..common.config import load_config
from ..common.record_store import RecordStore, RecordNotFound, RetrievalError
from ..common.store_factory import build_record_store
from ..retriever import DirectorySearch

logger = logging.getLogger("connectltv.mcp_server")


class MCPServerApp:
    """
    Exposes directory search to agents as read-only MCP tools.

    The tools never write to the store; enrichment runs through the
    HTTP admin endpoint or scripts/run_enrichment.py.
    """
    def __init__(
            self,
            search: DirectorySearch,
            store: Optional[RecordStore] = None,
            mcp_server_name: str = "connectltv_directory",
        ) -> None:
        """
        Initializes the MCPServerApp.

        Args:
            search (DirectorySearch): Search pipeline the tools delegate to.
            store (RecordStore): Store behind the pipeline, for status checks.
            mcp_server_name (str): The name of the MCP server.
        """
        self.search = search
        self.store = store
        self.mcp = FastMCP(name=mcp_server_name)

        # ---------- MCP Tools: Search ---------- #
        @self.mcp.tool(
            name="search_profiles",
            description=(
                "Search the LTV alumni directory by free text. Matches any query word "
                "(3+ characters) against name, title, company, location, function, "
                "stage and comments, ranks name hits highest, and returns each match "
                "with a short note on why it is relevant."
            ),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_search_profiles(
            query: Annotated[str, Field(description="free-text query, e.g. 'CEO education'")],
            limit: Annotated[Optional[int], Field(description="maximum number of results", ge=1)] = None,
        ) -> Dict[str, Any]:
            """
            MCP tool to search the alumni directory.

            Returns:
                Dict[str, Any]: {"ok": True, "query", "count", "results"} or an error envelope.
            """
            try:
                results = await self.search.search(query, limit)
            except ValueError as e:
                return {"ok": False, "error": f"Invalid limit: {e}"}
            except RetrievalError as e:
                logger.error("search_profiles failed: %s", e)
                return {"ok": False, "error": f"Directory unavailable: {e}"}

            return {
                "ok": True,
                "query": query,
                "count": len(results),
                "results": [result.model_dump() for result in results],
            }

        # ---------- MCP Tools: Profile Detail ---------- #
        @self.mcp.tool(
            name="get_profile",
            description="Get one alumni profile by its directory id, including any enrichment text.",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_get_profile(
            profile_id: Annotated[int, Field(description="directory id of the profile")],
        ) -> Dict[str, Any]:
            """
            MCP tool to fetch a single profile.

            Returns:
                Dict[str, Any]: {"ok": True, "profile", "enrichment_text"} or an error envelope.
            """
            try:
                profile = await self.search.get_profile_result(profile_id)
                enrichment_text = await self.search.get_enrichment_text(profile_id)
            except RecordNotFound:
                return {"ok": False, "error": f"No profile with id {profile_id}"}
            except RetrievalError as e:
                logger.error("get_profile failed for %d: %s", profile_id, e)
                return {"ok": False, "error": f"Directory unavailable: {e}"}

            return {
                "ok": True,
                "profile": profile.model_dump(),
                "enrichment_text": enrichment_text,
            }

        # ---------- MCP Tools: Store Health Check ---------- #
        @self.mcp.tool(
            name="store_status",
            description="Check whether the alumni directory's record store is reachable.",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_store_status() -> Dict[str, Any]:
            """
            Returns the current record store status.
            """
            if self.store is None:
                return {
                    "ok": True,
                    "store_configured": False,
                    "reachable": False,
                }

            reachable = await self.store.health_check()
            return {
                "ok": True,
                "store_configured": True,
                "store": self.store.name,
                "reachable": reachable,
            }

    def run(self) -> None:
        """Runs the MCP server using stdio transport."""
        self.mcp.run(transport="stdio")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the ConnectLTV directory MCP server (stdio).")
    parser.add_argument(
        "--server-name",
        default="connectltv_directory",
        help="Advertised MCP server name.",
    )
    args = parser.parse_args()

    load_dotenv()
    config = load_config()

    store = build_record_store(config.store)
    logger.info("Record store ready: %s (%s)", store.name, config.store.table)

    app = MCPServerApp(
        search=DirectorySearch.from_config(store, config.search),
        store=store,
        mcp_server_name=args.server_name,
    )

    def _handle_shutdown(signum, frame):
        raise SystemExit(0)
    for sig in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
        if sig is not None:
            signal.signal(sig, _handle_shutdown)

    try:
        app.run()
    finally:
        asyncio.run(store.close())
        logger.info("Record store closed")


if __name__ == "__main__":
    main()
