"""
MCP Server for Shadow Nexus.

Exposes officer lookup and search as MCP tools that can be called by
Claude in Cursor or other MCP-compatible clients.

Usage:
    shadow-nexus mcp-serve

IMPORTANT: MCP uses stdio for JSON-RPC communication.
- NEVER print() or write to stdout - it corrupts the protocol
- All logging must go to stderr
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from .config import Settings
from .formatting import officer_heading, partial_failure_message, portrait_url
from .models import Officer, PartialFailure
from .retrieval import RetrievalService

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("shadow-nexus")

# Global retrieval service (initialized lazily)
_retrieval: RetrievalService | None = None
_settings: Settings | None = None


def configure_logging() -> None:
    """Route logging to stderr (stdout is reserved for MCP protocol)."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,  # Override any existing config
    )


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_retrieval() -> RetrievalService:
    """Get or create the retrieval service (lazy initialization)."""
    global _retrieval
    if _retrieval is None:
        _retrieval = RetrievalService(data_path=get_settings().data_path)
        _retrieval.initialize()
    return _retrieval


def officer_to_dict(officer: Officer) -> dict:
    """Convert an Officer model to a clean dictionary for JSON output."""
    result = officer.model_dump(mode="json", exclude={"portrait_path"})
    result["portrait_url"] = portrait_url(officer, get_settings().portrait_base_url)
    return result


def officer_summary(officer: Officer) -> dict:
    """Create a brief summary of an officer for list results."""
    return {
        "name": officer.name,
        "rarity": officer.rarity,
        "group": officer.group,
        "heading": officer_heading(officer),
    }


# =============================================================================
# MCP TOOLS
# =============================================================================


@mcp.tool()
def get_officer(name: str) -> dict | str:
    """
    Get full details for an officer.

    Accepts the exact name, a known nickname, or a fragment of the name
    ("kirk", "pike", "marcus").

    Args:
        name: Officer name or fragment, any case.

    Returns:
        Full officer record plus the lookup tier used, or an error message.
    """
    found = get_retrieval().match(name)
    if found is None:
        return f"No officer found matching '{name}'."

    result = officer_to_dict(found.officer)
    result["matched_by"] = found.tier.value
    return result


@mcp.tool()
def search_officers(query: str, limit: int = 20) -> dict:
    """
    Search officers by name, rarity, group, trait or ability text.

    Args:
        query: Substring to look for (case-insensitive), e.g. "armada", "epic".
        limit: Maximum number of officers to return (default: 20).

    Returns:
        Dictionary with the total match count and the first `limit` officers.
    """
    result = get_retrieval().search_page(query, limit=limit)
    return {
        "query": query,
        "total": result.total,
        "truncated": result.truncated,
        "officers": [officer_summary(o) for o in result.officers],
    }


@mcp.tool()
def compare_officers(first: str, second: str) -> dict | str:
    """
    Fetch two officers for side-by-side comparison.

    Args:
        first: First officer name or fragment.
        second: Second officer name or fragment.

    Returns:
        Both officer records, or a message naming the ones not found.
    """
    outcome = get_retrieval().resolve_pair(first, second)
    if isinstance(outcome, PartialFailure):
        return partial_failure_message(outcome).replace("**", "'")
    return {
        "first": officer_to_dict(outcome.first),
        "second": officer_to_dict(outcome.second),
    }


@mcp.tool()
def suggest_officer_names(partial: str = "", limit: int = 25) -> list[str]:
    """
    Suggest officer names containing a partial string.

    Args:
        partial: Text typed so far (may be empty).
        limit: Maximum suggestions (default: 25).
    """
    return get_retrieval().autocomplete(partial, limit=limit)


@mcp.tool()
def get_dataset_stats() -> dict:
    """
    Get statistics about the loaded officer snapshot.

    Returns:
        Officer and skipped-record counts, plus the load diagnostic if the
        snapshot could not be read.
    """
    retrieval = get_retrieval()
    stats: dict = dict(retrieval.stats())
    stats["data_path"] = str(get_settings().data_path)
    if retrieval.load_diagnostic:
        stats["diagnostic"] = retrieval.load_diagnostic
    return stats


# =============================================================================
# SERVER ENTRY POINT
# =============================================================================


def run_mcp_server():
    """Run the MCP server with stdio transport."""
    configure_logging()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_mcp_server()
