"""Tests for the MCP tool surface."""

import asyncio

from projectrag.models import SourceFile
from projectrag.server import create_mcp_server
from projectrag.service import ProjectRAGService


def _call_text(mcp, name: str, arguments: dict) -> str:
    result = asyncio.run(mcp.call_tool(name, arguments))
    # Newer mcp releases return (content, structured_output)
    if isinstance(result, tuple):
        result = result[0]
    return "".join(getattr(block, "text", "") for block in result)


def test_server_registers_tools(service) -> None:
    mcp = create_mcp_server(service, "proj")

    tools = asyncio.run(mcp.list_tools())

    assert {tool.name for tool in tools} == {"search", "context", "info"}


def test_search_tool_uses_configured_top_k(settings, store, embedder) -> None:
    with ProjectRAGService(settings.model_copy(update={"default_top_k": 1}), store=store, embedder=embedder) as service:
        service.index_files(
            "proj",
            [
                SourceFile("a.md", "a.md", "apples and pears"),
                SourceFile("b.md", "b.md", "apples and plums"),
                SourceFile("c.md", "c.md", "apples and grapes"),
            ],
        )
        mcp = create_mcp_server(service, "proj")

        default_text = _call_text(mcp, "search", {"query": "apples"})
        explicit_text = _call_text(mcp, "search", {"query": "apples", "limit": 3})

    assert "1. [" in default_text
    assert "2. [" not in default_text
    assert "3. [" in explicit_text
