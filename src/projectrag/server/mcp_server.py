"""FastMCP server exposing a project's index to MCP clients."""

from mcp.server.fastmcp import FastMCP

from projectrag.models import SearchOptions
from projectrag.service import ProjectRAGService


def create_mcp_server(service: ProjectRAGService, project_id: str) -> FastMCP:
    """Create an MCP server bound to one project.

    Design: 1 process = 1 project, so tools never search another
    project's files by accident.

    Args:
        service: The retrieval service that owns store and embedder
        project_id: Project whose index the tools query

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(name="projectrag")

    @mcp.tool()
    def search(query: str, limit: int | None = None, min_score: float | None = None) -> str:
        """Semantic search across the project's indexed files.

        Use this to find relevant content by concept, not just keyword.

        Args:
            query: Natural language description of what you're looking for
            limit: Maximum number of results (defaults to the configured top-k)
            min_score: Optional similarity cutoff between -1 and 1

        Returns:
            Ranked list of relevant chunks with similarity scores
        """
        results = service.search(project_id, query, SearchOptions(top_k=limit, min_score=min_score))
        if not results:
            return f"No results found for: {query}"

        lines = []
        for r in results:
            text = r.chunk.content[:200].replace("\n", " ")
            if len(r.chunk.content) > 200:
                text += "..."
            lines.append(f"{r.rank}. [{r.score:.3f}] {r.chunk.file_name}")
            lines.append(f"   {text}")
            lines.append("")
        return "\n".join(lines)

    @mcp.tool()
    def context(query: str) -> str:
        """Assemble prompt-ready context for a question, within the token budget."""
        rag_context = service.get_context(project_id, query)
        if not rag_context.context:
            return f"No context found for: {query}"
        return rag_context.context

    @mcp.tool()
    def info() -> str:
        """Summarize the project's index."""
        index_info = service.get_index_info(project_id)
        if not index_info.exists:
            suffix = " (needs rebuild)" if index_info.needs_rebuild else ""
            return f"No index for project {project_id}{suffix}"
        return (
            f"Project {project_id}: {index_info.file_count} files, "
            f"{index_info.chunk_count} chunks, updated {index_info.last_updated}"
        )

    return mcp
