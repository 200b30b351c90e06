"""CLI entry point for projectrag."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from projectrag.config import RAGSettings, RemoteEmbeddingConfig, load_settings
from projectrag.ingesters import iter_source_files
from projectrag.models import FileIndexState, SearchOptions
from projectrag.service import ProjectRAGService

logger = logging.getLogger(__name__)


def build_settings(args: argparse.Namespace) -> RAGSettings:
    """Config file (if given) or environment, then command-line overrides."""
    settings = load_settings(Path(args.config)) if args.config else RAGSettings.from_env()
    updates: dict = {}
    if args.data_dir:
        updates["data_dir"] = Path(args.data_dir)
    if args.remote:
        model = args.model or RemoteEmbeddingConfig().model
        updates["embedding"] = RemoteEmbeddingConfig(endpoint=args.remote, model=model)
    elif args.model:
        updates["embedding"] = settings.embedding.model_copy(update={"model": args.model})
    if updates:
        settings = RAGSettings.model_validate({**settings.model_dump(), **updates})
    return settings


def index(service: ProjectRAGService, project_id: str, source: str) -> int:
    """Index every text file under ``source`` into ``project_id``."""
    try:
        files = list(iter_source_files(source))
    except ValueError as exc:
        logger.error(str(exc))
        logger.error("Supported inputs: folders")
        return 1

    logger.info(f"Indexing {len(files)} files from {source} into {project_id}")
    status = service.index_files(project_id, files)

    failed = 0
    for file_status in status.files:
        if file_status.status == FileIndexState.ERROR:
            failed += 1
            logger.error(f"  {file_status.file_name}: {file_status.error}")
        elif file_status.chunks_created is None:
            logger.info(f"  {file_status.file_name} (unchanged)")
        else:
            logger.info(f"  {file_status.file_name}: {file_status.chunks_created} chunks")

    logger.info("")
    logger.info(f"Indexed {status.total_files} files, {status.total_chunks} chunks, {failed} errors")
    return 1 if failed else 0


def search(
    service: ProjectRAGService,
    project_id: str,
    query: str,
    top_k: Optional[int],
    min_score: Optional[float],
    file_ids: Optional[list[str]],
    as_json: bool,
) -> int:
    results = service.search(project_id, query, SearchOptions(top_k=top_k, min_score=min_score, file_ids=file_ids))
    if as_json:
        print(json.dumps([asdict(r) for r in results], indent=2))
        return 0
    if not results:
        print(f"No results found for: {query}")
        return 0
    for r in results:
        text = r.chunk.content[:200].replace("\n", " ")
        print(f"{r.rank}. [{r.score:.3f}] {r.chunk.file_name}")
        print(f"   {text}")
    return 0


def context(service: ProjectRAGService, project_id: str, query: str) -> int:
    rag_context = service.get_context(project_id, query)
    print(rag_context.context)
    logger.info(f"({len(rag_context.sources)} sources, ~{rag_context.token_count} tokens)")
    return 0


def info(service: ProjectRAGService, project_id: str) -> int:
    index_info = service.get_index_info(project_id)
    if not index_info.exists:
        print(f"No index for project {project_id}")
        if index_info.needs_rebuild:
            print("  Stored index is outdated or unreadable; re-index to rebuild it.")
        return 1

    print(f"Project: {project_id}")
    print(f"  Model: {service.model_name}")
    print(f"  Files: {index_info.file_count}")
    print(f"  Chunks: {index_info.chunk_count}")
    print(f"  Updated: {index_info.last_updated}")
    return 0


def serve(service: ProjectRAGService, project_id: str, transport: str = "stdio") -> int:
    """Start an MCP server for one project."""
    # Import here to avoid loading MCP unless needed
    from typing import Literal, cast

    from projectrag.server import create_mcp_server

    logger.info(f"Serving {project_id} via {transport}")
    mcp = create_mcp_server(service, project_id)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projectrag",
        description="projectrag - per-project semantic search",
    )
    parser.add_argument("--config", help="Path to a JSON settings file")
    parser.add_argument("--data-dir", help="Directory holding project indexes")
    parser.add_argument("--remote", metavar="URL", help="Use an Ollama-compatible embedding API at URL")
    parser.add_argument("--model", help="Embedding model name")
    subparsers = parser.add_subparsers(dest="command", required=True)

    index_parser = subparsers.add_parser("index", help="Index a folder into a project")
    index_parser.add_argument("project", help="Project id")
    index_parser.add_argument("source", help="Folder to index")

    search_parser = subparsers.add_parser("search", help="Semantic search within a project")
    search_parser.add_argument("project", help="Project id")
    search_parser.add_argument("query", help="Natural language query")
    search_parser.add_argument("--top-k", type=int, help="Maximum number of results")
    search_parser.add_argument("--min-score", type=float, help="Minimum similarity score")
    search_parser.add_argument("--file", action="append", dest="file_ids", help="Restrict to a file id (repeatable)")
    search_parser.add_argument("--json", action="store_true", help="Emit results as JSON")

    context_parser = subparsers.add_parser("context", help="Print LLM-ready context for a query")
    context_parser.add_argument("project", help="Project id")
    context_parser.add_argument("query", help="Natural language query")

    info_parser = subparsers.add_parser("info", help="Show information about a project index")
    info_parser.add_argument("project", help="Project id")

    remove_parser = subparsers.add_parser("remove", help="Remove one file from a project index")
    remove_parser.add_argument("project", help="Project id")
    remove_parser.add_argument("file_id", help="File id (relative path for indexed folders)")
    remove_parser.add_argument("file_name", nargs="?", help="File name (defaults to the id)")

    delete_parser = subparsers.add_parser("delete", help="Delete a project's index and stored files")
    delete_parser.add_argument("project", help="Project id")

    serve_parser = subparsers.add_parser("serve", help="Start MCP server for a project")
    serve_parser.add_argument("project", help="Project id")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = build_settings(args)
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")

    with ProjectRAGService(settings) as service:
        if args.command == "index":
            code = index(service, args.project, args.source)
        elif args.command == "search":
            code = search(service, args.project, args.query, args.top_k, args.min_score, args.file_ids, args.json)
        elif args.command == "context":
            code = context(service, args.project, args.query)
        elif args.command == "info":
            code = info(service, args.project)
        elif args.command == "remove":
            removed = service.remove_file(args.project, args.file_id, args.file_name or args.file_id)
            logger.info("Removed" if removed else f"Nothing indexed for {args.file_id}")
            code = 0 if removed else 1
        elif args.command == "delete":
            deleted = service.delete_project_index(args.project)
            logger.info("Deleted" if deleted else f"No index for project {args.project}")
            code = 0 if deleted else 1
        else:
            code = serve(service, args.project, args.transport)

    sys.exit(code)


if __name__ == "__main__":
    main()
