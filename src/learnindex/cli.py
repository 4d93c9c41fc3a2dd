"""CLI entry point for learnindex."""

import argparse
import json
import logging
import sys
from typing import Literal, Optional, cast

from learnindex.audit import audit_learning_paths
from learnindex.errors import CorpusBuildError, LearnIndexError
from learnindex.index import LoadResult, PersonaMatcher, load_corpus
from learnindex.models import PROFILES, Depth, DocumentRecord, Persona, get_profile
from learnindex.utils import format_documents

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)

DEPTH_CHOICES = [d.value for d in Depth]
PERSONA_CHOICES = [p.value for p in Persona]


def load_or_exit(source: str) -> LoadResult:
    """Build the corpus, or report why not and exit 1."""
    try:
        return load_corpus(source)
    except CorpusBuildError as exc:
        logger.error(f"Build failed: {exc}")
        for diagnostic in exc.diagnostics:
            logger.error(f"  {diagnostic}")
        sys.exit(1)
    except LearnIndexError as exc:
        logger.error(str(exc))
        sys.exit(1)


def print_documents(docs: tuple[DocumentRecord, ...], as_json: bool) -> None:
    if as_json:
        print(json.dumps([doc.as_dict() for doc in docs], indent=2))
    elif docs:
        print(format_documents(docs))
    else:
        logger.info("No matching documents")


def build(source: str, as_json: bool = False) -> None:
    """Build the index for a source and report diagnostics.

    Args:
        source: Content folder or zip file
        as_json: Print the report as JSON
    """
    result = load_or_exit(source)
    index = result.index

    if as_json:
        report = {
            "documents": len(index),
            "skipped": result.skipped,
            "diagnostics": [d.as_dict() for d in result.diagnostics],
        }
        print(json.dumps(report, indent=2))
        return

    logger.info(f"Indexed {len(index)} documents from {source}")
    logger.info(f"  Phases: {len(index.phases())}")
    logger.info(f"  Topics: {len(index.topics())}")
    for depth in Depth:
        logger.info(f"  {depth.value}: {len(index.by_depth(depth))}")
    if result.skipped:
        logger.info(f"  Skipped (no front-matter): {len(result.skipped)}")

    if result.diagnostics:
        logger.info("")
        logger.info(f"Diagnostics ({len(result.errors)} excluded, {len(result.warnings)} warnings):")
        for diagnostic in result.diagnostics:
            logger.info(f"  {diagnostic}")


def query(
    source: str,
    phase: Optional[str] = None,
    topic: Optional[str] = None,
    depth: Optional[str] = None,
    persona: Optional[str] = None,
    as_json: bool = False,
) -> None:
    """Run one view query against the index."""
    index = load_or_exit(source).index

    if phase is not None:
        docs = index.by_phase(phase)
    elif topic is not None:
        docs = index.by_topic(topic)
    elif depth is not None:
        docs = index.by_depth(depth)
    else:
        docs = index.by_persona(persona or "")

    print_documents(docs, as_json)


def path(
    source: str,
    persona: str,
    max_depth: Optional[str] = None,
    profile_depth: bool = False,
    entry_points: bool = False,
    as_json: bool = False,
) -> None:
    """Print the recommended reading order for a persona.

    Args:
        source: Content folder or zip file
        persona: Persona tag
        max_depth: Depth ceiling
        profile_depth: Use the persona profile's preferred depth as ceiling
        entry_points: Only list the persona's entry-point documents
        as_json: Print as JSON
    """
    index = load_or_exit(source).index
    matcher = PersonaMatcher()

    if profile_depth:
        max_depth = get_profile(Persona(persona)).preferred_depth.value

    if entry_points:
        docs = matcher.entry_points(index, persona)
    else:
        docs = matcher.match(index, persona, max_depth)

    print_documents(docs, as_json)


def audit(source: str, paths_dir: str, metadata_dir: Optional[str] = None) -> None:
    """Check learning paths against the index; exit 1 on missing content.

    Args:
        source: Content folder or zip file
        paths_dir: Directory of learning-path JSON files
        metadata_dir: Directory holding topics/<topic>.json metadata
    """
    index = load_or_exit(source).index
    report = audit_learning_paths(index, paths_dir, metadata_dir)

    logger.info(f"Learning paths: {report.total_paths} ({report.total_steps} steps)")
    logger.info(f"  Valid references: {report.valid_references}")
    logger.info(f"  Invalid references: {report.invalid_references}")

    if report.missing_content:
        logger.info("")
        logger.info(f"Missing content ({len(report.missing_content)}):")
        for missing in report.missing_content:
            logger.info(f"  {missing.path_name}: {missing.key}")

    if report.missing_metadata:
        logger.info("")
        logger.info(f"Missing metadata files ({len(report.missing_metadata)}):")
        for missing in report.missing_metadata:
            logger.info(f"  topics/{missing.topic}.json")
            logger.info(f"    Referenced by: {', '.join(missing.referenced_by)}")

    if report.warnings:
        logger.info("")
        logger.info(f"Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            logger.info(f"  {warning}")

    logger.info("")
    logger.info(f"{len(report.unreferenced)} documents not referenced by any learning path")

    if not report.passed:
        logger.error(f"Audit failed with {report.invalid_references} invalid references")
        sys.exit(1)
    logger.info("Audit passed")


def personas() -> None:
    """Print the persona reference table."""
    for profile in PROFILES.values():
        print(f"{profile.persona.value}")
        print(f"  {profile.tagline}")
        print(f"  Preferred depth: {profile.preferred_depth.value}")
        print(f"  Time budget: {profile.time_budget.value}")
        print(f"  Entry points: {', '.join(profile.entry_points)}")


def serve(source: str, transport: str = "stdio") -> None:
    """Start MCP server for a content source.

    Args:
        source: Content folder or zip file
        transport: Transport protocol (stdio or sse)
    """
    # Import here to avoid loading MCP unless needed
    from learnindex.server import create_mcp_server

    try:
        mcp = create_mcp_server(source)
    except CorpusBuildError as exc:
        logger.error(f"Build failed: {exc}")
        sys.exit(1)
    except LearnIndexError as exc:
        logger.error(str(exc))
        sys.exit(1)

    logger.info(f"Serving {source} via {transport}")
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="learnindex",
        description="learnindex - metadata index for phase/topic/depth learning content",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Build the index and report diagnostics",
    )
    build_parser.add_argument("source", help="Content folder or zip file path")
    build_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    # query command
    query_parser = subparsers.add_parser(
        "query",
        help="List documents by phase, topic, depth or persona",
    )
    query_parser.add_argument("source", help="Content folder or zip file path")
    selector = query_parser.add_mutually_exclusive_group(required=True)
    selector.add_argument("--phase", help="Phase folder name, e.g. 02-design")
    selector.add_argument("--topic", help="Topic slug")
    selector.add_argument("--depth", choices=DEPTH_CHOICES, help="Depth level")
    selector.add_argument("--persona", choices=PERSONA_CHOICES, help="Persona tag")
    query_parser.add_argument("--json", action="store_true", help="Print as JSON")

    # path command
    path_parser = subparsers.add_parser(
        "path",
        help="Recommended reading order for a persona",
    )
    path_parser.add_argument("source", help="Content folder or zip file path")
    path_parser.add_argument("persona", choices=PERSONA_CHOICES, help="Persona tag")
    ceiling = path_parser.add_mutually_exclusive_group()
    ceiling.add_argument("--max-depth", choices=DEPTH_CHOICES, help="Deepest level to include")
    ceiling.add_argument(
        "--profile-depth",
        action="store_true",
        help="Use the persona's preferred depth as the ceiling",
    )
    path_parser.add_argument(
        "--entry-points",
        action="store_true",
        help="Only list the persona's entry-point documents",
    )
    path_parser.add_argument("--json", action="store_true", help="Print as JSON")

    # audit command
    audit_parser = subparsers.add_parser(
        "audit",
        help="Check learning-path JSON files against the index",
    )
    audit_parser.add_argument("source", help="Content folder or zip file path")
    audit_parser.add_argument("paths_dir", help="Directory of learning-path .json files")
    audit_parser.add_argument(
        "--metadata-dir",
        help="Also check that each referenced topic has topics/<topic>.json here",
    )

    # personas command
    subparsers.add_parser(
        "personas",
        help="Show the persona reference table",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start MCP server for a content source",
    )
    serve_parser.add_argument("source", help="Content folder or zip file path")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    args = parser.parse_args()

    if args.command == "build":
        build(args.source, args.json)
    elif args.command == "query":
        query(args.source, args.phase, args.topic, args.depth, args.persona, args.json)
    elif args.command == "path":
        path(
            args.source,
            args.persona,
            max_depth=args.max_depth,
            profile_depth=args.profile_depth,
            entry_points=args.entry_points,
            as_json=args.json,
        )
    elif args.command == "audit":
        audit(args.source, args.paths_dir, args.metadata_dir)
    elif args.command == "personas":
        personas()
    elif args.command == "serve":
        serve(args.source, args.transport)


if __name__ == "__main__":
    main()
