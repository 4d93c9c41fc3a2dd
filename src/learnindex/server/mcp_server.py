"""FastMCP server implementation for learnindex."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from learnindex.errors import LearnIndexError
from learnindex.index import IndexHolder
from learnindex.models import DocumentRecord
from learnindex.utils import format_documents


def create_mcp_server(source: Path | str) -> FastMCP:
    """Create an MCP server for one content source.

    Design: 1 process = 1 corpus. The index is built up front, so a broken
    corpus fails here, and is only replaced as a whole by the ``reload`` tool.

    Args:
        source: Content folder or zip to index

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="learnindex",
    )

    holder = IndexHolder(source)
    holder.reload()

    def listing(docs: tuple[DocumentRecord, ...], what: str) -> str:
        if not docs:
            return f"No documents found for {what}"
        return format_documents(docs)

    @mcp.tool()
    def by_phase(phase: str) -> str:
        """List documents in a phase (e.g. "02-design")."""
        return listing(holder.current.index.by_phase(phase), f"phase '{phase}'")

    @mcp.tool()
    def by_topic(topic: str) -> str:
        """List every depth published for a topic slug (e.g. "api-design")."""
        return listing(holder.current.index.by_topic(topic), f"topic '{topic}'")

    @mcp.tool()
    def by_depth(depth: str) -> str:
        """List documents at one depth: surface, mid-depth or deep-water."""
        return listing(holder.current.index.by_depth(depth), f"depth '{depth}'")

    @mcp.tool()
    def by_persona(persona: str) -> str:
        """List documents written for a persona (e.g. "busy-developer")."""
        return listing(holder.current.index.by_persona(persona), f"persona '{persona}'")

    @mcp.tool()
    def recommended_order(persona: str, max_depth: str = "") -> str:
        """Reading order for a persona, prerequisites first.

        Args:
            persona: Persona tag
            max_depth: Optional depth ceiling (surface, mid-depth, deep-water)

        Returns:
            Numbered reading list
        """
        try:
            docs = holder.current.index.recommended_order(persona, max_depth or None)
        except ValueError as exc:
            return f"Error: {exc}"

        if not docs:
            return f"No documents found for persona '{persona}'"
        lines = format_documents(docs).splitlines()
        return "\n".join(f"{i}. {line}" for i, line in enumerate(lines, 1))

    @mcp.tool()
    def document(doc_id: str) -> str:
        """Show the metadata and resolved relations of one document."""
        index = holder.current.index
        doc = index.get(doc_id)
        if doc is None:
            return f"Error: Document not found: {doc_id}"

        relations = index.relations
        personas = ", ".join(sorted(p.value for p in doc.personas)) or "-"
        return (
            f"{doc.title}\n"
            f"  Id: {doc.id}\n"
            f"  Phase: {doc.phase}  Topic: {doc.topic}  Depth: {doc.depth.value}\n"
            f"  Personas: {personas}\n"
            f"  Prerequisites: {', '.join(sorted(relations.prerequisites_of(doc.id))) or '-'}\n"
            f"  Needed by: {', '.join(sorted(relations.dependents_of(doc.id))) or '-'}\n"
            f"  Related: {', '.join(sorted(relations.related_of(doc.id))) or '-'}"
        )

    @mcp.tool()
    def diagnostics() -> str:
        """Problems found while building the index."""
        result = holder.current
        if not result.diagnostics:
            return "No problems found"
        return "\n".join(str(d) for d in result.diagnostics)

    @mcp.tool()
    def reload() -> str:
        """Rebuild the index from the source and swap it in."""
        try:
            result = holder.reload()
        except LearnIndexError as exc:
            return f"Reload failed, previous index still active: {exc}"
        return f"Indexed {len(result.index)} documents ({len(result.warnings)} warnings)"

    return mcp
