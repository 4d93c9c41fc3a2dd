"""Front-matter extraction for markdown documents."""

from dataclasses import dataclass, field
from typing import Any

import yaml

from learnindex.errors import MalformedFrontMatterError

DELIMITER = "---"
END_MARKERS = {"---", "..."}


@dataclass(frozen=True)
class ParsedDocument:
    """Front-matter mapping plus the markdown that follows it."""

    front_matter: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    has_front_matter: bool = False


def parse_front_matter(text: str) -> ParsedDocument:
    """Split raw file text into a front-matter mapping and a body.

    Text that does not open with a ``---`` line has no front-matter: the
    mapping is empty and the body is the text unchanged.

    Raises:
        MalformedFrontMatterError: the opening delimiter is present but the
            block is never closed, is not valid YAML, or is not a mapping.
    """
    content = text[1:] if text.startswith("\ufeff") else text
    lines = content.splitlines(keepends=True)

    if not lines or lines[0].rstrip() != DELIMITER:
        return ParsedDocument(front_matter={}, body=text)

    for end, line in enumerate(lines[1:], start=1):
        if line.rstrip() in END_MARKERS:
            break
    else:
        raise MalformedFrontMatterError("front-matter block has no closing '---'")

    block = "".join(lines[1:end])
    body = "".join(lines[end + 1 :])

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise MalformedFrontMatterError(f"invalid YAML in front-matter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontMatterError(
            f"front-matter must be a mapping, got {type(data).__name__}"
        )

    return ParsedDocument(
        front_matter={str(k): v for k, v in data.items()},
        body=body,
        has_front_matter=True,
    )
