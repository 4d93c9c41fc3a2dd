"""Path filtering shared by the ingesters."""

from pathlib import PurePath

MARKDOWN_EXTENSIONS = {".md", ".markdown"}

# Common artifact and tooling directories
SKIP_PATTERNS = {
    "__pycache__",
    "node_modules",
    "venv",
    "env",
    "dist",
    "build",
    "site-packages",
}


def should_skip(path: PurePath) -> bool:
    """Check if a file should be skipped.

    Skips hidden files and folders, build artifacts and anything that is not
    markdown.
    """
    parts = path.parts

    if any(part.startswith(".") for part in parts):
        return True

    if any(part in SKIP_PATTERNS or part.endswith(".egg-info") for part in parts):
        return True

    return path.suffix.lower() not in MARKDOWN_EXTENSIONS
