"""
Rewrite marker-delimited generated regions inside hand-written documents.

Only the text strictly between the start and end marker belongs to docsync.
Everything else, including the markers themselves, is left byte-for-byte
untouched, and a document whose region is already current is never written.
"""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from docsync.core.tracker.errors import DocSyncError

logger = logging.getLogger(__name__)


class MarkerNotFoundError(DocSyncError):
    """Raised when a document lacks a valid start/end marker pair."""

    def __init__(self, path: Path | str, start_marker: str, end_marker: str):
        self.path = path
        self.start_marker = start_marker
        self.end_marker = end_marker
        super().__init__(
            f"Missing or invalid generated markers in {path}: {start_marker} ... {end_marker}"
        )


@dataclass(frozen=True)
class PatchResult:
    path: Path
    changed: bool
    written: bool


def replace_generated_section(
    text: str,
    start_marker: str,
    end_marker: str,
    replacement: str,
    *,
    path: Path | str = "<document>",
) -> str:
    """
    Return text with the region between the markers replaced.

    The new region is the replacement wrapped in single newlines. The first
    end marker in the document must begin after the start marker ends.

    Example:
        >>> replace_generated_section("<!--S-->old<!--E-->", "<!--S-->", "<!--E-->", "new")
        '<!--S-->\\nnew\\n<!--E-->'

    Raises:
        MarkerNotFoundError: If a marker is missing or the end marker comes first
    """
    start_index = text.find(start_marker)
    end_index = text.find(end_marker)

    if start_index == -1 or end_index == -1 or end_index < start_index + len(start_marker):
        raise MarkerNotFoundError(path, start_marker, end_marker)

    before = text[: start_index + len(start_marker)]
    after = text[end_index:]
    return f"{before}\n{replacement}\n{after}"


def _write_atomic(path: Path, content: str) -> None:
    """Write content via a temp file in the same directory and rename it into place."""
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def patch_document(
    path: Path,
    start_marker: str,
    end_marker: str,
    replacement: str,
    *,
    dry_run: bool = False,
) -> PatchResult:
    """
    Replace a document's generated region, writing only if it changed.

    Args:
        path: Markdown document to patch
        start_marker: Literal that opens the generated region
        end_marker: Literal that closes the generated region
        replacement: New region content (without surrounding newlines)
        dry_run: Compute the result but never write

    Returns:
        PatchResult telling whether the region was stale and whether it was written

    Raises:
        MarkerNotFoundError: If the markers are missing or out of order
        OSError: If the document cannot be read or written
    """
    # newline="" keeps CRLF documents byte-identical outside the region
    with open(path, encoding="utf-8", newline="") as f:
        original = f.read()

    updated = replace_generated_section(
        original, start_marker, end_marker, replacement, path=path
    )

    if updated == original:
        logger.debug("%s is up to date", path)
        return PatchResult(path=path, changed=False, written=False)

    if dry_run:
        logger.info("%s is stale (not written)", path)
        return PatchResult(path=path, changed=True, written=False)

    _write_atomic(path, updated)
    logger.info("Updated generated section in %s", path)
    return PatchResult(path=path, changed=True, written=True)
