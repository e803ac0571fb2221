"""
Public Suffix List parsing.

Splits the list into ICANN (public) suffixes, PRIVATE suffixes and their
union. Every entry is stored in its ASCII form; entries written in Unicode
are followed by their original form so tries match both spellings.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Union

import idna

from fasttld.errors import SourceUnavailableError
from fasttld.models import SuffixCollections
from fasttld.utils.domain import to_ascii

logger = logging.getLogger(__name__)

PRIVATE_SECTION_MARKER = "// ===BEGIN PRIVATE DOMAINS==="


def parse_suffix_lines(lines: Iterable[str]) -> SuffixCollections:
    """
    Classify PSL lines into public, private and combined suffix collections.

    Lines that cannot be converted to ASCII are logged and skipped.
    """
    public: list[str] = []
    private: list[str] = []
    combined: list[str] = []
    in_private_section = False
    skipped = 0

    for raw_line in lines:
        line = raw_line.strip()

        if line == PRIVATE_SECTION_MARKER:
            in_private_section = True

        # Skip comments and blank lines
        if not line or line.startswith("//"):
            continue

        try:
            suffix = to_ascii(line)
        except (idna.IDNAError, UnicodeError) as e:
            logger.warning(f"Skipping suffix {line!r}: {e}")
            skipped += 1
            continue

        forms = [suffix] if suffix == line else [suffix, line]
        (private if in_private_section else public).extend(forms)
        combined.extend(forms)

    if skipped:
        logger.info(f"Skipped {skipped} suffix lines that could not be converted to ASCII")

    return SuffixCollections(
        public=tuple(public),
        private=tuple(private),
        all=tuple(combined),
    )


def load_suffix_collections(path: Union[str, Path]) -> SuffixCollections:
    """
    Load suffix collections from a PSL file.

    Raises:
        SourceUnavailableError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            collections = parse_suffix_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read suffix list {path}: {e}")
        raise SourceUnavailableError(path, str(e)) from e

    logger.info(
        f"Loaded {len(collections.public)} public and {len(collections.private)} "
        f"private suffixes from {path}"
    )
    return collections
