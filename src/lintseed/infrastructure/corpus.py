"""Corpus provider: source text of the sample files, read lazily."""

# lintseed:domain=infrastructure

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


def iter_corpus(paths: Iterable[Path]) -> Iterator[tuple[str, str]]:
    """Yield ``(filename, source)`` for each readable file, one at a time.

    Unreadable or non-UTF-8 files are skipped with a warning.
    """
    for path in paths:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s, skipping: %s", path, exc)
            continue
        yield str(path), source

