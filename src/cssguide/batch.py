"""Batch processing: run the pipeline over many documents concurrently.

Each document gets its own tokens, tree and violations; only the read-only
StyleConfig is shared between worker threads. A failure in one document is
recorded on its result and never stops the batch.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from cssguide.config import StyleConfig
from cssguide.engine import check
from cssguide.formatter import format
from cssguide.model.diagnostic import Severity, Violation

logger = logging.getLogger("cssguide.batch")

STYLESHEET_SUFFIXES = (".css", ".scss")

EXCLUDED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".tox",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        "bower_components",
        "vendor",
        "dist",
        "build",
    }
)


@dataclass
class DocumentResult:
    """Outcome of one document's pipeline.

    ``fixed_text`` is set only in ``fix`` mode; ``error`` is set when the
    document could not be processed at all.
    """

    path: str
    violations: list[Violation] = field(default_factory=list)
    source: str | None = None
    fixed_text: str | None = None
    error: str | None = None

    @property
    def changed(self) -> bool:
        return self.fixed_text is not None and self.fixed_text != self.source

    @property
    def failed(self) -> bool:
        return self.error is not None

    def count(self, severity: Severity) -> int:
        return sum(1 for v in self.violations if v.severity is severity)


def process_document(
    text: str, config: StyleConfig | None = None, *, path: str = "<stdin>"
) -> DocumentResult:
    """Run the pipeline for one document in the mode *config* selects."""
    config = config or StyleConfig()
    if config.mode == "fix":
        result = format(text, config)
        return DocumentResult(
            path=path, violations=result.violations, source=text, fixed_text=result.text
        )
    return DocumentResult(path=path, violations=check(text, config), source=text)


def discover_files(paths: Iterable[Path | str]) -> Iterator[Path]:
    """Yield stylesheet files under *paths*, in a stable order.

    Directories are searched recursively, skipping VCS, virtualenv and vendor
    directories. Files named explicitly are yielded whatever their suffix.
    """
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            found = (
                fp
                for fp in p.rglob("*")
                if fp.is_file()
                and fp.suffix.lower() in STYLESHEET_SUFFIXES
                and not any(part in EXCLUDED_DIRS for part in fp.relative_to(p).parts)
            )
            yield from sorted(found)
        else:
            yield p


def _process_path(path: Path, config: StyleConfig) -> DocumentResult:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return DocumentResult(path=str(path), error=f"Cannot read {path}: {exc}")
    return process_document(text, config, path=str(path))


def process_files(
    paths: Iterable[Path | str],
    config: StyleConfig | None = None,
    *,
    jobs: int | None = None,
) -> list[DocumentResult]:
    """Discover and process every stylesheet under *paths*.

    Documents run concurrently on a thread pool of *jobs* workers (``None``
    lets the executor choose). Results come back in discovery order.
    """
    config = config or StyleConfig()
    files = list(discover_files(paths))
    logger.info("Processing %d file(s) with %s worker(s)", len(files), jobs or "default")
    if not files:
        return []

    results: dict[int, DocumentResult] = {}
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        futures = {pool.submit(_process_path, fp, config): k for k, fp in enumerate(files)}
        for future in as_completed(futures):
            k = futures[future]
            try:
                result = future.result()
            except Exception as exc:
                logger.exception("Unexpected failure processing %s", files[k])
                result = DocumentResult(path=str(files[k]), error=f"Internal error: {exc}")
            results[k] = result
    return [results[k] for k in range(len(files))]
