"""Directory walking and output writing around the engine.

Input files are read in sorted relative-path order so the first-seen
tie-break, and therefore every alias, is reproducible across runs.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from minifier.config import MinifyConfig
from minifier.engine import MinifyResult, SourceUnit, run
from processors import dialect_for_path

logger = logging.getLogger("minifier")


def collect_sources(input_root: Path) -> tuple[list[SourceUnit], list[str]]:
    """Read every processable file under *input_root*.

    Returns the source units (paths relative to *input_root*, POSIX style)
    and the relative paths of files with no dialect.
    """
    sources: list[SourceUnit] = []
    passthrough: list[str] = []
    for path in sorted(p for p in input_root.rglob("*") if p.is_file()):
        rel = path.relative_to(input_root).as_posix()
        dialect = dialect_for_path(path)
        if dialect is None:
            passthrough.append(rel)
            continue
        text = path.read_text(encoding="utf-8")
        sources.append(SourceUnit(path=rel, text=text, dialect=dialect))
    return sources, passthrough


def write_text_atomic(path: Path, text: str) -> None:
    """Write *text* to *path* through a temp file so it is never half written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def minify_tree(
    input_root: str | Path,
    output_root: str | Path | None = None,
    config: MinifyConfig | None = None,
) -> MinifyResult:
    """Minify every HTML/CSS file under *input_root* into *output_root*.

    The output tree mirrors the input tree; *output_root* defaults to
    *input_root* (in-place).  Files without a dialect are copied when the
    roots differ.  I/O errors propagate.
    """
    config = config or MinifyConfig()
    input_root = Path(input_root)
    output_root = Path(output_root) if output_root is not None else input_root
    if not input_root.is_dir():
        raise NotADirectoryError(f"input root is not a directory: {input_root}")

    sources, passthrough = collect_sources(input_root)
    logger.info(
        "minifying %d files (%d passthrough)",
        len(sources),
        len(passthrough),
        extra={"path": str(input_root)},
    )

    result = run(sources, config)
    result.skipped = passthrough

    for rel, text in result.outputs.items():
        write_text_atomic(output_root / rel, text)

    if output_root.resolve() != input_root.resolve():
        for rel in passthrough:
            target = output_root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(input_root / rel, target)

    if config.alias_map_path:
        write_text_atomic(
            Path(config.alias_map_path),
            json.dumps(result.alias_map, ensure_ascii=False, indent=2),
        )

    return result
