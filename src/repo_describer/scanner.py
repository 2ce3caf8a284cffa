import logging
import os
from collections import Counter
from pathlib import Path
from typing import NamedTuple

from repo_describer.errors import TraversalError
from repo_describer.ignore import IgnoreMatcher

logger = logging.getLogger(__name__)


class ScanResult(NamedTuple):
    primary_language: str
    file_structure: list[str]
    entry_point: str
    current_code: dict[str, str]
    extension_counts: dict[str, int]


def file_extension(name: str) -> str:
    """Suffix from the last '.' of a file name, dot included ("" when there is none)."""
    idx = name.rfind(".")
    return name[idx:] if idx >= 0 else ""


def pick_primary_language(counts: dict[str, int]) -> str:
    # Highest count wins; ties go to the lexicographically smallest extension.
    if not counts:
        return ""
    return min(counts.items(), key=lambda item: (-item[1], item[0]))[0]


def entry_point_for(primary_language: str) -> str:
    return "main." + primary_language.removeprefix(".")


def _read_file(path: Path) -> str:
    with open(path, "rb") as f:
        return f.read().decode("utf-8", errors="replace")


def _walk(
    root: Path,
    rel_dir: str,
    matcher: IgnoreMatcher,
    vcs_dir: str,
    file_structure: list[str],
    current_code: dict[str, str],
    counts: Counter,
) -> None:
    directory = root / rel_dir if rel_dir else root
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        rel_path = f"{rel_dir}/{entry.name}" if rel_dir else entry.name

        if entry.is_dir(follow_symlinks=False):
            if entry.name == vcs_dir:
                continue
            if matcher.matches(rel_path, is_dir=True):
                logger.debug(f"Pruned ignored directory {rel_path}")
                continue
            _walk(root, rel_path, matcher, vcs_dir, file_structure, current_code, counts)
            continue

        if entry.is_symlink() and entry.is_dir():
            logger.debug(f"Skipped symlinked directory {rel_path}")
            continue
        if matcher.matches(rel_path, is_dir=False):
            continue

        file_structure.append(rel_path)
        current_code[rel_path] = _read_file(Path(entry.path))
        ext = file_extension(entry.name)
        if ext:
            counts[ext] += 1


def scan_repository(root: Path, matcher: IgnoreMatcher, vcs_dir: str = ".git") -> ScanResult:
    """Walk ``root`` once, collecting paths, contents and extension counts.

    Entries are visited depth-first in name order, so the file structure is
    stable for an unchanged tree. Ignored directories and ``vcs_dir`` are never
    descended into. Any filesystem error aborts the scan.
    """
    root = Path(root)
    file_structure: list[str] = []
    current_code: dict[str, str] = {}
    counts: Counter = Counter()

    try:
        _walk(root, "", matcher, vcs_dir, file_structure, current_code, counts)
    except OSError as exc:
        raise TraversalError(f"Failed to scan {root}: {exc}") from exc

    primary_language = pick_primary_language(counts)
    logger.info(
        f"Scanned {len(file_structure)} files, primary language "
        f"{primary_language or '(none)'} from {dict(counts.most_common(5))}"
    )
    return ScanResult(
        primary_language=primary_language,
        file_structure=file_structure,
        entry_point=entry_point_for(primary_language),
        current_code=current_code,
        extension_counts=dict(counts),
    )
