"""Gitignore-style exclusion rules read from the root of a scanned tree."""

import logging
from pathlib import Path

import pathspec

from repo_describer.errors import IgnoreFileReadError

logger = logging.getLogger(__name__)


class IgnoreMatcher:
    """Decides whether a path relative to the scan root is excluded.

    Patterns follow gitignore precedence: the last matching pattern wins, so a
    ``!pattern`` can re-include something an earlier line excluded. An empty
    matcher excludes nothing.
    """

    def __init__(self, patterns: list[str] | None = None):
        self.patterns = [
            line for line in (patterns or [])
            if line.strip() and not line.startswith("#")
        ]
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, relative_path: str, is_dir: bool) -> bool:
        if not self.patterns:
            return False
        path = relative_path.replace("\\", "/").strip("/")
        if is_dir:
            # Directory-only patterns ("build/") need the trailing slash to match.
            path += "/"
        return self._spec.match_file(path)


def compile_ignore(root: Path, ignore_file_name: str = ".gitignore") -> IgnoreMatcher:
    ignore_path = Path(root) / ignore_file_name
    try:
        # utf-8-sig drops a leading byte-order mark, as git does.
        with open(ignore_path, encoding="utf-8-sig") as f:
            lines = f.read().splitlines()
    except FileNotFoundError:
        logger.info(f"No {ignore_file_name} at {root}, scanning unfiltered")
        return IgnoreMatcher()
    except (OSError, UnicodeDecodeError) as exc:
        raise IgnoreFileReadError(f"Failed to read {ignore_path}: {exc}") from exc

    matcher = IgnoreMatcher(lines)
    logger.info(f"Loaded {len(matcher.patterns)} ignore pattern(s) from {ignore_path}")
    return matcher
