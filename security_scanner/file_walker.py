"""Candidate file enumeration for the content checks."""

import logging
import os
from typing import Iterator, List, Optional

from security_scanner.ignore_rules import IgnoreRules

logger = logging.getLogger(__name__)

# Version control and dependency manager directories are never entered
SKIP_DIRS = {
    ".git", ".hg", ".svn", "node_modules", "bower_components",
    ".venv", "venv",
}

SKIP_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".bmp", ".webp",
    ".pdf", ".zip", ".tar", ".gz", ".rar", ".7z",
    ".mp3", ".mp4", ".avi", ".mov", ".wav",
    ".woff", ".woff2", ".ttf", ".eot",
    ".exe", ".dll", ".so", ".dylib", ".pyc", ".class",
}

SOURCE_EXTENSIONS = {".js", ".ts", ".py", ".php", ".java", ".go", ".rb", ".cs"}

BINARY_SNIFF_BYTES = 1024


def walk_files(scan_path: str, ignore_rules: Optional[IgnoreRules] = None) -> Iterator[str]:
    """Yield relative paths of every regular file under ``scan_path``.

    Skipped directories and directories excluded by ``ignore_rules`` are
    pruned before descent; excluded files are dropped.
    """
    for root, dirs, files in os.walk(scan_path):
        rel_root = os.path.relpath(root, scan_path)
        if rel_root == ".":
            rel_root = ""

        kept = []
        for d in sorted(dirs):
            if d in SKIP_DIRS:
                continue
            if ignore_rules and ignore_rules.is_excluded(os.path.join(rel_root, d), is_dir=True):
                continue
            kept.append(d)
        dirs[:] = kept

        for filename in sorted(files):
            rel_path = os.path.join(rel_root, filename).replace(os.sep, "/")
            if ignore_rules and ignore_rules.is_excluded(rel_path):
                continue
            yield rel_path


def secret_candidates(scan_path: str, ignore_rules: Optional[IgnoreRules] = None) -> List[str]:
    return [
        p for p in walk_files(scan_path, ignore_rules)
        if os.path.splitext(p)[1].lower() not in SKIP_EXTENSIONS
    ]


def source_candidates(scan_path: str, ignore_rules: Optional[IgnoreRules] = None) -> List[str]:
    return [
        p for p in walk_files(scan_path, ignore_rules)
        if os.path.splitext(p)[1].lower() in SOURCE_EXTENSIONS
    ]


def read_text(scan_path: str, rel_path: str) -> Optional[str]:
    """Return file text, or None for unreadable and binary files."""
    filepath = os.path.join(scan_path, rel_path)
    try:
        with open(filepath, "rb") as f:
            raw = f.read()
    except OSError as e:
        logger.debug("Skipping unreadable file %s: %s", rel_path, e)
        return None
    if b"\x00" in raw[:BINARY_SNIFF_BYTES]:
        logger.debug("Skipping binary file %s", rel_path)
        return None
    return raw.decode("utf-8", errors="ignore")
