"""Secret detection over lines added anywhere in git history."""

import logging
import os
import re
import shutil
import subprocess
from typing import Iterator, List, Optional, Tuple

from security_scanner.checks.secret_detection import find_secrets, truncate_match
from security_scanner.file_walker import SKIP_EXTENSIONS
from security_scanner.models import Category, Finding, Severity
from security_scanner.patterns import secret_severity

logger = logging.getLogger(__name__)

MAX_COMMITS = 1000
GIT_TIMEOUT = 120

HUNK_HEADER = re.compile(r"^@@ -\d+(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def run(scan_path: str, ignore_rules=None) -> List[Finding]:
    # Ignore rules are deliberately not applied: ignored files are exactly
    # where committed credentials tend to survive in history.
    log_text = _read_history(scan_path)
    if log_text is None:
        return [_placeholder()]

    findings: List[Finding] = []
    for commit, path, line, added in iter_added_lines(log_text):
        if os.path.splitext(path)[1].lower() in SKIP_EXTENSIONS:
            continue
        for rule, matched, _ in find_secrets(added):
            findings.append(Finding(
                severity=secret_severity(rule.name),
                category=Category.GIT_HISTORY,
                title=f"Potential {rule.name} in git history",
                details=f"Found in {path} at line {line} (commit {commit[:8]})",
                file=path,
                line=line,
                match=truncate_match(matched),
            ))
    return findings


def _placeholder() -> Finding:
    return Finding(
        severity=Severity.INFO,
        category=Category.GIT_HISTORY,
        title="Git history scan",
        details="Full git history scanning requires git command execution",
    )


def _read_history(scan_path: str) -> Optional[str]:
    """Return ``git log -p`` output, or None when history is unavailable."""
    if not os.path.isdir(os.path.join(scan_path, ".git")):
        return None
    if not shutil.which("git"):
        logger.info("git executable not found, skipping history scan")
        return None

    try:
        result = subprocess.run(
            [
                "git", "-c", "core.quotePath=false", "log", "-p", "--all",
                "--no-color", "--unified=0",
                f"--max-count={MAX_COMMITS}", "--format=commit %H",
            ],
            cwd=scan_path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=GIT_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("git log failed in %s: %s", scan_path, e)
        return None

    if result.returncode != 0:
        logger.warning("git log exited with %d: %s", result.returncode, result.stderr.strip())
        return None
    return result.stdout


def iter_added_lines(log_text: str) -> Iterator[Tuple[str, str, int, str]]:
    """Yield (commit, path, new line number, text) for each added line.

    Expects ``git log -p --unified=0 --format='commit %H'`` output.  Hunk
    bodies are consumed by the line counts in their headers, so added lines
    that themselves begin with ``++`` are never taken for file headers.
    """
    commit = ""
    path = ""
    new_line = 0
    old_left = new_left = 0

    for raw in log_text.split("\n"):
        if old_left or new_left:
            if raw.startswith("+"):
                yield commit, path, new_line, raw[1:]
                new_line += 1
                new_left -= 1
            elif raw.startswith("-"):
                old_left -= 1
            continue

        if raw.startswith("commit "):
            commit = raw[len("commit "):].strip()
        elif raw.startswith("+++ "):
            path = _strip_diff_prefix(raw[4:])
        else:
            header = HUNK_HEADER.match(raw)
            if header:
                old_count, new_start, new_count = header.groups()
                old_left = int(old_count) if old_count is not None else 1
                new_left = int(new_count) if new_count is not None else 1
                new_line = int(new_start)


def _strip_diff_prefix(name: str) -> str:
    name = name.strip()
    if name.startswith('"') and name.endswith('"'):
        name = name[1:-1]
    if name.startswith("b/"):
        name = name[2:]
    return name
