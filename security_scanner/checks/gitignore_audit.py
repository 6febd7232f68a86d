"""Coverage audit of the repository .gitignore."""

from typing import Iterable, List, Optional, Sequence

from security_scanner.ignore_rules import GITIGNORE_FILENAME, IgnoreRules
from security_scanner.models import Category, Finding, GitignoreAnalysis, Severity
from security_scanner.patterns import RECOMMENDED_GITIGNORE_PATTERNS, gitignore_severity

SUGGESTIONS = (
    (".env", "Add .env and .env.* patterns to prevent credential exposure"),
    ("node_modules", "Add node_modules/ for Node.js projects"),
    ("__pycache__", "Add __pycache__/ and *.pyc for Python projects"),
)


def existing_entries(content: str) -> List[str]:
    return [line.strip() for line in content.split("\n")]


def missing_patterns(content: str, patterns: Iterable[str]) -> List[str]:
    """Patterns with no line equal to, or starting with, them."""
    existing = existing_entries(content)
    return [
        pattern for pattern in patterns
        if not any(line == pattern or line.startswith(pattern) for line in existing)
    ]


def analyze_gitignore(content: str, extra_patterns: Optional[Sequence[str]] = None) -> GitignoreAnalysis:
    patterns = list(RECOMMENDED_GITIGNORE_PATTERNS) + list(extra_patterns or [])
    existing = existing_entries(content)
    suggestions = [
        hint for needle, hint in SUGGESTIONS
        if not any(needle in line for line in existing)
    ]
    return GitignoreAnalysis(missing=missing_patterns(content, patterns), suggestions=suggestions)


def run(scan_path: str, ignore_rules: Optional[IgnoreRules] = None) -> List[Finding]:
    if ignore_rules is None:
        ignore_rules = IgnoreRules.load(scan_path)

    if not ignore_rules.present:
        return [Finding(
            severity=Severity.CRITICAL,
            category=Category.GITIGNORE,
            title=f"Missing {GITIGNORE_FILENAME} file",
            details=f"No {GITIGNORE_FILENAME} file found in repository root",
        )]

    return [
        Finding(
            severity=gitignore_severity(pattern),
            category=Category.GITIGNORE,
            title=f"Missing recommended {GITIGNORE_FILENAME} pattern",
            details=f"Pattern '{pattern}' should be added to {GITIGNORE_FILENAME}",
        )
        for pattern in missing_patterns(ignore_rules.content, RECOMMENDED_GITIGNORE_PATTERNS)
    ]
