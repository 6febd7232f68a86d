"""Runs the selected checks against a repository and aggregates their findings."""

import logging
import os
from typing import Dict, List, Optional, Sequence

from security_scanner.checks import (
    dependency_audit,
    git_history,
    gitignore_audit,
    secret_detection,
    vulnerability_patterns,
)
from security_scanner.checks.gitignore_audit import analyze_gitignore
from security_scanner.errors import TargetNotFoundError, UnknownCategoryError
from security_scanner.ignore_rules import IgnoreRules
from security_scanner.models import (
    Category,
    Finding,
    ScanResult,
    SecretMatch,
    Summary,
    utc_timestamp,
)
from security_scanner.patterns import secret_severity

logger = logging.getLogger(__name__)

CHECK_MODULES = {
    Category.SECRETS: secret_detection,
    Category.VULNERABILITIES: vulnerability_patterns,
    Category.DEPENDENCIES: dependency_audit,
    Category.GITIGNORE: gitignore_audit,
    Category.GIT_HISTORY: git_history,
}

CATEGORY_NAMES = [c.external_name for c in Category]

__all__ = ["scan", "check_content_for_secrets", "analyze_gitignore", "parse_categories", "CATEGORY_NAMES"]


def parse_categories(names: Optional[Sequence[str]]) -> List[Category]:
    """Map external category names to categories; None selects all of them."""
    if names is None:
        return list(Category)
    categories = []
    for name in names:
        try:
            category = Category.from_external(name)
        except ValueError:
            raise UnknownCategoryError(name, CATEGORY_NAMES) from None
        if category not in categories:
            categories.append(category)
    return categories


def scan(repo_path: str, categories: Optional[Sequence[str]] = None) -> ScanResult:
    """Scan ``repo_path`` for the requested categories (all when omitted)."""
    selected = parse_categories(categories)
    if not os.path.isdir(repo_path):
        raise TargetNotFoundError(repo_path)

    scan_date = utc_timestamp()
    ignore_rules = IgnoreRules.load(repo_path)

    findings: Dict[str, List[Finding]] = {}
    for category in selected:
        logger.info("Running %s checks on %s", category.external_name, repo_path)
        findings[category.value] = CHECK_MODULES[category].run(repo_path, ignore_rules)
        logger.info("  %d finding(s)", len(findings[category.value]))

    return ScanResult(
        repository=os.path.basename(os.path.normpath(os.path.abspath(repo_path))),
        scan_date=scan_date,
        summary=Summary.from_findings(findings),
        findings=findings,
    )


def check_content_for_secrets(content: str, file_type: Optional[str] = None) -> List[SecretMatch]:
    """Run the secret rules over ``content`` directly.

    ``file_type`` is accepted for callers that know it but does not change
    which rules run.
    """
    return [
        SecretMatch(type=rule.name, match=matched, line=line, severity=secret_severity(rule.name))
        for rule, matched, line in secret_detection.find_secrets(content)
    ]
