"""Secret detection via regex pattern matching."""

from typing import Iterator, List, Optional, Tuple

from security_scanner.file_walker import read_text, secret_candidates
from security_scanner.ignore_rules import IgnoreRules
from security_scanner.models import Category, Finding
from security_scanner.patterns import SECRET_RULES, Rule, line_number, secret_severity

MATCH_PREVIEW_LENGTH = 50


def find_secrets(content: str) -> Iterator[Tuple[Rule, str, int]]:
    """Yield (rule, matched text, line) for every secret rule hit in ``content``.

    Rules run in table order; each contributes all of its non-overlapping
    matches.  Overlapping rules are not deduplicated.
    """
    for rule in SECRET_RULES:
        for match in rule.pattern.finditer(content):
            yield rule, match.group(0), line_number(content, match.start())


def truncate_match(text: str) -> str:
    """First 50 characters plus an ellipsis, whatever the length."""
    return text[:MATCH_PREVIEW_LENGTH] + "..."


def run(scan_path: str, ignore_rules: Optional[IgnoreRules] = None) -> List[Finding]:
    if ignore_rules is None:
        ignore_rules = IgnoreRules.load(scan_path)

    findings: List[Finding] = []
    for rel_path in secret_candidates(scan_path, ignore_rules):
        content = read_text(scan_path, rel_path)
        if content is None:
            continue

        for rule, matched, line in find_secrets(content):
            findings.append(Finding(
                severity=secret_severity(rule.name),
                category=Category.SECRETS,
                title=f"Potential {rule.name} found",
                details=f"Found in {rel_path} at line {line}",
                file=rel_path,
                line=line,
                match=truncate_match(matched),
            ))

    return findings
