"""Risky code pattern detection over source files."""

from typing import List, Optional

from security_scanner.file_walker import read_text, source_candidates
from security_scanner.ignore_rules import IgnoreRules
from security_scanner.models import Category, Finding
from security_scanner.patterns import VULNERABILITY_RULES, line_number, vulnerability_severity


def run(scan_path: str, ignore_rules: Optional[IgnoreRules] = None) -> List[Finding]:
    if ignore_rules is None:
        ignore_rules = IgnoreRules.load(scan_path)

    findings: List[Finding] = []
    for rel_path in source_candidates(scan_path, ignore_rules):
        content = read_text(scan_path, rel_path)
        if content is None:
            continue

        for rule in VULNERABILITY_RULES:
            for match in rule.pattern.finditer(content):
                line = line_number(content, match.start())
                # Code snippets are not sensitive, keep them whole
                snippet = match.group(0)
                findings.append(Finding(
                    severity=vulnerability_severity(rule.name),
                    category=Category.VULNERABILITIES,
                    title=f"Potential {rule.name}",
                    details=f"Found in {rel_path} at line {line}: {snippet}",
                    file=rel_path,
                    line=line,
                    match=snippet,
                ))

    return findings
