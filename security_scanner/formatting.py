"""Text renderings of scan results for the CLI and the MCP tools."""

import json
from typing import Dict, List

from security_scanner.models import (
    SEVERITY_ORDER,
    Finding,
    GitignoreAnalysis,
    ScanResult,
    SecretMatch,
    Severity,
)

SEVERITY_ICONS = {
    Severity.CRITICAL: "🔴",
    Severity.HIGH: "🟠",
    Severity.MEDIUM: "🟡",
    Severity.LOW: "🔵",
    Severity.INFO: "ℹ️",
}

RECOMMENDATIONS = [
    "Rotate any exposed credentials immediately",
    "Add all sensitive files to .gitignore",
    "Remove secrets from git history using git filter-branch",
    "Use environment variables or secret management services",
    "Run dependency updates regularly",
    "Implement pre-commit hooks to prevent secret commits",
]

SECRET_PREVIEW_LENGTH = 20


def format_scan_result(result: ScanResult, output_format: str = "summary") -> str:
    if output_format == "json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if output_format == "detailed":
        return format_detailed(result)
    return format_summary(result)


def format_summary(result: ScanResult) -> str:
    s = result.summary
    lines = [
        "🔍 Security Scan Summary",
        "━" * 40,
        f"Repository: {result.repository}",
        f"Scan Date: {result.scan_date}",
        "",
        "Issues Found:",
        f"  🔴 Critical: {s.critical}",
        f"  🟠 High: {s.high}",
        f"  🟡 Medium: {s.medium}",
        f"  🔵 Low: {s.low}",
        f"  ℹ️  Info: {s.info}",
        f"  📊 Total: {s.total}",
    ]
    return "\n".join(lines) + "\n"


def format_detailed(result: ScanResult) -> str:
    s = result.summary
    rule = "=" * 80
    thin = "-" * 80
    lines = [
        "🔒 SECURITY SCAN REPORT",
        rule,
        f"Repository: {result.repository}",
        f"Scan Date: {result.scan_date}",
        f"Scanner Version: {result.version}",
        rule,
        "",
        "📊 SUMMARY",
        thin,
        f"Critical Issues: {s.critical}",
        f"High Issues: {s.high}",
        f"Medium Issues: {s.medium}",
        f"Low Issues: {s.low}",
        f"Info Issues: {s.info}",
        f"Total Issues: {s.total}",
        "",
    ]

    for category, findings in result.findings.items():
        if not findings:
            continue
        lines.extend(["", f"## {category.upper().replace('_', ' ')}", thin])
        by_severity: Dict[Severity, List[Finding]] = {}
        for finding in findings:
            by_severity.setdefault(finding.severity, []).append(finding)
        for severity in SEVERITY_ORDER:
            if severity not in by_severity:
                continue
            lines.append("")
            lines.append(f"### {severity.value.upper()} Severity:")
            for finding in by_severity[severity]:
                lines.append(f"• {finding.title}")
                lines.append(f"  {finding.details}")
                lines.append("")

    lines.extend(["", "## RECOMMENDATIONS", thin])
    if s.critical > 0:
        lines.extend(["🚨 CRITICAL: Address critical issues immediately!", ""])
    lines.extend(f"{i}. {text}" for i, text in enumerate(RECOMMENDATIONS, start=1))
    return "\n".join(lines) + "\n"


def format_secret_matches(matches: List[SecretMatch]) -> str:
    if not matches:
        return "✅ No secrets detected in the provided content."

    lines = [f"⚠️ Found {len(matches)} potential secret(s):", ""]
    for m in matches:
        lines.append(f"• {m.type}: {m.match[:SECRET_PREVIEW_LENGTH]}...")
        lines.append(f"  Line: {m.line}")
        lines.append(f"  Severity: {m.severity.value}")
        lines.append("")
    return "\n".join(lines)


def format_gitignore_analysis(analysis: GitignoreAnalysis) -> str:
    lines = ["📋 .gitignore Analysis", ""]
    if analysis.missing:
        lines.append("⚠️ Missing recommended patterns:")
        lines.extend(f"  • {pattern}" for pattern in analysis.missing)
        lines.append("")
    else:
        lines.extend(["✅ All recommended security patterns are present!", ""])

    if analysis.suggestions:
        lines.append("💡 Suggestions:")
        lines.extend(f"  • {suggestion}" for suggestion in analysis.suggestions)
    return "\n".join(lines)
