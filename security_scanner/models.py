from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

SCANNER_VERSION = "1.0.0"


class Severity(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Higher is more severe: critical=4 ... info=0."""
        return len(SEVERITY_ORDER) - 1 - SEVERITY_ORDER.index(self)


SEVERITY_ORDER = [
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.INFO,
]


class Category(Enum):
    SECRETS = "secrets"
    VULNERABILITIES = "vulnerabilities"
    DEPENDENCIES = "dependencies"
    GITIGNORE = "gitignore"
    GIT_HISTORY = "git_history"

    @property
    def external_name(self) -> str:
        # git_history is spelled git-history on the command line and tool surface
        return self.value.replace("_", "-")

    @classmethod
    def from_external(cls, name: str) -> "Category":
        for category in cls:
            if category.external_name == name:
                return category
        raise ValueError(name)


@dataclass(frozen=True)
class Finding:
    severity: Severity
    category: Category
    title: str
    details: str
    file: Optional[str] = None
    line: Optional[int] = None
    match: Optional[str] = None

    def __post_init__(self):
        if self.line is not None and self.file is None:
            raise ValueError("a finding with a line number must name a file")

    def to_dict(self) -> dict:
        data = {
            "severity": self.severity.value,
            "category": self.category.value,
            "title": self.title,
            "details": self.details,
        }
        if self.file is not None:
            data["file"] = self.file
        if self.line is not None:
            data["line"] = self.line
        if self.match is not None:
            data["match"] = self.match
        return data


@dataclass(frozen=True)
class Summary:
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    info: int = 0
    total: int = 0

    @classmethod
    def from_findings(cls, findings: Dict[str, List[Finding]]) -> "Summary":
        counts = {s.value: 0 for s in Severity}
        total = 0
        for category_findings in findings.values():
            for finding in category_findings:
                counts[finding.severity.value] += 1
                total += 1
        return cls(total=total, **counts)

    def count(self, severity: Severity) -> int:
        return getattr(self, severity.value)

    def to_dict(self) -> dict:
        return {
            "critical": self.critical,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "info": self.info,
            "total": self.total,
        }


@dataclass(frozen=True)
class ScanResult:
    repository: str
    scan_date: str
    summary: Summary
    findings: Dict[str, List[Finding]] = field(default_factory=dict)
    version: str = SCANNER_VERSION

    def all_findings(self) -> List[Finding]:
        return [f for category_findings in self.findings.values() for f in category_findings]

    def to_dict(self) -> dict:
        return {
            "repository": self.repository,
            "scanDate": self.scan_date,
            "version": self.version,
            "summary": self.summary.to_dict(),
            "findings": {
                category: [f.to_dict() for f in category_findings]
                for category, category_findings in self.findings.items()
            },
        }


@dataclass(frozen=True)
class SecretMatch:
    type: str
    match: str
    line: int
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "match": self.match,
            "line": self.line,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class GitignoreAnalysis:
    missing: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
