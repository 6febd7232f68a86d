"""Detection rules shared by every check.

Severity is decided by the name of the rule that fired, never by the matched
text: each ``*_severity`` helper walks its bucket lists in order and returns
the first bucket holding a substring of the rule name.
"""

import re
from typing import NamedTuple, Sequence, Tuple

from security_scanner.models import Severity


class Rule(NamedTuple):
    name: str
    pattern: re.Pattern


SECRET_RULES: Tuple[Rule, ...] = (
    Rule("AWS Access Key", re.compile(r"AKIA[A-Z0-9]{16}")),
    Rule("AWS Secret Key", re.compile(r"""aws[_-]?secret[_-]?access[_-]?key.*?["']?([A-Za-z0-9/+=]{40})["']?""", re.IGNORECASE)),
    Rule("API Key Generic", re.compile(r"""(api[_-]?key|apikey|api[_-]?secret)["']?\s*[:=]\s*["']([^"'{}$\s]{20,})["']""", re.IGNORECASE)),
    Rule("OpenAI API Key", re.compile(r"sk-[a-zA-Z0-9]{48}")),
    Rule("GitHub Token", re.compile(r"gh[ps]_[A-Za-z0-9]{36}")),
    Rule("Google API Key", re.compile(r"AIza[0-9A-Za-z\-_]{35}")),
    Rule("Private Key", re.compile(r"-----BEGIN\s+(?:RSA\s+)?PRIVATE\s+KEY-----")),
    Rule("Firebase URL", re.compile(r"https://[a-z0-9-]+\.firebaseio\.com")),
    Rule("Slack Token", re.compile(r"xox[baprs]-[0-9a-zA-Z]{10,48}")),
    Rule("Generic Secret", re.compile(r"""(password|passwd|pwd|secret|token)["']?\s*[:=]\s*["']([^"'{}$\s]{8,})["']""", re.IGNORECASE)),
    Rule("JWT Token", re.compile(r"eyJ[A-Za-z0-9\-_=]+\.eyJ[A-Za-z0-9\-_=]+\.[A-Za-z0-9\-_.+/=]+")),
    Rule("Database URL", re.compile(r"""(mysql|postgres|postgresql|mongodb)://[^:]+:[^@]+@[^/]+/[^\s"']+""", re.IGNORECASE)),
    Rule("Stripe Key", re.compile(r"sk_(?:test|live)_[0-9a-zA-Z]{24}")),
    Rule("Twilio API Key", re.compile(r"SK[0-9a-fA-F]{32}")),
    Rule("SendGrid API Key", re.compile(r"SG\.[A-Za-z0-9_-]{22}\.[A-Za-z0-9_-]{43}")),
    Rule("Mailgun API Key", re.compile(r"key-[0-9a-zA-Z]{32}")),
    Rule("SSH Private Key", re.compile(r"ssh-rsa\s+[A-Za-z0-9+/]+={0,2}")),
)

VULNERABILITY_RULES: Tuple[Rule, ...] = (
    Rule("Hardcoded IP", re.compile(r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b")),
    Rule("SQL Injection Risk", re.compile(r"(execute|query)\s*\([^)]*\+[^)]*\)", re.IGNORECASE)),
    Rule("Command Injection Risk", re.compile(r"(exec|system|eval|spawn)\s*\([^)]*\$[^)]*\)")),
    Rule("Unsafe Deserialization", re.compile(r"(pickle\.loads|yaml\.load|eval|exec)\s*\(", re.IGNORECASE)),
    Rule("Weak Crypto", re.compile(r"(md5|sha1)\s*\(", re.IGNORECASE)),
    Rule("HTTP without TLS", re.compile(r"""http://[^\s"']+""")),
    Rule("Debugging Code", re.compile(r"(console\.(log|debug|info)|print\s*\(|debugger|pdb\.set_trace)", re.IGNORECASE)),
    Rule("TODO Security", re.compile(r"TODO.*?(security|password|auth|token|secret)", re.IGNORECASE)),
    Rule("Temporary Files", re.compile(r"""/tmp/[^\s"']+""")),
    Rule("Insecure Random", re.compile(r"(math\.random|rand\(\))", re.IGNORECASE)),
)

RECOMMENDED_GITIGNORE_PATTERNS: Tuple[str, ...] = (
    ".env",
    ".env.*",
    "!.env.example",
    "!.env.*.example",
    "*.pem",
    "*.key",
    "*.cert",
    "*.p12",
    "*.pfx",
    ".aws/",
    "credentials",
    "aws-exports.js",
    "**/secrets/",
    "**/credentials/",
    "*.log",
    "*.sqlite",
    "*.db",
    "node_modules/",
    "__pycache__/",
    "*.pyc",
    ".vscode/",
    ".idea/",
    ".DS_Store",
    "Thumbs.db",
    "*.bak",
    "*.tmp",
    "*~",
    "config.json",
    "settings.json",
    "docker-compose.override.yml",
)

# (bucket severity, name fragments); first matching bucket wins
SECRET_BUCKETS = (
    (Severity.CRITICAL, ("AWS Secret Key", "Private Key", "Database URL")),
    (Severity.HIGH, ("AWS Access Key", "API Key", "GitHub Token", "OpenAI API Key")),
)

VULNERABILITY_BUCKETS = (
    (Severity.HIGH, ("SQL Injection", "Command Injection", "Unsafe Deserialization")),
    (Severity.MEDIUM, ("Weak Crypto", "HTTP without TLS")),
)

GITIGNORE_BUCKETS = (
    (Severity.HIGH, (".env", "*.key", "*.pem", "credentials")),
    (Severity.MEDIUM, (".aws/", "**/secrets/", "config.json")),
)


def _classify(name: str, buckets: Sequence, default: Severity) -> Severity:
    for severity, fragments in buckets:
        if any(fragment in name for fragment in fragments):
            return severity
    return default


def secret_severity(rule_name: str) -> Severity:
    return _classify(rule_name, SECRET_BUCKETS, Severity.MEDIUM)


def vulnerability_severity(rule_name: str) -> Severity:
    return _classify(rule_name, VULNERABILITY_BUCKETS, Severity.LOW)


def gitignore_severity(pattern: str) -> Severity:
    return _classify(pattern, GITIGNORE_BUCKETS, Severity.LOW)


def line_number(content: str, offset: int) -> int:
    """1-based line of ``offset``: newlines before it, plus one."""
    return content.count("\n", 0, offset) + 1
