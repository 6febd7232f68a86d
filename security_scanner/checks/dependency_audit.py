"""Dependency hygiene checks for package.json and requirements.txt."""

import json
import logging
import os
from typing import List

from security_scanner.models import Category, Finding, Severity

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
REQUIREMENTS_TXT = "requirements.txt"

# Exact, minimum and compatible-release operators ("===" contains "==")
PIN_OPERATORS = ("==", ">=", "~=")

# Index and include options; editable and VCS installs are still checked
PIP_OPTIONS = (
    "-r", "--requirement", "-c", "--constraint",
    "-i", "--index-url", "--extra-index-url",
)


def run(scan_path: str, ignore_rules=None) -> List[Finding]:
    findings: List[Finding] = []

    if os.path.isfile(os.path.join(scan_path, PACKAGE_JSON)):
        findings.extend(_check_package_json(scan_path))

    if os.path.isfile(os.path.join(scan_path, REQUIREMENTS_TXT)):
        findings.extend(_check_requirements(scan_path))

    return findings


def _check_package_json(scan_path: str) -> List[Finding]:
    findings: List[Finding] = []
    path = os.path.join(scan_path, PACKAGE_JSON)

    try:
        with open(path, "r", encoding="utf-8") as f:
            manifest = json.load(f)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.debug("Skipping unreadable %s: %s", PACKAGE_JSON, e)
        return findings
    if not isinstance(manifest, dict):
        return findings

    dependencies = manifest.get("dependencies") or {}
    dev_dependencies = manifest.get("devDependencies") or {}
    if not isinstance(dependencies, dict):
        dependencies = {}
    if not isinstance(dev_dependencies, dict):
        dev_dependencies = {}

    if not dependencies and not dev_dependencies:
        findings.append(Finding(
            severity=Severity.INFO,
            category=Category.DEPENDENCIES,
            title="No dependencies found",
            details="package.json has no dependencies listed",
        ))

    # devDependencies win on a name clash, like an object spread
    declared = {**dependencies, **dev_dependencies}
    for name, version in declared.items():
        if isinstance(version, str) and "*" in version:
            findings.append(Finding(
                severity=Severity.HIGH,
                category=Category.DEPENDENCIES,
                title="Wildcard version dependency",
                details=(
                    f"{name}: {version} - Using wildcard versions can lead to "
                    "unexpected breaking changes"
                ),
            ))

    return findings


def _check_requirements(scan_path: str) -> List[Finding]:
    findings: List[Finding] = []
    path = os.path.join(scan_path, REQUIREMENTS_TXT)

    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            lines = f.read().splitlines()
    except OSError as e:
        logger.debug("Skipping unreadable %s: %s", REQUIREMENTS_TXT, e)
        return findings

    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.split()[0].split("=")[0] in PIP_OPTIONS:
            continue
        if not any(op in line for op in PIN_OPERATORS):
            findings.append(Finding(
                severity=Severity.MEDIUM,
                category=Category.DEPENDENCIES,
                title="Unpinned Python dependency",
                details=f"{line} - Dependencies should be pinned to specific versions",
            ))

    return findings
