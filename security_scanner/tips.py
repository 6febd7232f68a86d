"""Static security guidance, served by the get_security_tips tool."""

from typing import Dict, List

SECURITY_TIPS: Dict[str, List[str]] = {
    "secrets": [
        "Never commit API keys, passwords, or tokens to version control",
        "Use environment variables for all sensitive configuration",
        "Install pre-commit hooks such as git-secrets or pre-commit",
        "Rotate credentials immediately if they are exposed",
        "Keep credentials in a secret manager (AWS Secrets Manager, HashiCorp Vault)",
        "Add .env files to .gitignore before creating them",
        "Document required variables in a value-free .env.example",
        "Scan git history regularly for accidentally committed secrets",
        "Use different credentials for development and production",
        "Grant API keys the least privilege they need",
    ],
    "gitignore": [
        "Always include .env and .env.* patterns",
        "Add *.pem, *.key, *.cert for certificate files",
        "Include the .aws/ directory for AWS credentials",
        "Add node_modules/ for Node.js projects",
        "Include IDE-specific files (.vscode/, .idea/)",
        "Add build outputs (dist/, build/, *.pyc)",
        "Include OS-specific files (.DS_Store, Thumbs.db)",
        "Add backup files (*.bak, *.tmp, *~)",
        "Review .gitignore before the first commit",
        "Start from a generated template (gitignore.io) and trim it",
    ],
    "dependencies": [
        "Run security audits regularly (npm audit, pip-audit)",
        "Keep dependencies up to date with automated tools",
        "Commit lock files to get consistent installations",
        "Review dependency licenses for compatibility",
        "Watch security advisories for the packages you use",
        "Let Dependabot or Renovate open update pull requests",
        "Audit transitive dependencies as well as direct ones",
        "Remove unused dependencies",
        "Run dependency scanning in CI",
        "Host internal packages on a private registry",
    ],
    "docker": [
        "Never put secrets in a Dockerfile",
        "Use multi-stage builds to keep the final image small",
        "Run containers as a non-root user",
        "Scan images for vulnerabilities (Trivy, Grype)",
        "Pin base images to specific tags, not 'latest'",
        "Rebuild regularly on updated base images",
        "Use .dockerignore to keep sensitive files out of the build context",
        "Sign and verify images deployed to production",
        "Inject runtime configuration from a secret store",
        "Define health checks for every container",
    ],
    "ci-cd": [
        "Store secrets in the CI platform's encrypted secret store",
        "Run security scanning in every pipeline",
        "Give service accounts the least privilege they need",
        "Enable audit logging for deployments",
        "Require approval before production deploys",
        "Scan for secrets before deployment",
        "Prefer short-lived credentials (OIDC) to static keys",
        "Keep a tested rollback procedure",
        "Monitor for configuration drift",
        "Review infrastructure-as-code changes for security",
    ],
    "general": [
        "Layer defences so no single control is critical",
        "Follow the principle of least privilege",
        "Train developers on secure coding regularly",
        "Require code review for every change",
        "Run static analysis security testing (SAST)",
        "Run dynamic application security testing (DAST)",
        "Schedule regular penetration tests",
        "Maintain an incident response plan",
        "Document security policies and procedures",
        "Keep up with current security advisories",
    ],
}

TOPICS = tuple(SECURITY_TIPS)


def format_tips(topic: str) -> str:
    lines = [f"🔒 Security Best Practices: {topic.upper()}", ""]
    lines.extend(f"{i}. {tip}" for i, tip in enumerate(SECURITY_TIPS.get(topic, []), start=1))
    return "\n".join(lines) + "\n"
