"""MCP server: stdio JSON-RPC 2.0 loop exposing the scanner as tools."""

import json
import logging
import os
import sys
from typing import Any, Callable, Dict, List, Literal, Optional, TextIO

from pydantic import BaseModel, Field, ValidationError

from security_scanner.checks.gitignore_audit import analyze_gitignore
from security_scanner.errors import ScannerError, TargetNotFoundError, UnknownToolError
from security_scanner.formatting import (
    format_gitignore_analysis,
    format_scan_result,
    format_secret_matches,
)
from security_scanner.ignore_rules import read_gitignore
from security_scanner.models import SCANNER_VERSION
from security_scanner.orchestrator import check_content_for_secrets, scan
from security_scanner.tips import format_tips

logger = logging.getLogger(__name__)

SERVER_NAME = "security-scanner-mcp"
PROTOCOL_VERSION = "2024-11-05"

CategoryName = Literal["secrets", "vulnerabilities", "dependencies", "gitignore", "git-history"]


class ScanRepositoryArgs(BaseModel):
    path: str = Field(description="Path to the repository to scan")
    outputFormat: Literal["summary", "detailed", "json"] = Field(
        default="summary", description="Output format for the scan results"
    )
    categories: Optional[List[CategoryName]] = Field(
        default=None, description="Specific categories to scan (default: all)"
    )


class CheckSecretArgs(BaseModel):
    content: str = Field(description="Content to check for secrets")
    fileType: Optional[str] = Field(
        default=None, description="File type/extension for context-aware scanning"
    )


class CheckGitignoreArgs(BaseModel):
    path: str = Field(description="Path to the repository")
    patterns: Optional[List[str]] = Field(
        default=None, description="Additional patterns to check for in .gitignore"
    )


class SecurityTipsArgs(BaseModel):
    topic: Literal["secrets", "gitignore", "dependencies", "docker", "ci-cd", "general"] = Field(
        description="Security topic to get tips for"
    )


def handle_scan_repository(args: ScanRepositoryArgs) -> str:
    if not os.path.exists(args.path):
        raise TargetNotFoundError(args.path)
    result = scan(args.path, args.categories)
    return format_scan_result(result, args.outputFormat)


def handle_check_secret(args: CheckSecretArgs) -> str:
    return format_secret_matches(check_content_for_secrets(args.content, args.fileType))


def handle_check_gitignore(args: CheckGitignoreArgs) -> str:
    content = read_gitignore(args.path)
    if content is None:
        return "❌ No .gitignore file found in the repository!"
    return format_gitignore_analysis(analyze_gitignore(content, args.patterns))


def handle_security_tips(args: SecurityTipsArgs) -> str:
    return format_tips(args.topic)


# name -> (description, argument model, handler)
TOOLS: Dict[str, tuple] = {
    "scan_repository": (
        "Perform a comprehensive security scan on a repository",
        ScanRepositoryArgs,
        handle_scan_repository,
    ),
    "check_secret": (
        "Check if a piece of content contains potential secrets or sensitive information",
        CheckSecretArgs,
        handle_check_secret,
    ),
    "check_gitignore": (
        "Analyze .gitignore file for missing security patterns",
        CheckGitignoreArgs,
        handle_check_gitignore,
    ),
    "get_security_tips": (
        "Get security best practices and tips for a specific topic",
        SecurityTipsArgs,
        handle_security_tips,
    ),
}


def tools_list() -> List[Dict[str, Any]]:
    return [
        {"name": name, "description": description, "inputSchema": model.model_json_schema()}
        for name, (description, model, _) in TOOLS.items()
    ]


def _text(text: str, is_error: bool = False) -> Dict[str, Any]:
    result: Dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Run one tool; failures come back as an error result, never raised."""
    try:
        if name not in TOOLS:
            raise UnknownToolError(name)
        _, model, handler = TOOLS[name]
        return _text(handler(model.model_validate(arguments or {})))
    except ValidationError as e:
        return _text(f"Error: Invalid arguments for {name}: {e}", is_error=True)
    except ScannerError as e:
        return _text(f"Error: {e.message}", is_error=True)


class SecurityScannerServer:
    """MCP server with tool routing over stdio JSON-RPC."""

    def __init__(self) -> None:
        self.methods: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            "initialize": self._initialize,
            "ping": lambda params: {},
            "tools/list": lambda params: {"tools": tools_list()},
            "tools/call": lambda params: call_tool(params.get("name", ""), params.get("arguments")),
        }

    def handle_rpc(self, req: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Route a single JSON-RPC request; notifications get no response."""
        rpc_id = req.get("id")
        method = req.get("method", "")
        params = req.get("params") or {}

        if "id" not in req:
            logger.debug("Notification %s", method)
            return None

        handler = self.methods.get(method)
        if not handler:
            return {
                "jsonrpc": "2.0",
                "id": rpc_id,
                "error": {"code": -32601, "message": f"Method not found: {method}"},
            }

        try:
            return self._rpc_ok(rpc_id, handler(params))
        except Exception as e:
            logger.exception("Unhandled error in %s", method)
            return {
                "jsonrpc": "2.0",
                "id": rpc_id,
                "error": {"code": -32603, "message": f"Internal error: {e}"},
            }

    def _initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "protocolVersion": params.get("protocolVersion", PROTOCOL_VERSION),
            "capabilities": {"tools": {}},
            "serverInfo": {"name": SERVER_NAME, "version": SCANNER_VERSION},
        }

    def _rpc_ok(self, rpc_id: Any, result: Any) -> Dict[str, Any]:
        return {"jsonrpc": "2.0", "id": rpc_id, "result": result}

    def serve(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        logger.info("Security Scanner MCP Server running on stdio")
        for line in stdin:
            line = line.strip()
            if not line:
                continue
            try:
                req = json.loads(line)
            except json.JSONDecodeError:
                resp = {
                    "jsonrpc": "2.0",
                    "id": None,
                    "error": {"code": -32700, "message": "Parse error"},
                }
            else:
                resp = self.handle_rpc(req) if isinstance(req, dict) else {
                    "jsonrpc": "2.0",
                    "id": None,
                    "error": {"code": -32600, "message": "Invalid Request"},
                }
            if resp is None:
                continue
            stdout.write(json.dumps(resp, ensure_ascii=False) + "\n")
            stdout.flush()


def main() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    SecurityScannerServer().serve()


if __name__ == "__main__":
    main()
