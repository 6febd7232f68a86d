"""Scanner settings read from the environment."""

import os
from dataclasses import dataclass, replace
from typing import List, Optional

OUTPUT_FORMATS = ("summary", "detailed", "json")


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class ScannerConfig:
    scan_path: str
    categories: Optional[List[str]] = None  # None means every category
    output_format: str = "summary"
    fail_on_critical: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "ScannerConfig":
        raw_categories = os.environ.get("SCAN_CATEGORIES", "")
        return cls(
            scan_path=os.environ.get("SCAN_PATH") or os.getcwd(),
            categories=parse_category_list(raw_categories),
            output_format=os.environ.get("OUTPUT_FORMAT", "summary").strip().lower() or "summary",
            fail_on_critical=_flag("FAIL_ON_CRITICAL", "true"),
            log_level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        )

    def override(self, **changes) -> "ScannerConfig":
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def parse_category_list(raw) -> Optional[List[str]]:
    """Split a comma list (or a list of such) into names; empty or 'all' means None."""
    if isinstance(raw, str):
        raw = [raw]
    names = [c.strip() for item in raw for c in item.split(",") if c.strip()]
    if not names or "all" in names:
        return None
    return names
