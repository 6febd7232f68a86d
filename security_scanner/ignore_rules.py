"""Repository .gitignore evaluation."""

import logging
import os
from typing import Optional

import pathspec

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"


class IgnoreRules:
    """Answers whether a repository-relative path is excluded by .gitignore.

    Uses git's own wildmatch semantics: ``!`` lines re-include, a trailing
    ``/`` only matches directories, ``**`` spans path segments.  Built once per
    scan and only read afterwards.
    """

    def __init__(self, content: Optional[str] = None):
        self.content = content
        self._spec = pathspec.GitIgnoreSpec.from_lines((content or "").splitlines())

    @classmethod
    def load(cls, scan_path: str) -> "IgnoreRules":
        """Read ``<scan_path>/.gitignore``; a missing file yields empty rules."""
        return cls(read_gitignore(scan_path))

    @property
    def present(self) -> bool:
        return self.content is not None

    def is_excluded(self, rel_path: str, is_dir: bool = False) -> bool:
        path = rel_path.replace(os.sep, "/")
        if is_dir and not path.endswith("/"):
            path += "/"
        return self._spec.match_file(path)


def read_gitignore(scan_path: str) -> Optional[str]:
    path = os.path.join(scan_path, GITIGNORE_FILENAME)
    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return None
