"""Caller-facing errors. Each carries a message fit to show a user."""


class ScannerError(Exception):
    @property
    def message(self) -> str:
        return str(self)


class TargetNotFoundError(ScannerError):
    def __init__(self, path: str):
        super().__init__(f"Repository path does not exist: {path}")
        self.path = path


class UnknownCategoryError(ScannerError):
    def __init__(self, category: str, valid):
        super().__init__(
            f"Unknown scan category: {category} (expected one of: {', '.join(valid)})"
        )
        self.category = category


class UnknownToolError(ScannerError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name
