"""
Farm Market Event Store — Errors
==================================
Error types for the append-only journal.
"""


class JournalError(Exception):
    """Base error for journal operations."""
    pass


class JournalFormatError(JournalError):
    """A stored journal line could not be decoded."""

    def __init__(self, line_number: int, detail: str):
        self.line_number = line_number
        self.detail = detail
        super().__init__(
            f"Journal line {line_number} is malformed: {detail}"
        )


class JournalIntegrityError(JournalError):
    """Hash chain, sequence or replay check failed; journal refused."""

    def __init__(self, code: str, sequence: int, detail: str):
        self.code = code
        self.sequence = sequence
        self.detail = detail
        super().__init__(
            f"Journal integrity failure ({code}) at entry "
            f"{sequence}: {detail}"
        )
