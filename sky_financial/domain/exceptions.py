"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnknownCalculatorError(DomainException):
    """Requested calculator kind does not exist"""

    pass


class InputOutOfRangeError(DomainException):
    """Calculator input falls outside the accepted bounds"""

    def __init__(self, violations: List[str]):
        super().__init__("; ".join(violations))
        self.violations = violations


class ChatServiceError(DomainException):
    """Language model API returned an error or is unavailable"""

    pass


class ChatSessionNotFoundError(DomainException):
    """Chat session id is unknown or has been closed"""

    pass
