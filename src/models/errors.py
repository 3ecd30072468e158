from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    OVER_STRESSED = "over_stressed_section"
    NON_COMPLIANT = "non_compliant_section"
    INTERNAL = "internal_error"


# Transport codes for a request/response boundary.
HTTP_STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.OVER_STRESSED: 422,
    ErrorKind.NON_COMPLIANT: 422,
    ErrorKind.INTERNAL: 500,
}


class SectionDesignError(ValueError):
    """Base for every rejection of a section design call."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(SectionDesignError):
    """A required field is missing/zero or a geometric invariant is violated."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(" | ".join(self.errors))


class OverStressedSectionError(SectionDesignError):
    """Resistance coefficient above the section capacity bound."""

    kind = ErrorKind.OVER_STRESSED

    def __init__(self, message: str, resistance_coeff: float) -> None:
        super().__init__(message)
        self.resistance_coeff = resistance_coeff


class NonCompliantSectionError(SectionDesignError):
    """Required tension steel above the code maximum."""

    kind = ErrorKind.NON_COMPLIANT
