"""Error taxonomy for model generation calls."""
from typing import Optional


class GenerationError(Exception):
    """Base class for failures of a generation call."""

    pass


class AuthError(GenerationError):
    """Identity or token acquisition failed. No candidate was attempted."""

    pass


class CandidateFailure(GenerationError):
    """
    A single candidate model failed.

    Raised and handled inside the invoker; the next candidate is tried.

    Attributes:
        model: Candidate model identifier
        status_code: HTTP status, or None for transport errors
        message: Upstream error message or transport error description
        absent_content: True when the call succeeded but carried no text
    """

    def __init__(
        self,
        model: str,
        message: str,
        status_code: Optional[int] = None,
        absent_content: bool = False,
    ):
        self.model = model
        self.message = message
        self.status_code = status_code
        self.absent_content = absent_content
        super().__init__(f"Model {model} failed ({status_code}): {message}")


class AllCandidatesExhausted(GenerationError):
    """Every candidate failed. Carries the last candidate's failure."""

    def __init__(self, last_failure: CandidateFailure, attempts: int):
        self.last_failure = last_failure
        self.attempts = attempts
        super().__init__(
            f"All {attempts} candidate models failed; last error: {last_failure}"
        )

    @property
    def status_code(self) -> Optional[int]:
        return self.last_failure.status_code

    @property
    def detail(self) -> str:
        return self.last_failure.message


class AbsentContentError(AllCandidatesExhausted):
    """The final candidate answered 2xx but returned no extractable text."""

    pass
