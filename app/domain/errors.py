"""Domain exceptions raised by use cases and surfaced as API execution errors."""


class DomainError(Exception):
    """Base class for errors that abort a request."""


class AssignmentNotFoundError(DomainError):
    def __init__(self, assignment_id: int):
        self.assignment_id = assignment_id
        super().__init__(f"assignment not found: {assignment_id}")


class InsufficientPermissionError(DomainError):
    def __init__(self, message: str = "insufficient permission"):
        super().__init__(message)


class UnsupportedStateError(DomainError):
    def __init__(self, state: str):
        self.state = state
        super().__init__(f"unable to handle state change: {state}")


class InvalidIDError(DomainError):
    pass
