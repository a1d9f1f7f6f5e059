"""Error taxonomy raised by the issue lifecycle engine"""


class IssueTrackError(Exception):
    """Base class for rejected operations.

    ``status_code`` is the HTTP status the API layer answers with.
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(IssueTrackError):
    """Malformed or semantically invalid input field"""

    status_code = 400


class NotFoundError(IssueTrackError):
    """Unknown issue identifier"""

    status_code = 404


class ImmutableStateError(IssueTrackError):
    """Mutation attempted on a completed or cancelled issue"""

    status_code = 400


class BusinessRuleError(IssueTrackError):
    """Resulting state would leave an active issue without an assignee"""

    status_code = 400
