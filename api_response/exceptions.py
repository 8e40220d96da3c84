from http import HTTPStatus


class ResponseWrapperError(Exception):
    """Base error for the library.

    Subclasses set ``code``, ``label`` and ``status_code`` at the class level.
    The label prefixes the message of the failure envelope built from the error.
    """

    code: str = "UNCLASSIFIED"
    label: str = "An unexpected error occurred"
    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ArgumentError(ResponseWrapperError):
    code = "ARGUMENT_ERROR"
    label = "Argument Error"
    status_code = HTTPStatus.BAD_REQUEST


class InvalidOperationError(ResponseWrapperError):
    code = "INVALID_OPERATION"
    label = "Invalid Operation"
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
