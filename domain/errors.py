class DomainError(Exception):
    """Base error for the service layer. The calculator itself never raises."""

    code = "E_DOMAIN"
    http_status = 400

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(DomainError):
    code = "E_INVALID_INPUT"


class NotFoundError(DomainError):
    code = "E_NOT_FOUND"
    http_status = 404


class StorageUnavailableError(DomainError):
    code = "E_STORAGE_UNAVAILABLE"
    http_status = 503
