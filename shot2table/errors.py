class Shot2TableError(RuntimeError):
    """Base class for every error surfaced to the user."""


class ConfigMissingError(Shot2TableError):
    pass


class RequestError(Shot2TableError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(Shot2TableError):
    pass


class ParseError(Shot2TableError):
    def __init__(self, message: str, raw_content: str = "") -> None:
        super().__init__(message)
        self.raw_content = raw_content


class EmptyDataError(Shot2TableError):
    pass


class InvalidImageError(Shot2TableError):
    pass


class AnalysisInProgressError(Shot2TableError):
    pass
