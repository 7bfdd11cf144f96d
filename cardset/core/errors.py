class CardSetError(Exception):
    code = "internal_error"


class FetchError(CardSetError):
    """The card-search API answered with an error or an unreadable page."""

    code = "fetch_error"


class DownloadError(CardSetError):
    code = "download_error"

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DatasetWriteError(CardSetError):
    code = "write_error"
