"""Exceptions raised by cpackget."""


class CpackgetError(Exception):
    """Base class of every error raised by cpackget."""

    message = "cpackget error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class BadPackNameError(CpackgetError):
    message = "bad pack name"


class FileTooBigError(CpackgetError):
    message = "files cannot be over 20G"


class TerminatedByUserError(CpackgetError):
    message = "terminated by user request"


class FailedWritingToLocalFileError(CpackgetError):
    message = "failed writing HTTP stream to local file"


class InsecureZipFileNameError(CpackgetError):
    message = "zip file contains insecure characters: ../"


class FailedCreatingFileError(CpackgetError):
    message = "failed to create a local file"


class FailedCreatingDirectoryError(CpackgetError):
    message = "failed to create a local directory"


class FailedDownloadingFileError(CpackgetError):
    message = "failed to download file"


class BadRequestError(CpackgetError):
    message = "bad request"


class PdscEntryExistsError(CpackgetError):
    message = "pdsc already in index"


class PdscEntryNotFoundError(CpackgetError):
    message = "pdsc not found"


class ConnectionOfflineError(CpackgetError):
    message = "remote server is offline or cannot be reached"