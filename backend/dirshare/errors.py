"""File-serving errors, each mapped to one HTTP status."""

from __future__ import annotations


class FileServerError(Exception):
    """Base class for errors that become an HTTP error response."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    @property
    def headers(self) -> dict[str, str]:
        # Range support is advertised on error responses too
        return {"Accept-Ranges": "bytes"}


class PathTraversalRejected(FileServerError):
    status_code = 400
    detail = "Invalid path"


class PathNotFound(FileServerError):
    status_code = 404
    detail = "Not found"


class PermissionDenied(FileServerError):
    status_code = 403
    detail = "Permission denied"


class DirectoryReadFailed(FileServerError):
    status_code = 500
    detail = "Failed to read directory"


class StreamIOFailed(FileServerError):
    status_code = 500
    detail = "Failed to read file"


class RangeMalformed(FileServerError):
    """Unsupported unit, wrong shape or non-numeric bounds."""

    status_code = 400
    detail = "Malformed Range header"


class RangeInvalid(RangeMalformed):
    """Both bounds parsed but start lies after end."""

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end
        super().__init__(f"Invalid range: start {start} is greater than end {end}")


class RangeUnsatisfiable(FileServerError):
    status_code = 416
    detail = "Range not satisfiable"

    def __init__(self, start: int, file_size: int):
        self.start = start
        self.file_size = file_size
        super().__init__(f"Range start {start} is beyond file size {file_size}")

    @property
    def headers(self) -> dict[str, str]:
        return {**super().headers, "Content-Range": f"bytes */{self.file_size}"}
