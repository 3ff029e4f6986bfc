from __future__ import annotations


class EduTubeError(Exception):
    pass


class NotFoundError(EduTubeError):
    pass


class DocumentNotFoundError(NotFoundError):
    def __init__(self, collection: str, document_id: str):
        super().__init__(f"Document not found: {collection}/{document_id}")
        self.collection = collection
        self.document_id = document_id


class FieldNotFoundError(NotFoundError):
    def __init__(self, document_id: str, field: str):
        super().__init__(f"Field {field} not found in Document {document_id}.")
        self.document_id = document_id
        self.field = field


class RecordNotFoundError(NotFoundError):
    def __init__(self, path: str, message: str | None = None):
        super().__init__(message or f"Record not found: {path}")
        self.path = path


class InvalidPathSegmentError(EduTubeError):
    def __init__(self, segment: str):
        super().__init__(f"Invalid path segment: {segment!r}")
        self.segment = segment


class StoreError(EduTubeError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Store error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class UpstreamError(EduTubeError):
    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class UpstreamQuotaExceededError(UpstreamError):
    def __init__(self, message: str = "YouTube API quota exceeded", status_code: int = 403, reason: str | None = None):
        super().__init__(message, status_code=status_code, reason=reason)


class CachedDataUnavailableError(EduTubeError):
    def __init__(self, cache_key: str):
        super().__init__("YouTube API quota exceeded and no fresh cached data is available")
        self.cache_key = cache_key
