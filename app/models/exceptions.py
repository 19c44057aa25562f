class ProcessingError(Exception):
    """Base exception for everything that can fail while processing an upload."""


class MissingUploadError(ProcessingError):
    """Raised when the request carries no PDF file."""


class InvalidMarkerIdError(ProcessingError):
    """Raised when a supplied marker ID is rejected for use as a key or path."""


class DocumentParseError(ProcessingError):
    """Raised when the upload is not a readable PDF or has no pages."""


class RenderError(ProcessingError):
    """Raised when the QR code or the page overlay cannot be produced."""


class StorageUploadError(ProcessingError):
    """Raised when the stamped PDF cannot be written to storage."""


class StorageURLError(ProcessingError):
    """Raised when no public URL can be derived for a stored object."""
