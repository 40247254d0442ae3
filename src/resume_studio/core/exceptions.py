from fastapi import HTTPException, status

# ── HTTP errors raised by the route layer ────────────────────────────────


class NotFoundError(HTTPException):
    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} with id '{resource_id}' not found",
        )


class ConflictError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class FileValidationError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )


class EditValidationError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )


class UnsupportedMediaError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=detail,
        )


class AIServiceError(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
        )


# ── Resume generation ────────────────────────────────────────────────────


class ResumeGenerationError(Exception):
    """Base class for failures that abort a whole generation attempt."""

    user_message = "An unknown error occurred during AI generation."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class ExtractionError(ResumeGenerationError):
    """Raised when no JSON-shaped span can be found in the model output."""

    user_message = "Invalid response format from AI."


class MalformedJsonError(ResumeGenerationError):
    """Raised when the extracted span is not a parseable JSON object."""

    user_message = "AI response malformed."

    def __init__(self, text: str, message: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class TransportError(ResumeGenerationError):
    """Raised when the Gemini call fails or the document cannot be read."""

    user_message = (
        "Failed to generate resume from AI. "
        "The provided document might be unreadable or malformed."
    )


class UnsupportedMediaTypeError(ResumeGenerationError):
    """Raised before any network call for uploads that are not PDF or DOCX."""

    user_message = "Invalid file type. Please upload a PDF or DOCX file."


class ItemShapeError(Exception):
    """Raised for a single collection element that cannot become a typed item.

    Never escapes the parser: the element is dropped and parsing continues.
    """


# ── Edit sessions ────────────────────────────────────────────────────────


class EditSessionError(Exception):
    """Base class for edit session misuse."""


class SessionStateError(EditSessionError):
    """Raised for an operation that is not valid in the current session state."""


class UnknownFieldError(EditSessionError):
    """Raised for a path, section or item field the document does not have."""


class ExportBlockedError(EditSessionError):
    """Raised when an export is requested while an edit session is open."""
