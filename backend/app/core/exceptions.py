"""
Custom Exceptions for ScaffoldAI
================================

The virtual file tree raises these instead of returning empty defaults,
so callers always know why an operation failed.

Usage:
    from app.core.exceptions import PathNotFoundError, NotAFolderError

    try:
        node = find_by_path(tree, "project-root/src/App.jsx")
    except PathNotFoundError as e:
        logger.warning(f"Lookup failed: {e}")
        raise
"""

from typing import Optional, Any, Dict, List


class ScaffoldError(Exception):
    """Base exception for all ScaffoldAI errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# File Tree Errors
# ============================================

class PathNotFoundError(ScaffoldError):
    """A path segment does not exist among a folder's children"""

    def __init__(self, path: str, segment: Optional[str] = None):
        message = f"Path '{path}' not found"
        if segment is not None:
            message += f" (missing segment '{segment}')"
        super().__init__(
            message,
            code="PATH_NOT_FOUND",
            details={"path": path, "segment": segment}
        )


class NotAFolderError(ScaffoldError):
    """A folder operation targeted a file"""

    def __init__(self, path: str):
        super().__init__(
            f"'{path}' is a file, not a folder",
            code="NOT_A_FOLDER",
            details={"path": path}
        )


class MalformedInputError(ScaffoldError):
    """A tree document does not match the {name, type, children, content} shape"""

    def __init__(self, message: str = "Malformed file tree", errors: Optional[List[Any]] = None):
        super().__init__(message, code="MALFORMED_INPUT")
        if errors:
            self.details["errors"] = errors


class NoEntryFileFoundError(ScaffoldError):
    """No App.jsx / App.js entry file could be resolved for the preview"""

    def __init__(self, available_paths: Optional[List[str]] = None):
        super().__init__(
            "No App.jsx or App.js file found in the project",
            code="NO_ENTRY_FILE",
            details={"available_paths": available_paths or []}
        )


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(ScaffoldError):
    """Input validation failed"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


# ============================================
# AI/Claude Errors
# ============================================

class AIServiceError(ScaffoldError):
    """AI service (Claude) error"""

    def __init__(self, message: str):
        super().__init__(message, code="AI_SERVICE_ERROR")


class AIRateLimitError(AIServiceError):
    """AI rate limit exceeded"""

    def __init__(self, retry_after: Optional[int] = None):
        super().__init__("AI rate limit exceeded. Please try again later.")
        self.code = "AI_RATE_LIMITED"
        if retry_after:
            self.details["retry_after_seconds"] = retry_after


class AIResponseParseError(MalformedInputError):
    """Failed to parse AI response into JSON"""

    def __init__(self, message: str = "Failed to parse JSON from AI response"):
        super().__init__(message)
        self.code = "AI_PARSE_ERROR"


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: ScaffoldError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
