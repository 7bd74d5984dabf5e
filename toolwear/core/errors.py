"""
Typed failures raised by the tool wear engine.

Every failure is scoped to the single operation that raised it; the HTTP
layer maps each class onto a status code.
"""


class ToolWearError(Exception):
    """Base class for engine failures"""

    code = "E_TOOL_WEAR"

    def __init__(self, message: str, code: str = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class InvalidInputError(ToolWearError):
    """Malformed or out-of-range argument"""

    code = "E_INVALID_INPUT"


class NotFoundError(ToolWearError):
    """Referenced tool does not exist, or is inactive where activity is required"""

    code = "E_NOT_FOUND"


class ConflictError(ToolWearError):
    """An active tool already uses the (moldId, toolId) pair"""

    code = "E_CONFLICT"
