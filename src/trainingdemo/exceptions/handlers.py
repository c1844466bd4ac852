from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse


class TrainingDemoException(Exception):
    """
    Base exception of the module.

    Carries message/code/status_code/details and renders
    itself with to_dict() for the HTTP layer.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "TRAININGDEMO_ERROR",
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details: Dict[str, Any] = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(TrainingDemoException):
    def __init__(self, message: str, field: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = {"field": field} if field else {}
        details.update(kwargs)
        self.field = field
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            details=details,
        )

    @classmethod
    def from_field_errors(cls, errors: Iterable[Any]) -> "ValidationError":
        """Pack field errors (objects with field/message) into one error."""
        items = [{"field": e.field, "message": e.message} for e in errors]
        first = items[0] if items else {"field": None, "message": "Invalid input"}
        return cls(first["message"], field=first["field"], errors=items)


class ConfigurationError(TrainingDemoException):
    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs: Any):
        details: Dict[str, Any] = {"config_key": config_key} if config_key else {}
        details.update(kwargs)
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            status_code=500,
            details=details,
        )


async def trainingdemo_exception_handler(
    request: Request, exc: TrainingDemoException
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
