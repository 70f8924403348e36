from typing import Any, Optional, Type
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import RequestError

DEFAULT_ERROR = "API request failed"


class ApiEnvelope(BaseModel):
    """
    Uniform {success, data, error} wrapper around every server reply.
    Valid only when success is true, data is present and error is absent.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None

    class Config:
        extra = "ignore"

    @property
    def is_valid_success(self) -> bool:
        return self.success and self.data is not None and self.error is None

    def unwrap(self, model: Optional[Type] = None) -> Any:
        """
        Returns data (validated into model when given).
        Raises RequestError for any envelope that is not a clean success.
        """
        if not self.is_valid_success:
            raise RequestError(self.error or DEFAULT_ERROR)

        if model is None:
            return self.data
        try:
            return TypeAdapter(model).validate_python(self.data)
        except ValidationError as e:
            raise RequestError(f"Unexpected response payload: {e.error_count()} validation error(s)")
