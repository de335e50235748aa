from typing import Any, Dict, Optional


class DocumentClientError(Exception):
    """Root of every error the document client raises.

    Subclasses record what they know about the failure (table, key,
    operation, error code...) in ``context``; both renderings below read
    from it, so a subclass only has to fill the dict.

    Attributes:
        message: Human-readable error message
        original_error: boto3/botocore/pydantic exception behind this one, if any
        context: Structured fields describing the failure
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = dict(context or {})
        super().__init__(message)

    @property
    def cause_name(self) -> Optional[str]:
        """Class name of the wrapped exception, e.g. ``'ClientError'``."""
        if self.original_error is None:
            return None
        return type(self.original_error).__name__

    def __str__(self) -> str:
        rendered = self.message
        if self.context:
            fields = ", ".join(f"{name}={value}" for name, value in self.context.items())
            rendered += f" [{fields}]"
        if self.cause_name:
            rendered += f" (caused by {self.cause_name})"
        return rendered

    def __repr__(self) -> str:
        fields = [repr(self.message)]
        fields.extend(f"{name}={value!r}" for name, value in self.context.items())
        if self.cause_name:
            fields.append(f"cause={self.cause_name}")
        return f"{self.__class__.__name__}({', '.join(fields)})"
