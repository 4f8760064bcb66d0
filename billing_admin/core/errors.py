# billing_admin/core/errors.py
from typing import Dict


class BillingError(Exception):
    """Base error rendered to clients as ``{"error": message}``."""

    status_code = 400
    kind = "BillingError"
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class TableNotAllowed(BillingError):
    kind = "TableNotAllowed"
    default_message = "Table not allowed"


class SchemaNotFound(BillingError):
    kind = "SchemaNotFound"
    default_message = "Schema not found"


class InvalidId(BillingError):
    kind = "InvalidId"
    default_message = "Invalid id"


class NoValidFields(BillingError):
    kind = "NoValidFields"
    default_message = "No valid fields provided"


class MalformedBody(BillingError):
    kind = "MalformedBody"
    default_message = "Request body must be a JSON object"


class InvalidFieldValue(BillingError):
    kind = "InvalidFieldValue"
    default_message = "Invalid field value"


class NotFound(BillingError):
    status_code = 404
    kind = "NotFound"
    default_message = "Not found"


class ValidationFailure(BillingError):
    """Form-level failure; ``fields`` maps field name to message."""

    status_code = 422
    kind = "ValidationFailure"
    default_message = "Validation failed"

    def __init__(self, fields: Dict[str, str], message: str | None = None):
        self.fields = dict(fields)
        super().__init__(message or "; ".join(self.fields.values()) or None)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["fields"] = self.fields
        return data


class QueryFailure(BillingError):
    status_code = 500
    kind = "QueryFailure"
    default_message = "Query failed"
