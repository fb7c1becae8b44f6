"""
API contract validation.

Sits between an API call and the business assertions on its result:

    raw = api.get("/api/productsList")
    products = validate_schema(ProductList, raw, "products list")
    assert products.responseCode == 200
"""

import json
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


class SchemaViolation(AssertionError):
    """Data received from an API did not match its contract."""

    def __init__(self, message: str, issues: List[str]):
        super().__init__(message)
        self.issues = issues


def format_issues(error: ValidationError) -> List[str]:
    """Render each pydantic error as "[dotted.path] message"."""
    return [
        f"[{'.'.join(str(part) for part in err['loc'])}] {err['msg']}"
        for err in error.errors()
    ]


def validate_schema(model: Type[M], data: Any, context: str) -> M:
    """
    Validate API data against a pydantic model.

    Args:
        model: pydantic model describing the contract
        data: Parsed JSON body
        context: Name of the payload, used in the error message

    Raises:
        SchemaViolation: With every issue listed and the raw data attached
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        issues = format_issues(e)
        message = (
            f'[API Contract Violation] Schema validation failed for "{context}":\n'
            + "\n".join(f"  • {issue}" for issue in issues)
            + f"\n\nRaw data received:\n{json.dumps(data, indent=2, default=str)}"
        )
        raise SchemaViolation(message, issues) from e
