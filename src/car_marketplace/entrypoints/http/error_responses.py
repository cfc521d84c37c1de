"""REST API error response models.

Documents the body the exception handlers return for fatal failures. It keeps
the envelope's ``success``/``error`` keys so soft and fatal failures parse alike.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error for rejected query parameters."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "limit",
                "message": "Input should be less than or equal to 200",
                "code": "less_than_equal",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Fatal error body.

    Examples:
        Missing identity on a wishlist toggle:
            {
                "success": false,
                "error": "Error toggling saved car: Unauthorized",
                "code": "UNAUTHORIZED"
            }

        Invalid query parameters:
            {
                "success": false,
                "error": "Invalid request parameters",
                "code": "VALIDATION_ERROR",
                "errors": [{"field": "page", "message": "...", "code": "greater_than_equal"}]
            }
    """

    success: bool = False
    error: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "success": False,
                    "error": "Error toggling saved car: Unauthorized",
                    "code": "UNAUTHORIZED",
                },
                {
                    "success": False,
                    "error": "Error toggling saved car: User not found",
                    "code": "NOT_FOUND",
                },
                {
                    "success": False,
                    "error": "Invalid request parameters",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "minPrice",
                            "message": "Input should be greater than or equal to 0",
                            "code": "greater_than_equal",
                        }
                    ],
                },
            ]
        }
    )
