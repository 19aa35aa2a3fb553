"""Pydantic schemas for API form fields and JSON responses.

Form fields arrive as strings; pydantic's lax mode turns "5" into 5 and
"on"/"true"/"1" into True.
"""

from pydantic import BaseModel, Field, FiniteFloat, field_validator

from config import ALLOWED_KERNEL_SIZES, DEFAULT_GRAYSCALE, DEFAULT_KERNEL_SIZE


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class ProcessForm(BaseModel):
    """Form fields for POST /api/process (the file itself is separate)."""
    kernel_size: int = DEFAULT_KERNEL_SIZE
    grayscale: bool = DEFAULT_GRAYSCALE

    @field_validator("kernel_size")
    @classmethod
    def _allowed_kernel_size(cls, value: int) -> int:
        if value not in ALLOWED_KERNEL_SIZES:
            allowed = ", ".join(str(size) for size in ALLOWED_KERNEL_SIZES)
            raise ValueError(f"kernel_size must be one of {allowed}")
        return value


class InspectForm(BaseModel):
    """Form fields for POST /api/inspect."""
    x: FiniteFloat
    y: FiniteFloat


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class KernelSizeOut(BaseModel):
    value: int
    label: str
    description: str


class OptionsResponse(BaseModel):
    """Response for GET /api/options."""
    kernel_sizes: list[KernelSizeOut]
    default_kernel_size: int
    max_upload_bytes: int
    max_upload_label: str


class PixelInfoResponse(BaseModel):
    """Response for POST /api/inspect."""
    x: int
    y: int
    r: int
    g: int
    b: int
    a: int
    alpha: float
    hex: str
    hsl: list[int]
    percentages: dict[str, int] = Field(default_factory=dict)
    width: int
    height: int


class ErrorResponse(BaseModel):
    error: str
