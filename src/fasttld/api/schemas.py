"""API schemas for request/response models."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class ExtractRequestBody(BaseModel):
    """Request model for extraction."""
    url: str = Field(..., description="URL or hostname to split")
    convert_to_punycode: bool = Field(False, description="Punycode-encode the host before matching")
    ignore_subdomains: bool = Field(False, description="Leave the subdomain field empty")

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("url must be a non-empty string")
        return v


class ExtractResponse(BaseModel):
    """Response model for extraction."""
    model_config = ConfigDict(from_attributes=True)

    subdomain: str
    domain: str
    suffix: str
    registered_domain: str
    port: str


class RefreshResponse(BaseModel):
    """Response model for suffix list refresh."""
    status: str
    source: str


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str
    detail: Optional[str] = None
