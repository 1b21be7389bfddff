from pydantic import BaseModel, ConfigDict, Field, StrictStr, computed_field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from shortlink_app.config import settings


def build_short_url(code: str) -> str:
    return f"{settings.base_url.rstrip('/')}/{code}"


class ShortenRequest(BaseModel):
    """Create request: one required, non-empty string field"""
    url: StrictStr = Field(..., min_length=1, description="The URL to be shortened")


class CamelModel(BaseModel):
    """Serializes with camelCase keys, reads snake_case ORM attributes"""

    # Pydantic V2 style configuration
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ShortenResponse(CamelModel):
    """Response schema that automatically serializes the SQLAlchemy URL model

    - from_attributes=True enables ORM mode (reads from model attributes)
    - @computed_field creates derived fields
    """
    code: str
    original_url: str

    @computed_field(alias="shortUrl")
    @property
    def short_url(self) -> str:
        """Computed field - automatically generated from code"""
        return build_short_url(self.code)


class URLStats(ShortenResponse):
    created_at: datetime
    visits: int

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
