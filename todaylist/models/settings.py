"""Settings data model for todaylist."""

from pydantic import BaseModel, Field

from todaylist.models.constants import DEFAULT_RESET_HOUR


class Settings(BaseModel):
    """Process-wide settings."""

    reset_hour: int = Field(
        DEFAULT_RESET_HOUR,
        ge=0,
        le=23,
        description="Hour of day (0-23) at which the list is cleared",
    )
