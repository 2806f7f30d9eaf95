"""Data models for the document pipeline and site assembly"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class Frontmatter(BaseModel):
    """Validated document metadata; unknown keys are kept as extras."""
    model_config = ConfigDict(extra="allow")

    description:  StrictStr = Field(min_length=1)
    publish_date: Optional[StrictStr] = None

    @field_validator("publish_date", mode="before")
    @classmethod
    def _date_to_iso(cls, value: Any) -> Any:
        # Unquoted YAML dates arrive as date/datetime objects.
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("publish_date")
    @classmethod
    def _iso_date(cls, value: Optional[str]) -> Optional[str]:
        # Kept as the source string; ordering compares it as text.
        if value is not None:
            try:
                datetime.fromisoformat(value)
            except ValueError as e:
                raise ValueError(f"not an ISO 8601 date: {value!r}") from e
        return value


@dataclass
class RenderedPage:
    """Output of the document pipeline for one source file."""
    html:         str
    title:        str
    description:  str
    publish_date: Optional[str] = None


@dataclass
class Post:
    """A blog post as assembled from one RenderedPage."""
    title:        str
    folder:       str          # e.g. "blog/my-post", relative to the site root
    url:          str          # canonical absolute URL
    publish_date: str
    description:  str
    html:         str          # rendered body, before page templating
