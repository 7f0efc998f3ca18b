"""Analytics Schemas — client-reported page views and clicks."""

from pydantic import BaseModel, Field, field_validator


class PageViewCreate(BaseModel):
    page: str = Field(min_length=1, max_length=2000)
    title: str = Field("", max_length=500)
    referrer: str | None = Field(None, max_length=2000)

    @field_validator("page")
    @classmethod
    def strip_page(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("page cannot be empty or whitespace")
        return v


class ButtonClickCreate(BaseModel):
    button_name: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=2000)


class ScrollDepthCreate(BaseModel):
    depth: int = Field(ge=0, le=100)


class EventAccepted(BaseModel):
    accepted: bool = True
    event: str
