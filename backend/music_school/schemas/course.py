"""Course Schemas — catalog responses and query parameters.

Invariants:
    - CourseOut mirrors the dataset shape (isFeatured serialized in camelCase)
    - CatalogResponse.count == len(CatalogResponse.courses)
"""

from pydantic import BaseModel, ConfigDict, Field

from music_school.core.catalog import CatalogView, Course
from music_school.core.domain_types import CourseAction


class CourseOut(BaseModel):
    """Public course record."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    slug: str
    description: str
    price: float
    instructor: str
    is_featured: bool = Field(alias="isFeatured")
    image: str

    @classmethod
    def from_course(cls, course: Course) -> "CourseOut":
        return cls.model_validate(course.to_record())


class CatalogResponse(BaseModel):
    courses: list[CourseOut]
    count: int
    total: int
    filtered: bool

    @classmethod
    def from_view(cls, view: CatalogView) -> "CatalogResponse":
        return cls(
            courses=[CourseOut.from_course(c) for c in view.courses],
            count=view.count,
            total=view.total,
            filtered=view.filtered,
        )


class FeaturedResponse(BaseModel):
    courses: list[CourseOut]


class InstructorsResponse(BaseModel):
    instructors: list[str]


class CourseInteractionCreate(BaseModel):
    """Course interaction reported by the client."""
    action: CourseAction
    location: str = Field("courses_page", min_length=1, max_length=100)
