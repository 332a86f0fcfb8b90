"""Content types shared by the catalog, scorer and selector."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


class ContentType(str, Enum):
    """Kind of content a page shows."""

    BLOG = "blog"
    INFORMATION = "information"

    @property
    def opposite(self) -> "ContentType":
        if self is ContentType.BLOG:
            return ContentType.INFORMATION
        return ContentType.BLOG


@dataclass
class RelatedArticle:
    """A suggestion card, as handed to page rendering."""

    slug: str
    title_en: str
    title_ar: str
    excerpt_en: str
    excerpt_ar: str
    featured_image: str
    type: ContentType
    category_name_en: str | None = None
    category_name_ar: str | None = None
    reading_time: int | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass
class ContentItem:
    """Normalised catalog entry used for scoring."""

    slug: str
    type: ContentType
    title_en: str = ""
    title_ar: str = ""
    excerpt_en: str = ""
    excerpt_ar: str = ""
    featured_image: str = ""
    category_id: str = ""
    category_name_en: str = ""
    category_name_ar: str = ""
    tags: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    page_type: str = ""
    reading_time: int = 0
    published: bool = False

    @property
    def identity(self) -> tuple[ContentType, str]:
        return (self.type, self.slug)

    def to_related(self) -> RelatedArticle:
        return RelatedArticle(
            slug=self.slug,
            title_en=self.title_en,
            title_ar=self.title_ar,
            excerpt_en=self.excerpt_en,
            excerpt_ar=self.excerpt_ar,
            featured_image=self.featured_image,
            type=self.type,
            category_name_en=self.category_name_en or None,
            category_name_ar=self.category_name_ar or None,
            reading_time=self.reading_time or None,
        )


# Raw catalog records. Optional fields accept null and are normalised by the loader.
# A value of the wrong type is dropped to the field default; only a bad slug or id
# rejects the whole record.


def _default_on_error(
    value: Any, handler: ValidatorFunctionWrapHandler, default: Any = None
) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return default


class LookupRecord(BaseModel):
    """Category or section display names."""

    id: str
    name_en: str | None = None
    name_ar: str | None = None

    @field_validator("name_en", "name_ar", mode="wrap")
    @classmethod
    def _drop_invalid_name(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _default_on_error(value, handler)


class BlogPostRecord(BaseModel):
    """Blog post as written in a catalog document."""

    slug: str = Field(min_length=1)
    title_en: str | None = None
    title_ar: str | None = None
    excerpt_en: str | None = None
    excerpt_ar: str | None = None
    featured_image: str | None = None
    category_id: str | None = None
    tags: list[str] | None = None
    keywords: list[str] | None = None
    page_type: str | None = None
    reading_time: int | None = None
    published: bool = False

    @field_validator(
        "title_en",
        "title_ar",
        "excerpt_en",
        "excerpt_ar",
        "featured_image",
        "category_id",
        "tags",
        "keywords",
        "page_type",
        "reading_time",
        mode="wrap",
    )
    @classmethod
    def _drop_invalid_optional(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _default_on_error(value, handler)

    @field_validator("published", mode="wrap")
    @classmethod
    def _drop_invalid_flag(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> bool:
        return _default_on_error(value, handler, default=False)


class InformationArticleRecord(BlogPostRecord):
    """Information-hub article as written in a catalog document."""

    section_id: str | None = None

    @field_validator("section_id", mode="wrap")
    @classmethod
    def _drop_invalid_section(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _default_on_error(value, handler)
