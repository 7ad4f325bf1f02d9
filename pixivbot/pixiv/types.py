"""
Pydantic models for pixiv API responses.

Only the fields the relay reads are modelled; everything else in the
payload is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import config
from ..exceptions import PixivAPIError
from ..services.image_pipeline.context import ImageSource

ILLUST_TYPE_ILLUST = 0
ILLUST_TYPE_MANGA = 1
ILLUST_TYPE_UGOIRA = 2


class PixivModel(BaseModel):
    """Base model accepting both camelCase API keys and field names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class IllustUrls(PixivModel):
    """Image URLs of the first page, smallest to largest."""

    mini: str | None = None
    thumb: str | None = None
    small: str | None = None
    regular: str | None = None
    original: str | None = None


class IllustTag(PixivModel):
    tag: str
    translation: dict[str, str] | None = None
    locked: bool = False

    def get_translation(self) -> str:
        """English translation if present, otherwise any translation, otherwise ''."""
        if not self.translation:
            return ""
        if self.translation.get("en"):
            return self.translation["en"]
        return next((value for value in self.translation.values() if value), "")


class IllustTags(PixivModel):
    tags: list[IllustTag] = Field(default_factory=list)


class IllustData(PixivModel, ImageSource):
    """
    Illustration details from /ajax/illust/{id}.

    Attributes:
        id: Illustration ID
        title: Illustration title
        comment: Description HTML (illustComment)
        user_id: Author ID
        user_name: Author display name
        urls: Image URLs of the first page
        tags: Tag list with optional translations
        illust_type: 0 illustration, 1 manga, 2 ugoira
        page_count: Number of pages
    """

    id: str = Field(alias="illustId")
    title: str = Field(default="", alias="illustTitle")
    comment: str = Field(default="", alias="illustComment")
    user_id: str = Field(default="", alias="userId")
    user_name: str = Field(default="", alias="userName")
    urls: IllustUrls = Field(default_factory=IllustUrls)
    tags: IllustTags = Field(default_factory=IllustTags)
    illust_type: int = Field(default=ILLUST_TYPE_ILLUST, alias="illustType")
    page_count: int = Field(default=1, alias="pageCount")
    width: int | None = None
    height: int | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """pixiv returns IDs as strings, but accept integers too."""
        return str(v) if v is not None else v

    @property
    def is_ugoira(self) -> bool:
        return self.illust_type == ILLUST_TYPE_UGOIRA

    @property
    def artwork_url(self) -> str:
        return f"{config.PIXIV_SITE_BASE}/artworks/{self.id}"

    @property
    def author_url(self) -> str:
        return f"{config.PIXIV_SITE_BASE}/users/{self.user_id}"

    def get_small_image(self) -> str:
        if not self.urls.regular:
            raise PixivAPIError(f"Illustration {self.id} has no regular image URL")
        return self.urls.regular

    def get_original_image(self) -> str:
        if not self.urls.original:
            raise PixivAPIError(f"Illustration {self.id} has no original image URL")
        return self.urls.original


class IllustResponse(PixivModel):
    """Envelope of every pixiv ajax response."""

    error: bool = False
    message: str = ""
    body: IllustData | None = None

    def get_error(self) -> PixivAPIError | None:
        if self.error:
            return PixivAPIError(f"server error: {self.message}")
        return None

    @field_validator("body", mode="before")
    @classmethod
    def empty_body(cls, v):
        """Error responses carry body: [] instead of an object."""
        if v == [] or v == {}:
            return None
        return v
