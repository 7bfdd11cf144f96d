from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CardFace(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    image_uris: Optional[dict[str, Any]] = None


class CardRecord(BaseModel):
    """A card object as returned by the search API.

    Only the fields the downloader and verifier read are declared; everything
    else is kept as extra data so the record round-trips unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: Optional[str] = None
    collector_number: str = ""
    image_uris: Optional[dict[str, Any]] = None
    card_faces: Optional[list[CardFace]] = None
    local_image_paths: Optional[list[str]] = Field(default=None, alias="localImagePaths")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ImageTask(BaseModel):
    url: str
    path: str


class VerifyEntry(BaseModel):
    name: Optional[str] = None
    collector_number: Optional[int] = None


class VerifyReport(BaseModel):
    entries: list[VerifyEntry]
    total: int
    unique_ids: int

    @property
    def has_duplicates(self) -> bool:
        return self.unique_ids < self.total
