from enum import Enum
from typing import Any, List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from catalog.config import ALL, ITEMS_PER_PAGE

# -ENUMS for validation and type safety
class Dimension(str, Enum):
    TYPE = "type"
    YEAR = "year"
    LYRICIST = "lyricist"
    COMPOSER = "composer"
    ARRANGER = "arranger"

class Handle(str, Enum):
    START = "start"
    END = "end"


# --- CATALOG RECORDS ---

class Record(BaseModel):
    """
    One catalog entry. `year` is derived from `date` by the normalizer and is
    never taken from the raw source.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: Union[int, str]
    title: str
    album: Optional[str] = None
    date: Optional[str] = None
    year: Optional[int] = None
    length: Optional[int] = None
    genre: List[str] = Field(default_factory=list)
    lyricist: List[str] = Field(default_factory=list)
    composer: List[str] = Field(default_factory=list)
    arranger: List[str] = Field(default_factory=list)
    type: List[str] = Field(default_factory=list)

    @field_validator("genre", "lyricist", "composer", "arranger", "type", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        return [v for v in value if v]

    @model_validator(mode="before")
    @classmethod
    def drop_source_year(cls, values):
        # The source never decides the year; see services.normalizer.
        if isinstance(values, dict) and "year" in values:
            values = {k: v for k, v in values.items() if k != "year"}
        return values


# --- FILTER MODELS ---

class FilterOptions(BaseModel):
    """Selectable values per dimension, each list starting with the "All" sentinel."""
    type: List[str] = Field(default_factory=lambda: [ALL])
    year: List[Union[int, str]] = Field(default_factory=lambda: [ALL])
    lyricist: List[str] = Field(default_factory=lambda: [ALL])
    composer: List[str] = Field(default_factory=lambda: [ALL])
    arranger: List[str] = Field(default_factory=lambda: [ALL])

    def for_dimension(self, dimension: Union[Dimension, str]) -> List[Union[int, str]]:
        return getattr(self, Dimension(dimension).value)


class FilterState(BaseModel):
    """
    The user's current selection. `year_range` holds zero-based indices into
    the descending slider year list; None means the full span.
    """
    model_config = ConfigDict(frozen=True)

    query: str = ""
    type: str = ALL
    year: str = ALL
    lyricist: str = ALL
    composer: str = ALL
    arranger: str = ALL
    year_range: Optional[Tuple[int, int]] = None

    def selection(self, dimension: Union[Dimension, str]) -> str:
        return getattr(self, Dimension(dimension).value)


# --- PAGINATION MODELS ---

class PaginationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_page: int = 1
    items_per_page: int = Field(ITEMS_PER_PAGE, ge=1)
    total_items: int = Field(0, ge=0)

    @property
    def total_pages(self) -> int:
        return -(-self.total_items // self.items_per_page)


class Page(BaseModel):
    """One slice of an ordered result list. start/end indices are 1-based and inclusive."""
    items: List[Any]
    current_page: int
    total_pages: int
    start_index: int
    end_index: int
    total_items: int
    items_per_page: int
