"""Journal request/response schemas. Wire names are camelCase."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JournalEntryCreate(_CamelModel):
    text: str = Field(min_length=1)

    @field_validator("text")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text is required")
        return v


class JournalEntryUpdate(_CamelModel):
    text: Optional[str] = None
    tags: Optional[List[str]] = None
    created_at: Optional[datetime] = None

    @field_validator("text")
    @classmethod
    def reject_blank_text(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("text must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return [tag.strip() for tag in v if tag.strip()]


class JournalEntryListFilter(_CamelModel):
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    mood: Literal["all", "happy", "neutral", "sad"] = "all"
    search: Optional[str] = None
    sort_by: Literal["latest", "oldest", "highest", "lowest"] = "latest"

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_missing(cls, v, info):
        # Query strings send empty values for untouched filter controls.
        if isinstance(v, str) and not v.strip():
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("search")
    @classmethod
    def strip_search(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class JournalEntryResponse(_CamelModel):
    id: str
    owner_id: int
    text: str
    mood_score: int
    mood_bucket: str
    tags: List[str]
    created_at: str
    updated_at: str


class PaginationResponse(BaseModel):
    total: int
    pages: int
    page: int
    limit: int


class AnalyzeRequest(BaseModel):
    text: str = Field(min_length=1)

    @field_validator("text")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text is required")
        return v


class SearchCandidateIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Union[str, int]
    text: str = ""
    tags: List[str] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def id_as_str(cls, v: Union[str, int]) -> str:
        return str(v)

    @field_validator("text", mode="before")
    @classmethod
    def none_text_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def none_tags_as_empty(cls, v):
        return [] if v is None else v


class SemanticSearchRequest(BaseModel):
    query: str = Field(min_length=1)
    entries: List[SearchCandidateIn]

    @field_validator("query")
    @classmethod
    def require_query(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query is required")
        return v.strip()
