"""
Request payloads for the recipe API.

Bodies come from a browser form, so every field is lenient: anything
malformed collapses to its neutral value instead of failing the request.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.config.settings import settings

TIME_BUCKETS = ("any", "<15", "15-30", "30-60", ">60")


def _string_list(v: Any) -> List[str]:
    if not isinstance(v, (list, tuple, set)):
        return []
    return [str(x) for x in v if isinstance(x, (str, int, float)) and str(x).strip()]


def _optional_bound(v: Any) -> Optional[str]:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, str):
        return v
    return None


class FilterBundle(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    time: str = "any"
    difficulty: str = "any"
    dietary: List[str] = Field(default_factory=list)
    caloriesMin: Optional[str] = None
    caloriesMax: Optional[str] = None
    # display-only hint, never used for filtering
    servings: Optional[int] = None
    cuisines: List[str] = Field(default_factory=list)

    @field_validator("time", "difficulty", mode="before")
    @classmethod
    def _selector(cls, v: Any) -> str:
        return v if isinstance(v, str) and v else "any"

    @field_validator("dietary", "cuisines", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> List[str]:
        return _string_list(v)

    @field_validator("caloriesMin", "caloriesMax", mode="before")
    @classmethod
    def _bounds(cls, v: Any) -> Optional[str]:
        return _optional_bound(v)

    @field_validator("servings", mode="before")
    @classmethod
    def _servings(cls, v: Any) -> Optional[int]:
        try:
            return int(v) if v is not None and not isinstance(v, bool) else None
        except (TypeError, ValueError, OverflowError):
            return None


class SearchRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    terms: List[str] = Field(default_factory=list)
    filters: FilterBundle = Field(default_factory=FilterBundle)
    generateIfEmpty: bool = True

    @field_validator("terms", mode="before")
    @classmethod
    def _terms(cls, v: Any) -> List[str]:
        return _string_list(v)

    @field_validator("filters", mode="before")
    @classmethod
    def _filters(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}

    @field_validator("generateIfEmpty", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        if v is None:
            return True
        if isinstance(v, str):
            return v.strip().lower() not in ("0", "false", "no", "off")
        return bool(v)

    @classmethod
    def from_payload(cls, body: Any) -> "SearchRequest":
        if not isinstance(body, dict):
            return cls()
        try:
            return cls.model_validate(body)
        except ValidationError:
            return cls()


class GenerateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    n: int = 1

    @field_validator("n", mode="before")
    @classmethod
    def _n(cls, v: Any) -> int:
        try:
            n = int(float(v))
        except (TypeError, ValueError, OverflowError):
            return 1
        return min(max(1, n), settings.max_generate)

    @classmethod
    def from_payload(cls, body: Any) -> "GenerateRequest":
        if not isinstance(body, dict):
            return cls()
        return cls.model_validate(body)
