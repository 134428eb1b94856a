from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchOptions(BaseModel):
    """Target of a search: an API endpoint from data.yaml or a logical index name."""

    model_config = ConfigDict(frozen=True)

    api: Optional[str] = Field(default=None, description="API endpoint configured in data.yaml")
    index: Optional[str] = Field(default=None, description="Logical index name")

    @field_validator("api", "index", mode="before")
    @classmethod
    def stringify(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)

    @classmethod
    def coerce(cls, options: Union["SearchOptions", Mapping, None]) -> "SearchOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(**{str(k): v for k, v in options.items()})


class SearchResult(BaseModel):
    total: int
    page: int
    per_page: int
    results: List[Dict[str, Any]] = Field(default_factory=list)
