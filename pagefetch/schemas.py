from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional, Union

class ContentMethod(str, Enum):
    """How the body was turned into text."""
    JSON = "json"
    HTML = "html"
    TEXT = "text"
    RAW = "raw"
    FALLBACK = "fallback"

class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

class FetchRequest(_Record):
    url: str
    timeout_seconds: Optional[Union[int, float]] = Field(None, description="Hard timeout for the whole request")
    raw: bool = Field(default=False, description="Skip content-type transforms")
    max_bytes: Optional[int] = Field(None, gt=0, description="Output byte cap")
    max_lines: Optional[int] = Field(None, gt=0, description="Output line cap")

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value):
        if value is not None and value <= 0:
            raise ValueError("timeout_seconds must be positive")
        return value

class FetchTruncation(_Record):
    total_lines: int
    total_bytes: int
    output_lines: int
    output_bytes: int

class FetchResponse(_Record):
    request_url: str
    final_url: str
    status: int
    content_type: str = Field(description="Base media type without parameters")
    method: ContentMethod
    content: str
    truncated: bool
    full_output_path: Optional[str] = Field(None, description="Untruncated text, present only when saved")
    notes: List[str] = Field(default_factory=list)
    truncation: Optional[FetchTruncation] = None
