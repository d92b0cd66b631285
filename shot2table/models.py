from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


class TableData(BaseModel):
    headers: list[str] = Field(default_factory=list)
    # Rows may be shorter than `headers`; missing cells render blank.
    rows: list[list[str]] = Field(default_factory=list)

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_to_str(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_stringify(item) for item in value]
        return value

    @field_validator("rows", mode="before")
    @classmethod
    def _cells_to_str(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [
            [_stringify(cell) for cell in row] if isinstance(row, list) else row
            for row in value
        ]

    def is_empty(self) -> bool:
        return not self.headers and not self.rows

    @property
    def column_count(self) -> int:
        widest_row = max((len(row) for row in self.rows), default=0)
        return max(len(self.headers), widest_row)


class ImageUrl(BaseModel):
    url: str


class ContentPart(BaseModel):
    type: Literal["text", "image_url"]
    text: str | None = None
    image_url: ImageUrl | None = None


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: list[ContentPart]


class ChatRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    max_tokens: int = 4000
    temperature: float = 0.1

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
