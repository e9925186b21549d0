"""Dataclasses for content sent to the generation provider."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Union

@dataclass(frozen=True)
class ContentPart:
    """Binary attachment encoded for transport."""
    data: str
    mime_type: str

    def to_payload(self) -> dict[str, Any]:
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}


Part = Union[str, ContentPart]


def part_payload(part: Part) -> dict[str, Any]:
    """Serialise a prompt string or ContentPart into a Gemini request part."""
    if isinstance(part, ContentPart):
        return part.to_payload()
    return {"text": part}
