"""
Generation backend contract.
The client talks to the remote service only through ``GenerationBackend.send``,
so tests can plug in a fake without network access.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class GenerationRequest:
    model: str
    prompt: str
    response_schema: Optional[Dict[str, Any]] = None
    schema_name: str = "response"
    image: bool = False
    aspect_ratio: Optional[str] = None
    image_size: Optional[str] = None
    image_quality: Optional[str] = None


@dataclass
class ReplyPart:
    text: Optional[str] = None
    inline_data: Optional[str] = None  # base64 payload
    mime_type: Optional[str] = None


@dataclass
class GenerationReply:
    parts: List[ReplyPart] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(p.text for p in self.parts if p.text)


class GenerationBackend(ABC):
    """Remote generation capability."""

    @abstractmethod
    async def send(self, request: GenerationRequest) -> GenerationReply:
        """
        Submit one request and return the ordered reply parts.
        Transport and service errors must be raised, never returned.
        """
        ...

    async def close(self) -> None:
        return None
