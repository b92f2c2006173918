"""
pytest shared fixtures.
Run with: pytest tests/ -v
No network access: the generation service is replaced by FakeBackend.
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Make the project root importable without installation
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.generation import GenerationBackend, GenerationReply, GenerationRequest, ReplyPart  # noqa: E402


class FakeBackend(GenerationBackend):
    """Replays canned replies in order and records every request."""

    def __init__(self, replies: Optional[List[GenerationReply]] = None, error: Optional[BaseException] = None,
                 delay: float = 0.0):
        self.replies = list(replies or [])
        self.error = error
        self.delay = delay
        self.requests: List[GenerationRequest] = []
        self.closed = False

    async def send(self, request: GenerationRequest) -> GenerationReply:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)

    async def close(self) -> None:
        self.closed = True


def text_reply(text: str) -> GenerationReply:
    return GenerationReply(parts=[ReplyPart(text=text)])


def image_reply(data: str) -> GenerationReply:
    return GenerationReply(parts=[ReplyPart(text="here you go"), ReplyPart(inline_data=data, mime_type="image/png")])


@pytest.fixture
def outline_payload():
    """A well-formed outline reply: 3 sections, 2 image placements."""
    return {
        "suggestedTitles": ["Best Standing Desks 2026", "Standing Desk Buying Guide"],
        "structure": [
            {
                "level": "H2",
                "title": "Why stand while working",
                "description": "Health and productivity benefits.",
                "guidelines": "Cite two studies.",
                "sourceCompetitor": "https://a.example.com/desks",
            },
            {
                "level": "H3",
                "title": "Posture",
                "description": "Spine alignment.",
                "guidelines": "Add a diagram.",
                "sourceCompetitor": None,
            },
            {
                "level": "H2",
                "title": "How to choose",
                "description": "Motor, height range, stability.",
                "guidelines": "Use a comparison table.",
            },
        ],
        "imageStrategy": {
            "totalImages": 2,
            "placements": [
                {"afterSection": "How to choose", "description": "Desk comparison", "aiPrompt": "two desks side by side"},
                {"afterSection": "Why stand while working", "description": "Person at desk", "aiPrompt": "office worker standing"},
            ],
        },
        "targetWordCount": "2500-3000",
        "faqs": [
            {"question": "Are standing desks worth it?", "answer": "Yes, for most people.", "rationale": "High search volume."},
        ],
    }


@pytest.fixture
def draft_payload():
    return {
        "score": 72.5,
        "missingSections": ["How to choose"],
        "keywordGaps": ["standing desk height"],
        "suggestions": ["Add a comparison table"],
        "readabilityFeedback": "Clear and professional.",
    }


@pytest.fixture
def outline_json(outline_payload):
    return json.dumps(outline_payload)
