"""
Shared data models for seo-content-blueprint.
All client operations return these normalized types.

Attributes are snake_case; ``to_dict()`` emits the camelCase shape the
generation service reads and writes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# ─── Requests ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OutlineRequest:
    keywords: str
    target_region: str
    competitor_urls: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DraftAnalysisRequest:
    outline: "ArticleOutline"
    draft_text: str = ""
    keywords: str = ""


# ─── Outline Models ──────────────────────────────────────────────────────────

@dataclass
class OutlineNode:
    level: str  # "H2" / "H3"
    title: str
    description: str = ""
    guidelines: str = ""
    source_competitor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "level": self.level,
            "title": self.title,
            "description": self.description,
            "guidelines": self.guidelines,
        }
        if self.source_competitor is not None:
            data["sourceCompetitor"] = self.source_competitor
        return data


@dataclass
class ImagePlacement:
    after_section: str
    description: str = ""
    ai_prompt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "afterSection": self.after_section,
            "description": self.description,
            "aiPrompt": self.ai_prompt,
        }


@dataclass
class ImageStrategy:
    total_images: int = 0
    placements: List[ImagePlacement] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalImages": self.total_images,
            "placements": [p.to_dict() for p in self.placements],
        }


@dataclass
class FaqItem:
    question: str
    answer: str = ""
    rationale: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"question": self.question, "answer": self.answer, "rationale": self.rationale}


@dataclass
class ArticleOutline:
    suggested_titles: List[str] = field(default_factory=list)
    structure: List[OutlineNode] = field(default_factory=list)
    image_strategy: ImageStrategy = field(default_factory=ImageStrategy)
    target_word_count: str = ""
    faqs: List[FaqItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestedTitles": list(self.suggested_titles),
            "structure": [n.to_dict() for n in self.structure],
            "imageStrategy": self.image_strategy.to_dict(),
            "targetWordCount": self.target_word_count,
            "faqs": [f.to_dict() for f in self.faqs],
        }


# ─── Draft Analysis Models ───────────────────────────────────────────────────

@dataclass
class DraftAnalysis:
    score: float
    missing_sections: List[str] = field(default_factory=list)
    keyword_gaps: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    readability_feedback: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "missingSections": list(self.missing_sections),
            "keywordGaps": list(self.keyword_gaps),
            "suggestions": list(self.suggestions),
            "readabilityFeedback": self.readability_feedback,
        }


# ─── UI flow ─────────────────────────────────────────────────────────────────

class AppStep(Enum):
    SETUP = "setup"
    ANALYZING = "analyzing"
    OUTLINE_READY = "outline_ready"
    EDITOR = "editor"  # user writes the draft and reviews the analysis
