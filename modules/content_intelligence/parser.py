"""
Reply parsing for the content intelligence client.

Two stages, kept separate so each failure kind stays distinct:
  1. extract_json_object / load_json_object → MalformedResponse
  2. parse_outline / parse_draft_analysis   → SchemaViolation
"""
import json
import logging
from numbers import Real
from typing import Any, Callable, Dict, List, Optional, Sequence

from config.settings import HEADING_LEVELS, IMAGE_DATA_URI_PREFIX, SCORE_MAX, SCORE_MIN
from core.errors import ImageGenerationFailed, MalformedResponse, SchemaViolation
from core.generation import ReplyPart
from core.models import (
    ArticleOutline,
    DraftAnalysis,
    FaqItem,
    ImagePlacement,
    ImageStrategy,
    OutlineNode,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Stage 1: extraction
# ═══════════════════════════════════════════════════════════════════════════

def extract_json_object(text: Optional[str]) -> str:
    """
    Return the substring from the first '{' to the last '}'.
    Without such a pair, fall back to the trimmed text.
    """
    if not text:
        return ""
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        return text[first:last + 1]
    return text.strip()


def load_json_object(text: Optional[str]) -> Dict[str, Any]:
    candidate = extract_json_object(text)
    if not candidate:
        raise MalformedResponse("Empty reply", raw=text)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {e}")
        raise MalformedResponse(f"Reply is not valid JSON: {e}", raw=text) from e
    if not isinstance(data, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(data).__name__}", raw=text)
    return data


# ═══════════════════════════════════════════════════════════════════════════
# Stage 2: structural validation
# ═══════════════════════════════════════════════════════════════════════════

def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _require(data: Dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaViolation("missing required field", _join(path, key))
    return data[key]


def _str(data: Dict[str, Any], key: str, path: str) -> str:
    value = _require(data, key, path)
    if not isinstance(value, str):
        raise SchemaViolation(f"expected string, got {type(value).__name__}", _join(path, key))
    return value


def _optional_str(data: Dict[str, Any], key: str, path: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SchemaViolation(f"expected string or null, got {type(value).__name__}", _join(path, key))
    return value


def _object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaViolation(f"expected object, got {type(value).__name__}", path)
    return value


def _list(data: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = _require(data, key, path)
    if not isinstance(value, list):
        raise SchemaViolation(f"expected array, got {type(value).__name__}", _join(path, key))
    return value


def _str_list(data: Dict[str, Any], key: str, path: str) -> List[str]:
    items = _list(data, key, path)
    for idx, item in enumerate(items):
        if not isinstance(item, str):
            raise SchemaViolation(f"expected string, got {type(item).__name__}", f"{_join(path, key)}[{idx}]")
    return list(items)


def _objects(data: Dict[str, Any], key: str, path: str, build: Callable[[Dict[str, Any], str], Any]) -> List[Any]:
    base = _join(path, key)
    return [build(_object(item, f"{base}[{idx}]"), f"{base}[{idx}]") for idx, item in enumerate(_list(data, key, path))]


def _outline_node(data: Dict[str, Any], path: str) -> OutlineNode:
    level = _str(data, "level", path)
    if level not in HEADING_LEVELS:
        raise SchemaViolation(f"level must be one of {', '.join(HEADING_LEVELS)}, got {level!r}", _join(path, "level"))
    return OutlineNode(
        level=level,
        title=_str(data, "title", path),
        description=_str(data, "description", path),
        guidelines=_str(data, "guidelines", path),
        source_competitor=_optional_str(data, "sourceCompetitor", path),
    )


def _placement(data: Dict[str, Any], path: str) -> ImagePlacement:
    return ImagePlacement(
        after_section=_str(data, "afterSection", path),
        description=_str(data, "description", path),
        ai_prompt=_str(data, "aiPrompt", path),
    )


def _faq(data: Dict[str, Any], path: str) -> FaqItem:
    return FaqItem(
        question=_str(data, "question", path),
        answer=_str(data, "answer", path),
        rationale=_str(data, "rationale", path),
    )


def _image_strategy(data: Dict[str, Any], path: str) -> ImageStrategy:
    total = _require(data, "totalImages", path)
    if isinstance(total, bool) or not isinstance(total, int):
        raise SchemaViolation(f"expected integer, got {type(total).__name__}", _join(path, "totalImages"))
    if total < 0:
        raise SchemaViolation(f"must be >= 0, got {total}", _join(path, "totalImages"))
    return ImageStrategy(total_images=total, placements=_objects(data, "placements", path, _placement))


def parse_outline(data: Dict[str, Any]) -> ArticleOutline:
    """Validate a decoded reply against the ArticleOutline shape. Orderings are kept as received."""
    return ArticleOutline(
        suggested_titles=_str_list(data, "suggestedTitles", ""),
        structure=_objects(data, "structure", "", _outline_node),
        image_strategy=_image_strategy(_object(_require(data, "imageStrategy", ""), "imageStrategy"), "imageStrategy"),
        target_word_count=_str(data, "targetWordCount", ""),
        faqs=_objects(data, "faqs", "", _faq),
    )


def parse_draft_analysis(data: Dict[str, Any]) -> DraftAnalysis:
    """Validate a decoded reply against the DraftAnalysis shape. Out-of-range scores are rejected, not clamped."""
    score = _require(data, "score", "")
    if isinstance(score, bool) or not isinstance(score, Real):
        raise SchemaViolation(f"expected number, got {type(score).__name__}", "score")
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise SchemaViolation(f"must lie within [{SCORE_MIN}, {SCORE_MAX}], got {score}", "score")
    return DraftAnalysis(
        score=score,
        missing_sections=_str_list(data, "missingSections", ""),
        keyword_gaps=_str_list(data, "keywordGaps", ""),
        suggestions=_str_list(data, "suggestions", ""),
        readability_feedback=_str(data, "readabilityFeedback", ""),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Images
# ═══════════════════════════════════════════════════════════════════════════

def extract_image_data_uri(parts: Sequence[ReplyPart]) -> str:
    """First part carrying inline image data, as a PNG data URI."""
    for part in parts:
        if part.inline_data:
            return f"{IMAGE_DATA_URI_PREFIX}{part.inline_data}"
    raise ImageGenerationFailed("Reply contained no inline image data")
