"""
Instruction builders and strict response schemas for the content intelligence client.
"""
import json
from typing import Any, Dict, Sequence

from config.settings import DEFAULT_OUTPUT_LANGUAGE, IMAGE_STYLE_SUFFIX, OUTPUT_LANGUAGES
from core.models import ArticleOutline

# ═══════════════════════════════════════════════════════════════════════════
# Response schemas (strict mode: every property required, no extras)
# ═══════════════════════════════════════════════════════════════════════════

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": _STRING}


def _object(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


OUTLINE_SCHEMA: Dict[str, Any] = _object({
    "suggestedTitles": _STRING_LIST,
    "structure": {
        "type": "array",
        "items": _object({
            "level": {"type": "string", "enum": ["H2", "H3"]},
            "title": _STRING,
            "description": _STRING,
            "guidelines": _STRING,
            "sourceCompetitor": {"type": ["string", "null"]},
        }),
    },
    "imageStrategy": _object({
        "totalImages": {"type": "integer"},
        "placements": {
            "type": "array",
            "items": _object({
                "afterSection": _STRING,
                "description": _STRING,
                "aiPrompt": _STRING,
            }),
        },
    }),
    "targetWordCount": _STRING,
    "faqs": {
        "type": "array",
        "items": _object({
            "question": _STRING,
            "answer": _STRING,
            "rationale": _STRING,
        }),
    },
})

DRAFT_ANALYSIS_SCHEMA: Dict[str, Any] = _object({
    "score": {"type": "number"},
    "missingSections": _STRING_LIST,
    "keywordGaps": _STRING_LIST,
    "suggestions": _STRING_LIST,
    "readabilityFeedback": _STRING,
})


# ═══════════════════════════════════════════════════════════════════════════
# Instructions
# ═══════════════════════════════════════════════════════════════════════════

_OUTLINE_PROMPT = """You are a top-tier SEO content strategist. Analyse the competitor URLs below in depth and build a content blueprint that outranks them.
[Core keywords]: {keywords}
[Target region]: {region}
[Competitor URLs]:
{urls}

Return detailed JSON with:
1. Suggested titles (suggestedTitles)
2. H2/H3 structure (structure): level, title, content description and writing guidelines for every heading; set sourceCompetitor to the URL that inspired the section, or null.
3. Image strategy (imageStrategy):
   - recommended total number of images (totalImages)
   - concrete placements (placements): the section each image follows (afterSection), what the image shows (description) and an AI image-generation prompt (aiPrompt).
4. Target word count (targetWordCount)
5. Must-have FAQ (faqs): question, answer and why it matters (rationale).

Language: {language}.
Answer with a single JSON object only, no prose before or after it."""

_DRAFT_PROMPT = """Analyse the user's draft against the planned SEO blueprint.
[SEO blueprint]: {outline}
[Draft]: {draft}
[Core keywords]: {keywords}

Evaluate how well the draft follows the blueprint and point out what is lacking.
Return JSON with:
1. Overall score from 0 to 100 (score)
2. Missing sections or core points (missingSections)
3. Keyword distribution advice and gaps (keywordGaps)
4. Concrete improvement suggestions (suggestions)
5. Feedback on readability and professionalism (readabilityFeedback)

Language: {language}.
Answer with a single JSON object only, no prose before or after it."""


def language_name(language: str) -> str:
    return OUTPUT_LANGUAGES.get(language, OUTPUT_LANGUAGES[DEFAULT_OUTPUT_LANGUAGE])


def build_outline_prompt(
    keywords: str,
    target_region: str,
    competitor_urls: Sequence[str],
    language: str = DEFAULT_OUTPUT_LANGUAGE,
) -> str:
    """Embed keywords, region and URLs verbatim (URLs one per line)."""
    return _OUTLINE_PROMPT.format(
        keywords=keywords,
        region=target_region,
        urls="\n".join(competitor_urls),
        language=language_name(language),
    )


def build_draft_prompt(
    outline: ArticleOutline,
    draft_text: str,
    keywords: str,
    language: str = DEFAULT_OUTPUT_LANGUAGE,
) -> str:
    return _DRAFT_PROMPT.format(
        outline=json.dumps(outline.to_dict(), ensure_ascii=False),
        draft=draft_text,
        keywords=keywords,
        language=language_name(language),
    )


def build_image_prompt(prompt: str) -> str:
    """Caller prompt + the fixed house style."""
    return f"{prompt}{IMAGE_STYLE_SUFFIX}"
