"""
Reply parsing: extraction, structural validation, image part scan.
"""
import copy

import pytest

from core.errors import ImageGenerationFailed, MalformedResponse, SchemaViolation
from core.generation import ReplyPart
from modules.content_intelligence.parser import (
    extract_image_data_uri,
    extract_json_object,
    load_json_object,
    parse_draft_analysis,
    parse_outline,
)


# ── Extraction ──────────────────────────────────────────────────────────────

def test_extract_strips_surrounding_text():
    assert extract_json_object('Here is the result:\n{"a":1}\nThanks') == '{"a":1}'


def test_extract_is_idempotent():
    once = extract_json_object('prefix {"a": {"b": 2}} suffix')
    assert once == '{"a": {"b": 2}}'
    assert extract_json_object(once) == once


def test_extract_without_braces_falls_back_to_trimmed_text():
    assert extract_json_object("  no json here \n") == "no json here"


def test_load_without_braces_is_malformed():
    with pytest.raises(MalformedResponse) as exc:
        load_json_object("Sorry, I cannot help with that.")
    assert exc.value.raw == "Sorry, I cannot help with that."


@pytest.mark.parametrize("raw", ["", None, "   "])
def test_load_empty_is_malformed(raw):
    with pytest.raises(MalformedResponse):
        load_json_object(raw)


def test_load_broken_json_is_malformed():
    with pytest.raises(MalformedResponse):
        load_json_object('{"a": 1,, }')


def test_load_non_object_is_malformed():
    with pytest.raises(MalformedResponse):
        load_json_object("[1, 2, 3]")


# ── Outline ─────────────────────────────────────────────────────────────────

def test_parse_outline_keeps_order(outline_payload):
    outline = parse_outline(outline_payload)
    assert [n.title for n in outline.structure] == ["Why stand while working", "Posture", "How to choose"]
    assert [p.after_section for p in outline.image_strategy.placements] == ["How to choose", "Why stand while working"]
    assert outline.image_strategy.total_images == 2
    assert outline.target_word_count == "2500-3000"
    assert outline.structure[0].source_competitor == "https://a.example.com/desks"
    assert outline.structure[1].source_competitor is None
    assert outline.structure[2].source_competitor is None
    assert outline.faqs[0].rationale == "High search volume."


@pytest.mark.parametrize("field", ["suggestedTitles", "structure", "imageStrategy", "targetWordCount", "faqs"])
def test_parse_outline_missing_top_level_field(outline_payload, field):
    del outline_payload[field]
    with pytest.raises(SchemaViolation) as exc:
        parse_outline(outline_payload)
    assert exc.value.path == field


def test_parse_outline_missing_nested_field(outline_payload):
    del outline_payload["structure"][1]["guidelines"]
    with pytest.raises(SchemaViolation) as exc:
        parse_outline(outline_payload)
    assert exc.value.path == "structure[1].guidelines"


def test_parse_outline_rejects_unknown_level(outline_payload):
    outline_payload["structure"][0]["level"] = "H4"
    with pytest.raises(SchemaViolation) as exc:
        parse_outline(outline_payload)
    assert exc.value.path == "structure[0].level"


def test_parse_outline_rejects_negative_image_count(outline_payload):
    outline_payload["imageStrategy"]["totalImages"] = -1
    with pytest.raises(SchemaViolation):
        parse_outline(outline_payload)


def test_parse_outline_rejects_non_integer_image_count(outline_payload):
    outline_payload["imageStrategy"]["totalImages"] = "two"
    with pytest.raises(SchemaViolation) as exc:
        parse_outline(outline_payload)
    assert exc.value.path == "imageStrategy.totalImages"


def test_parse_outline_missing_placement_prompt(outline_payload):
    del outline_payload["imageStrategy"]["placements"][1]["aiPrompt"]
    with pytest.raises(SchemaViolation) as exc:
        parse_outline(outline_payload)
    assert exc.value.path == "imageStrategy.placements[1].aiPrompt"


def test_parse_outline_rejects_non_string_title(outline_payload):
    outline_payload["suggestedTitles"].append(42)
    with pytest.raises(SchemaViolation) as exc:
        parse_outline(outline_payload)
    assert exc.value.path == "suggestedTitles[2]"


# ── Draft analysis ──────────────────────────────────────────────────────────

def test_parse_draft_analysis(draft_payload):
    analysis = parse_draft_analysis(draft_payload)
    assert analysis.score == 72.5
    assert analysis.missing_sections == ["How to choose"]
    assert analysis.readability_feedback == "Clear and professional."


@pytest.mark.parametrize("score", [150, -1, 100.01])
def test_parse_draft_analysis_out_of_range_score(draft_payload, score):
    draft_payload["score"] = score
    with pytest.raises(SchemaViolation) as exc:
        parse_draft_analysis(draft_payload)
    assert exc.value.path == "score"


@pytest.mark.parametrize("score", [0, 100])
def test_parse_draft_analysis_boundary_scores(draft_payload, score):
    assert parse_draft_analysis(draft_payload | {"score": score}).score == score


@pytest.mark.parametrize("score", [True, "80", None])
def test_parse_draft_analysis_non_numeric_score(draft_payload, score):
    draft_payload["score"] = score
    with pytest.raises(SchemaViolation):
        parse_draft_analysis(draft_payload)


def test_parse_draft_analysis_missing_field(draft_payload):
    payload = copy.deepcopy(draft_payload)
    del payload["keywordGaps"]
    with pytest.raises(SchemaViolation) as exc:
        parse_draft_analysis(payload)
    assert exc.value.path == "keywordGaps"


# ── Images ──────────────────────────────────────────────────────────────────

def test_image_uri_from_first_inline_part():
    parts = [ReplyPart(text="ok"), ReplyPart(inline_data="iVBORw0KG..."), ReplyPart(inline_data="second")]
    assert extract_image_data_uri(parts) == "data:image/png;base64,iVBORw0KG..."


def test_image_without_inline_part_fails():
    with pytest.raises(ImageGenerationFailed):
        extract_image_data_uri([ReplyPart(text="ok")])


def test_load_with_reversed_braces_is_malformed():
    assert extract_json_object("} x {") == "} x {"
    with pytest.raises(MalformedResponse):
        load_json_object("} x {")


def test_parse_outline_rejects_non_string_source(outline_payload):
    outline_payload["structure"][0]["sourceCompetitor"] = 5
    with pytest.raises(SchemaViolation) as exc:
        parse_outline(outline_payload)
    assert exc.value.path == "structure[0].sourceCompetitor"
