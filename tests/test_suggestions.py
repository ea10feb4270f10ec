import json

import pytest
from pydantic import ValidationError

from review_engine.models.report import Level, ReviewScope, Suggestion
from review_engine.services.rules import PlaceholderPolicy
from review_engine.services.suggestions import (
    ReviewPoint,
    build_suggestions,
    classify_points,
    extract_suggestions,
)

SPEC_REVIEW = "Logic Issues:\n- flaw one\n- flaw two\nStructure Issues:\n- org problem"


def test_article_sections_become_suggestions(scope):
    out = extract_suggestions(SPEC_REVIEW, scope)
    assert [s.id for s in out] == ["art1-logic-0", "art1-logic-1", "art1-structure-0"]
    assert [s.title for s in out] == ["Logic Issue 1", "Logic Issue 2", "Structure Issue 1"]
    assert [s.content for s in out] == ["flaw one", "flaw two", "org problem"]
    assert [s.category for s in out] == ["logic", "logic", "structure"]
    assert all(s.code_snippet_id is None for s in out)


def test_extraction_is_deterministic(scope):
    first = [s.model_dump() for s in extract_suggestions(SPEC_REVIEW, scope)]
    second = [s.model_dump() for s in extract_suggestions(SPEC_REVIEW, scope)]
    assert json.dumps(first) == json.dumps(second)


def test_severity_and_lines_are_attached(scope):
    out = extract_suggestions("Citations:\n- incorrect reference on lines 4-5", scope)
    assert out[0].id == "art1-citations-0"
    assert out[0].title == "Citation Issue 1"
    assert out[0].level == Level.HIGH
    assert out[0].severity == "critical"
    assert out[0].priority == "high"
    assert out[0].line_numbers == (4, 5)


def test_code_review_levels(code_scope):
    text = (
        "Bugs:\n- Off-by-one on lines 4-6\n"
        "Readability:\n- This is a critical naming problem\n"
        "Performance:\n- Consider caching results\n"
        "Suggestions:\n- Nice idea to split the module"
    )
    out = {s.category: s for s in extract_suggestions(text, code_scope, "code")}

    bug = out["bug"]
    assert bug.id == "art1-code-s1-bug-0"
    assert bug.title == "Python Bug 1"
    assert bug.level == Level.HIGH
    assert bug.line_numbers == (4, 5, 6)
    assert bug.code_snippet_id == "s1"

    # fixed levels override the wording
    assert out["readability"].level == Level.LOW
    # performance and suggestions keep the keyword heuristic
    assert out["performance"].level == Level.MEDIUM
    assert out["suggestion"].level == Level.LOW
    assert out["suggestion"].title == "Python Suggestion 1"


def test_security_points_are_always_high(code_scope):
    out = extract_suggestions("Security:\n- tokens are logged", code_scope, "code")
    assert out[0].level == Level.HIGH
    assert out[0].title == "Python Security Issue 1"


def test_code_scope_without_snippet_or_language():
    out = extract_suggestions("Bugs:\n- crash", ReviewScope(article_id="a9"), "code")
    assert out[0].id == "a9-code-bug-0"
    assert out[0].title == "Code Bug 1"


def test_unrecognized_headers_fall_back_to_general(scope):
    out = extract_suggestions("Summary:\n- point a\n- point b", scope)
    assert [s.id for s in out] == ["art1-general-0", "art1-general-1"]
    assert [s.title for s in out] == ["General Issue 1", "General Issue 2"]


def test_empty_sections_fall_back_to_raw_text(scope):
    out = extract_suggestions("Intro paragraph.\nLogic Issues:\nStructure Issues:", scope)
    assert len(out) == 1
    assert out[0].id == "art1-general-0"
    assert out[0].title == "Review Point 1"
    assert out[0].content.startswith("Intro paragraph.")


@pytest.mark.parametrize("text", ["", "   \n\t", None])
def test_empty_input_yields_nothing(scope, text):
    assert extract_suggestions(text, scope) == []


def test_placeholder_article(scope):
    out = extract_suggestions("This is TEST CONTENT and not a real article.", scope)
    assert len(out) == 1
    assert out[0].id == "art1-test-content"
    assert out[0].title == "Test Content Detected"
    assert out[0].level == Level.HIGH


def test_placeholder_code(code_scope):
    out = extract_suggestions("TEST CODE: nothing to review", code_scope, "code")
    assert [s.id for s in out] == ["art1-code-s1-test"]
    assert out[0].code_snippet_id == "s1"


def test_placeholder_detection_can_be_disabled(scope):
    out = extract_suggestions("This is TEST CONTENT.", scope, policy=PlaceholderPolicy(enabled=False))
    assert [s.id for s in out] == ["art1-general-0"]


def test_structured_review_mapping(scope):
    text = json.dumps({"sections": {"Reasoning": ["Circular argument"], "references": ["Missing DOI"]}})
    out = extract_suggestions(text, scope)
    assert [s.id for s in out] == ["art1-logic-0", "art1-citations-0"]
    assert out[1].title == "Citation Issue 1"


def test_structured_review_list_in_fence(scope):
    text = (
        "Here is the review:\n```json\n"
        '{"sections": [{"category": "structure", "points": ["Reorder sections", " "]}]}'
        "\n```"
    )
    out = extract_suggestions(text, scope)
    assert [(s.id, s.content) for s in out] == [("art1-structure-0", "Reorder sections")]


def test_structured_placeholder_flag(scope):
    out = extract_suggestions('{"isTestContent": true}', scope)
    assert [s.id for s in out] == ["art1-test-content"]


def test_structured_review_without_points(scope):
    assert extract_suggestions('{"sections": {}}', scope) == []


def test_json_outside_schema_is_free_text(scope):
    out = extract_suggestions('{"foo": 1}', scope)
    assert [s.id for s in out] == ["art1-general-0"]


def test_build_suggestions_ordinals_are_per_category(scope):
    sections = {
        "logic": classify_points(["a", "b"]),
        "general": [ReviewPoint(text="  c  ", level=Level.MEDIUM)],
    }
    out = build_suggestions(sections, scope)
    assert [s.id for s in out] == ["art1-logic-0", "art1-logic-1", "art1-general-0"]
    assert out[2].content == "c"
    assert len({s.id for s in out}) == len(out)


def test_suggestion_is_immutable(scope):
    s = extract_suggestions(SPEC_REVIEW, scope)[0]
    with pytest.raises(ValidationError):
        s.content = "changed"


def test_suggestion_accepts_either_vocabulary():
    base = {"id": "x", "category": "logic", "title": "t", "content": "c"}
    assert Suggestion(**base, severity="warning").level == Level.MEDIUM
    assert Suggestion(**base, priority="high").level == Level.HIGH
    assert Suggestion(**base).level == Level.LOW
    with pytest.raises(ValidationError):
        Suggestion(**base, severity="urgent")


def test_suggestion_line_numbers_sorted_unique():
    s = Suggestion(id="x", category="code", title="t", content="c", line_numbers=[9, 3, 9])
    assert s.line_numbers == (3, 9)


def test_overlong_line_number_does_not_break_extraction(code_scope):
    out = extract_suggestions("Bugs:\n- crash on line " + "9" * 5000, code_scope, "code")
    assert [s.id for s in out] == ["art1-code-s1-bug-0"]
    assert out[0].line_numbers == ()


def test_structured_review_after_braced_preface(scope):
    text = 'Review of the {x} template follows.\n{"sections": {"logic": ["circular argument"]}}'
    out = extract_suggestions(text, scope)
    assert [(s.id, s.content) for s in out] == [("art1-logic-0", "circular argument")]
