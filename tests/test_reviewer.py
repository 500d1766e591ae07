import asyncio
import json

import pytest

from scholarscan.agents.reviewer import (
    CONNECTION_ERROR, NO_CONTENT_ERROR, NO_RESPONSE_ERROR, UNEXPECTED_ERROR,
    ReviewRequestError, analyze_document, build_parts, classify_error, parse_feedback,
)
from scholarscan.config import PDF_MIME_TYPE
from scholarscan.schemas import CustomCriterion, FileData, ReviewCategory, ReviewConfiguration

from conftest import FakeLLM, make_response

PDF = FileData(name="paper.pdf", mime_type=PDF_MIME_TYPE, data="JVBERi0=")


class TestBuildParts:
    def test_file_then_text(self):
        parts = build_parts("pasted", PDF)
        assert parts == [
            {"inline_data": {"mime_type": PDF_MIME_TYPE, "data": "JVBERi0=", "name": "paper.pdf"}},
            {"text": "pasted"},
        ]

    def test_text_only(self):
        assert build_parts("pasted", None) == [{"text": "pasted"}]

    def test_nothing(self):
        with pytest.raises(ReviewRequestError, match=NO_CONTENT_ERROR):
            build_parts("", None)


class TestParseFeedback:
    @pytest.mark.parametrize("text", [None, ""])
    def test_no_response(self, text):
        with pytest.raises(ReviewRequestError) as exc:
            parse_feedback(text)
        assert str(exc.value) == NO_RESPONSE_ERROR

    def test_not_json(self):
        with pytest.raises(ReviewRequestError, match="invalid JSON"):
            parse_feedback("Sure! Here is your review: {")

    def test_missing_reviews_is_a_failure(self):
        data = make_response()
        del data["reviews"]
        with pytest.raises(ReviewRequestError, match="reviews"):
            parse_feedback(json.dumps(data))

    def test_ok(self):
        assert parse_feedback(json.dumps(make_response())).summary

    @pytest.mark.parametrize("score", ["85", 85.0, True])
    def test_overall_score_must_be_an_integer(self, score):
        with pytest.raises(ReviewRequestError, match="overallScore"):
            parse_feedback(json.dumps(make_response(overallScore=score)))

    def test_general_feedback_must_be_a_boolean(self):
        data = make_response()
        data["reviews"][0]["feedbackPoints"][2]["general_feedback"] = "yes"
        with pytest.raises(ReviewRequestError, match="general_feedback"):
            parse_feedback(json.dumps(data))

    def test_enum_strings_still_accepted(self):
        feedback = parse_feedback(json.dumps(make_response(overallScore=85)))
        assert feedback.overall_score == 85
        assert feedback.reviews[0].score.value == "Good"
        assert feedback.reviews[0].feedback_points[2].general_feedback is True


class TestClassifyError:
    @pytest.mark.parametrize("msg", ["Rpc failed due to xhr error", "xhr error", "Connection error."])
    def test_transport_markers(self, msg):
        assert classify_error(RuntimeError(msg)) == CONNECTION_ERROR

    def test_builtin_connection_error(self):
        assert classify_error(ConnectionResetError("peer reset")) == CONNECTION_ERROR

    def test_verbatim(self):
        assert classify_error(ValueError("400 INVALID_ARGUMENT: bad key")) == "400 INVALID_ARGUMENT: bad key"

    def test_empty_message(self):
        assert classify_error(RuntimeError()) == UNEXPECTED_ERROR

    def test_request_errors_pass_through(self):
        assert classify_error(ReviewRequestError(NO_RESPONSE_ERROR)) == NO_RESPONSE_ERROR


def _configuration():
    return ReviewConfiguration(
        category=ReviewCategory.JOURNAL,
        selected_criteria=["Originality", "Clarity"],
        custom_criteria=[CustomCriterion(id="1", name="Methodology"), CustomCriterion(id="2")],
    )


class TestAnalyzeDocument:
    def test_single_call_with_fixed_settings(self, fake_llm):
        fb = asyncio.run(analyze_document(fake_llm, _configuration(), "essay text", PDF))
        assert [r.criterion for r in fb.reviews] == ["Clarity", "Originality"]
        assert len(fake_llm.calls) == 1
        call = fake_llm.calls[0]
        assert call["temperature"] == 0.3
        assert call["response_schema"]["required"] == ["summary", "overallScore", "reviews"]
        assert '["Clarity", "Originality", "Methodology"]' in call["system"]
        assert [list(p) for p in call["parts"]] == [["inline_data"], ["text"]]

    def test_no_retry_on_failure(self):
        llm = FakeLLM(error=RuntimeError("Rpc failed"))
        with pytest.raises(ReviewRequestError) as exc:
            asyncio.run(analyze_document(llm, _configuration(), "essay", None))
        assert str(exc.value) == CONNECTION_ERROR
        assert len(llm.calls) == 1

    def test_empty_model_output(self):
        llm = FakeLLM(response="")
        with pytest.raises(ReviewRequestError, match=NO_RESPONSE_ERROR):
            asyncio.run(analyze_document(llm, _configuration(), "essay", None))

    def test_rejected_before_dispatch_without_content(self, fake_llm):
        with pytest.raises(ReviewRequestError, match=NO_CONTENT_ERROR):
            asyncio.run(analyze_document(fake_llm, _configuration(), "", None))
        assert fake_llm.calls == []
