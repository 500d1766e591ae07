import datetime

import pytest

from scholarscan.render import render_markdown, report_filename, request_export, score_label
from scholarscan.schemas import ReviewFeedback

from conftest import make_response


@pytest.mark.parametrize("score,label", [
    (100, "Exceptional"), (90, "Exceptional"), (89, "Very Good"), (80, "Very Good"),
    (75, "Good"), (60, "Fair"), (59, "Needs Improvement"), (0, "Needs Improvement"),
])
def test_score_label(score, label):
    assert score_label(score) == label


def test_markdown():
    md = render_markdown(ReviewFeedback.model_validate(make_response(["Clarity", "Evidence Use"])))
    assert "2 Criteria Analyzed" in md
    assert "**Overall Score:** 72 (Good)" in md
    assert "## Evidence Use" in md
    assert "`■■■■□` **Good**" in md
    assert '> "quoted sentence 0"' in md


def test_general_feedback_hides_highlight():
    data = make_response()
    fp = data["reviews"][0]["feedbackPoints"][2]
    fp["highlight"] = "should not show"
    md = render_markdown(ReviewFeedback.model_validate(data))
    assert "should not show" not in md


class TestExportPlaceholder:
    DAY = datetime.date(2024, 5, 17)

    def test_filename(self):
        assert report_filename("pdf", self.DAY) == "ScholarScan_Report_2024-05-17.pdf"

    @pytest.mark.parametrize("fmt", ["pdf", "DOCX"])
    def test_acknowledges_without_exporting(self, fmt):
        msg = request_export(fmt, self.DAY)
        assert f"ScholarScan_Report_2024-05-17.{fmt.lower()}" in msg
        assert "placeholder" in msg

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            request_export("odt")
