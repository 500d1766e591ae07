import datetime
from typing import List, Optional

from .schemas import CriterionResult, ReviewFeedback

USAGE_TIPS_TEXT = (
    "This AI reviewer is intended for educational purposes, to help you reflect on and improve your "
    "writing. It can also be used as a learning tool to explore how AI generates feedback and how biases "
    "may appear in automated assessments. The feedback, scores, highlights, and recommendations are "
    "indicative only, as they may be incomplete, inaccurate, or influenced by biases. This tool is not a "
    "substitute for human judgment, and all suggestions should be critically evaluated. Always verify "
    "feedback yourself and consult instructors or peers for final assessment decisions."
)

EXPORT_FORMATS = ("pdf", "docx")

# (lower bound, label), checked top down
SCORE_BANDS = [
    (90, "Exceptional"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Fair"),
]


def score_label(score: int) -> str:
    for bound, label in SCORE_BANDS:
        if score >= bound:
            return label
    return "Needs Improvement"


def _render_criterion(item: CriterionResult) -> str:
    lines = [f"## {item.criterion}", f"`{item.visual_bar}` **{item.score.value}**", ""]
    for i, fp in enumerate(item.feedback_points, 1):
        lines.append(f"{i}. {fp.point}")
        # quotes are only meaningful for specific-issue points
        if fp.highlight and not fp.general_feedback:
            lines.append(f"   > \"{fp.highlight}\"")
    return "\n".join(lines)


def render_markdown(feedback: ReviewFeedback) -> str:
    sections: List[str] = [
        "# Evaluation Report",
        f"{len(feedback.reviews)} Criteria Analyzed",
        f"**Overall Score:** {feedback.overall_score} ({score_label(feedback.overall_score)})",
        f"**Summary**  \n{feedback.summary}",
    ]
    sections.extend(_render_criterion(item) for item in feedback.reviews)
    return "\n\n".join(sections) + "\n"


def report_filename(fmt: str, today: Optional[datetime.date] = None) -> str:
    today = today or datetime.date.today()
    return f"ScholarScan_Report_{today.isoformat()}.{fmt}"


def request_export(fmt: str, today: Optional[datetime.date] = None) -> str:
    """Acknowledge a PDF/DOCX download request. No file is generated."""
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    filename = report_filename(fmt, today)
    return (f"Initiating download for {filename}...\n\n"
            f"(This feature uses a placeholder for {fmt.upper()} generation)")
