import copy
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..config import Config
from ..schemas import (
    AVAILABLE_CRITERIA, EMPTY_GLYPH, FILLED_GLYPH,
    CritiqueLevel, CustomCriterion, ReviewCategory, Score,
)
from .personas import persona_for

PROMPT_FILE = Path(__file__).parents[1] / "prompts" / "review_system.txt"

# Fixed response contract. It does not depend on the review configuration.
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "overallScore": {"type": "integer", "minimum": 0, "maximum": 100},
        "reviews": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "criterion": {"type": "string"},
                    "score": {"type": "string", "enum": [s.value for s in Score]},
                    "visualBar": {
                        "type": "string",
                        "description": "Visual representation of score, e.g. ■■■■□",
                        "minLength": 5,
                        "maxLength": 5,
                    },
                    "feedbackPoints": {
                        "type": "array",
                        "minItems": 3,
                        "maxItems": 3,
                        "items": {
                            "type": "object",
                            "properties": {
                                "point": {"type": "string"},
                                "highlight": {"type": "string"},
                                "general_feedback": {"type": "boolean"},
                            },
                            "required": ["point"],
                        },
                    },
                },
                "required": ["criterion", "score", "visualBar", "feedbackPoints"],
            },
        },
    },
    "required": ["summary", "overallScore", "reviews"],
}


@dataclass(frozen=True)
class CompiledPrompt:
    instruction: str
    schema: Dict[str, Any]
    criteria_names: List[str]


@lru_cache(maxsize=1)
def _load_template() -> str:
    return PROMPT_FILE.read_text(encoding="utf-8")


def criteria_names(selected_criteria: Sequence[str], custom_criteria: Sequence[CustomCriterion]) -> List[str]:
    """Built-in criteria in catalog order, then named custom criteria in entry order."""
    chosen = set(selected_criteria)
    names = [c for c in AVAILABLE_CRITERIA if c in chosen]
    names.extend(c.name for c in custom_criteria if c.name.strip())
    return names


def format_custom_criteria(custom_criteria: Sequence[CustomCriterion]) -> str:
    lines = []
    for c in custom_criteria:
        if not c.name.strip():
            continue
        focus = f" (Focus on: {c.keywords})" if c.keywords.strip() else ""
        lines.append(f"- {c.name}{focus}")
    return "\n".join(lines)


def compile_review_prompt(category: ReviewCategory, critique_level: CritiqueLevel,
                          selected_criteria: Sequence[str], custom_criteria: Sequence[CustomCriterion],
                          config: Config = None) -> CompiledPrompt:
    """Build the system instruction and response schema for one review request.

    Pure: the same inputs always give the same instruction text and schema.
    """
    config = config or Config()
    category = ReviewCategory(category)
    critique_level = CritiqueLevel(critique_level)
    names = criteria_names(selected_criteria, custom_criteria)

    custom_lines = format_custom_criteria(custom_criteria)
    custom_block = f"Custom Rubric Items:\n{custom_lines}\n" if custom_lines else ""

    scores = [f'"{s.value}"' for s in Score]
    bar_example = FILLED_GLYPH * 3 + EMPTY_GLYPH * (config.visual_bar_length - 3)

    instruction = _load_template().format(
        category=category.value,
        critique_level=critique_level.value,
        criteria_json=json.dumps(names, ensure_ascii=False),
        custom_block=custom_block,
        persona_block=persona_for(category, critique_level).render(critique_level),
        criteria_list=", ".join(names),
        score_values=", ".join(scores[:-1]) + f", or {scores[-1]}",
        bar_length=config.visual_bar_length,
        filled=FILLED_GLYPH,
        empty=EMPTY_GLYPH,
        bar_example=bar_example,
        points=config.feedback_points_per_criterion,
    )
    return CompiledPrompt(instruction=instruction, schema=copy.deepcopy(RESPONSE_SCHEMA), criteria_names=names)
