import json

import pytest


def make_point(i, general=False):
    point = {"point": f"Issue {i} in the argument [Section: Introduction]"}
    if general:
        point["general_feedback"] = True
    else:
        point["highlight"] = f"quoted sentence {i}"
    return point


def make_review(criterion, n_points=3, score="Good", bar="■■■■□"):
    return {
        "criterion": criterion,
        "score": score,
        "visualBar": bar,
        "feedbackPoints": [make_point(i, general=(i == n_points - 1)) for i in range(n_points)],
    }


def make_response(criteria=("Clarity",), n_points=3, **overrides):
    data = {
        "summary": "A clear essay with thin evidence.",
        "overallScore": 72,
        "reviews": [make_review(c, n_points) for c in criteria],
    }
    data.update(overrides)
    return data


class FakeLLM:
    """Records calls and replays a canned response (or raises)."""

    model_name = "fake-model"

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_structured(self, parts, system, response_schema, temperature=0.3, max_tokens=None):
        self.calls.append({
            "parts": parts,
            "system": system,
            "response_schema": response_schema,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def good_response():
    return json.dumps(make_response(["Clarity", "Originality"]))


@pytest.fixture
def fake_llm(good_response):
    return FakeLLM(response=good_response)
