from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP = str(Path(__file__).parents[1] / "streamlit_app.py")


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.delenv("SCHOLARSCAN_MODEL", raising=False)
    at = AppTest.from_file(APP, default_timeout=30)
    at.run()
    assert not at.exception
    return at


class TestKeywordBox:
    def test_accepted_edit_reaches_session(self, app):
        app.text_area(key="custom_kw_1").input("sampling, validity").run()
        assert app.session_state["review_session"].custom_criterion("1").keywords == "sampling, validity"
        assert not app.warning

    def test_over_cap_edit_reverts_the_box(self, app):
        app.text_area(key="custom_kw_1").input("short focus").run()
        app.text_area(key="custom_kw_1").input(" ".join(["word"] * 201)).run()

        assert app.session_state["custom_kw_1"] == "short focus"
        assert app.text_area(key="custom_kw_1").value == "short focus"
        assert app.session_state["review_session"].custom_criterion("1").keywords == "short focus"
        assert "200 words" in app.warning[0].value

    def test_warning_clears_on_next_run(self, app):
        app.text_area(key="custom_kw_2").input(" ".join(["word"] * 201)).run()
        assert len(app.warning) == 1
        app.run()
        assert not app.warning
