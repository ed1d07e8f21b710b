"""
Streamlit app tests driven through the script runner.
"""

from pathlib import Path

import pytest

testing = pytest.importorskip("streamlit.testing.v1")

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


def run_app():
    app = testing.AppTest.from_file(APP_PATH, default_timeout=60)
    app.run()
    return app


class TestHandLoadInput:

    def test_default_load_is_accepted(self):
        app = run_app()

        assert not app.exception
        assert app.session_state["hand_load_mass"] == 5.0
        assert len(app.warning) == 0

    def test_invalid_text_keeps_last_accepted_load_across_reruns(self):
        app = run_app()
        app.sidebar.text_input[0].set_value("12.5").run()
        assert app.session_state["hand_load_mass"] == 12.5

        app.sidebar.text_input[0].set_value("heavy").run()

        assert app.session_state["hand_load_mass"] == 12.5
        assert "using 12.5 kg" in app.warning[0].value

    def test_negative_load_is_rejected(self):
        app = run_app()

        app.sidebar.text_input[0].set_value("-3").run()

        assert app.session_state["hand_load_mass"] == 5.0
        assert "using 5.0 kg" in app.warning[0].value
