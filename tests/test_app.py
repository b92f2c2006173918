"""
Streamlit flow, driven headless through streamlit's AppTest.
"""
from pathlib import Path

from streamlit.testing.v1 import AppTest

from core.models import AppStep
from modules.content_intelligence.parser import parse_outline

APP = str(Path(__file__).resolve().parent.parent / "app.py")


def test_fresh_session_starts_in_setup():
    at = AppTest.from_file(APP, default_timeout=30)
    at.run()
    assert not at.exception
    assert at.session_state["step"] == AppStep.SETUP


def test_outline_ready_survives_rerun(outline_payload):
    at = AppTest.from_file(APP, default_timeout=30)
    at.session_state["outline"] = parse_outline(outline_payload)
    at.session_state["step"] = AppStep.OUTLINE_READY
    at.run()
    assert not at.exception
    assert at.session_state["step"] == AppStep.OUTLINE_READY
