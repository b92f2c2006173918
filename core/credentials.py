"""
Credentials management for seo-content-blueprint.
Loads from .env file by default, with an optional override mapping
(filled from the Streamlit sidebar).
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()


@dataclass
class Credentials:
    openai_api_key: str = ""


def get_credentials(override: Optional[Dict[str, str]] = None) -> Credentials:
    """
    Get API credentials. Priority:
    1. Explicit override mapping (sidebar input)
    2. Environment variables / .env file
    """
    creds = Credentials(openai_api_key=os.getenv("OPENAI_API_KEY", ""))
    if override and override.get("openai_api_key"):
        creds.openai_api_key = override["openai_api_key"]
    return creds


def render_credentials_sidebar() -> Dict[str, str]:
    """Render the API key override field in the Streamlit sidebar and return the override."""
    import streamlit as st

    with st.sidebar.expander("🔑 API Credentials", expanded=False):
        st.caption("Leave empty to use the .env file")

        current = st.session_state.get("credentials_override", {})

        openai_key = st.text_input(
            "OpenAI API Key",
            value=current.get("openai_api_key", ""),
            type="password",
            key="cred_openai_key",
        )

        if st.button("💾 Save", key="cred_save"):
            st.session_state["credentials_override"] = {"openai_api_key": openai_key}
            st.success("Credentials updated for this session")

    return st.session_state.get("credentials_override", {})
