"""Streamlit UI for sending prompts to the Gemini Relay API."""

import json
import logging
import os
from typing import Optional

import httpx
import streamlit as st
import streamlit.components.v1 as components

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Configuration ---
BACKEND_API_URL = os.getenv("GEMINI_RELAY_API_URL", "http://localhost:5000/api/gemini-query")
REQUEST_TIMEOUT = 300.0 # seconds; covers both Gemini calls

THEMES = {
    "dark": {"background": "#111827", "text": "#f3f4f6", "panel": "#1f2937"},
    "light": {"background": "#f9fafb", "text": "#111827", "panel": "#ffffff"},
}
DEFAULT_THEME = "dark"
THEME_STORAGE_KEY = "theme"

# Runs in the component iframe, which shares the app's origin.
# Without a ?theme= in the URL, a theme saved by an earlier visit is restored
# by reloading with it; otherwise the current theme is saved.
_REMEMBER_THEME_JS = """
<script>
try {{
  const storage = window.parent.localStorage;
  const saved = storage.getItem({key});
  if (!{has_query_param} && saved && saved !== {theme} && {known}.includes(saved)) {{
    const url = new URL(window.parent.location.href);
    url.searchParams.set("theme", saved);
    window.parent.location.replace(url.toString());
  }} else {{
    storage.setItem({key}, {theme});
  }}
}} catch (e) {{
  console.warn("Theme preference not persisted:", e);
}}
</script>
"""


def resolve_theme(value: Optional[str]) -> str:
    """Returns `value` if it names a known theme, else the default theme."""
    return value if value in THEMES else DEFAULT_THEME


def remember_theme(theme: str, has_query_param: bool):
    """Saves the theme in the browser's localStorage, or restores a saved one."""
    components.html(
        _REMEMBER_THEME_JS.format(
            key=json.dumps(THEME_STORAGE_KEY),
            theme=json.dumps(theme),
            has_query_param=json.dumps(has_query_param),
            known=json.dumps(sorted(THEMES)),
        ),
        height=0,
    )


def apply_theme(theme: str):
    colors = THEMES[theme]
    st.markdown(
        f"""
        <style>
        .stApp {{ background-color: {colors['background']}; color: {colors['text']}; }}
        .stApp textarea, .stApp .stMarkdown {{ color: {colors['text']}; }}
        .stApp textarea {{ background-color: {colors['panel']}; }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def error_text(response: httpx.Response) -> str:
    """Builds a readable error from the relay's `{"message", "error"}` body."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP error! status: {response.status_code}"
    message = data.get("message") or f"HTTP error! status: {response.status_code}"
    if data.get("error"):
        return f"{message} ({data['error']})"
    return message


# --- Theme (cosmetic) ---
# The choice lives in the `theme` query parameter, so it survives reloads, and
# is mirrored into the browser's localStorage so a fresh visit restores it.
st.set_page_config(page_title="Gemini Chat", layout="centered")

st.session_state.theme = resolve_theme(st.query_params.get("theme"))

toggle_label = "☀️ Light mode" if st.session_state.theme == "dark" else "🌙 Dark mode"
if st.button(toggle_label, key="theme_toggle"):
    st.query_params["theme"] = "light" if st.session_state.theme == "dark" else "dark"
    st.rerun()
apply_theme(st.session_state.theme)
remember_theme(st.session_state.theme, has_query_param="theme" in st.query_params)

st.title("✨ Gemini Chat")
st.caption("Ask anything. The answer comes back reformatted to be easier to read.")

# --- User Input ---
prompt = st.text_area("Your prompt:", key="prompt_input", height=120)
submit_button = st.button("Send", key="send_button")

# --- API Call and Response Handling ---
if submit_button and prompt:
    try:
        with st.spinner("Thinking..."):
            with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
                logger.info(f"Sending prompt to backend: '{prompt[:50]}...'")
                response = client.post(BACKEND_API_URL, json={"prompt": prompt})

        if response.is_success:
            answer = response.json().get("response", "")
            logger.info(f"Received answer from backend: {answer[:100]}...")
            st.markdown("### Response:")
            st.markdown(answer)
        else:
            logger.error(f"Backend returned {response.status_code}: {response.text}")
            st.error(f"Failed to get response: {error_text(response)}")

    except httpx.RequestError as e:
        logger.error(f"Request error calling backend: {e}", exc_info=True)
        st.error("Error: Could not connect to the backend API. Please check your backend server and API key.")
        st.error(f"Details: {e}")
elif submit_button and not prompt:
    st.warning("Please enter a prompt.")
