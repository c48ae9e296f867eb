from typing import Any, Dict, List

import streamlit as st

SHOPPING_LIST_KEY = "yacht_shopping_list"


class SessionStateCartStorage:
    """Shopping list storage backed by Streamlit session state."""

    def __init__(self, key: str = SHOPPING_LIST_KEY):
        self.key = key

    def load(self) -> List[Dict[str, Any]]:
        return [dict(item) for item in st.session_state.get(self.key, [])]

    def save(self, items: List[Dict[str, Any]]) -> None:
        st.session_state[self.key] = [dict(item) for item in items]


def render_language_picker():
    return st.sidebar.radio(
        "Language / اللغة",
        ["en", "ar"],
        format_func=lambda code: "English" if code == "en" else "العربية",
        key="language",
    )


def api_error_message(response) -> str:
    """The single message the API put in an error response."""
    try:
        return response.json().get("detail", response.text)
    except ValueError:
        return response.text
