import streamlit as st
import requests
from typing import Optional

from charter.core.config import settings


class AuthComponent:
    """Holds the access token issued by the identity provider for this browser session."""

    def __init__(self, api_base_url: str = settings.API_BASE_URL):
        self.api_base_url = api_base_url

    def sign_in(self, token: str) -> bool:
        """Check the token against the API and keep it in session state"""
        try:
            response = requests.get(
                f"{self.api_base_url}/auth/me",
                headers={"Authorization": f"Bearer {token}"},
                timeout=5,
            )
        except requests.RequestException as e:
            st.error(f"Sign-in error: {e}")
            return False

        if response.status_code != 200:
            return False
        st.session_state["access_token"] = token
        st.session_state["user_info"] = response.json()
        return True

    def sign_out(self):
        """Clear the token and cached user info"""
        for key in ("access_token", "user_info"):
            if key in st.session_state:
                del st.session_state[key]

    def is_authenticated(self) -> bool:
        return "access_token" in st.session_state

    def get_token(self) -> Optional[str]:
        return st.session_state.get("access_token")

    def get_user_info(self) -> Optional[dict]:
        return st.session_state.get("user_info")

    def is_admin(self) -> bool:
        user_info = self.get_user_info()
        return bool(user_info and user_info.get("is_admin"))

    def render_sign_in_form(self):
        """Render the token form"""
        st.header("🔐 Admin sign-in")

        with st.form("sign_in_form"):
            token = st.text_input("Access token", type="password")
            submitted = st.form_submit_button("Sign in")

            if submitted:
                if not token:
                    st.error("Please paste your access token")
                elif self.sign_in(token.strip()):
                    st.success("Signed in")
                    st.rerun()
                else:
                    st.error("This token was not accepted")

    def require_admin(self) -> bool:
        """Render the sign-in form unless an admin is signed in"""
        if not self.is_authenticated():
            self.render_sign_in_form()
            return False
        if not self.is_admin():
            st.error("Your account does not have the admin role.")
            if st.button("Sign out"):
                self.sign_out()
                st.rerun()
            return False
        return True

    def render_user_info(self):
        """Render user info and sign-out button in sidebar"""
        user_info = self.get_user_info()
        if user_info:
            st.sidebar.write(f"👤 Signed in as: **{user_info['id']}**")
            st.sidebar.write(f"🏷️ Roles: **{', '.join(user_info['roles']) or 'none'}**")

            if st.sidebar.button("Sign out"):
                self.sign_out()
                st.rerun()

    def get_headers(self) -> dict:
        """Get authorization headers for API requests"""
        token = self.get_token()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}


# Global auth instance
auth = AuthComponent()
