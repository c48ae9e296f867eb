import streamlit as st
import requests
import pandas as pd
from datetime import datetime, time

from charter.core.config import settings
from charter.streamlit_pages.components.auth import auth
from charter.streamlit_pages.components.session_storage import api_error_message

st.set_page_config(page_title="Promotions & Settings", page_icon="🏷️", layout="wide")

API_BASE_URL = settings.API_BASE_URL
ITEM_KINDS = {
    "yachts": ["yacht"],
    "services": ["water_sport", "food", "additional_service"],
}


def get_promotions():
    """Fetch all promotions"""
    try:
        response = requests.get(
            f"{API_BASE_URL}/promotions/", headers=auth.get_headers(), timeout=10
        )
    except requests.RequestException as e:
        st.error(f"Cannot reach the API: {e}")
        return []
    if response.status_code == 200:
        return response.json()
    st.error(api_error_message(response))
    return []


def create_promotion(data):
    try:
        response = requests.post(
            f"{API_BASE_URL}/promotions/", json=data, headers=auth.get_headers(), timeout=10
        )
    except requests.RequestException as e:
        return False, str(e)
    if response.status_code == 200:
        return True, None
    return False, api_error_message(response)


def delete_promotion(promotion_id):
    try:
        response = requests.delete(
            f"{API_BASE_URL}/promotions/{promotion_id}", headers=auth.get_headers(), timeout=10
        )
    except requests.RequestException as e:
        return False, str(e)
    if response.status_code == 200:
        return True, None
    return False, api_error_message(response)


def render_promotions():
    promotions = get_promotions()
    if promotions:
        df = pd.DataFrame(promotions)
        columns = [
            "id",
            "title",
            "catalog",
            "item_kind",
            "item_id",
            "discount_percentage",
            "discount_amount",
            "is_active",
            "valid_from",
            "valid_until",
        ]
        st.dataframe(df[columns], use_container_width=True, hide_index=True)

        promotion_id = st.selectbox("Promotion", [promotion["id"] for promotion in promotions])
        if st.button("Delete promotion"):
            ok, error = delete_promotion(promotion_id)
            if ok:
                st.success("Promotion deleted")
                st.rerun()
            st.error(error)
    else:
        st.info("No promotions yet")

    st.subheader("New promotion")
    with st.form("promotion_form"):
        title = st.text_input("Title")
        description = st.text_area("Description")
        catalog = st.selectbox("Catalog", list(ITEM_KINDS))
        item_kind = st.selectbox("Item kind", ITEM_KINDS[catalog])
        item_id = st.number_input("Item id (0 = whole catalog)", min_value=0, value=0)
        col1, col2 = st.columns(2)
        with col1:
            percentage = st.number_input("Discount %", min_value=0.0, max_value=100.0, value=0.0)
            valid_from = st.date_input("Valid from", value=None)
        with col2:
            amount = st.number_input("Discount amount", min_value=0.0, value=0.0)
            valid_until = st.date_input("Valid until", value=None)
        is_active = st.checkbox("Active", value=True)
        submitted = st.form_submit_button("Create promotion", type="primary")

    if submitted:
        data = {
            "title": title,
            "description": description or None,
            "catalog": catalog,
            "item_kind": item_kind if item_id else None,
            "item_id": int(item_id) or None,
            "discount_percentage": percentage or None,
            "discount_amount": amount or None,
            "is_active": is_active,
            "valid_from": datetime.combine(valid_from, time.min).isoformat() if valid_from else None,
            "valid_until": datetime.combine(valid_until, time.max).isoformat() if valid_until else None,
        }
        ok, error = create_promotion(data)
        if ok:
            st.success("Promotion created")
            st.rerun()
        st.error(error)


def render_settings():
    try:
        response = requests.get(f"{API_BASE_URL}/settings/whatsapp-number", timeout=10)
        current = response.json().get("whatsapp_number") if response.status_code == 200 else None
    except requests.RequestException as e:
        st.error(f"Cannot reach the API: {e}")
        return

    with st.form("whatsapp_form"):
        number = st.text_input("WhatsApp number", value=current or "")
        if st.form_submit_button("Save"):
            try:
                response = requests.put(
                    f"{API_BASE_URL}/settings/whatsapp-number",
                    json={"whatsapp_number": number},
                    headers=auth.get_headers(),
                    timeout=10,
                )
            except requests.RequestException as e:
                st.error(str(e))
                return
            if response.status_code == 200:
                st.success(f"Saved: {response.json()['whatsapp_number']}")
            else:
                st.error(api_error_message(response))


def main():
    st.title("🏷️ Promotions & Settings")
    if not auth.require_admin():
        return
    auth.render_user_info()

    tab1, tab2 = st.tabs(["Promotions", "Site settings"])
    with tab1:
        render_promotions()
    with tab2:
        render_settings()


if __name__ == "__main__":
    main()
