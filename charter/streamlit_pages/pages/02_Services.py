import streamlit as st
import requests

from charter.core.config import settings
from charter.core.i18n import pick
from charter.streamlit_pages.components.session_storage import (
    api_error_message,
    render_language_picker,
)

st.set_page_config(page_title="Water Sports & Food", page_icon="🌊", layout="wide")

API_BASE_URL = settings.API_BASE_URL
CURRENCY = settings.CURRENCY


def get_catalog(path):
    """Fetch one of the service catalogs"""
    try:
        response = requests.get(f"{API_BASE_URL}/{path}/", timeout=10)
    except requests.RequestException as e:
        st.error(f"Cannot reach the API: {e}")
        return []
    if response.status_code == 200:
        return response.json()
    return []


def get_cart_session():
    """Guest cart id, created once per browser session"""
    if "cart_session_id" not in st.session_state:
        response = requests.post(f"{API_BASE_URL}/cart/session", timeout=10)
        response.raise_for_status()
        st.session_state["cart_session_id"] = response.json()["session_id"]
    return st.session_state["cart_session_id"]


def add_to_cart(session_id, path, payload):
    try:
        response = requests.post(
            f"{API_BASE_URL}/cart/{session_id}/{path}", json=payload, timeout=10
        )
    except requests.RequestException as e:
        return False, str(e)
    if response.status_code == 200:
        return True, None
    return False, api_error_message(response)


def get_inquiry_link(item_kind, item_id, language):
    try:
        response = requests.post(
            f"{API_BASE_URL}/pricing/whatsapp-inquiry",
            json={"item_kind": item_kind, "item_id": item_id},
            headers={"Accept-Language": language},
            timeout=10,
        )
    except requests.RequestException:
        return None
    if response.status_code == 200:
        return response.json()["url"]
    return None


def render_cart(session_id, language):
    try:
        response = requests.get(f"{API_BASE_URL}/cart/{session_id}", timeout=10)
    except requests.RequestException as e:
        st.sidebar.error(str(e))
        return
    if response.status_code != 200:
        st.sidebar.error(api_error_message(response))
        return

    cart = response.json()
    st.sidebar.subheader(f"🛒 {pick('السلة', 'Cart', language)} ({len(cart['items'])})")
    for item in cart["items"]:
        col1, col2 = st.sidebar.columns([3, 1])
        length = f" · {item['duration']} min" if item.get("duration") else ""
        col1.write(f"{item['item_name']} x {item['quantity']}{length}: {item['price']} {CURRENCY}")
        if col2.button("✖", key=f"cart_remove_{item['id']}"):
            requests.delete(f"{API_BASE_URL}/cart/{session_id}/items/{item['id']}", timeout=10)
            st.rerun()
    st.sidebar.write(f"**{pick('المجموع', 'Total', language)}: {cart['total']} {CURRENCY}**")
    if cart["items"] and st.sidebar.button(pick("إفراغ السلة", "Clear cart", language)):
        requests.delete(f"{API_BASE_URL}/cart/{session_id}", timeout=10)
        st.rerun()


def render_water_sports(session_id, language):
    for sport in get_catalog("water-sports"):
        with st.container(border=True):
            st.subheader(sport["name"])
            st.caption(f"👥 {pick('حتى', 'up to', language)} {sport['pax']}")
            st.write(
                f"30 min: {sport['price_30min'] or 0} {CURRENCY} · "
                f"60 min: {sport['price_60min'] or 0} {CURRENCY}"
            )
            duration = st.radio(
                pick("المدة", "Duration", language),
                [30, 60],
                format_func=lambda minutes: f"{minutes} min",
                horizontal=True,
                key=f"ws_duration_{sport['id']}",
            )
            col1, col2 = st.columns(2)
            with col1:
                if st.button(pick("أضف إلى السلة", "Add to cart", language), key=f"ws_add_{sport['id']}"):
                    ok, error = add_to_cart(
                        session_id,
                        "water-sports",
                        {"water_sport_id": sport["id"], "duration": duration},
                    )
                    if ok:
                        st.rerun()
                    st.error(error)
            with col2:
                url = get_inquiry_link("water_sport", sport["id"], language)
                if url:
                    st.link_button("WhatsApp", url)


def render_food(session_id, language):
    for food in get_catalog("food"):
        with st.container(border=True):
            st.subheader(food["name"])
            if food.get("description"):
                st.write(food["description"])
            st.write(f"{food['price_per_person'] or 0} {CURRENCY} / {pick('شخص', 'person', language)}")
            quantity = st.number_input(
                pick("عدد الأشخاص", "Persons", language),
                min_value=1,
                value=1,
                key=f"food_qty_{food['id']}",
            )
            if st.button(pick("أضف إلى السلة", "Add to cart", language), key=f"food_add_{food['id']}"):
                ok, error = add_to_cart(
                    session_id, "food", {"food_item_id": food["id"], "quantity": int(quantity)}
                )
                if ok:
                    st.rerun()
                st.error(error)


def render_additional_services(language):
    for service in get_catalog("additional-services"):
        with st.container(border=True):
            st.subheader(service["name"])
            if service.get("description"):
                st.write(service["description"])
            st.write(f"{service['price'] or 0} {CURRENCY}")
            url = get_inquiry_link("additional_service", service["id"], language)
            if url:
                st.link_button("WhatsApp", url)


def main():
    language = render_language_picker()
    st.title(pick("🌊 الخدمات الإضافية", "🌊 Water Sports & Food", language))

    try:
        session_id = get_cart_session()
    except requests.RequestException as e:
        st.error(f"Cannot reach the API: {e}")
        return
    render_cart(session_id, language)

    tab1, tab2, tab3 = st.tabs(
        [
            pick("الرياضات المائية", "Water sports", language),
            pick("الطعام", "Food", language),
            pick("خدمات أخرى", "Additional services", language),
        ]
    )
    with tab1:
        render_water_sports(session_id, language)
    with tab2:
        render_food(session_id, language)
    with tab3:
        render_additional_services(language)


if __name__ == "__main__":
    main()
