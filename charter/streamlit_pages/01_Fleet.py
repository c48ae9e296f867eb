import asyncio

import streamlit as st
import requests

from charter.core.booking_draft import parse_hours_input
from charter.core.booking_flow import BookingFlow, BookingStep
from charter.core.config import settings
from charter.core.exceptions import DomainException, FieldValidationError
from charter.core.i18n import pick
from charter.core.pricing import preview_total_price
from charter.core.promotions import find_applicable_promotion, promotional_price_preview
from charter.core.shopping_list import ShoppingList
from charter.schemas.promotion import Promotion
from charter.schemas.yacht import Yacht
from charter.streamlit_pages.components.session_storage import (
    SessionStateCartStorage,
    api_error_message,
    render_language_picker,
)

st.set_page_config(page_title="Yacht Fleet", page_icon="🛥️", layout="wide")

API_BASE_URL = settings.API_BASE_URL
CURRENCY = settings.CURRENCY


def get_yachts():
    """Fetch yachts with their options"""
    try:
        response = requests.get(f"{API_BASE_URL}/yachts/", timeout=10)
    except requests.RequestException as e:
        st.error(f"Cannot reach the API: {e}")
        return []
    if response.status_code == 200:
        return [Yacht.model_validate(item) for item in response.json()]
    return []


def get_active_promotions():
    try:
        response = requests.get(
            f"{API_BASE_URL}/promotions/active", params={"catalog": "yachts"}, timeout=10
        )
    except requests.RequestException:
        return []
    if response.status_code == 200:
        return [Promotion.model_validate(item) for item in response.json()]
    return []


def get_whatsapp_number():
    try:
        response = requests.get(f"{API_BASE_URL}/settings/whatsapp-number", timeout=10)
    except requests.RequestException:
        return None
    if response.status_code == 200:
        return response.json().get("whatsapp_number")
    return None


def submit_booking_via_api(yacht_id, language):
    async def submitter(draft):
        payload = {
            "yacht_id": yacht_id,
            "customer_name": draft.customer_name,
            "customer_email": draft.customer_email,
            "customer_phone": draft.customer_phone,
            "hours": draft.hours,
            "selected_option_ids": draft.selected_option_ids,
        }
        response = await asyncio.to_thread(
            requests.post,
            f"{API_BASE_URL}/bookings/",
            json=payload,
            headers={"Accept-Language": language},
            timeout=15,
        )
        if response.status_code != 201:
            raise RuntimeError(api_error_message(response))
        return response.json()

    return submitter


def get_flow(yacht, language) -> BookingFlow:
    key = f"booking_flow_{yacht.id}"
    flow = st.session_state.get(key)
    if flow is None or flow.language != language:
        flow = BookingFlow(
            yacht,
            [option for option in yacht.options if option.is_active],
            language=language,
        )
        st.session_state[key] = flow
    return flow


def render_price(yacht, promotions, language):
    promotion = find_applicable_promotion(promotions, yacht)
    hourly = preview_total_price(yacht, 1)
    if hourly is None:
        return
    label = pick("للساعة", "per hour", language)
    if promotion is None:
        st.write(f"**{hourly} {CURRENCY}** {label}")
        return
    discounted = promotional_price_preview(hourly, promotion)
    st.markdown(f"~~{hourly} {CURRENCY}~~ **{discounted} {CURRENCY}** {label}")
    st.caption(f"🏷️ {promotion.title}")


def render_details_step(flow: BookingFlow, language):
    yacht = flow.yacht
    with st.form(f"details_{yacht.id}"):
        name = st.text_input(pick("الاسم", "Name", language), value=flow.draft.customer_name)
        email = st.text_input(
            pick("البريد الإلكتروني", "Email", language), value=flow.draft.customer_email
        )
        phone = st.text_input(pick("الهاتف", "Phone", language), value=flow.draft.customer_phone)
        hours_raw = st.text_input(pick("عدد الساعات", "Hours", language), value=str(flow.draft.hours))

        selected = []
        for option in flow.available_options:
            if st.checkbox(
                f"{option.name} (+{option.price} {CURRENCY})",
                value=option.id in flow.draft.selected_option_ids,
                key=f"option_{yacht.id}_{option.id}",
            ):
                selected.append(option.id)

        col1, col2 = st.columns(2)
        with col1:
            proceed = st.form_submit_button(pick("متابعة", "Continue", language), type="primary")
        with col2:
            whatsapp = st.form_submit_button(pick("احجز عبر واتساب", "Book via WhatsApp", language))

    if not (proceed or whatsapp):
        return

    flow.update_details(
        customer_name=name,
        customer_email=email,
        customer_phone=phone,
        hours=parse_hours_input(hours_raw),
    )
    flow.draft.selected_option_ids = selected

    if whatsapp:
        try:
            url = flow.whatsapp_url(get_whatsapp_number())
        except FieldValidationError:
            pass
        except DomainException as e:
            st.error(e.message)
        else:
            st.link_button(pick("افتح واتساب", "Open WhatsApp", language), url)
    elif flow.proceed():
        st.rerun()

    for error in flow.field_errors.values():
        st.error(error)


def render_confirmation_step(flow: BookingFlow, language):
    draft = flow.draft
    st.write(f"**{draft.customer_name}** · {draft.customer_email} · {draft.customer_phone}")
    st.write(f"{draft.hours} {pick('ساعات', 'hours', language)}")
    for option in flow.selected_options:
        st.write(f"• {option.name}: {option.price} {CURRENCY}")
    st.subheader(f"{pick('المجموع', 'Total', language)}: {flow.total_price} {CURRENCY}")

    col1, col2 = st.columns(2)
    with col1:
        if st.button(pick("تأكيد الحجز", "Confirm booking", language), key=f"confirm_{flow.yacht.id}", type="primary"):
            result = asyncio.run(flow.submit(submit_booking_via_api(flow.yacht.id, language)))
            if result is not None:
                st.session_state["last_booking_message"] = result["message"]
            st.rerun()
    with col2:
        if st.button(pick("رجوع", "Back", language), key=f"back_{flow.yacht.id}"):
            flow.back()
            st.rerun()


def render_booking(yacht, language):
    flow = get_flow(yacht, language)

    if flow.step == BookingStep.COLLECTING_DETAILS:
        render_details_step(flow, language)
    elif flow.step == BookingStep.COLLECTING_CONFIRMATION:
        render_confirmation_step(flow, language)
    elif flow.step == BookingStep.SUBMITTED:
        st.success(st.session_state.get("last_booking_message", ""))
        if st.button(pick("حجز جديد", "New booking", language), key=f"reset_{yacht.id}"):
            flow.reset()
            st.rerun()
    elif flow.step == BookingStep.FAILED:
        st.error(flow.error_message)
        if st.button(pick("رجوع", "Back", language), key=f"retry_{yacht.id}"):
            flow.back()
            st.rerun()


def render_shopping_list(shopping_list: ShoppingList, language):
    st.sidebar.subheader(f"🛒 {pick('قائمة اليخوت', 'Shopping list', language)} ({shopping_list.count()})")
    for item in shopping_list.items:
        col1, col2 = st.sidebar.columns([3, 1])
        col1.write(item.yacht["name"])
        if col2.button("✖", key=f"remove_{item.yacht_id}"):
            shopping_list.remove(item.yacht_id)
            st.rerun()
    if shopping_list.count() and st.sidebar.button(pick("إفراغ القائمة", "Clear list", language)):
        shopping_list.clear()
        st.rerun()


def main():
    language = render_language_picker()
    st.title(pick("🛥️ أسطول اليخوت", "🛥️ Our Fleet", language))

    shopping_list = ShoppingList(SessionStateCartStorage())
    render_shopping_list(shopping_list, language)

    yachts = get_yachts()
    promotions = get_active_promotions()
    if not yachts:
        st.info(pick("لا توجد يخوت حالياً", "No yachts available yet", language))
        return

    for yacht in yachts:
        with st.container(border=True):
            col1, col2 = st.columns([1, 2])
            with col1:
                if yacht.main_image:
                    st.image(yacht.main_image)
            with col2:
                st.subheader(yacht.name)
                description = yacht.description_ar if language == "ar" and yacht.description_ar else yacht.description
                if description:
                    st.write(description)
                st.caption(
                    f"👥 {yacht.capacity} · 📍 {yacht.location or pick('غير محدد', 'Not specified', language)}"
                )
                render_price(yacht, promotions, language)

                if not shopping_list.contains(yacht.id):
                    if st.button(pick("أضف إلى القائمة", "Add to list", language), key=f"add_{yacht.id}"):
                        shopping_list.add(yacht)
                        st.rerun()

            if not yacht.is_available:
                st.warning(pick("غير متاح حالياً للحجز", "Currently not available for booking", language))
                continue
            with st.expander(pick("احجز الآن", "Book now", language)):
                render_booking(yacht, language)


if __name__ == "__main__":
    main()
