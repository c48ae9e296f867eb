import streamlit as st
import requests
import pandas as pd
from datetime import datetime, timedelta

from charter.core.config import settings
from charter.core.pricing import compute_admin_total
from charter.streamlit_pages.components.auth import auth
from charter.streamlit_pages.components.session_storage import api_error_message

st.set_page_config(page_title="Booking Management", page_icon="📅", layout="wide")

API_BASE_URL = settings.API_BASE_URL
CURRENCY = settings.CURRENCY
STATUSES = ["pending", "confirmed", "cancelled"]


def get_bookings(status=None):
    """Fetch bookings from API"""
    params = {}
    if status:
        params["status"] = status
    try:
        response = requests.get(
            f"{API_BASE_URL}/bookings/", headers=auth.get_headers(), params=params, timeout=10
        )
    except requests.RequestException as e:
        st.error(f"Cannot reach the API: {e}")
        return []
    if response.status_code == 200:
        return response.json()
    st.error(api_error_message(response))
    return []


def get_yachts():
    """Fetch yachts for booking creation"""
    try:
        response = requests.get(f"{API_BASE_URL}/yachts/", timeout=10)
    except requests.RequestException:
        return []
    if response.status_code == 200:
        return response.json()
    return []


def update_status(booking_id, status):
    try:
        response = requests.patch(
            f"{API_BASE_URL}/bookings/{booking_id}/status",
            json={"status": status},
            headers=auth.get_headers(),
            timeout=10,
        )
    except requests.RequestException as e:
        return False, str(e)
    if response.status_code == 200:
        return True, None
    return False, api_error_message(response)


def delete_booking(booking_id):
    try:
        response = requests.delete(
            f"{API_BASE_URL}/bookings/{booking_id}", headers=auth.get_headers(), timeout=10
        )
    except requests.RequestException as e:
        return False, str(e)
    if response.status_code == 200:
        return True, None
    return False, api_error_message(response)


def create_booking(data):
    """Create a back-office booking"""
    try:
        response = requests.post(
            f"{API_BASE_URL}/bookings/admin", json=data, headers=auth.get_headers(), timeout=10
        )
    except requests.RequestException as e:
        return False, str(e)
    if response.status_code == 201:
        return True, None
    return False, api_error_message(response)


def get_dashboard_stats():
    """Fetch dashboard statistics"""
    try:
        response = requests.get(
            f"{API_BASE_URL}/bookings/stats", headers=auth.get_headers(), timeout=10
        )
    except requests.RequestException as e:
        st.error(f"Cannot reach the API: {e}")
        return None
    if response.status_code == 200:
        return response.json()
    st.error(api_error_message(response))
    return None


def render_stats():
    stats = get_dashboard_stats()
    if stats is None:
        return

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("🛥️ Total Yachts", stats["total_yachts"])
    with col2:
        st.metric("📅 Total Bookings", stats["total_bookings"])
    with col3:
        st.metric("⏳ Pending Bookings", stats["pending_bookings"])
    with col4:
        st.metric("💰 Total Amount", f"{stats['total_amount']} {CURRENCY}")

    st.subheader("Bookings by status")
    df = pd.DataFrame(
        [{"status": status, "bookings": count} for status, count in stats["by_status"].items()]
    )
    st.bar_chart(df.set_index("status"))


def render_bookings_list():
    status_filter = st.selectbox("Status", ["all"] + STATUSES)
    bookings = get_bookings(None if status_filter == "all" else status_filter)
    if not bookings:
        st.info("No bookings found")
        return

    df = pd.DataFrame(bookings)
    df["options"] = df["options"].apply(
        lambda options: ", ".join(option["option_name"] for option in options)
    )
    columns = [
        "id",
        "yacht_id",
        "customer_name",
        "customer_phone",
        "start_date",
        "duration_value",
        "total_price",
        "status",
        "options",
    ]
    st.dataframe(df[columns], use_container_width=True, hide_index=True)

    st.subheader("Update booking")
    booking_ids = [booking["id"] for booking in bookings]
    col1, col2, col3 = st.columns(3)
    with col1:
        booking_id = st.selectbox("Booking", booking_ids)
    with col2:
        new_status = st.selectbox("New status", STATUSES)
    with col3:
        st.write("")
        if st.button("Save status", type="primary"):
            ok, error = update_status(booking_id, new_status)
            if ok:
                st.success("Status updated")
                st.rerun()
            st.error(error)
        if st.button("Delete booking"):
            ok, error = delete_booking(booking_id)
            if ok:
                st.success("Booking deleted")
                st.rerun()
            st.error(error)


def render_booking_form():
    st.subheader("Create booking")
    yachts = get_yachts()
    if not yachts:
        st.error("No yachts found. Please add yachts first.")
        return

    yacht_options = {yacht["name"]: yacht for yacht in yachts}
    yacht = yacht_options[st.selectbox("Yacht", list(yacht_options))]

    col1, col2 = st.columns(2)
    with col1:
        first_name = st.text_input("First name")
        email = st.text_input("Email")
        country = st.text_input("Country")
        start = st.date_input("Start date")
        start_time = st.time_input("Start time")
        hours = st.number_input("Duration (hours)", min_value=1, max_value=72, value=2)
        persons = st.number_input("Number of persons", min_value=1, value=2)
    with col2:
        last_name = st.text_input("Last name")
        phone = st.text_input("Phone")
        trip_type = st.text_input("Trip type")
        rate = st.number_input(
            f"Rate per hour ({CURRENCY})",
            min_value=0.0,
            value=float(yacht.get("price_per_hour") or 0),
        )
        other_charges = st.number_input("Other charges", min_value=0.0, value=0.0)
        fine_penalty = st.number_input("Fine / penalty", min_value=0.0, value=0.0)
        discount = st.number_input("Discount", min_value=0.0, value=0.0)
    apply_vat = st.checkbox("Apply VAT", value=True)
    coupon_code = st.text_input("Coupon code")
    notes = st.text_area("Notes")

    total = compute_admin_total(rate, hours, other_charges, fine_penalty, discount, apply_vat)
    st.metric("Total", f"{total} {CURRENCY}")

    if st.button("Create booking", type="primary"):
        start_date = datetime.combine(start, start_time)
        data = {
            "yacht_id": yacht["id"],
            "first_name": first_name,
            "last_name": last_name,
            "customer_email": email,
            "customer_phone": phone,
            "country": country or None,
            "start_date": start_date.isoformat(),
            "end_date": (start_date + timedelta(hours=hours)).isoformat(),
            "duration_value": hours,
            "number_of_persons": persons,
            "trip_type": trip_type or None,
            "rate_per_hour": rate,
            "apply_vat": apply_vat,
            "other_charges": other_charges,
            "discount": discount,
            "fine_penalty": fine_penalty,
            "coupon_code": coupon_code or None,
            "notes": notes or None,
        }
        ok, error = create_booking(data)
        if ok:
            st.success("Booking created")
        else:
            st.error(f"Error creating booking: {error}")


def main():
    st.title("📅 Booking Management")
    if not auth.require_admin():
        return
    auth.render_user_info()

    tab1, tab2, tab3 = st.tabs(["Overview", "Bookings", "New booking"])
    with tab1:
        render_stats()
    with tab2:
        render_bookings_list()
    with tab3:
        render_booking_form()


if __name__ == "__main__":
    main()
