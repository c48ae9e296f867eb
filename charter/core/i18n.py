"""
Arabic/English string picker.

All user-facing messages produced by the backend live in ``MESSAGES`` so that
every error path can answer in the visitor's selected language.
"""

from typing import Optional

from charter.core.config import settings

SUPPORTED_LANGUAGES = ("en", "ar")

# key -> (arabic, english)
MESSAGES = {
    "name_required": ("الاسم مطلوب", "Name is required"),
    "name_too_short": ("الاسم يجب أن يكون حرفين على الأقل", "Name must be at least 2 characters"),
    "name_too_long": ("الاسم يجب أن يكون أقل من 100 حرف", "Name must be less than 100 characters"),
    "name_invalid": ("الاسم يحتوي على أحرف غير صالحة", "Name contains invalid characters"),
    "email_invalid": ("البريد الإلكتروني غير صالح", "Invalid email address"),
    "email_too_long": ("البريد الإلكتروني يجب أن يكون أقل من 255 حرفاً", "Email must be less than 255 characters"),
    "phone_too_short": ("رقم الهاتف قصير جداً", "Phone number too short"),
    "phone_too_long": ("رقم الهاتف طويل جداً", "Phone number too long"),
    "phone_invalid": ("صيغة رقم الهاتف غير صالحة", "Invalid phone number format"),
    "hours_whole": ("عدد الساعات يجب أن يكون رقماً صحيحاً", "Hours must be a whole number"),
    "hours_min": ("الحد الأدنى {min} ساعة", "Minimum {min} hour"),
    "hours_max": ("الحد الأقصى {max} ساعة", "Maximum {max} hours"),
    "hours_unit": ("ساعات", "hours"),
    "invalid_input": ("يرجى تصحيح الحقول المحددة", "Please correct the highlighted fields"),
    "booking_submitted": (
        "تم الحجز بنجاح! سيتم مراجعة حجزك قريباً",
        "Booking submitted successfully! Your booking will be reviewed soon",
    ),
    "booking_failed": ("حدث خطأ في الحجز", "Error creating booking"),
    "yacht_unavailable": (
        "عذراً، هذا اليخت غير متاح حالياً للحجز",
        "Sorry, this yacht is currently not available for booking",
    ),
    "whatsapp_not_configured": (
        "رقم واتساب غير متوفر حالياً",
        "WhatsApp contact is not configured",
    ),
    "not_found": ("العنصر المطلوب غير موجود", "The requested item was not found"),
    "not_authenticated": ("يرجى تسجيل الدخول", "Please sign in"),
    "access_denied": ("ليس لديك صلاحية لهذا الإجراء", "You are not allowed to do this"),
    "backend_transient": (
        "الخدمة غير متاحة مؤقتاً، يرجى المحاولة لاحقاً",
        "The service is temporarily unavailable, please try again later",
    ),
    "backend_failed": ("حدث خطأ غير متوقع", "An unexpected error occurred"),
    "invalid_value": ("القيمة المدخلة غير صالحة", "Invalid value"),
    "whole_number": ("القيمة يجب أن تكون رقماً صحيحاً", "The value must be a whole number"),
    "positive_number": ("القيمة يجب أن تكون أكبر من صفر", "The value must be greater than 0"),
    "water_sport_duration": (
        "مدة الرياضة المائية يجب أن تكون 30 أو 60 دقيقة",
        "Water sport duration must be 30 or 60 minutes",
    ),
    "field_empty": ("هذا الحقل لا يمكن أن يكون فارغاً", "This field cannot be empty"),
    "date_range": (
        "تاريخ الانتهاء يجب أن يكون بعد تاريخ البدء",
        "The end date must be after the start date",
    ),
    "not_in_shopping_list": ("اليخت غير موجود في قائمة التسوق", "Yacht is not in the shopping list"),
    "yacht_not_a_service": ("استخدم صفحات اليخوت لإدارة اليخوت", "Use the yacht endpoints for yachts"),
    "promotion_window": (
        "تاريخ انتهاء العرض لا يمكن أن يسبق تاريخ بدايته",
        "A promotion cannot end before it starts",
    ),
    "promotion_item_kind": (
        "يرجى تحديد نوع العنصر عند استهداف عنصر واحد",
        "Choose the item type when a promotion targets one item",
    ),
    "promotion_catalog_mismatch": (
        "نوع العنصر لا ينتمي إلى كتالوج هذا العرض",
        "This item type does not belong to the promotion's catalog",
    ),
    "conflict": ("يتعارض هذا الطلب مع بيانات موجودة", "This request conflicts with existing data"),
    "still_referenced": (
        "لا يمكن الحذف لوجود {count} من السجلات المرتبطة، يرجى حذفها أولاً",
        "Cannot delete: {count} related records still exist, remove them first",
    ),
    "record_exists": ("هذا السجل موجود مسبقاً", "This record already exists"),
    "reference_missing": (
        "اليخت أو الخيار أو الحجز المشار إليه غير موجود",
        "The referenced yacht, option or booking does not exist",
    ),
    "required_missing": ("أحد الحقول المطلوبة مفقود", "A required field is missing"),
    "constraint_violation": ("تعذر حفظ البيانات لمخالفتها القيود", "Database constraint violation"),
    "request_invalid": ("بيانات الطلب غير صالحة", "Request validation failed"),
}


def normalize_language(value: Optional[str]) -> str:
    """Reduce an ``Accept-Language`` header or language code to ``"ar"`` or ``"en"``."""
    if not value:
        return settings.DEFAULT_LANGUAGE
    primary = value.split(",")[0].split(";")[0].strip().lower()
    if primary.startswith("ar"):
        return "ar"
    if primary.startswith("en"):
        return "en"
    return settings.DEFAULT_LANGUAGE


def pick(ar: str, en: str, language: str = "en") -> str:
    return ar if language == "ar" else en


def message(key: str, language: str = "en", **params) -> str:
    ar, en = MESSAGES[key]
    return pick(ar, en, language).format(**params)
