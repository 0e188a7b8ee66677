"""Translation dictionary for report exports (en/ar)."""
from __future__ import annotations

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "order_summary": "Order Summary",
        "order_number": "Order Number",
        "execution_date": "Execution Date",
        "customer": "Customer",
        "total_sale": "Total Sales",
        "total_cost": "Total Cost",
        "vat_sale": "Sales VAT",
        "vat_cost": "Cost VAT",
        "net_amount": "Net Amount",
    },
    "ar": {
        "order_summary": "ملخص الطلبات",
        "order_number": "رقم الطلب",
        "execution_date": "تاريخ التنفيذ",
        "customer": "العميل",
        "total_sale": "إجمالي المبيعات",
        "total_cost": "إجمالي التكلفة",
        "vat_sale": "ضريبة المبيعات",
        "vat_cost": "ضريبة التكلفة",
        "net_amount": "صافي المبلغ",
    },
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(TRANSLATIONS)


def t(lang: str, key: str) -> str:
    """Get translated label. Falls back to English."""
    return TRANSLATIONS.get(lang, TRANSLATIONS["en"]).get(
        key, TRANSLATIONS["en"].get(key, key)
    )
