"""Locale resolution and translated copy for server-rendered pages."""

from typing import Literal, TypedDict, cast

Locale = Literal["en", "hy", "ru"]

LOCALES: tuple[Locale, ...] = ("en", "hy", "ru")
DEFAULT_LOCALE: Locale = "en"
LOCALE_COOKIE = "megatours-locale"


class PaymentCopy(TypedDict):
    """Copy of a payment status page."""

    title: str
    body: str
    note: str | None
    cta: str


class PaymentTranslations(TypedDict):
    """Payment status page copy."""

    success: PaymentCopy
    failure: PaymentCopy


class ErrorTranslations(TypedDict):
    """Generic user-facing error messages."""

    generic: str
    results: str
    hotel: str
    rooms: str


class Translations(TypedDict):
    """All translated strings for one locale."""

    payment: PaymentTranslations
    errors: ErrorTranslations


TRANSLATIONS: dict[Locale, Translations] = {
    "en": {
        "payment": {
            "success": {
                "title": "Payment successful",
                "body": "Thank you! Your payment has been received and your booking is being confirmed.",
                "note": "A confirmation email with your booking details will arrive shortly.",
                "cta": "Back to home",
            },
            "failure": {
                "title": "Payment failed",
                "body": "Your payment could not be completed. No charges were made. Please try again.",
                "note": None,
                "cta": "Back to home",
            },
        },
        "errors": {
            "generic": "Something went wrong. Please try again in a moment.",
            "results": "Unable to load results right now. Please try again.",
            "hotel": "Unable to load this hotel right now. Please try again.",
            "rooms": "Unable to load room options. Please try again.",
        },
    },
    "hy": {
        "payment": {
            "success": {
                "title": "Վճարումը հաջողվեց",
                "body": "Շնորհակալություն։ Ձեր վճարումը ստացվել է, և ամրագրումը հաստատվում է։",
                "note": "Ամրագրման մանրամասներով հաստատման նամակը շուտով կստանաք։",
                "cta": "Վերադառնալ գլխավոր էջ",
            },
            "failure": {
                "title": "Վճարումը չհաջողվեց",
                "body": "Վճարումը հնարավոր չեղավ ավարտել։ Գումար չի գանձվել։ Խնդրում ենք կրկին փորձել։",
                "note": None,
                "cta": "Վերադառնալ գլխավոր էջ",
            },
        },
        "errors": {
            "generic": "Ինչ-որ բան սխալ գնաց։ Խնդրում ենք փորձել մի փոքր ուշ։",
            "results": "Արդյունքները հնարավոր չէ բեռնել։ Խնդրում ենք կրկին փորձել։",
            "hotel": "Հյուրանոցի տվյալները հնարավոր չէ բեռնել։ Խնդրում ենք կրկին փորձել։",
            "rooms": "Սենյակների տարբերակները հնարավոր չէ բեռնել։ Խնդրում ենք կրկին փորձել։",
        },
    },
    "ru": {
        "payment": {
            "success": {
                "title": "Оплата прошла успешно",
                "body": "Спасибо! Платёж получен, бронирование подтверждается.",
                "note": "Письмо с деталями бронирования придёт в ближайшее время.",
                "cta": "На главную",
            },
            "failure": {
                "title": "Оплата не прошла",
                "body": "Не удалось завершить платёж. Деньги не списаны. Попробуйте ещё раз.",
                "note": None,
                "cta": "На главную",
            },
        },
        "errors": {
            "generic": "Что-то пошло не так. Попробуйте ещё раз чуть позже.",
            "results": "Не удалось загрузить результаты. Попробуйте ещё раз.",
            "hotel": "Не удалось загрузить отель. Попробуйте ещё раз.",
            "rooms": "Не удалось загрузить варианты номеров. Попробуйте ещё раз.",
        },
    },
}


def resolve_locale(value: str | None) -> Locale:
    """Return a supported locale, falling back to the default."""
    if value in LOCALES:
        return cast("Locale", value)
    return DEFAULT_LOCALE


def get_translations(locale: Locale) -> Translations:
    """Get the string table for a locale."""
    return TRANSLATIONS[locale]
