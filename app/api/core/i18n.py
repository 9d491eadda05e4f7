"""
Localized message lookup.

Messages live in a flat per-locale catalog keyed by dotted names
(``table.pagination.next``). Lookups fall back to English, then to the key.
"""

from typing import Optional

from fastapi import Request

from config import settings

SUPPORTED_LOCALES = settings.SUPPORTED_LOCALES
DEFAULT_LOCALE = settings.DEFAULT_LOCALE
LOCALE_COOKIE_NAME = "locale"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "table.empty": "No data available",
        "table.loading": "Loading...",
        "table.pagination.previous": "Previous",
        "table.pagination.next": "Next",
        "table.pagination.page": "Page",
        "table.pagination.of": "of",
        "table.pagination.itemsPerPage": "Items per page",
        "api.product.created": "Product created successfully",
        "api.product.deleted": "Product deleted successfully",
        "api.product.notFound": "Product not found",
        "api.product.fetchFailed": "Failed to fetch products",
        "api.product.deletionFailed": "Failed to delete product",
        "api.product.creationFailed": "Failed to create product",
        "api.registration.success": "Account created successfully",
        "api.registration.failed": "Registration failed",
        "registration.errors.userExists": "User with this email already exists",
        "common.errors.forbidden": "You do not have permission to perform this action",
        "cms.login.title": "CMS login",
        "cms.login.email": "Email",
        "cms.login.password": "Password",
        "cms.login.submit": "Sign in",
        "cms.login.invalid": "Invalid email or password",
        "cms.logout": "Log out",
        "cms.products.title": "Products",
        "cms.products.back": "Back to products",
        "product.name": "Name",
        "product.sku": "SKU",
        "product.price": "Price",
        "product.stock": "Stock",
        "product.category": "Category",
        "product.isActive": "Active",
        "product.description": "Description",
        "product.updatedAt": "Last updated",
        "common.yes": "Yes",
        "common.no": "No",
    },
    "pl": {
        "table.empty": "Brak danych",
        "table.loading": "Ładowanie...",
        "table.pagination.previous": "Poprzednia",
        "table.pagination.next": "Następna",
        "table.pagination.page": "Strona",
        "table.pagination.of": "z",
        "table.pagination.itemsPerPage": "Elementów na stronie",
        "api.product.created": "Produkt został utworzony",
        "api.product.deleted": "Produkt został usunięty",
        "api.product.notFound": "Nie znaleziono produktu",
        "api.product.fetchFailed": "Nie udało się pobrać produktów",
        "api.product.deletionFailed": "Nie udało się usunąć produktu",
        "api.product.creationFailed": "Nie udało się utworzyć produktu",
        "api.registration.success": "Konto zostało utworzone",
        "api.registration.failed": "Rejestracja nie powiodła się",
        "registration.errors.userExists": "Użytkownik z tym adresem e-mail już istnieje",
        "common.errors.forbidden": "Nie masz uprawnień do wykonania tej operacji",
        "cms.login.title": "Logowanie do CMS",
        "cms.login.email": "E-mail",
        "cms.login.password": "Hasło",
        "cms.login.submit": "Zaloguj",
        "cms.login.invalid": "Nieprawidłowy e-mail lub hasło",
        "cms.logout": "Wyloguj",
        "cms.products.title": "Produkty",
        "cms.products.back": "Powrót do produktów",
        "product.name": "Nazwa",
        "product.sku": "SKU",
        "product.price": "Cena",
        "product.stock": "Stan",
        "product.category": "Kategoria",
        "product.isActive": "Aktywny",
        "product.description": "Opis",
        "product.updatedAt": "Ostatnia zmiana",
        "common.yes": "Tak",
        "common.no": "Nie",
    },
}


def normalize_locale(locale: Optional[str]) -> str:
    """Return ``locale`` if supported, otherwise the default locale."""
    if locale:
        short = locale.strip().lower().replace("_", "-").split("-")[0]
        if short in SUPPORTED_LOCALES:
            return short
    return DEFAULT_LOCALE


def translate(key: str, locale: Optional[str] = None) -> str:
    """
    Look up a localized message.

    Args:
        key (str): Dotted message key
        locale (str, optional): Locale code; unsupported values use the default

    Returns:
        str: Localized message, the English message, or the key itself
    """
    catalog = MESSAGES.get(normalize_locale(locale), {})
    if key in catalog:
        return catalog[key]
    return MESSAGES[DEFAULT_LOCALE].get(key, key)


def get_locale_from_request(request: Request) -> str:
    """
    Resolve the locale of a request.

    Checks the first path segment, then the ``locale`` cookie, then the first
    entry of ``Accept-Language``.

    Args:
        request (Request): Incoming request

    Returns:
        str: A supported locale code
    """
    segments = [segment for segment in request.url.path.split("/") if segment]
    if segments and segments[0] in SUPPORTED_LOCALES:
        return segments[0]

    cookie_locale = request.cookies.get(LOCALE_COOKIE_NAME)
    if cookie_locale and normalize_locale(cookie_locale) == cookie_locale:
        return cookie_locale

    accept_language = request.headers.get("accept-language", "")
    first = accept_language.split(",")[0].split(";")[0]
    return normalize_locale(first)
