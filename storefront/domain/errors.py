# storefront/domain/errors.py
"""
Wyjatki domenowe sklepu.

Bazy builtin (PermissionError, ValueError, LookupError) zostaja jak w reszcie
serwisow, routery mapuja je na kody HTTP.
"""


class StorefrontError(Exception):
    """Base storefront exception"""


class NotAuthenticated(StorefrontError, PermissionError):
    pass


class FormValidationError(StorefrontError, ValueError):
    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class MissingProductReference(StorefrontError, ValueError):
    def __init__(self, product_name: str):
        super().__init__(
            f"Nie mozna zapisac zamowienia: brak ID produktu dla {product_name}. "
            f"Usun produkt z koszyka i dodaj go ponownie."
        )
        self.product_name = product_name


class CheckoutStepError(StorefrontError, ValueError):
    pass


class EmptyCart(StorefrontError, ValueError):
    pass


class ProductNotFound(StorefrontError, LookupError):
    pass


class SessionNotFound(StorefrontError, LookupError):
    pass


class RecordStoreError(StorefrontError):
    """Blad zewnetrznego magazynu rekordow (przekazywany dalej)."""


class OrderCreateFailed(RecordStoreError):
    pass


class CheckoutTimeout(RecordStoreError):
    pass


class EmbeddingUnavailable(StorefrontError):
    pass


class SearchSuperseded(StorefrontError):
    """Wynik wyszukiwania jest nieaktualny, w miedzyczasie przyszlo nowsze zapytanie."""
