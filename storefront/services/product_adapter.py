# storefront/services/product_adapter.py
from storefront.domain.schemas import CatalogProduct, ProductView
from storefront.utils.money import to_decimal

PLACEHOLDER_IMAGE = "https://via.placeholder.com/150?text=No+Image"
DEFAULT_CATEGORY = "Uncategorized"


def display_id_for(product_id: str | None) -> int:
    """
    Numeric id do wyswietlania: pierwsze 8 znakow id jako liczba hex.
    Nie jest unikalne, nie sluzy do laczenia pozycji w koszyku ani do zapisu.
    """
    try:
        return int((product_id or "")[:8], 16)
    except ValueError:
        return 0


def adapt(product: CatalogProduct) -> ProductView:
    return ProductView(
        id=product.id,
        display_id=display_id_for(product.id),
        name=product.name or "",
        description=product.description or "",
        price=to_decimal(product.price),
        image=product.image_url or PLACEHOLDER_IMAGE,
        category=product.category or DEFAULT_CATEGORY,
        rating=to_decimal(product.rating),
        reviews=0,
        in_stock=(product.stock_quantity or 0) > 0,
        stock_quantity=product.stock_quantity or 0,
    )
