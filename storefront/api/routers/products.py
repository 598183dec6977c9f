# storefront/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_embedding_client, get_registry
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import ProductView, SortBy
from storefront.services.catalog_service import CatalogService
from storefront.services.embedding_client import EmbeddingClient
from storefront.services.product_adapter import adapt
from storefront.services.session_service import SessionRegistry

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session, embedding_client: EmbeddingClient):
    return CatalogService(db=db, embedding_client=embedding_client)


@router.get("/", response_model=List[ProductView])
def list_products(
    q: Optional[str] = Query(None, description="Wyszukiwanie semantyczne"),
    category: Optional[str] = Query(None),
    sort_by: SortBy = "featured",
    x_session_id: Optional[str] = Header(None, alias="X-Session-Id"),
    db: Session = Depends(get_db),
    embedding_client: EmbeddingClient = Depends(get_embedding_client),
    registry: SessionRegistry = Depends(get_registry),
):
    svc = get_service(db, embedding_client)

    def fetch():
        return svc.fetch_products(search_text=q, category=category, sort_by=sort_by)

    try:
        if x_session_id:
            # debounce + odrzucanie nieaktualnych odpowiedzi w ramach sesji
            products = registry.get(x_session_id).search.run(fetch)
        else:
            products = fetch()
    except (StorefrontError, PermissionError, ValueError) as e:
        raise to_http(e)

    return [adapt(p) for p in products]


@router.get("/categories", response_model=List[str])
def list_categories(
    db: Session = Depends(get_db),
    embedding_client: EmbeddingClient = Depends(get_embedding_client),
):
    try:
        return get_service(db, embedding_client).list_categories()
    except StorefrontError as e:
        raise to_http(e)


@router.get("/{product_id}", response_model=ProductView)
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    embedding_client: EmbeddingClient = Depends(get_embedding_client),
):
    try:
        return adapt(get_service(db, embedding_client).get_product(product_id))
    except StorefrontError as e:
        raise to_http(e)
