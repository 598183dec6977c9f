# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import ProductModel, ProfileModel
from storefront.repos.profile_repo import ProfileRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_SELLER_ID = "00000000-0000-0000-0000-00000000a001"
DEMO_CUSTOMER_ID = "00000000-0000-0000-0000-00000000c001"

DEMO_PRODUCTS = [
    ("Wireless Headphones", "Over-ear headphones with noise cancelling", "Electronics", "2499.00", 15),
    ("Mechanical Keyboard", "Hot-swap keyboard with brown switches", "Electronics", "3199.00", 8),
    ("Ceramic Mug", "Hand made mug, 350 ml", "Home", "349.00", 40),
    ("Linen Cushion", "Washed linen cushion cover", "Home", "599.00", 0),
]


def seed(db=None, embedding_client=None):
    own_session = db is None
    db = db or SessionLocal()
    try:
        # tylko pusta baza
        if db.query(ProductModel).first():
            return

        profiles = ProfileRepo(db)
        profiles.create_profile(ProfileModel(id=DEMO_SELLER_ID, full_name="Demo Seller", email="seller@example.com", role="seller"))
        profiles.create_profile(
            ProfileModel(
                id=DEMO_CUSTOMER_ID,
                full_name="Demo Customer",
                email="customer@example.com",
                role="customer",
                address="221B Baker Street",
            )
        )

        for name, description, category, price, stock in DEMO_PRODUCTS:
            embedding = embedding_client.embed(f"{name} {description}") if embedding_client else None
            db.add(
                ProductModel(
                    seller_id=DEMO_SELLER_ID,
                    name=name,
                    description=description,
                    category=category,
                    price=Decimal(price),
                    stock_quantity=stock,
                    embedding=embedding,
                )
            )
        db.commit()
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    from storefront.main import init_db
    from storefront.services.embedding_client import EmbeddingClient

    init_db()
    seed(embedding_client=EmbeddingClient())
