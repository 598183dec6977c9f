from sqlalchemy import Column, String

from storefront.data.database import Base


class ProfileModel(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    role = Column(String, nullable=False, default="customer")
    address = Column(String, nullable=True)
