# storefront/services/identity_service.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from sqlalchemy.orm import Session

from storefront.data.models.profile import ProfileModel
from storefront.repos.profile_repo import ProfileRepo
from storefront.utils.settings import SECRET_KEY, JWT_ALGORITHM
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UserIdentity:
    id: str
    email: str | None = None


def create_access_token(user_id: str, email: str | None = None, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=60))
    payload = {"sub": user_id, "exp": expire}
    if email:
        payload["email"] = email
    return jwt.encode(payload, SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str | None) -> UserIdentity | None:
    """Zwraca tozsamosc z tokenu albo None (brak / zly / wygasly token)."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        return None

    subject = payload.get("sub")
    if not subject:
        return None
    return UserIdentity(id=str(subject), email=payload.get("email"))


class IdentityService:
    def __init__(self, db: Session):
        self.repo = ProfileRepo(db)

    def get_profile(self, user_id: str) -> ProfileModel | None:
        return self.repo.get_profile(user_id)

    def is_seller(self, user_id: str) -> bool:
        profile = self.repo.get_profile(user_id)
        return bool(profile and (profile.role or "").lower() == "seller")
