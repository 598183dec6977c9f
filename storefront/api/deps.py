# storefront/api/deps.py
from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import SessionNotFound
from storefront.services.embedding_client import EmbeddingClient
from storefront.services.identity_service import IdentityService, UserIdentity, decode_access_token
from storefront.services.session_service import SessionRegistry, StorefrontSession

bearer_scheme = HTTPBearer(auto_error=False)


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session(
    x_session_id: str = Header(..., alias="X-Session-Id"),
    registry: SessionRegistry = Depends(get_registry),
) -> StorefrontSession:
    try:
        return registry.get(x_session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


def get_embedding_client() -> EmbeddingClient:
    return EmbeddingClient()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserIdentity | None:
    # brak tokenu to nie blad, checkout sam zglasza NotAuthenticated
    if credentials is None:
        return None
    return decode_access_token(credentials.credentials)


def require_user(user: UserIdentity | None = Depends(get_current_user)) -> UserIdentity:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_seller(
    user: UserIdentity = Depends(require_user),
    db: Session = Depends(get_db),
) -> UserIdentity:
    if not IdentityService(db).is_seller(user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return user
