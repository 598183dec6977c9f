# storefront/api/routers/sessions.py
from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_registry
from storefront.domain.schemas import SessionOut
from storefront.services.session_service import SessionRegistry

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("/", response_model=SessionOut, status_code=201)
def create_session(registry: SessionRegistry = Depends(get_registry)):
    session = registry.create()
    return {"session_id": session.id, "expires_at": session.expires_at}


@router.delete("/{session_id}", status_code=204)
def end_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    registry.end(session_id)
    return Response(status_code=204)
