# storefront/services/session_service.py
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict

from storefront.domain.errors import SessionNotFound
from storefront.services.cart_store import CartStore
from storefront.services.checkout_service import CheckoutOrchestrator
from storefront.services.search_tracker import SearchTracker
from storefront.utils.settings import SESSION_TTL_SECONDS, SEARCH_DEBOUNCE_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class StorefrontSession:
    """Stan jednego klienta sklepu: koszyk, checkout, wyszukiwania."""

    def __init__(self, session_id: str, ttl_seconds: int, notifier=None, debounce_seconds: float | None = None):
        self.id = session_id
        self.ttl_seconds = ttl_seconds
        self.cart = CartStore()
        self.checkout = CheckoutOrchestrator(self.cart, notifier=notifier)
        self.search = SearchTracker(SEARCH_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds)
        self.touch()

    def touch(self):
        self.expires_at = datetime.now(timezone.utc) + timedelta(seconds=self.ttl_seconds)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class SessionRegistry:
    """
    Wlasciciel sesji: tworzenie, pobranie (przedluza TTL), zamkniecie.
    Sesje wygasle sa usuwane przy kazdym dostepie.
    """

    def __init__(self, ttl_seconds: int = SESSION_TTL_SECONDS, notifier=None, debounce_seconds: float | None = None):
        self.ttl_seconds = ttl_seconds
        self.notifier = notifier
        self.debounce_seconds = debounce_seconds
        self._sessions: Dict[str, StorefrontSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def _sweep(self):
        now = datetime.now(timezone.utc)
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Expired {len(expired)} storefront sessions")

    def create(self) -> StorefrontSession:
        with self._lock:
            self._sweep()
            session = StorefrontSession(
                str(uuid.uuid4()),
                self.ttl_seconds,
                notifier=self.notifier,
                debounce_seconds=self.debounce_seconds,
            )
            self._sessions[session.id] = session
        logger.info(f"Utworzono sesje {session.id}")
        return session

    def get(self, session_id: str) -> StorefrontSession:
        with self._lock:
            self._sweep()
            session = self._sessions.get(session_id)
            if not session:
                raise SessionNotFound("Sesja nie istnieje lub wygasla")
            session.touch()
            return session

    def end(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session:
            session.cart.clear()
            logger.info(f"Zamknieto sesje {session_id}")
