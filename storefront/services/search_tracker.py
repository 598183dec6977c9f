# storefront/services/search_tracker.py
import threading
import time
from typing import Callable, TypeVar

from storefront.domain.errors import SearchSuperseded
from storefront.utils.settings import SEARCH_DEBOUNCE_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class SearchTracker:
    """
    Debounce + numer generacji dla wyszukiwan jednej sesji.
    Kazde wyszukiwanie dostaje kolejny numer; wynik starszej generacji jest odrzucany.
    """

    def __init__(self, debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS, sleep: Callable[[float], None] = time.sleep):
        self.debounce_seconds = debounce_seconds
        self._sleep = sleep
        self._lock = threading.Lock()
        self._generation = 0

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def run(self, fetch: Callable[[], T]) -> T:
        generation = self.begin()

        if self.debounce_seconds > 0:
            self._sleep(self.debounce_seconds)

        #w trakcie debounce przyszlo nowsze zapytanie, nie pytamy bazy wcale
        if not self.is_current(generation):
            logger.info(f"Search {generation} superseded before fetch")
            raise SearchSuperseded("Wyszukiwanie zastapione nowszym zapytaniem")

        result = fetch()

        if not self.is_current(generation):
            logger.info(f"Discarding stale search response {generation}")
            raise SearchSuperseded("Wyszukiwanie zastapione nowszym zapytaniem")

        return result
