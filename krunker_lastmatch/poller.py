from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from .client import MatchHistoryClient
from .config import POLL_INTERVAL_S
from .errors import InternalError, LastMatchError
from .models import Credentials, ResolvedPlayerInfo
from .resolver import resolve


logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to process match data."


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one fetch+resolve pass. Exactly one of `info` / `error` is set."""

    generation: int
    info: Optional[ResolvedPlayerInfo] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.info is not None


class MatchPoller:
    """Polls the match history API on a fixed interval for one set of credentials.

    `configure()` starts a new session and `reset()` ends it. Each session
    change bumps a generation counter; a cycle whose request was started under
    an older generation is dropped instead of being published.
    """

    def __init__(
        self,
        client: MatchHistoryClient,
        on_update: Callable[[CycleResult], None],
        *,
        interval_s: float = POLL_INTERVAL_S,
    ) -> None:
        self.client = client
        self.on_update = on_update
        self.interval_s = float(interval_s)
        self._credentials: Optional[Credentials] = None
        self._generation = 0
        self._state_lock = threading.RLock()
        self._cycle_lock = threading.Lock()
        self._wake = threading.Event()
        self._stopped = threading.Event()

    @property
    def generation(self) -> int:
        with self._state_lock:
            return self._generation

    @property
    def configured(self) -> bool:
        with self._state_lock:
            return self._credentials is not None

    def configure(self, credentials: Credentials) -> None:
        with self._state_lock:
            self._credentials = credentials
            self._generation += 1
            gen = self._generation
        logger.info("Polling match history for %s (session %d)", credentials.player_name, gen)
        self._wake.set()

    def reset(self) -> None:
        with self._state_lock:
            self._credentials = None
            self._generation += 1
        logger.info("Polling stopped; credentials cleared")

    def stop(self) -> None:
        self._stopped.set()
        self._wake.set()

    def run_cycle(self) -> Optional[CycleResult]:
        if not self._cycle_lock.acquire(blocking=False):
            logger.debug("Previous cycle still in flight; skipping")
            return None
        try:
            return self._run_cycle()
        finally:
            self._cycle_lock.release()

    def _run_cycle(self) -> Optional[CycleResult]:
        with self._state_lock:
            credentials = self._credentials
            gen = self._generation
        if credentials is None:
            return None

        try:
            history = self.client.fetch(credentials)
            result = CycleResult(generation=gen, info=resolve(history, credentials.player_name))
        except InternalError:
            logger.exception("Player entry missing from selected match")
            result = CycleResult(generation=gen, error=GENERIC_ERROR)
        except (LastMatchError, ValueError) as e:
            logger.warning("Resolution cycle failed: %s", e)
            result = CycleResult(generation=gen, error=str(e))
        except Exception:
            logger.exception("Unexpected failure during resolution cycle")
            result = CycleResult(generation=gen, error=GENERIC_ERROR)

        # Held while publishing so a session change cannot slip in between.
        with self._state_lock:
            if gen != self._generation:
                logger.info("Discarding result from stale session %d", gen)
                return None
            self.on_update(result)
        return result

    def run_forever(self) -> None:
        while not self._stopped.is_set():
            self._wake.clear()
            self.run_cycle()
            self._wake.wait(self.interval_s)
