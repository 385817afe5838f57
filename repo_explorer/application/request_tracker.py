"""Latest-request-wins bookkeeping for callers that issue overlapping searches."""

import logging
import threading
from typing import Optional

from repo_explorer.domain.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class RequestTracker:
    """Issues generation-numbered tokens and cancels the one it replaces."""
    
    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0
        self._current: Optional[CancellationToken] = None
    
    def issue(self) -> CancellationToken:
        """Start a new request, superseding whichever request was current."""
        with self._lock:
            self._generation += 1
            previous = self._current
            self._current = CancellationToken(self._generation)
            token = self._current
        
        if previous is not None and not previous.cancelled:
            previous.cancel()
            logger.info(f"Request {previous.generation} superseded by request {token.generation}")
        return token
    
    def is_current(self, token: CancellationToken) -> bool:
        with self._lock:
            return token is self._current and not token.cancelled
    
    def reset(self):
        """Cancel the current request without starting a new one."""
        with self._lock:
            previous = self._current
            self._current = None
        if previous is not None:
            previous.cancel()
