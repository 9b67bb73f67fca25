"""Process-wide single tunnel guard.

ngrok refuses a second simultaneous client session, so at most one tunnel
may be open per Python process. The guard fails fast locally instead of
letting ngrok reject the session after it has been launched. It is not a
cross-process lock.
"""

import threading
from typing import Any


class TunnelGuard:
    """Lock-protected flag recording whether a tunnel is open."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._holder: Any | None = None

    def try_acquire(self, holder: Any) -> bool:
        """Atomically claim the guard for ``holder``.

        Args:
            holder: Object that will own the guard, usually the tunnel

        Returns:
            True if the guard was free and is now held by ``holder``
        """
        with self._lock:
            if self._holder is not None:
                return False
            self._holder = holder
            return True

    def release(self, holder: Any | None = None) -> bool:
        """Atomically clear the guard.

        Args:
            holder: If given, only release when held by this object

        Returns:
            True if the guard was held and has been released
        """
        with self._lock:
            if self._holder is None:
                return False
            if holder is not None and self._holder is not holder:
                return False
            self._holder = None
            return True

    def held_by(self, holder: Any) -> bool:
        with self._lock:
            return self._holder is holder

    @property
    def held(self) -> bool:
        with self._lock:
            return self._holder is not None


default_guard = TunnelGuard()
