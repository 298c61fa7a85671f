# src/anchor_http/core/interceptor_chain.py
"""
Thread-safe interceptor registry for HTTPClient.

Registration and removal may happen from any thread while requests are in
flight; every execution iterates over its own snapshot of the list.
"""
import threading
from typing import Iterator, List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..interceptors.interceptor import RequestInterceptor


class InterceptorChain:
    """
    Ordered, lock-guarded list of request interceptors.

    Order is registration order. The same interceptor may be registered
    more than once and then runs once per registration.

    Example:
        >>> chain = InterceptorChain()
        >>> chain.add(auth)
        >>> chain.add(logging_interceptor)
        >>> for interceptor in chain.snapshot():
        ...     interceptor.intercept(request)
    """

    def __init__(self):
        self._interceptors: List['RequestInterceptor'] = []
        self._lock = threading.Lock()

    def add(self, interceptor: 'RequestInterceptor') -> None:
        """Append an interceptor."""
        with self._lock:
            self._interceptors.append(interceptor)

    def remove(self, interceptor: 'RequestInterceptor') -> bool:
        """
        Remove the first registration of `interceptor` (by identity).

        Returns:
            True if something was removed
        """
        with self._lock:
            for index, registered in enumerate(self._interceptors):
                if registered is interceptor:
                    del self._interceptors[index]
                    return True
            return False

    def clear(self) -> None:
        """Remove all interceptors."""
        with self._lock:
            self._interceptors.clear()

    def snapshot(self) -> List['RequestInterceptor']:
        """Copy of the current list, safe to iterate without the lock."""
        with self._lock:
            return list(self._interceptors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._interceptors)

    def __iter__(self) -> Iterator['RequestInterceptor']:
        return iter(self.snapshot())
