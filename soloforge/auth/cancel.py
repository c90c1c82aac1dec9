from __future__ import annotations


class CancellationToken:
    """
    Cooperative cancellation for page-scoped flows.

    The owner calls `cancel()` on teardown; the flow checks `cancelled` after every
    await before touching visible state. In-flight requests are not interrupted.
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
