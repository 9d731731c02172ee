"""Links that only open after a parent passes the gate."""

from __future__ import annotations

import webbrowser
from typing import Callable, Optional

from loguru import logger

from parental_gate.core.coordinator import GateCoordinator
from parental_gate.core.models import Callback, GateKind


class GatedLink:
    """An external link guarded by a `LINK` parental gate.

    Args:
        coordinator: Coordinator that queues the gate.
        url: Destination opened once the gate is passed.
        opener: Called with `url` on approval. Defaults to `webbrowser.open`.
    """

    def __init__(
        self,
        coordinator: GateCoordinator,
        url: str,
        opener: Callable[[str], object] = webbrowser.open,
    ) -> None:
        self.coordinator = coordinator
        self.url = url
        self._opener = opener

    def activate(self, on_cancel: Optional[Callback] = None) -> None:
        """Queue the gate; the link opens only if it is approved."""
        logger.debug(f"Link to {self.url} requested; awaiting parental approval.")
        self.coordinator.request_approval(GateKind.LINK, self._open, on_cancel)

    def _open(self) -> None:
        logger.info(f"Opening {self.url} after parental approval.")
        self._opener(self.url)
