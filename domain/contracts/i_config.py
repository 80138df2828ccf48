# domain/contracts/i_config.py
# -----------------------------------------------------------------------------
# Contract for backend configuration. Implementations are immutable values and
# perform no I/O: the final URL, query and headers of every request follow
# from the configuration plus the endpoint path.
# -----------------------------------------------------------------------------

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple


class IConfig(ABC):
    """Supplies base URL, auth headers and query parameters for a backend."""

    @abstractmethod
    def url(self, path: str) -> str:
        """Full request URL for an endpoint path such as `/chat/completions`."""
        pass

    @abstractmethod
    def headers(self) -> List[Tuple[str, str]]:
        """Auth and organisation headers, in the order they are sent."""
        pass

    @abstractmethod
    def query(self) -> List[Tuple[str, str]]:
        """Query parameters appended to every request."""
        pass
