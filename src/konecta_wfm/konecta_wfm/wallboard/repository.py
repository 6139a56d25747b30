from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LiveRow


class WallboardRepository(Protocol):
    def list_live_rows(self, *, day: date, manager_id: Optional[int] = None) -> Sequence[LiveRow]:
        """Active agents for `day`; only reports of `manager_id` when given."""

        raise NotImplementedError
