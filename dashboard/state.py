"""Results handed back to the web layer after a form submission."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Union


@dataclass(frozen=True)
class ActionState:
    """Outcome of a mutation attempt that the form should display.

    ``errors`` maps field names to messages shown beside the inputs;
    ``message`` is a single banner line.
    """

    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None

    def update(self, **changes) -> "ActionState":
        return replace(self, **changes)


@dataclass(frozen=True)
class Redirect:
    """The submission finished; the browser should go to ``location``."""

    location: str


ActionResult = Union[ActionState, Redirect]
