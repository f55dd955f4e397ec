"""Options threaded through declaration builders."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..logging import get_logger
from .links import TypeLinker


@dataclass(frozen=True)
class BuildOpts:
    """Identity and collaborators for the declaration currently being built."""

    id: str
    name: str
    scope: str = "common"
    linker: TypeLinker = field(default_factory=TypeLinker)
    log: logging.Logger = field(default_factory=lambda: get_logger("declarations"))


__all__ = ["BuildOpts"]
