"""Cross-link named type references inside printed type text."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional, Set

from ..models import TextWithLinks, TypeReference

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")


class TypeLinker:
    """Replaces identifiers naming exported declarations with `TypeReference`s.

    Identifiers that name a declaration known to exist but not exported are
    remembered in :attr:`missing_exports`.
    """

    def __init__(
        self,
        exported: Optional[Mapping[str, TypeReference]] = None,
        unexported: Iterable[str] = (),
    ) -> None:
        self._exported: Dict[str, TypeReference] = dict(exported or {})
        self._unexported: Set[str] = set(unexported)
        self.missing_exports: Set[str] = set()

    def link(self, type_text: str) -> TextWithLinks:
        pieces: List[object] = []
        position = 0
        for match in _IDENTIFIER.finditer(type_text):
            name = match.group(0)
            if name in self._unexported and name not in self._exported:
                self.missing_exports.add(name)
                continue
            reference = self._exported.get(name)
            if reference is None:
                continue
            if match.start() > position:
                pieces.append(type_text[position : match.start()])
            pieces.append(reference)
            position = match.end()
        if position < len(type_text):
            pieces.append(type_text[position:])
        return [piece for piece in pieces if piece != ""]  # type: ignore[misc]


__all__ = ["TypeLinker"]
