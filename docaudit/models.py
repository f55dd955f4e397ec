"""Core data models shared across docaudit components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class TypeKind(str, Enum):
    """Coarse type classification attached to every declaration node."""

    ANY = "AnyKind"
    STRING = "StringKind"
    NUMBER = "NumberKind"
    BOOLEAN = "BooleanKind"
    ARRAY = "ArrayKind"
    OBJECT = "ObjectKind"
    FUNCTION = "FunctionKind"
    COMPOUND = "CompoundTypeKind"
    TYPE = "TypeKind"
    INTERFACE = "InterfaceKind"
    UNKNOWN = "UnknownKind"


@dataclass(frozen=True)
class SourceLocation:
    """Repository-relative path and 1-based line of a declaration."""

    path: str
    line: int


@dataclass(frozen=True)
class TypeReference:
    """Cross-link to another exported declaration mentioned in a type."""

    id: str
    text: str
    scope: str


TextWithLinks = List[Union[str, TypeReference]]


@dataclass
class DeclarationNode:
    """One entry in the extracted documentation tree."""

    id: str
    label: str
    kind: TypeKind
    location: SourceLocation
    description: Optional[List[str]] = None
    children: List["DeclarationNode"] = field(default_factory=list)
    is_required: bool = True
    rendered_type: str = ""
    type_links: TextWithLinks = field(default_factory=list)
    return_type: str = ""
    return_comment: Optional[List[str]] = None
    documented_params: List[str] = field(default_factory=list)
    references: Optional[List[str]] = None
    deprecated: bool = False


ApiForest = Dict[str, List[DeclarationNode]]


@dataclass(frozen=True)
class DeprecationReference:
    """A deprecated API referenced from another source unit."""

    id: str
    label: str
    referenced_from: str
