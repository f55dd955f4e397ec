"""Build declaration nodes for function parameters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from ..comments.jsdoc import CommentSource
from ..comments.resolver import candidate_paths, resolve
from ..models import DeclarationNode, SourceLocation, TypeKind
from .base import BuildOpts


@dataclass(frozen=True)
class MemberSpec:
    """A member of an anonymous object-literal type."""

    name: str
    type_text: str
    type_kind: TypeKind
    location: SourceLocation
    optional: bool = False
    members: Optional[Sequence["MemberSpec"]] = None


@dataclass(frozen=True)
class ParameterSpec:
    """A parameter as reported by the parsing collaborator.

    ``members`` is set only when the declared type is an object literal.
    """

    name: str
    type_text: str
    type_kind: TypeKind
    location: SourceLocation
    nullable: bool = False
    members: Optional[Sequence[MemberSpec]] = field(default=None)


def build_parameter_declarations(
    parameters: Sequence[ParameterSpec],
    parent_opts: BuildOpts,
    comment_source: Optional[CommentSource] = None,
) -> List[DeclarationNode]:
    """Capture function parameters as declaration nodes, in positional order."""
    declarations: List[DeclarationNode] = []
    for index, param in enumerate(parameters):
        opts = replace(parent_opts, id=f"{parent_opts.id}.${index + 1}", name=param.name)
        opts.log.debug(
            "Getting parameter doc def for %s of kind %s", opts.name, param.type_kind.value
        )
        if param.members:
            node = _build_type_literal(param.name, param.members, opts, param.location)
            node.is_required = not param.nullable
        else:
            node = DeclarationNode(
                id=opts.id,
                label=param.name,
                kind=param.type_kind,
                location=param.location,
                is_required=not param.nullable,
                rendered_type=param.type_text,
                type_links=opts.linker.link(param.type_text),
            )
        apply_param_comments(node, comment_source, [param.name])
        declarations.append(node)
    return declarations


def _build_type_literal(
    label: str,
    members: Sequence[MemberSpec],
    opts: BuildOpts,
    location: SourceLocation,
) -> DeclarationNode:
    children: List[DeclarationNode] = []
    for member in members:
        child_id = f"{opts.id}.{member.name}"
        if member.members:
            child = _build_type_literal(
                member.name, member.members, replace(opts, id=child_id), member.location
            )
            child.is_required = not member.optional
        else:
            child = DeclarationNode(
                id=child_id,
                label=member.name,
                kind=member.type_kind,
                location=member.location,
                is_required=not member.optional,
                rendered_type=member.type_text,
                type_links=opts.linker.link(member.type_text),
            )
        children.append(child)
    return DeclarationNode(
        id=opts.id,
        label=label,
        kind=TypeKind.OBJECT,
        location=location,
        children=children,
    )


def apply_param_comments(
    node: DeclarationNode,
    comment_source: Optional[CommentSource],
    path: List[str],
) -> None:
    """Attach resolved `@param` text to ``node`` and, by path, to its descendants."""
    if comment_source is None:
        return
    comment = resolve(comment_source, candidate_paths(path))
    if comment:
        node.description = comment
    for child in node.children:
        apply_param_comments(child, comment_source, [*path, child.label])


__all__ = [
    "MemberSpec",
    "ParameterSpec",
    "apply_param_comments",
    "build_parameter_declarations",
]
