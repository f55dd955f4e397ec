"""Build a declaration node for a whole function signature."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence

from ..comments.jsdoc import (
    CommentSource,
    get_description,
    get_param_tag_names,
    get_return_comment,
    is_deprecated,
)
from ..models import DeclarationNode, SourceLocation, TypeKind
from .base import BuildOpts
from .parameters import ParameterSpec, build_parameter_declarations


@dataclass(frozen=True)
class FunctionSignature:
    """A function-like declaration as reported by the parsing collaborator."""

    name: str
    parameters: Sequence[ParameterSpec]
    return_type: str
    location: SourceLocation
    comment_source: Optional[CommentSource] = None
    exported: bool = True
    signature_text: str = field(default="")


def build_function_declaration(signature: FunctionSignature, opts: BuildOpts) -> DeclarationNode:
    opts = replace(opts, name=signature.name)
    opts.log.debug("Building function declaration %s (%s)", signature.name, opts.id)
    source = signature.comment_source
    rendered = signature.signature_text or f"({_params_text(signature)}) => {signature.return_type}"
    return DeclarationNode(
        id=opts.id,
        label=signature.name,
        kind=TypeKind.FUNCTION,
        location=signature.location,
        description=get_description(source) or None,
        children=build_parameter_declarations(signature.parameters, opts, source),
        rendered_type=rendered,
        type_links=opts.linker.link(rendered),
        return_type=signature.return_type,
        return_comment=get_return_comment(source),
        documented_params=get_param_tag_names(source),
        deprecated=is_deprecated(source),
    )


def _params_text(signature: FunctionSignature) -> str:
    return ", ".join(f"{param.name}: {param.type_text}" for param in signature.parameters)


__all__ = ["FunctionSignature", "build_function_declaration"]
