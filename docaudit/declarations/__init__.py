"""Declaration builders turning parsed signatures into declaration trees."""

from .base import BuildOpts
from .functions import FunctionSignature, build_function_declaration
from .links import TypeLinker
from .parameters import (
    MemberSpec,
    ParameterSpec,
    apply_param_comments,
    build_parameter_declarations,
)

__all__ = [
    "BuildOpts",
    "FunctionSignature",
    "MemberSpec",
    "ParameterSpec",
    "TypeLinker",
    "apply_param_comments",
    "build_function_declaration",
    "build_parameter_declarations",
]
