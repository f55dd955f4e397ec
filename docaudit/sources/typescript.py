"""Tree-sitter powered extraction of TypeScript function signatures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..comments.jsdoc import CommentSource, RawNode, TagList, is_jsdoc, parse_blocks
from ..declarations.functions import FunctionSignature
from ..declarations.parameters import MemberSpec, ParameterSpec
from ..logging import get_logger
from ..models import SourceLocation, TypeKind

_LANGUAGES = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_PARAMETER_NODES = {"required_parameter", "optional_parameter"}
_FUNCTION_VALUE_NODES = {"arrow_function", "function_expression", "function"}
_TYPE_DECLARATION_NODES = {
    "interface_declaration",
    "type_alias_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
}
_ANNOTATION_NODES = {"type_annotation", "opting_type_annotation", "omitting_type_annotation"}
_NESTED_SCOPE_NODES = {
    "function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "method_definition",
    "class_declaration",
}
_PREDEFINED_KINDS = {
    "any": TypeKind.ANY,
    "string": TypeKind.STRING,
    "number": TypeKind.NUMBER,
    "bigint": TypeKind.NUMBER,
    "boolean": TypeKind.BOOLEAN,
    "object": TypeKind.OBJECT,
}
_INITIALIZER_TYPES = {
    "number": ("number", TypeKind.NUMBER),
    "string": ("string", TypeKind.STRING),
    "template_string": ("string", TypeKind.STRING),
    "true": ("boolean", TypeKind.BOOLEAN),
    "false": ("boolean", TypeKind.BOOLEAN),
}
_UNCHECKED_TYPES = {"any", "unknown"}
_NULLISH = {"null", "undefined"}


@dataclass(frozen=True)
class TypeDeclaration:
    """An interface, type alias, class or enum declared at module level."""

    name: str
    exported: bool
    location: SourceLocation


@dataclass
class ParsedModule:
    """Everything the audit needs from one source file."""

    path: str
    functions: List[FunctionSignature] = field(default_factory=list)
    types: List[TypeDeclaration] = field(default_factory=list)
    identifiers: Set[str] = field(default_factory=set)


class TypeScriptSource:
    """Parses TypeScript modules into `FunctionSignature`s for the declaration builders."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}
        self.logger = get_logger("sources.typescript")

    def parse(self, path: str, source: str) -> ParsedModule:
        language_key = "tsx" if path.endswith(".tsx") else "typescript"
        source_bytes = source.encode("utf-8")
        tree = self._get_parser(language_key).parse(source_bytes)
        module = _ModuleReader(path, source_bytes).read(tree.root_node)
        self.logger.debug(
            "Parsed %s: %d functions, %d types", path, len(module.functions), len(module.types)
        )
        return module

    def _get_parser(self, language_key: str) -> Parser:
        parser = self._parsers.get(language_key)
        if parser is None:
            parser = Parser(Language(_LANGUAGES[language_key]()))
            self._parsers[language_key] = parser
        return parser


class _ModuleReader:
    def __init__(self, path: str, source_bytes: bytes) -> None:
        self.path = path
        self.source_bytes = source_bytes

    def read(self, root: Node) -> ParsedModule:
        module = ParsedModule(path=self.path)
        pending_comments: List[str] = []
        for child in root.named_children:
            if child.type == "comment":
                pending_comments.append(self._text(child))
                continue
            exported = child.type == "export_statement"
            declaration = child.child_by_field_name("declaration") if exported else child
            if declaration is not None:
                self._read_declaration(module, declaration, exported, pending_comments)
            pending_comments = []
        module.identifiers = set(self._identifiers(root))
        return module

    def _read_declaration(
        self, module: ParsedModule, node: Node, exported: bool, comments: List[str]
    ) -> None:
        if node.type in {"function_declaration", "function_signature"}:
            name_node = node.child_by_field_name("name")
            if name_node is None:
                return
            source = TagList(blocks=parse_blocks(comments))
            module.functions.append(
                self._function(self._text(name_node), node, node, exported, source)
            )
        elif node.type in {"lexical_declaration", "variable_declaration"}:
            source = RawNode(
                blocks=parse_blocks(comments),
                leading_text="\n".join(text for text in comments if not is_jsdoc(text)),
            )
            for declarator in node.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                value = declarator.child_by_field_name("value")
                if name_node is None or value is None or value.type not in _FUNCTION_VALUE_NODES:
                    continue
                module.functions.append(
                    self._function(self._text(name_node), value, declarator, exported, source)
                )
        elif node.type in _TYPE_DECLARATION_NODES:
            name_node = node.child_by_field_name("name")
            if name_node is not None:
                module.types.append(
                    TypeDeclaration(
                        name=self._text(name_node),
                        exported=exported,
                        location=self._location(node),
                    )
                )

    def _function(
        self,
        name: str,
        node: Node,
        anchor: Node,
        exported: bool,
        source: CommentSource,
    ) -> FunctionSignature:
        unchecked = self._unconstrained_type_parameters(node)
        parameters: List[ParameterSpec] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            for param in params_node.named_children:
                if param.type in _PARAMETER_NODES:
                    parameters.append(self._parameter(param, unchecked))
        else:
            single = node.child_by_field_name("parameter")
            if single is not None:
                parameters.append(
                    ParameterSpec(
                        name=self._text(single),
                        type_text="any",
                        type_kind=TypeKind.ANY,
                        location=self._location(single),
                    )
                )
        return_node = self._type_of(node.child_by_field_name("return_type"))
        return_type = self._text(return_node) if return_node is not None else self._infer_return(node)
        signature_text = f"({', '.join(self._param_text(p) for p in parameters)}) => {return_type}"
        return FunctionSignature(
            name=name,
            parameters=parameters,
            return_type=return_type,
            location=self._location(anchor),
            comment_source=source,
            exported=exported,
            signature_text=signature_text,
        )

    def _parameter(self, node: Node, unchecked: Set[str]) -> ParameterSpec:
        pattern = node.child_by_field_name("pattern")
        name = self._text(pattern) if pattern is not None else self._text(node)
        type_node = self._type_of(self._annotation(node))
        value = node.child_by_field_name("value")
        if type_node is not None:
            type_text, type_kind = self._text(type_node), self._kind(type_node, unchecked)
        elif value is not None:
            # inferred from the default value
            type_text, type_kind = _INITIALIZER_TYPES.get(value.type, ("unknown", TypeKind.UNKNOWN))
        else:
            type_text, type_kind = "any", TypeKind.ANY
        nullable = (
            node.type == "optional_parameter"
            or value is not None
            or self._is_nullish_union(type_text)
        )
        return ParameterSpec(
            name=name,
            type_text=type_text,
            type_kind=type_kind,
            location=self._location(node),
            nullable=nullable,
            members=self._members(type_node, unchecked),
        )

    def _members(self, type_node: Optional[Node], unchecked: Set[str]) -> Optional[List[MemberSpec]]:
        if type_node is None or type_node.type != "object_type":
            return None
        members: List[MemberSpec] = []
        for member in type_node.named_children:
            if member.type == "property_signature":
                name_node = member.child_by_field_name("name")
                value_node = self._type_of(self._annotation(member))
                members.append(
                    MemberSpec(
                        name=self._text(name_node) if name_node is not None else self._text(member),
                        type_text=self._text(value_node) if value_node is not None else "any",
                        type_kind=self._kind(value_node, unchecked),
                        location=self._location(member),
                        optional=any(child.type == "?" for child in member.children),
                        members=self._members(value_node, unchecked),
                    )
                )
            elif member.type == "method_signature":
                name_node = member.child_by_field_name("name")
                members.append(
                    MemberSpec(
                        name=self._text(name_node) if name_node is not None else self._text(member),
                        type_text=self._text(member),
                        type_kind=TypeKind.FUNCTION,
                        location=self._location(member),
                        optional=any(child.type == "?" for child in member.children),
                    )
                )
            elif member.type == "index_signature":
                text = self._text(member)
                value_node = self._type_of(self._annotation(member))
                value_text = self._text(value_node) if value_node is not None else "any"
                kind = (
                    TypeKind.ANY
                    if value_text in _UNCHECKED_TYPES
                    else self._kind(value_node, unchecked)
                )
                members.append(
                    MemberSpec(
                        name=text[: text.find("]") + 1],
                        type_text=value_text,
                        type_kind=kind,
                        location=self._location(member),
                    )
                )
        return members or None

    def _kind(self, node: Optional[Node], unchecked: Set[str]) -> TypeKind:
        if node is None:
            return TypeKind.ANY
        text = self._text(node)
        if node.type == "predefined_type":
            return _PREDEFINED_KINDS.get(text, TypeKind.UNKNOWN)
        if node.type == "object_type":
            return TypeKind.OBJECT
        if node.type in {"function_type", "constructor_type"}:
            return TypeKind.FUNCTION
        if node.type in {"array_type", "tuple_type"}:
            return TypeKind.ARRAY
        if node.type in {"union_type", "intersection_type"}:
            return TypeKind.COMPOUND
        if node.type == "parenthesized_type" and node.named_children:
            return self._kind(node.named_children[0], unchecked)
        if node.type == "literal_type":
            if text.startswith(("'", '"', "`")):
                return TypeKind.STRING
            if text in {"true", "false"}:
                return TypeKind.BOOLEAN
            return TypeKind.NUMBER if text[:1].isdigit() or text[:1] == "-" else TypeKind.UNKNOWN
        if node.type == "type_identifier":
            return TypeKind.ANY if text in unchecked else TypeKind.TYPE
        if node.type == "generic_type":
            name = node.child_by_field_name("name")
            if name is not None and self._text(name) in {"Array", "ReadonlyArray"}:
                return TypeKind.ARRAY
            return TypeKind.TYPE
        return TypeKind.UNKNOWN

    def _unconstrained_type_parameters(self, node: Node) -> Set[str]:
        type_params = node.child_by_field_name("type_parameters")
        names: Set[str] = set()
        if type_params is None:
            return names
        for param in type_params.named_children:
            if param.type != "type_parameter":
                continue
            if any(child.type == "constraint" for child in param.children):
                continue
            default = next((c for c in param.children if c.type == "default_type"), None)
            if default is not None and self._text(default).lstrip("=").strip() not in _UNCHECKED_TYPES:
                continue
            name = next((c for c in param.children if c.type == "type_identifier"), None)
            if name is not None:
                names.add(self._text(name))
        return names

    def _infer_return(self, node: Node) -> str:
        body = node.child_by_field_name("body")
        if body is None:
            return "void"
        if body.type != "statement_block":
            return "unknown"
        for statement in self._walk(body, skip=_NESTED_SCOPE_NODES):
            if statement.type == "return_statement" and statement.named_children:
                return "unknown"
        return "void"

    @staticmethod
    def _annotation(node: Node) -> Optional[Node]:
        annotation = node.child_by_field_name("type")
        if annotation is not None and annotation.type in _ANNOTATION_NODES:
            return annotation
        return next((c for c in node.children if c.type in _ANNOTATION_NODES), None)

    @staticmethod
    def _type_of(annotation: Optional[Node]) -> Optional[Node]:
        if annotation is None:
            return None
        if annotation.type not in _ANNOTATION_NODES:
            return annotation
        return annotation.named_children[-1] if annotation.named_children else None

    @staticmethod
    def _is_nullish_union(type_text: str) -> bool:
        return any(part.strip() in _NULLISH for part in type_text.split("|"))

    @staticmethod
    def _param_text(param: ParameterSpec) -> str:
        return f"{param.name}: {param.type_text}"

    def _walk(self, node: Node, skip: Iterable[str] = ()) -> Iterator[Node]:
        skipped = set(skip)
        for child in node.children:
            yield child
            if child.type not in skipped:
                yield from self._walk(child, skipped)

    def _identifiers(self, root: Node) -> Iterator[str]:
        for node in self._walk(root):
            if node.type in {"identifier", "type_identifier"}:
                yield self._text(node)

    def _location(self, node: Node) -> SourceLocation:
        return SourceLocation(path=self.path, line=node.start_point[0] + 1)

    def _text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


__all__ = ["ParsedModule", "TypeDeclaration", "TypeScriptSource"]
