"""RBS output.

RBS declares types inline instead of through ``sig`` blocks:

    def self.parse: (String source, ?Integer line) { (Node) -> void } -> Tree
    attr_reader name: String
    type text = String | Symbol

Sorbet-only markers (``abstract!``, ``final!``, override qualifiers) have
no RBS counterpart and are omitted. Enum classes list their values as
constants of the enum's own type; struct props become attributes.
"""

from decl_weaver.tree.namespace import ClassNamespace, EnumNamespace, InterfaceNamespace, ModuleNamespace, Namespace, StructNamespace
from decl_weaver.tree.nodes import Attribute, Constant, Method, Parameter, ParameterKind, TypeAlias

from .dialect import Dialect
from .options import RenderOptions

UNTYPED = "untyped"
DEFAULT_BLOCK_TYPE = "() -> untyped"


def rbs_param(parameter: Parameter) -> str:
    type_ = parameter.type or UNTYPED
    name = parameter.name_without_kind
    optional = "?" if parameter.default is not None else ""
    match parameter.kind:
        case ParameterKind.SPLAT:
            return f"*{type_} {name}"
        case ParameterKind.DOUBLE_SPLAT:
            return f"**{type_} {name}"
        case ParameterKind.KEYWORD:
            return f"{optional}{name}: {type_}"
        case ParameterKind.BLOCK:
            return f"{optional}{{ {parameter.type or DEFAULT_BLOCK_TYPE} }}"
        case _:
            return f"{optional}{type_} {name}"


class RbsDialect(Dialect):
    name = "rbs"

    def namespace_open(self, namespace: Namespace, level: int, options: RenderOptions) -> list[str]:
        match namespace:
            case ClassNamespace() if namespace.superclass:
                header = f"class {namespace.name} < {namespace.superclass}"
            case ClassNamespace():
                header = f"class {namespace.name}"
            case InterfaceNamespace():
                header = f"interface {namespace.name}"
            case ModuleNamespace():
                header = f"module {namespace.name}"
            case _:
                raise TypeError(f"Cannot open {namespace.describe()}")
        return [options.indented(level, header)]

    def enum_lines(self, namespace: EnumNamespace, level: int, options: RenderOptions) -> list[str]:
        names = [value if isinstance(value, str) else value[0] for value in namespace.enums]
        return [options.indented(level, f"{name}: {namespace.name}") for name in names]

    def struct_lines(self, namespace: StructNamespace, level: int, options: RenderOptions) -> list[str]:
        lines: list[str] = []
        for prop in namespace.props:
            accessor = "attr_reader" if prop.immutable else "attr_accessor"
            nilable = "?" if prop.optional else ""
            lines.append(options.indented(level, f"{accessor} {prop.name}: {prop.type}{nilable}"))
        return lines

    def method_lines(self, method: Method, level: int, options: RenderOptions) -> list[str]:
        blocks = [p for p in method.parameters if p.kind is ParameterKind.BLOCK]
        positional = [rbs_param(p) for p in method.parameters if p.kind is not ParameterKind.BLOCK]
        block = "".join(f" {rbs_param(p)}" for p in blocks[:1])
        returns = method.return_type or "void"

        prefix = "self." if method.class_method else ""
        type_params = f"[{', '.join(method.type_parameters)}] " if method.type_parameters else ""
        head = f"def {prefix}{method.name}: {type_params}"

        if len(positional) >= options.break_params:
            last = len(positional) - 1
            return [
                options.indented(level, f"{head}("),
                *(options.indented(level + 1, param + ("," if i < last else "")) for i, param in enumerate(positional)),
                options.indented(level, f"){block} -> {returns}"),
            ]
        return [options.indented(level, f"{head}({', '.join(positional)}){block} -> {returns}")]

    def attribute_lines(self, attribute: Attribute, level: int, options: RenderOptions) -> list[str]:
        owner = "self." if attribute.class_attribute else ""
        return [options.indented(level, f"attr_{attribute.kind} {owner}{attribute.name}: {attribute.type}")]

    def constant_lines(self, constant: Constant, level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, f"{constant.name}: {constant.type or UNTYPED}")]

    def type_alias_lines(self, alias: TypeAlias, level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, f"type {alias.name} = {alias.type}")]


__all__ = ["RbsDialect", "rbs_param"]
