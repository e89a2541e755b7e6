"""Sorbet RBI output.

Methods and attributes are preceded by a ``sig`` block. Signatures whose
parameter count reaches ``break_params`` switch from the one-line form

    sig { params(a: Integer).returns(String) }

to the block form with one parameter per line:

    sig do
      params(
        a: Integer,
        b: String
      ).void
    end
"""

from collections.abc import Sequence

from decl_weaver.tree.namespace import ClassNamespace, EnumNamespace, InterfaceNamespace, ModuleNamespace, Namespace, StructNamespace
from decl_weaver.tree.nodes import Attribute, AttributeKind, Constant, Method, Parameter, ParameterKind, TypeAlias

from .dialect import Dialect
from .options import RenderOptions

UNTYPED = "T.untyped"

_FLAG_ORDER = ("abstract", "interface", "final", "sealed")


def sig_param(parameter: Parameter) -> str:
    return f"{parameter.name_without_kind}: {parameter.type or UNTYPED}"


def def_param(parameter: Parameter) -> str:
    if parameter.default is None:
        return parameter.name
    if parameter.kind is ParameterKind.KEYWORD:
        return f"{parameter.name} {parameter.default}"
    return f"{parameter.name} = {parameter.default}"


def _qualifiers(method: Method) -> str:
    result = ""
    if method.abstract:
        result += "abstract."
    if method.override:
        result += "override."
    if method.overridable:
        result += "overridable."
    if method.type_parameters:
        result += f"type_parameters({', '.join(f':{name}' for name in method.type_parameters)})."
    return result


class RbiDialect(Dialect):
    name = "rbi"

    def file_banner(self, strictness: str) -> list[str]:
        return [f"# typed: {strictness}"]

    def namespace_open(self, namespace: Namespace, level: int, options: RenderOptions) -> list[str]:
        match namespace:
            case EnumNamespace():
                header = f"class {namespace.name} < T::Enum"
            case StructNamespace():
                header = f"class {namespace.name} < T::Struct"
            case ClassNamespace() if namespace.superclass:
                header = f"class {namespace.name} < {namespace.superclass}"
            case ClassNamespace():
                header = f"class {namespace.name}"
            case ModuleNamespace() | InterfaceNamespace():
                header = f"module {namespace.name}"
            case _:
                raise TypeError(f"Cannot open {namespace.describe()}")
        return [options.indented(level, header)]

    def flag_lines(self, namespace: Namespace, level: int, options: RenderOptions) -> list[str]:
        flags = namespace.flags()
        if isinstance(namespace, InterfaceNamespace):
            flags["interface"] = True
        return [options.indented(level, f"{flag}!") for flag in _FLAG_ORDER if flags.get(flag)]

    def enum_lines(self, namespace: EnumNamespace, level: int, options: RenderOptions) -> list[str]:
        lines = [options.indented(level, "enums do")]
        for value in namespace.enums:
            if isinstance(value, str):
                lines.append(options.indented(level + 1, f"{value} = new"))
            else:
                name, serialized = value
                lines.append(options.indented(level + 1, f"{name} = new({serialized})"))
        lines.append(options.indented(level, "end"))
        return lines

    def struct_lines(self, namespace: StructNamespace, level: int, options: RenderOptions) -> list[str]:
        lines: list[str] = []
        for prop in namespace.props:
            keyword = "const" if prop.immutable else "prop"
            extras = "".join(f", {option}: {value}" for option, value in prop.extra_options())
            lines.append(options.indented(level, f"{keyword} :{prop.name}, {prop.type}{extras}"))
        return lines

    def class_level_block(self, level: int, options: RenderOptions) -> tuple[list[str], list[str]]:
        return [options.indented(level, "class << self")], [options.indented(level, "end")]

    def method_lines(self, method: Method, level: int, options: RenderOptions) -> list[str]:
        sig = self._sig_lines(
            method.parameters,
            method.return_type,
            qualifiers=_qualifiers(method),
            final=method.final,
            level=level,
            options=options,
        )
        prefix = "self." if method.class_method else ""
        params = f"({', '.join(def_param(p) for p in method.parameters)})" if method.parameters else ""
        return [*sig, options.indented(level, f"def {prefix}{method.name}{params}; end")]

    def attribute_lines(self, attribute: Attribute, level: int, options: RenderOptions) -> list[str]:
        parameters = [Parameter(attribute.name, type=attribute.type)] if attribute.kind is AttributeKind.WRITER else []
        sig = self._sig_lines(parameters, attribute.type, qualifiers="", final=False, level=level, options=options)
        return [*sig, options.indented(level, f"attr_{attribute.kind} :{attribute.name}")]

    def constant_lines(self, constant: Constant, level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, f"{constant.name} = {constant.value}")]

    def type_alias_lines(self, alias: TypeAlias, level: int, options: RenderOptions) -> list[str]:
        return [options.indented(level, f"{alias.name} = T.type_alias {{ {alias.type} }}")]

    @staticmethod
    def _sig_lines(
        parameters: Sequence[Parameter],
        return_type: str | None,
        *,
        qualifiers: str,
        final: bool,
        level: int,
        options: RenderOptions,
    ) -> list[str]:
        returns = f"returns({return_type})" if return_type else "void"
        sig = "sig(:final)" if final else "sig"
        sig_params = [sig_param(p) for p in parameters]

        if len(parameters) >= options.break_params:
            last = len(sig_params) - 1
            return [
                options.indented(level, f"{sig} do"),
                options.indented(level + 1, f"{qualifiers}params("),
                *(options.indented(level + 2, param + ("," if i < last else "")) for i, param in enumerate(sig_params)),
                options.indented(level + 1, f").{returns}"),
                options.indented(level, "end"),
            ]

        if sig_params:
            chain = f"{qualifiers}params({', '.join(sig_params)})."
        elif qualifiers:
            chain = qualifiers
        else:
            chain = ""
        return [options.indented(level, f"{sig} {{ {chain}{returns} }}")]


__all__ = ["RbiDialect", "def_param", "sig_param"]
