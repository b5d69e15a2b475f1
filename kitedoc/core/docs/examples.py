"""Example and schema listings shared by all renderers.

Each function returns token lines (see :mod:`kitedoc.core.docs.highlighting`)
so Markdown, ``.kite`` and HTML output are generated from the same listing.
"""

from __future__ import annotations

from collections.abc import Sequence

from kitedoc.core.docs.formatting import (
    align,
    column_width,
    format_literal,
    quote,
    single_line,
    truncate,
)
from kitedoc.core.docs.highlighting import (
    Line,
    Token,
    comment,
    decorator,
    delim,
    ident,
    kw,
    literal_token,
    op,
    prop,
    string,
    text,
    typ,
)
from kitedoc.core.docs.models import PropertyInfo, ProviderInfo, ResourceInfo

INDENT = "    "
COMMENT_GAP = "  "
COMPLETE_COMMENT_LIMIT = 40

#: Placeholder values by type tag, used when a property has no default.
PLACEHOLDERS: dict[str, tuple[Token, ...]] = {
    "string": (string('"example-value"'),),
    "integer": (literal_token("42"),),
    "boolean": (literal_token("true"),),
    "number": (literal_token("3.14"),),
    "list": (delim("["), string('"item1"'), text(", "), string('"item2"'), delim("]")),
    "set": (delim("["), string('"item1"'), text(", "), string('"item2"'), delim("]")),
    "map": (
        delim("{"),
        text(" "),
        prop("key"),
        delim(":"),
        text(" "),
        string('"value"'),
        text(" "),
        delim("}"),
    ),
}
FALLBACK_PLACEHOLDER: tuple[Token, ...] = (string('"..."'),)


def example_value(info: PropertyInfo) -> tuple[Token, ...]:
    """Value shown for a property in examples.

    The default value wins, then the first valid value, then a placeholder
    chosen by type.
    """
    if info.default_value:
        return (literal_token(format_literal(info.default_value, info.type)),)
    if info.valid_values:
        return (string(quote(info.valid_values[0])),)
    return PLACEHOLDERS.get(info.type, FALLBACK_PLACEHOLDER)


def _open_resource(resource_type: str, name: str) -> Line:
    return (
        kw("resource"),
        text(" "),
        typ(resource_type),
        text(" "),
        ident(name),
        text(" "),
        delim("{"),
    )


def _assignments(
    props: Sequence[PropertyInfo], values: Sequence[tuple[Token, ...]]
) -> list[tuple[Token, ...]]:
    labels = align([(p.name, "") for p in props])
    lines = []
    for info, label, value in zip(props, labels, values, strict=True):
        padding = label[len(info.name) :]
        head = (text(INDENT), prop(info.name), text(padding + " "), op("="), text(" "))
        lines.append((*head, *value))
    return lines


def basic_example(resource: ResourceInfo) -> list[Line]:
    """Minimal example: user properties that are not deprecated, aligned on ``=``."""
    props = [p for p in resource.user_properties if not p.deprecated]
    return [
        _open_resource(resource.name, "example"),
        *_assignments(props, [example_value(p) for p in props]),
        (delim("}"),),
    ]


def reference_name(resource: ResourceInfo) -> str:
    return f"my_{resource.name.lower()}"


def references_example(resource: ResourceInfo, related: Sequence[ResourceInfo]) -> list[Line]:
    """Example wiring the first string properties to related resources' ``id``.

    ``related`` is the already bounded list of same-domain resources to
    reference, in navigation order.
    """
    props = [p for p in resource.user_properties if not p.deprecated]
    lines: list[Line] = [(comment("// Example with resource references"),), ()]

    for other in related:
        lines.append(_open_resource(other.name, reference_name(other)))
        lines.append((text(INDENT), comment("// ... configuration")))
        lines.append((delim("}"),))
        lines.append(())

    pending = list(related)
    values: list[tuple[Token, ...]] = []
    for info in props:
        if pending and info.type == "string":
            target = pending.pop(0)
            values.append((ident(reference_name(target)), delim("."), prop("id")))
        else:
            values.append(example_value(info))

    lines.append(_open_resource(resource.name, "example"))
    lines.extend(_assignments(props, values))
    lines.append((delim("}"),))
    return lines


def complete_example(resource: ResourceInfo) -> list[Line]:
    """Every user property; deprecated ones are commented out, not omitted."""
    props = list(resource.user_properties)
    active = [p for p in props if not p.deprecated]
    rendered = _assignments(active, [example_value(p) for p in active])
    assignments = {info.name: line for info, line in zip(active, rendered, strict=True)}

    lines: list[Line] = [
        (comment("// Complete example with all properties"),),
        _open_resource(resource.name, "complete_example"),
    ]
    for info in props:
        if info.deprecated:
            lines.append((text(INDENT), comment(f"// {info.name} (deprecated)")))
            continue
        line = assignments[info.name]
        if info.description:
            note = truncate(single_line(info.description), COMPLETE_COMMENT_LIMIT)
            line = (*line, text(COMMENT_GAP), comment(f"// {note}"))
        lines.append(line)
    lines.append((delim("}"),))
    return lines


def schema_type(info: PropertyInfo) -> str:
    """Type column of a schema declaration; nullable types carry ``?``."""
    return info.type if info.required else f"{info.type}?"


def schema_default(info: PropertyInfo) -> str | None:
    if not info.default_value:
        return None
    return format_literal(info.default_value, info.type)


def schema_header(resource: ResourceInfo) -> str:
    if resource.description:
        return f"// {resource.name} - {single_line(resource.description)}"
    return f"// {resource.name}"


def schema_listing(resource: ResourceInfo) -> list[Line]:
    """Declarative schema of a resource in ``.kite`` syntax.

    Types are padded to the widest type plus one space; descriptions start
    in one column after ``name = default``.
    """
    props = resource.properties
    type_width = column_width([schema_type(p) for p in props]) + 1
    defaults = [schema_default(p) for p in props]
    name_columns = align(
        [(p.name, f" = {d}" if d else "") for p, d in zip(props, defaults, strict=True)]
    )

    lines: list[Line] = [
        (comment(schema_header(resource)),),
        (kw("schema"), text(" "), typ(resource.name), text(" "), delim("{")),
    ]
    for info, default, column in zip(props, defaults, name_columns, strict=True):
        if info.valid_values:
            allowed: list[Token] = [text(INDENT), decorator("@allowed"), delim("([")]
            for index, value in enumerate(info.valid_values):
                if index:
                    allowed.append(text(", "))
                allowed.append(string(quote(value)))
            allowed.append(delim("])"))
            lines.append(tuple(allowed))
        if info.cloud_managed:
            if info.importable:
                lines.append(
                    (text(INDENT), decorator("@cloud"), delim("("), ident("importable"), delim(")"))
                )
            else:
                lines.append((text(INDENT), decorator("@cloud")))
        if info.deprecated:
            message = string(quote(single_line(info.deprecation_message)))
            lines.append((text(INDENT), decorator("@deprecated"), delim("("), message, delim(")")))

        type_text = schema_type(info)
        gap = " " * (type_width - len(type_text))
        line: list[Token] = [text(INDENT), typ(type_text), text(gap), prop(info.name)]
        if default is not None:
            line += [text(" "), op("="), text(" "), literal_token(default)]
        if info.description:
            used = len(info.name) + (len(default) + 3 if default is not None else 0)
            padding = " " * (len(column) - used) + COMMENT_GAP
            line += [text(padding), comment(f"// {single_line(info.description)}")]
        lines.append(tuple(line))

    lines.append((delim("}"),))
    return lines


def import_path(provider: ProviderInfo, resource: ResourceInfo) -> str:
    """Path used to import a resource schema (``aws/networking/Vpc.kite``)."""
    return f"{provider.slug}/{resource.domain_tag.lower()}/{resource.name}.kite"


def import_line(provider: ProviderInfo, resource: ResourceInfo) -> Line:
    return (
        kw("import"),
        text(" "),
        typ(resource.name),
        text(" "),
        kw("from"),
        text(" "),
        string(quote(import_path(provider, resource))),
    )
