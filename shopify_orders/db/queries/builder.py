"""
Typed GraphQL document builder.

Queries are composed as an immutable selection tree and rendered to text
only when sent. Fragments referenced anywhere in the tree are collected and
declared once at the end of the document; two different fragments sharing a
name are rejected. String arguments are always rendered as escaped GraphQL
string literals.

Example:
    >>> doc = Operation(
    ...     "query",
    ...     "shop",
    ...     selections=(select("shop", *fields("id", "name")),),
    ... )
    >>> print(render(doc))
    query shop {
      shop {
        id
        name
      }
    }
"""

import json
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Union

from shopify_orders.utils.error_handler import DocumentBuildError

INDENT = "  "


@dataclass(frozen=True)
class VariableRef:
    """Reference to an operation variable used as an argument value."""

    name: str

    def render(self) -> str:
        return f"${self.name}"


@dataclass(frozen=True)
class Literal:
    """Inline argument value."""

    value: Any

    def render(self) -> str:
        value = self.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            # JSON string escapes are a subset of GraphQL string escapes
            return json.dumps(value, ensure_ascii=False)
        raise DocumentBuildError(f"Unsupported literal type: {type(value).__name__}")


ArgumentValue = Union[VariableRef, Literal]


@dataclass(frozen=True)
class Field:
    """A field selection with optional arguments and sub-selections."""

    name: str
    arguments: tuple[tuple[str, ArgumentValue], ...] = ()
    selections: tuple["Selection", ...] = ()


@dataclass(frozen=True)
class Fragment:
    """Named fragment definition."""

    name: str
    type_condition: str
    selections: tuple["Selection", ...]


@dataclass(frozen=True)
class FragmentSpread:
    """``...Name`` reference to a fragment definition."""

    fragment: Fragment


@dataclass(frozen=True)
class InlineFragment:
    """``... on Type { ... }`` selection."""

    type_condition: str
    selections: tuple["Selection", ...]


Selection = Union[Field, FragmentSpread, InlineFragment]


@dataclass(frozen=True)
class VariableDefinition:
    """Operation variable declaration, e.g. ``$id: ID!``."""

    name: str
    type: str


@dataclass(frozen=True)
class Operation:
    """
    Query or mutation document root.

    ``name`` may be None for an anonymous query (bulk operation documents are
    anonymous and take no variables).
    """

    kind: str
    name: str | None = None
    variables: tuple[VariableDefinition, ...] = ()
    selections: tuple[Selection, ...] = ()


def var(name: str) -> VariableRef:
    """Shortcut for a variable argument value."""
    return VariableRef(name)


def _as_argument(value: Any) -> ArgumentValue:
    if isinstance(value, (VariableRef, Literal)):
        return value
    return Literal(value)


def select(name: str, *selections: Selection, **arguments: Any) -> Field:
    """
    Build a field selection.

    Keyword arguments become field arguments; plain Python values are
    rendered as literals and ``var("x")`` as ``$x``.
    """
    return Field(
        name=name,
        arguments=tuple((key, _as_argument(value)) for key, value in arguments.items()),
        selections=tuple(selections),
    )


def fields(*names: str) -> tuple[Field, ...]:
    """Build leaf field selections."""
    return tuple(Field(name) for name in names)


def spread(fragment: Fragment) -> FragmentSpread:
    return FragmentSpread(fragment)


def on(type_condition: str, *selections: Selection) -> InlineFragment:
    return InlineFragment(type_condition, tuple(selections))


def connection(
    name: str,
    node_selections: Iterable[Selection],
    *,
    with_cursor: bool = False,
    page_info: Iterable[str] = (),
    **arguments: Any,
) -> Field:
    """
    Build a ``name(args) { edges { node { ... } cursor } pageInfo { ... } }`` selection.

    Args:
        name: Connection field name
        node_selections: Selections applied to each node
        with_cursor: Select the edge cursor next to the node
        page_info: PageInfo fields to select (omitted when empty)
        **arguments: Connection arguments
    """
    edge_selections: list[Selection] = [select("node", *node_selections)]
    if with_cursor:
        edge_selections.append(Field("cursor"))

    connection_selections: list[Selection] = [select("edges", *edge_selections)]
    page_info = tuple(page_info)
    if page_info:
        connection_selections.append(select("pageInfo", *fields(*page_info)))

    return select(name, *connection_selections, **arguments)


def iter_fragments(selections: Iterable[Selection]) -> Iterator[Fragment]:
    """Yield every fragment referenced in the selections, depth first."""
    for selection in selections:
        if isinstance(selection, FragmentSpread):
            yield selection.fragment
            yield from iter_fragments(selection.fragment.selections)
        elif isinstance(selection, (Field, InlineFragment)):
            yield from iter_fragments(selection.selections)


def collect_fragments(selections: Iterable[Selection]) -> list[Fragment]:
    """
    Collect referenced fragments in first-use order, each exactly once.

    Raises:
        DocumentBuildError: If two different fragments share a name
    """
    by_name: dict[str, Fragment] = {}
    for fragment in iter_fragments(selections):
        existing = by_name.get(fragment.name)
        if existing is None:
            by_name[fragment.name] = fragment
        elif existing != fragment:
            raise DocumentBuildError(
                f"Fragment name collision: '{fragment.name}' is defined twice with different selections",
                details={"fragment": fragment.name},
            )
    return list(by_name.values())


def _render_selections(selections: Iterable[Selection], depth: int) -> list[str]:
    lines = []
    pad = INDENT * depth
    for selection in selections:
        if isinstance(selection, Field):
            head = selection.name
            if selection.arguments:
                args = ", ".join(f"{key}: {value.render()}" for key, value in selection.arguments)
                head = f"{head}({args})"
            if selection.selections:
                lines.append(f"{pad}{head} {{")
                lines.extend(_render_selections(selection.selections, depth + 1))
                lines.append(f"{pad}}}")
            else:
                lines.append(f"{pad}{head}")
        elif isinstance(selection, FragmentSpread):
            lines.append(f"{pad}...{selection.fragment.name}")
        elif isinstance(selection, InlineFragment):
            lines.append(f"{pad}... on {selection.type_condition} {{")
            lines.extend(_render_selections(selection.selections, depth + 1))
            lines.append(f"{pad}}}")
        else:
            raise DocumentBuildError(f"Unsupported selection: {selection!r}")
    return lines


def render(operation: Operation) -> str:
    """
    Render an operation and the fragments it uses to GraphQL text.

    Returns:
        str: GraphQL document
    """
    head = operation.kind
    if operation.name:
        head = f"{head} {operation.name}"
    if operation.variables:
        declared = ", ".join(f"${v.name}: {v.type}" for v in operation.variables)
        head = f"{head}({declared})"

    lines = [f"{head} {{"]
    lines.extend(_render_selections(operation.selections, 1))
    lines.append("}")

    for fragment in collect_fragments(operation.selections):
        lines.append("")
        lines.append(f"fragment {fragment.name} on {fragment.type_condition} {{")
        lines.extend(_render_selections(fragment.selections, 1))
        lines.append("}")

    return "\n".join(lines)
