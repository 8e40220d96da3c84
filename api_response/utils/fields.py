from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, inspect

from api_response.exceptions import ArgumentError


def column_map(entity: Any, *names: str) -> dict[str, Any]:
    """Build a name -> column allow-list for a mapped entity.

    With no names every mapped column attribute is included. Unknown names
    are rejected here, when the map is built, rather than per request.
    """
    mapper = inspect(entity).mapper
    if not names:
        names = tuple(mapper.column_attrs.keys())
    unknown = [name for name in names if name not in mapper.column_attrs]
    if unknown:
        raise ArgumentError(
            f"{mapper.class_.__name__} has no column attribute(s): {', '.join(unknown)}"
        )
    return {name: getattr(entity, name) for name in names}


def resolve_column(
    query: Select,
    name: str,
    columns: Mapping[str, Any] | None = None,
) -> Any:
    """Return the column expression called ``name`` for ``query``.

    Lookup order: the explicit ``columns`` map when given (nothing else is
    consulted), then the mapped attributes of each selected entity, then the
    keys of the statement's selected columns. Names are case-sensitive.
    """
    if not name:
        raise ArgumentError("Property name must not be empty.")

    if columns is not None:
        if name not in columns:
            raise ArgumentError(f"Property '{name}' is not available for this query.")
        return columns[name]

    for description in query.column_descriptions:
        entity = description.get("entity")
        if entity is None:
            continue
        if name in inspect(entity).mapper.column_attrs:
            return getattr(entity, name)

    column = query.selected_columns.get(name)
    if column is not None:
        return column

    raise ArgumentError(f"Property '{name}' does not exist on the queried entity.")
