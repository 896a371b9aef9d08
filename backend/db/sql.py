from typing import Any, Mapping

from errors import BadRequestError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str],
) -> tuple[str, list[Any]]:
    """
    Turn a partial field mapping into the SET clause of an UPDATE statement.

    Field names found in ``js_to_sql`` are written as their column name, the
    rest are used as-is. Placeholders are numbered from 1 in the iteration
    order of ``data_to_update`` and the returned values follow that order:

        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        -> ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises BadRequestError when ``data_to_update`` is empty.
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [
        f'"{js_to_sql.get(name, name)}"=${idx}'
        for idx, name in enumerate(keys, start=1)
    ]
    values = [data_to_update[name] for name in keys]

    return ", ".join(cols), values
