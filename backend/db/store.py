import logging
import re
from typing import Any, Sequence

from sqlalchemy import text
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def bind_positional(statement: str, args: Sequence[Any] = ()) -> tuple[str, dict[str, Any]]:
    """Rewrite ``$n`` placeholders as named binds and build their parameter dict."""

    def _named(match: re.Match) -> str:
        position = int(match.group(1))
        if position < 1 or position > len(args):
            raise ValueError(
                f"Placeholder ${position} has no argument ({len(args)} supplied)"
            )
        return f":p{position}"

    sql = _PLACEHOLDER_RE.sub(_named, statement)
    params = {f"p{idx}": value for idx, value in enumerate(args, start=1)}
    return sql, params


def run_query(db: Session, statement: str, args: Sequence[Any] = ()) -> list[dict]:
    """
    Execute a statement written with ``$1``, ``$2``, ... placeholders.

    Returns the result rows as plain dicts keyed by column alias, or an empty
    list for statements that produce no rows. Store errors are not caught.
    """
    sql, params = bind_positional(statement, args)
    logger.debug("Executing %s with %d argument(s)", " ".join(sql.split()), len(params))

    result = db.execute(text(sql), params)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
