from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable, List

from core.errors import DatasetError
from core.records import UserQuery


def load_user_queries(path: str | Path, *, has_header: bool = True, separator: str = ',') -> List[UserQuery]:
    """Read a delimited text file into UserQuery records.

    Columns are mapped by position (0 -> text, 1 -> intent); the header row is
    skipped without being interpreted. Rows are not validated: short rows get
    empty strings for missing columns and extra columns are ignored. File
    order is preserved.
    """
    p = Path(path)
    if not p.is_file():
        raise DatasetError(f"Training file not found: {p}")
    queries: List[UserQuery] = []
    try:
        with p.open('r', encoding='utf-8', newline='') as f:
            reader = csv.reader(f, delimiter=separator)
            for i, row in enumerate(reader):
                if i == 0 and has_header:
                    continue
                if not row:
                    continue
                text = row[0]
                intent = row[1] if len(row) > 1 else ''
                queries.append(UserQuery(text=text, intent=intent))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise DatasetError(f"Failed to read training file {p}: {e}") from e
    return queries


def distinct_intents(queries: Iterable[UserQuery], key_order: str = 'occurrence') -> List[str]:
    """Distinct non-None intents in first-occurrence order, or sorted for key_order='value'."""
    seen: dict[str, None] = {}
    for q in queries:
        if q.intent is not None and q.intent not in seen:
            seen[q.intent] = None
    labels = list(seen)
    if key_order == 'value':
        labels.sort()
    return labels


__all__ = ['load_user_queries', 'distinct_intents']
