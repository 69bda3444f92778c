"""General-purpose CSV writing for dashboard-style tables.

Fields are quoted only when they need to be, and embedded quotes are doubled.
The vesting-platform export in ``fundraising_export.magna`` quotes every field
and does not use these helpers.
"""

from typing import Any, Iterable, Sequence


def escape_csv_field(value: Any) -> str:
    """Render one CSV field.

    ``None`` becomes an empty field. Values containing a comma, a double quote
    or a newline are wrapped in quotes with internal quotes doubled.

    Examples:
        escape_csv_field(None) → ""
        escape_csv_field("Seed, Round") → '"Seed, Round"'
        escape_csv_field('Say "hi"') → '"Say ""hi""\"'
    """
    if value is None:
        return ""

    text = str(value)
    if "," in text or '"' in text or "\n" in text:
        escaped = text.replace('"', '""')
        return f'"{escaped}"'
    return text


def to_csv(rows: Iterable[Sequence[Any]], headers: Sequence[str]) -> str:
    """Header line followed by one line per row, joined with ``\\n``."""
    lines = [",".join(escape_csv_field(h) for h in headers)]
    for row in rows:
        lines.append(",".join(escape_csv_field(cell) for cell in row))
    return "\n".join(lines)
