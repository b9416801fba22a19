"""SQL CASE fragments that reproduce ``normalize_asp_name`` inside a query.

Filtering/grouping by canonical ASP has to happen server-side, so the same
precedence as the in-process normalizer is rendered as a ``CASE`` expression:

    Japanese alias -> DB code (exact) -> DB code (UPPER) -> DTI + URL -> LOWER()

Column references are interpolated verbatim, so they must be ``ColumnRef``
values (plain dotted identifiers). Right-hand literals come from the registry.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from sqlalchemy import literal_column
from sqlalchemy.sql.elements import ColumnElement

from processor.asp_registry import (
    DTI_CODE,
    DTI_FALLBACK,
    DTI_URL_PATTERNS,
    FOLDED_CODE_MAP,
    JA_TO_EN_MAP,
    UPPER_TO_LOWER_MAP,
)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$")


class InvalidColumnRef(ValueError):
    """Raised when a column reference is not a plain SQL identifier."""


class ColumnRef:
    """A trusted column reference such as ``ps.asp_name``.

    Only dotted identifiers are accepted; expressions, quotes, whitespace and
    comments are rejected so caller input can never reach the generated SQL.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        if not isinstance(name, str) or not _IDENTIFIER_RE.fullmatch(name):
            raise InvalidColumnRef(f"not a column reference: {name!r}")
        self.name = name

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ColumnRef({self.name!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, ColumnRef) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)


def _col(ref: ColumnRef | str) -> str:
    if isinstance(ref, ColumnRef):
        return ref.name
    return ColumnRef(ref).name


def quote_literal(value: str) -> str:
    """Render ``value`` as a SQL string literal."""
    return "'" + value.replace("'", "''") + "'"


def _equals_parts(expr: str, table: Mapping[str, str]) -> str:
    return "\n".join(
        f"WHEN {expr} = {quote_literal(raw)} THEN {quote_literal(slug)}"
        for raw, slug in table.items()
    )


def build_dti_url_case_parts(url_column: ColumnRef | str) -> str:
    """``WHEN <url> LIKE '%<host>%' THEN '<slug>'`` for every DTI URL pattern."""
    url = _col(url_column)
    return "\n".join(
        f"WHEN {url} LIKE {quote_literal('%' + pattern + '%')} THEN {quote_literal(slug)}"
        for pattern, slug in DTI_URL_PATTERNS.items()
    )


def build_ja_to_en_case_parts(column: ColumnRef | str) -> str:
    return _equals_parts(_col(column), JA_TO_EN_MAP)


def build_upper_to_lower_case_parts(column: ColumnRef | str) -> str:
    return _equals_parts(_col(column), UPPER_TO_LOWER_MAP)


def _case_folded_parts(column: str) -> str:
    # Mirrors the ``raw.upper()`` lookup against the uppercased codes.
    return _equals_parts(f"UPPER({column})", FOLDED_CODE_MAP)


def build_asp_normalization_sql(
    name_column: ColumnRef | str,
    url_column: ColumnRef | str,
) -> str:
    """Full ``CASE`` expression equivalent to ``normalize_asp_name(name, url)``."""
    name = _col(name_column)
    url = _col(url_column)
    return (
        "CASE\n"
        f"{build_ja_to_en_case_parts(name)}\n"
        f"{build_upper_to_lower_case_parts(name)}\n"
        f"{_case_folded_parts(name)}\n"
        f"WHEN UPPER({name}) = {quote_literal(DTI_CODE)} THEN CASE\n"
        f"{build_dti_url_case_parts(url)}\n"
        f"ELSE {quote_literal(DTI_FALLBACK)}\n"
        "END\n"
        f"ELSE LOWER({name})\n"
        "END"
    )


def build_asp_match_sql(
    name_column: ColumnRef | str,
    url_column: ColumnRef | str,
    slugs: Iterable[str],
) -> str:
    """``(<normalization>) IN (...)``; an empty slug list matches nothing."""
    values = ", ".join(quote_literal(s) for s in slugs)
    return f"({build_asp_normalization_sql(name_column, url_column)}) IN ({values})"


def asp_normalization_column(
    name_column: ColumnRef | str,
    url_column: ColumnRef | str,
    label: str | None = None,
) -> ColumnElement:
    """The normalization expression as a SQLAlchemy column for Core ``select()``."""
    col = literal_column(f"({build_asp_normalization_sql(name_column, url_column)})")
    return col.label(label) if label else col
