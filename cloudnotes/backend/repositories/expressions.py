"""
Dialect-aware SQL predicates for the notes table.

Production runs on PostgreSQL (TEXT[] tags, built-in full-text search);
the test suite runs on SQLite (JSON tags, no text search). Each construct
below renders the native form on PostgreSQL and an equivalent fallback on
every other dialect, so the repository composes one query for both.
"""

from typing import Any

from sqlalchemy import Boolean, String, any_, func, literal, literal_column, or_, select
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import ColumnElement


class TagContains(ColumnElement[bool]):
    """True when the tag collection holds exactly ``tag``."""

    type = Boolean()
    inherit_cache = False

    def __init__(self, column: Any, tag: str) -> None:
        self.column = column
        self.tag = tag


class HasTags(ColumnElement[bool]):
    """True when the tag collection is non-empty."""

    type = Boolean()
    inherit_cache = False

    def __init__(self, column: Any) -> None:
        self.column = column


class TextSearch(ColumnElement[bool]):
    """
    Natural-language full-text match of ``query`` over ``columns``.

    PostgreSQL: ``to_tsvector(lang, c1 || ' ' || c2) @@ plainto_tsquery(lang, q)``,
    so stemming and stop words are the database's. Other dialects fall back
    to a case-insensitive substring match on any of the columns.
    """

    type = Boolean()
    inherit_cache = False

    def __init__(self, query: str, *columns: Any, language: str = "english") -> None:
        self.query = query
        self.columns = columns
        self.language = language


@compiles(TagContains, "postgresql")
def _tag_contains_postgresql(element: TagContains, compiler: Any, **kw: Any) -> str:
    return compiler.process(literal(element.tag, String) == any_(element.column), **kw)


@compiles(TagContains)
def _tag_contains_json(element: TagContains, compiler: Any, **kw: Any) -> str:
    entries = func.json_each(element.column).table_valued("value")
    clause = select(literal(1)).select_from(entries).where(entries.c.value == element.tag).exists()
    return compiler.process(clause, **kw)


@compiles(HasTags, "postgresql")
def _has_tags_postgresql(element: HasTags, compiler: Any, **kw: Any) -> str:
    return compiler.process(func.cardinality(element.column) > 0, **kw)


@compiles(HasTags)
def _has_tags_json(element: HasTags, compiler: Any, **kw: Any) -> str:
    return compiler.process(func.json_array_length(element.column) > 0, **kw)


@compiles(TextSearch, "postgresql")
def _text_search_postgresql(element: TextSearch, compiler: Any, **kw: Any) -> str:
    # search_language is restricted to [a-z_] by the config schema
    regconfig = literal_column(f"'{element.language}'")

    document = func.coalesce(element.columns[0], "")
    for column in element.columns[1:]:
        document = document.op("||")(" ").op("||")(func.coalesce(column, ""))

    clause = func.to_tsvector(regconfig, document).bool_op("@@")(
        func.plainto_tsquery(regconfig, element.query)
    )
    return compiler.process(clause, **kw)


@compiles(TextSearch)
def _text_search_substring(element: TextSearch, compiler: Any, **kw: Any) -> str:
    clause = or_(
        *(column.icontains(element.query, autoescape=True) for column in element.columns)
    )
    return compiler.process(clause, **kw)
