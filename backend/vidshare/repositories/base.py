"""Generic repository base and query utilities for SQLAlchemy 2.x.

Repositories are persistence-only: they build and run statements against the
session handed in by the Unit of Work and never commit or roll back.

Per-repository hooks
--------------------
``_sortable_fields``
    Public sort key → column. Unknown keys are dropped, so clients can never
    order by an arbitrary column (``-password_hash`` included).
``_filterable_fields``
    Public filter key → column for equality filters. ``None`` means "any
    mapped attribute".
``_updatable_fields``
    Attribute names :meth:`BaseRepository.assign_updates` may touch.
``_default_eagerload``
    Loader options added to ``get``/``list``/``paginate`` queries.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, Select, delete, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from vidshare.core.extensions import db

E = TypeVar("E")  # mapped entity


@dataclass(slots=True)
class Pagination:
    """
    Page request.

    :param page: 1-based page number.
    :param limit: Page size.
    :param sort: Sort tokens, ``-`` prefix for descending (``["-views"]``).
    """

    page: int
    limit: int
    sort: list[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * max(self.limit, 1)


@dataclass(slots=True)
class Page(Generic[E]):
    """One page of results plus the size of the unpaginated query."""

    items: Sequence[E]
    total: int
    page: int
    limit: int


def order_clauses(
    tokens: Iterable[str],
    columns: Mapping[str, InstrumentedAttribute[Any]],
) -> list[ColumnElement[Any]]:
    """Translate sort tokens into ``ORDER BY`` clauses, skipping unknown keys."""
    clauses: list[ColumnElement[Any]] = []
    for token in tokens:
        name = token.lstrip("-").strip()
        column = columns.get(name)
        if column is None:
            continue
        clauses.append(column.desc() if token.startswith("-") else column.asc())
    return clauses


def paginate_select(
    session: Session, stmt: Select[Any], pagination: Pagination
) -> tuple[list[Any], int]:
    """
    Run ``stmt`` for one page and count the whole result set.

    The count wraps ``stmt`` in a subquery with its ``ORDER BY`` removed.
    """
    total = session.execute(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ).scalar_one()
    sliced = stmt.limit(max(pagination.limit, 1)).offset(pagination.offset)
    return list(session.execute(sliced).scalars().unique().all()), int(total)


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single mapped table."""

    #: Mapped model, set by subclasses.
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The Unit of Work session, or Flask-SQLAlchemy's scoped one."""
        return self._session if self._session is not None else cast(Session, db.session)

    # ------------------------------ Hooks -------------------------------------

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]] | None:
        return None

    def _updatable_fields(self) -> set[str]:
        return set()

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    # ----------------------------- Helpers ------------------------------------

    @property
    def _pk(self) -> InstrumentedAttribute[Any]:
        return cast(InstrumentedAttribute[Any], getattr(self.model, "id"))

    def _conditions(self, filters: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
        if not filters:
            return []
        allowed = self._filterable_fields()
        if allowed is None:
            return [getattr(self.model, key) == value for key, value in filters.items()]
        return [allowed[key] == value for key, value in filters.items() if key in allowed]

    def _filtered(self, stmt: Select[Any], filters: Mapping[str, Any] | None) -> Select[Any]:
        conditions = self._conditions(filters)
        return stmt.where(*conditions) if conditions else stmt

    def _ordered(self, stmt: Select[Any], sort: Iterable[str]) -> Select[Any]:
        # Primary key last so equal sort values still page deterministically
        return stmt.order_by(*order_clauses(sort, self._sortable_fields()), self._pk.asc())

    # ------------------------------ Reads -------------------------------------

    def get(self, entity_id: Any) -> E | None:
        stmt = self._default_eagerload(select(self.model).where(self._pk == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = self._filtered(select(self._pk), filters).limit(1)
        return self.session.execute(stmt).first() is not None

    def count(self, **filters: Any) -> int:
        stmt = self._filtered(select(func.count()).select_from(self.model), filters)
        return int(self.session.execute(stmt).scalar_one())

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] = (),
    ) -> list[E]:
        """All rows matching ``filters`` in ``sort`` order."""
        stmt = self._default_eagerload(self._filtered(select(self.model), filters))
        return cast(list[E], list(self.session.execute(self._ordered(stmt, sort)).scalars()))

    def paginate(
        self, pagination: Pagination, *, filters: Mapping[str, Any] | None = None
    ) -> Page[E]:
        return self.paginate_statement(self._filtered(select(self.model), filters), pagination)

    def paginate_statement(self, stmt: Select[Any], pagination: Pagination) -> Page[E]:
        """Page through a select the caller already filtered."""
        stmt = self._ordered(self._default_eagerload(stmt), pagination.sort)
        items, total = paginate_select(self.session, stmt, pagination)
        return Page(
            items=cast(list[E], items),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    # ------------------------------ Writes ------------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its id and defaults are populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def assign_updates(self, instance: E, changes: Mapping[str, Any]) -> E:
        """
        Set whitelisted attributes on ``instance`` and flush.

        Attributes go through ``setattr`` so model ``@validates`` hooks run.

        :raises ValueError: If ``changes`` names a non-updatable attribute.
        """
        rejected = sorted(set(changes) - self._updatable_fields())
        if rejected:
            raise ValueError(f"Not updatable on {self.model.__name__}: {rejected}")
        for name, value in changes.items():
            setattr(instance, name, value)
        self.flush()
        return instance

    def update(self, instance: E, **changes: Any) -> E:
        return self.assign_updates(instance, changes)

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def delete_where(self, **filters: Any) -> int:
        """
        Delete every matching row in one statement.

        :returns: Number of rows removed.
        :raises ValueError: Without filters, which would empty the table.
        """
        conditions = self._conditions(filters)
        if not conditions:
            raise ValueError("delete_where requires at least one filter.")
        result = self.session.execute(
            delete(self.model).where(*conditions).execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)

    def flush(self) -> None:
        self.session.flush()
