"""
Query specifications and their compilation to SQLAlchemy statements.

A QuerySpec describes a listing as data: predicate groups (AND across groups,
OR inside an AnyOf), join descriptors, sort keys and a page window. The
compiler turns one spec into two statements sharing the same joins and
predicates: the page select and the count select. Keeping both on one spec is
what guarantees that pagination totals reflect the filtered count.

Reference: https://docs.sqlalchemy.org/en/20/orm/queryguide/select.html
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union

from sqlalchemy import Select, String, and_, func, literal_column, or_, select, type_coerce
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.functions import FunctionElement

from artforms.models.artist import Artist
from artforms.models.artwork import Artwork
from artforms.models.user import User


class Op(str, Enum):
    """Predicate operators understood by the compiler."""

    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LTE = "lte"
    # Case-insensitive substring of a scalar column
    ICONTAINS = "icontains"
    # JSON list column contains exactly this element
    HAS_ELEMENT = "has_element"
    # Some element of a JSON list column contains this substring, case-insensitively
    ICONTAINS_ELEMENT = "icontains_element"


@dataclass(frozen=True)
class Predicate:
    """A single condition on a field, e.g. Predicate("price", Op.GTE, 100)."""

    field: str
    op: Op
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """A group of alternatives; matches when at least one predicate matches."""

    alternatives: tuple[Predicate, ...]


Group = Union[Predicate, AnyOf]


@dataclass(frozen=True)
class Join:
    """Join descriptor: bring a related entity's fields into scope."""

    relation: str


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class QuerySpec:
    """
    Explicit query plan for one listing.

    ``groups`` are AND-ed. Fields are entity field names, or
    ``"<relation>.<field>"`` for fields reached through a join.
    """

    entity: str
    groups: tuple[Group, ...] = ()
    joins: tuple[Join, ...] = ()
    sort: tuple[SortKey, ...] = ()
    page: int = 1
    limit: int = 12

    def where(self, *groups: Group) -> "QuerySpec":
        return replace(self, groups=self.groups + tuple(groups))

    def join(self, relation: str) -> "QuerySpec":
        if any(j.relation == relation for j in self.joins):
            return self
        return replace(self, joins=self.joins + (Join(relation),))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# Entity registry: model class and the relations it can join
_ENTITIES = {
    "artwork": Artwork,
    "artist": Artist,
}

_RELATIONS = {
    ("artist", "user"): (User, Artist.user_id == User.id),
}


class json_elements(FunctionElement):
    """
    Set-returning function yielding each element of a JSON array as text,
    in a column named ``value``.

    Reference: https://docs.sqlalchemy.org/en/20/core/compiler.html
    """

    name = "json_elements"
    inherit_cache = True


@compiles(json_elements)
def _json_elements_sqlite(element, compiler, **kw):
    return f"json_each({compiler.process(element.clauses, **kw)})"


@compiles(json_elements, "postgresql")
def _json_elements_postgresql(element, compiler, **kw):
    return f"json_array_elements_text({compiler.process(element.clauses, **kw)})"


def _model(spec: QuerySpec):
    try:
        return _ENTITIES[spec.entity]
    except KeyError:
        raise ValueError(f"Unknown entity '{spec.entity}'") from None


def _column(spec: QuerySpec, name: str) -> InstrumentedAttribute:
    """Resolve a field name to a mapped column, checking that its join is planned."""
    if "." in name:
        relation, attr = name.split(".", 1)
        if (spec.entity, relation) not in _RELATIONS:
            raise ValueError(f"'{spec.entity}' has no relation '{relation}'")
        if not any(j.relation == relation for j in spec.joins):
            raise ValueError(f"Field '{name}' requires join '{relation}'")
        target, _ = _RELATIONS[(spec.entity, relation)]
        column = getattr(target, attr, None)
    else:
        column = getattr(_model(spec), name, None)
    if not isinstance(column, InstrumentedAttribute):
        raise ValueError(f"Unknown field '{name}' on '{spec.entity}'")
    return column


def _compile_predicate(spec: QuerySpec, predicate: Predicate):
    column = _column(spec, predicate.field)
    value = predicate.value
    if predicate.op is Op.EQ:
        return column == value
    if predicate.op is Op.GT:
        return column > value
    if predicate.op is Op.GTE:
        return column >= value
    if predicate.op is Op.LTE:
        return column <= value
    if predicate.op is Op.ICONTAINS:
        return column.icontains(value, autoescape=True)
    if predicate.op in (Op.HAS_ELEMENT, Op.ICONTAINS_ELEMENT):
        elements = json_elements(column).table_valued("value")
        element = type_coerce(elements.c.value, String)
        if predicate.op is Op.HAS_ELEMENT:
            condition = element == value
        else:
            condition = element.icontains(value, autoescape=True)
        return select(literal_column("1")).select_from(elements).where(condition).exists()
    raise ValueError(f"Unsupported operator '{predicate.op}'")


def _compile_group(spec: QuerySpec, group: Group):
    if isinstance(group, AnyOf):
        return or_(*(_compile_predicate(spec, p) for p in group.alternatives))
    return _compile_predicate(spec, group)


def _apply_filters(spec: QuerySpec, stmt: Select) -> Select:
    for join in spec.joins:
        try:
            target, onclause = _RELATIONS[(spec.entity, join.relation)]
        except KeyError:
            raise ValueError(f"'{spec.entity}' has no relation '{join.relation}'") from None
        stmt = stmt.join(target, onclause)
    if spec.groups:
        stmt = stmt.where(and_(*(_compile_group(spec, g) for g in spec.groups)))
    return stmt


def compile_page(spec: QuerySpec) -> Select:
    """
    Compile the page statement: filters, sort, offset and limit.

    The primary key is appended as the last sort key, in the direction of the
    first key, so rows with equal sort values page deterministically.
    """
    model = _model(spec)
    stmt = _apply_filters(spec, select(model))

    order_by = []
    for key in spec.sort:
        column = _column(spec, key.field)
        order_by.append(column.desc() if key.descending else column.asc())
    tiebreak_desc = spec.sort[0].descending if spec.sort else False
    order_by.append(model.id.desc() if tiebreak_desc else model.id.asc())

    return stmt.order_by(*order_by).offset(spec.offset).limit(spec.limit)


def compile_count(spec: QuerySpec) -> Select:
    """Compile the count statement: same joins and predicates, no sort or paging."""
    model = _model(spec)
    return _apply_filters(spec, select(func.count(model.id)).select_from(model))


async def fetch_page(db: AsyncSession, spec: QuerySpec, *options) -> tuple[list, int]:
    """
    Execute a spec and return (rows on the requested page, total matching rows).

    A page past the end yields an empty list alongside the true total.
    """
    result = await db.execute(compile_page(spec).options(*options))
    rows = list(result.scalars().unique().all())
    total = await db.scalar(compile_count(spec))
    return rows, total or 0
