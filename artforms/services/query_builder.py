"""
Translate listing request parameters into QuerySpecs.

Two artist paths exist on purpose: the plain listing filters the artists
table on its own columns and only joins users when a location filter needs
the user's state, while the search always joins users because name and
location live there.
"""

from dataclasses import dataclass
from typing import Optional

from artforms.core.exceptions import ValidationError
from artforms.models.artwork import ArtworkStatus
from artforms.services.query import AnyOf, Op, Predicate, QuerySpec, SortKey

# Public sort names (as sent by the frontend) -> entity field names
ARTWORK_SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "price": "price",
    "likes": "likes",
    "views": "views",
    "title": "title",
    "yearCreated": "year_created",
}

ARTIST_SORT_FIELDS = {
    "followers": "followers",
    "rating": "rating",
    "artworkCount": "artwork_count",
    "experience": "experience",
    "totalSales": "total_sales",
    "artistName": "artist_name",
    "createdAt": "created_at",
}

SORT_ORDERS = ("asc", "desc")


@dataclass
class ArtworkListParams:
    artform: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    is_for_sale: Optional[bool] = None
    featured: Optional[bool] = None
    search: Optional[str] = None
    sort: Optional[str] = None
    order: Optional[str] = None
    page: int = 1
    limit: int = 12


@dataclass
class ArtistListParams:
    specialization: Optional[str] = None
    verified: Optional[bool] = None
    location: Optional[str] = None
    sort: Optional[str] = None
    order: Optional[str] = None
    page: int = 1
    limit: int = 12


@dataclass
class ArtistSearchParams:
    q: Optional[str] = None
    specialization: Optional[str] = None
    location: Optional[str] = None
    page: int = 1
    limit: int = 12


def _sort_keys(
    sort: Optional[str],
    order: Optional[str],
    allowed: dict[str, str],
    default: tuple[SortKey, ...],
) -> tuple[SortKey, ...]:
    """
    Resolve ``sort``/``order`` against an allow-list.

    Without ``sort`` the default applies. With ``sort``, order defaults to asc.
    """
    if order is not None and order not in SORT_ORDERS:
        raise ValidationError.for_field("order", "Order must be 'asc' or 'desc'")
    if not sort:
        return default
    if sort not in allowed:
        raise ValidationError.for_field(
            "sort", f"Cannot sort by '{sort}'. Allowed: {', '.join(allowed)}"
        )
    return (SortKey(allowed[sort], descending=order == "desc"),)


def _search_terms(text: str) -> list[str]:
    return [term for term in text.split() if term]


def build_artwork_query(params: ArtworkListParams) -> QuerySpec:
    """Public artwork listing: approved only, newest first by default."""
    spec = QuerySpec(
        entity="artwork",
        sort=_sort_keys(
            params.sort,
            params.order,
            ARTWORK_SORT_FIELDS,
            default=(SortKey("created_at", descending=True),),
        ),
        page=params.page,
        limit=params.limit,
    ).where(Predicate("status", Op.EQ, ArtworkStatus.APPROVED.value))

    if params.artform:
        spec = spec.where(Predicate("artform", Op.EQ, params.artform))
    if params.min_price is not None:
        spec = spec.where(Predicate("price", Op.GTE, params.min_price))
    if params.max_price is not None:
        spec = spec.where(Predicate("price", Op.LTE, params.max_price))
    if params.is_for_sale is not None:
        spec = spec.where(Predicate("is_for_sale", Op.EQ, params.is_for_sale))
    if params.featured is not None:
        spec = spec.where(Predicate("featured", Op.EQ, params.featured))

    # Free text: any term found in title, description or a tag
    terms = _search_terms(params.search or "")
    if terms:
        alternatives = []
        for term in terms:
            alternatives += [
                Predicate("title", Op.ICONTAINS, term),
                Predicate("description", Op.ICONTAINS, term),
                Predicate("tags", Op.ICONTAINS_ELEMENT, term),
            ]
        spec = spec.where(AnyOf(tuple(alternatives)))

    return spec


def build_artist_query(params: ArtistListParams) -> QuerySpec:
    """Public artist listing: active only, most followed first by default."""
    spec = QuerySpec(
        entity="artist",
        sort=_sort_keys(
            params.sort,
            params.order,
            ARTIST_SORT_FIELDS,
            default=(SortKey("followers", descending=True),),
        ),
        page=params.page,
        limit=params.limit,
    ).where(Predicate("is_active", Op.EQ, True))

    if params.specialization:
        spec = spec.where(Predicate("specializations", Op.HAS_ELEMENT, params.specialization))
    if params.verified is not None:
        spec = spec.where(Predicate("is_verified", Op.EQ, params.verified))
    if params.location:
        spec = spec.join("user").where(
            Predicate("user.location_state", Op.ICONTAINS, params.location)
        )

    return spec


def build_artist_search(params: ArtistSearchParams) -> QuerySpec:
    """
    Cross-entity artist search.

    The ``q`` group (artist name, user name, any specialization) and the
    ``location`` group (user city, user state) are each OR-ed internally and
    AND-ed with each other.
    """
    spec = (
        QuerySpec(
            entity="artist",
            sort=(SortKey("followers", descending=True), SortKey("rating", descending=True)),
            page=params.page,
            limit=params.limit,
        )
        .join("user")
        .where(Predicate("is_active", Op.EQ, True))
    )

    if params.specialization:
        spec = spec.where(Predicate("specializations", Op.HAS_ELEMENT, params.specialization))

    q = (params.q or "").strip()
    if q:
        spec = spec.where(
            AnyOf(
                (
                    Predicate("artist_name", Op.ICONTAINS, q),
                    Predicate("user.name", Op.ICONTAINS, q),
                    Predicate("specializations", Op.ICONTAINS_ELEMENT, q),
                )
            )
        )

    location = (params.location or "").strip()
    if location:
        spec = spec.where(
            AnyOf(
                (
                    Predicate("user.location_city", Op.ICONTAINS, location),
                    Predicate("user.location_state", Op.ICONTAINS, location),
                )
            )
        )

    return spec
