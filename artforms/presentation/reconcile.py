"""
Apply a confirmed toggle result to the session and every mounted view.

Counts always come from the server response; nothing here adds or subtracts
locally.
"""

import logging

from artforms.presentation.page import Page
from artforms.presentation.session import ClientSession
from artforms.presentation.views import ARTIST, ARTWORK

logger = logging.getLogger(__name__)


def reconcile(page: Page, kind: str, entity_id: int, active: bool, count: int) -> int:
    """
    Set ``active``/``count`` on every view of the entity.

    Returns:
        Number of views updated
    """
    views = page.views_for(kind, entity_id)
    for view in views:
        view.reconcile(active, count)
    logger.debug(f"Reconciled {len(views)} {kind} view(s) for id {entity_id}: {active}, {count}")
    return len(views)


def reconcile_like(
    session: ClientSession, page: Page, artwork_id: int, liked: bool, likes: int
) -> int:
    session.apply_like(artwork_id, liked)
    return reconcile(page, ARTWORK, artwork_id, liked, likes)


def reconcile_follow(
    session: ClientSession, page: Page, artist_id: int, following: bool, followers: int
) -> int:
    session.apply_follow(artist_id, following)
    return reconcile(page, ARTIST, artist_id, following, followers)
