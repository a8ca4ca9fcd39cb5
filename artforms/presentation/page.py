"""
Registry of the views currently mounted on a page.

The same entity can be shown several times at once (a card in the grid, the
open detail panel, a card inside an artist's detail), so lookups return every
view for an (entity kind, entity id) pair.
"""

from collections import defaultdict
from typing import Iterator, Optional

from artforms.presentation.views import View


class Page:
    def __init__(self):
        self._views: dict[tuple[str, Optional[int]], list[View]] = defaultdict(list)

    def mount(self, view: View) -> View:
        """Register a view and its nested views."""
        self._views[(view.kind, view.entity_id)].append(view)
        for child in view.children:
            self.mount(child)
        return view

    def unmount(self, view: View) -> None:
        for child in view.children:
            self.unmount(child)
        key = (view.kind, view.entity_id)
        if view in self._views.get(key, []):
            self._views[key].remove(view)
            if not self._views[key]:
                del self._views[key]

    def clear(self, kind: Optional[str] = None) -> None:
        """Unmount everything, or every view of one kind."""
        if kind is None:
            self._views.clear()
            return
        for key in [k for k in self._views if k[0] == kind]:
            del self._views[key]

    def views_for(self, kind: str, entity_id: Optional[int]) -> list[View]:
        return list(self._views.get((kind, entity_id), []))

    def __iter__(self) -> Iterator[View]:
        for views in self._views.values():
            yield from views

    def __len__(self) -> int:
        return sum(len(views) for views in self._views.values())
