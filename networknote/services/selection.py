"""Row selection for bulk actions, keyed by record id."""

from collections.abc import Iterable


class SelectionSet:
    def __init__(self):
        self._selected: dict[str, bool] = {}

    def toggle(self, record_id: str) -> bool:
        self._selected[record_id] = not self._selected.get(record_id, False)
        return self._selected[record_id]

    def toggle_all(self, visible_ids: Iterable[str]) -> None:
        """Select every visible row, or deselect them all if they already are.

        Rows outside the visible set keep their state.
        """
        visible = list(visible_ids)
        if not visible:
            return
        select = not all(self._selected.get(record_id, False) for record_id in visible)
        for record_id in visible:
            self._selected[record_id] = select

    def is_selected(self, record_id: str) -> bool:
        return self._selected.get(record_id, False)

    def selected_ids(self) -> list[str]:
        return [record_id for record_id, selected in self._selected.items() if selected]

    def count(self) -> int:
        return len(self.selected_ids())

    def clear(self) -> None:
        self._selected = {}

    def prune(self, existing_ids: Iterable[str]) -> list[str]:
        """Drop selected ids that no longer exist; return the dropped ids."""
        existing = set(existing_ids)
        missing = [record_id for record_id in self.selected_ids() if record_id not in existing]
        for record_id in missing:
            del self._selected[record_id]
        return missing

    def snapshot(self) -> dict[str, bool]:
        return dict(self._selected)
