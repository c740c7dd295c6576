"""
Upload slots
============
Four fixed holding areas for screenshots waiting to be analysed. The two
stock-ranking slots take up to two images each; the two theme slots hold
one image, and a new upload replaces the old one.

Every ImageItem owns a PreviewHandle. The handle is released when the item
leaves its slot: removal, replacement, or the clear after a successful run.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from rankboard.ingest.previews import PreviewHandle, make_thumbnail_preview


REALTIME = "realtime"
CUMULATIVE = "cumulative"
THEMES_VIEWS = "themesViews"
THEMES_CHANGE = "themesChange"


@dataclass(frozen=True)
class SlotSpec:
    name: str
    capacity: int
    label: str       # Source label sent to the model before each image


# Order matters: request parts are emitted in this order.
SLOT_SPECS = (
    SlotSpec(REALTIME, 2, "30-second interval stock ranking"),
    SlotSpec(CUMULATIVE, 2, "intraday cumulative stock ranking"),
    SlotSpec(THEMES_VIEWS, 1, "themes by view rank"),
    SlotSpec(THEMES_CHANGE, 1, "themes by change rate"),
)
SLOT_NAMES = tuple(spec.name for spec in SLOT_SPECS)
STOCK_SLOTS = (REALTIME, CUMULATIVE)
THEME_SLOTS = (THEMES_VIEWS, THEMES_CHANGE)


def is_image(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


@dataclass
class ImageItem:
    data: bytes
    mime_type: str
    name: str = ""
    preview: PreviewHandle = field(default_factory=PreviewHandle)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


class SlotStore:
    """Holds pending uploads per slot and enforces slot capacity."""

    def __init__(self, preview_factory: Callable[[bytes], PreviewHandle] = make_thumbnail_preview):
        self.preview_factory = preview_factory
        self.focused_slot = REALTIME
        self._specs: Dict[str, SlotSpec] = {spec.name: spec for spec in SLOT_SPECS}
        self._slots: Dict[str, List[ImageItem]] = {name: [] for name in SLOT_NAMES}
        self._subscribers: List[Callable[["SlotStore"], None]] = []

    # --- Queries ---

    def spec(self, slot_name: str) -> SlotSpec:
        try:
            return self._specs[slot_name]
        except KeyError:
            raise KeyError(f"Unknown slot: {slot_name!r}") from None

    def capacity(self, slot_name: str) -> int:
        return self.spec(slot_name).capacity

    def items(self, slot_name: str) -> List[ImageItem]:
        """Slot contents as a list, whatever the slot's capacity."""
        self.spec(slot_name)
        return list(self._slots[slot_name])

    def get(self, slot_name: str):
        """A list for multi-image slots; the single item or None otherwise."""
        items = self.items(slot_name)
        if self.capacity(slot_name) > 1:
            return items
        return items[0] if items else None

    def count(self, slot_name: str) -> int:
        return len(self.items(slot_name))

    def has_images(self, slot_name: str) -> bool:
        return self.count(slot_name) > 0

    # --- Mutations ---

    def focus(self, slot_name: str):
        self.spec(slot_name)
        if self.focused_slot != slot_name:
            self.focused_slot = slot_name
            self._notify()

    def assign(self, slot_name: str, files: Iterable) -> List[ImageItem]:
        """
        Adds image files to a slot. Non-image files are dropped silently.
        Single-image slots are replaced; multi-image slots keep the earliest
        items and anything past capacity is discarded.
        Returns the items that were actually stored.
        """
        spec = self.spec(slot_name)
        images = [f for f in files if is_image(getattr(f, "mime_type", None))]
        if not images:
            return []

        current = self._slots[slot_name]
        if spec.capacity == 1:
            added = [self._make_item(images[0])]
            for old in current:
                old.preview.release()
            self._slots[slot_name] = added
        else:
            room = max(spec.capacity - len(current), 0)
            added = [self._make_item(f) for f in images[:room]]
            if not added:
                return []
            self._slots[slot_name] = current + added

        self._notify()
        return added

    def remove(self, slot_name: str, item_id: str) -> bool:
        self.spec(slot_name)
        current = self._slots[slot_name]
        kept = []
        removed = None
        for item in current:
            if removed is None and item.id == item_id:
                removed = item
            else:
                kept.append(item)
        if removed is None:
            return False
        removed.preview.release()
        self._slots[slot_name] = kept
        self._notify()
        return True

    def clear_all(self):
        for name in SLOT_NAMES:
            for item in self._slots[name]:
                item.preview.release()
            self._slots[name] = []
        self._notify()

    # --- Observers ---

    def subscribe(self, callback: Callable[["SlotStore"], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return unsubscribe

    def _notify(self):
        for callback in list(self._subscribers):
            callback(self)

    def _make_item(self, upload) -> ImageItem:
        return ImageItem(
            data=upload.data,
            mime_type=upload.mime_type,
            name=getattr(upload, "name", "") or "",
            preview=self.preview_factory(upload.data),
        )
