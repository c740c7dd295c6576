from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from rankboard.ingest.slots import ImageItem, SlotStore, is_image


@dataclass
class UploadedImage:
    """A file from any input channel, before it is placed in a slot."""
    name: str
    mime_type: str
    data: bytes


def from_streamlit(uploaded_file) -> UploadedImage:
    """Converts a Streamlit UploadedFile."""
    return UploadedImage(
        name=uploaded_file.name,
        mime_type=uploaded_file.type or "",
        data=uploaded_file.getvalue(),
    )


class ImageIngestor:
    """
    Routes the three input channels into the SlotStore.
    Click and drop target the slot under interaction; paste targets the
    focused slot.
    """
    def __init__(self, slot_store: SlotStore):
        self.slot_store = slot_store

    def on_slot_click(self, slot_name: str):
        self.slot_store.focus(slot_name)

    def on_file_select(self, files: Iterable[UploadedImage]) -> List[ImageItem]:
        return self.slot_store.assign(self.slot_store.focused_slot, list(files))

    def on_drop(self, slot_name: str, files: Iterable[UploadedImage]) -> List[ImageItem]:
        files = list(files)
        if not files:
            return []
        self.slot_store.focus(slot_name)
        return self.slot_store.assign(slot_name, files)

    def on_paste(self, items: Iterable[UploadedImage]) -> List[ImageItem]:
        images = [item for item in items if is_image(item.mime_type)]
        if not images:
            return []
        return self.slot_store.assign(self.slot_store.focused_slot, images)
