from unittest.mock import MagicMock

from rankboard.ingest.ingestor import ImageIngestor, UploadedImage, from_streamlit
from rankboard.ingest.slots import CUMULATIVE, REALTIME, THEMES_CHANGE, THEMES_VIEWS, SlotStore


def _img(name, mime="image/png"):
    return UploadedImage(name=name, mime_type=mime, data=b"bytes")


def _ingestor(fake_preview_factory):
    store = SlotStore(preview_factory=fake_preview_factory)
    return ImageIngestor(store), store


class TestChannels:

    def test_file_select_targets_focused_slot(self, fake_preview_factory):
        ingestor, store = _ingestor(fake_preview_factory)
        ingestor.on_slot_click(CUMULATIVE)
        ingestor.on_file_select([_img("a")])
        assert store.count(CUMULATIVE) == 1
        assert store.count(REALTIME) == 0

    def test_drop_targets_slot_and_focuses_it(self, fake_preview_factory):
        ingestor, store = _ingestor(fake_preview_factory)
        ingestor.on_drop(THEMES_VIEWS, [_img("t")])
        assert store.get(THEMES_VIEWS).name == "t"
        assert store.focused_slot == THEMES_VIEWS

    def test_empty_drop_keeps_focus(self, fake_preview_factory):
        ingestor, store = _ingestor(fake_preview_factory)
        assert ingestor.on_drop(THEMES_CHANGE, []) == []
        assert store.focused_slot == REALTIME

    def test_paste_goes_to_focused_slot(self, fake_preview_factory):
        ingestor, store = _ingestor(fake_preview_factory)
        store.focus(THEMES_CHANGE)
        ingestor.on_paste([_img("note", mime="text/plain"), _img("clip")])
        assert store.get(THEMES_CHANGE).name == "clip"

    def test_paste_without_images_is_noop(self, fake_preview_factory):
        ingestor, store = _ingestor(fake_preview_factory)
        assert ingestor.on_paste([_img("note", mime="text/html")]) == []
        assert store.count(REALTIME) == 0


def test_from_streamlit_reads_upload():
    uploaded = MagicMock()
    uploaded.name = "shot.png"
    uploaded.type = "image/png"
    uploaded.getvalue.return_value = b"\x89PNG"

    result = from_streamlit(uploaded)

    assert result == UploadedImage(name="shot.png", mime_type="image/png", data=b"\x89PNG")


def test_from_streamlit_missing_type():
    uploaded = MagicMock()
    uploaded.name = "blob"
    uploaded.type = None
    uploaded.getvalue.return_value = b""
    assert from_streamlit(uploaded).mime_type == ""
