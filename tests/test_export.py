"""Tests for text and GIF export."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from wireglyph.export import CELL_SIZE, frame_to_image, save_gif, save_text
from wireglyph.frame import Frame


def _square_frames(square_engine, n=3):
    _, shape, buffer = square_engine
    return [buffer.render(shape, {"XY": 0.2 * i}) for i in range(n)]


class TestSaveText:
    """One text file per frame."""

    def test_writes_frames(self, square_engine, tmp_path: Path) -> None:
        frames = _square_frames(square_engine)
        paths = save_text(frames, tmp_path / "out")
        assert [p.name for p in paths] == ["frame_0.txt", "frame_1.txt", "frame_2.txt"]
        assert paths[1].read_text(encoding="utf-8") == frames[1].text + "\n"


class TestImages:
    """Frames drawn with Pillow on a fixed character pitch."""

    def test_image_size(self, square_engine) -> None:
        frame = _square_frames(square_engine, 1)[0]
        img = frame_to_image(frame)
        assert img.size == (41 * CELL_SIZE[0], 41 * CELL_SIZE[1])
        assert img.getbbox() is not None

    def test_blank_frame_is_background(self) -> None:
        img = frame_to_image(Frame([[" "] * 4] * 4))
        assert img.getbbox() is None

    def test_save_gif(self, square_engine, tmp_path: Path) -> None:
        path = save_gif(_square_frames(square_engine), tmp_path / "anim" / "square.gif", duration=50)
        assert path.exists()
        with Image.open(path) as img:
            assert img.format == "GIF"
            assert img.size == (41 * CELL_SIZE[0], 41 * CELL_SIZE[1])

    def test_save_gif_needs_frames(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            save_gif([], tmp_path / "empty.gif")
