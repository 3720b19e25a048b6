"""Write rendered frames out as text files or an animated GIF."""

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

log = logging.getLogger(__name__)

# ==============================================================================
# CONFIGURATION
# ==============================================================================
CELL_SIZE = (6, 8)              # pixels per character (w, h) for the default bitmap font
BACKGROUND_COLOR = (0, 0, 0)    # Black
GLYPH_COLOR = (234, 179, 8)     # Amber


# ==============================================================================
# 1. TEXT FRAMES
# ==============================================================================
def save_text(frames, directory):
    """Write frame_0.txt, frame_1.txt, ... and return the paths."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for i, frame in enumerate(frames):
        path = out_dir / f"frame_{i}.txt"
        path.write_text(frame.text + "\n", encoding="utf-8")
        paths.append(path)
    log.info("wrote %d text frames to %s", len(paths), out_dir)
    return paths


# ==============================================================================
# 2. IMAGE FRAMES
# ==============================================================================
def frame_to_image(frame, cell=CELL_SIZE, fg=GLYPH_COLOR, bg=BACKGROUND_COLOR, font=None):
    """Draw each grid cell at a fixed pitch so columns stay aligned."""
    rows, cols = frame.shape
    cell_w, cell_h = cell
    img = Image.new("RGB", (cols * cell_w, rows * cell_h), bg)
    draw = ImageDraw.Draw(img)
    font = font or ImageFont.load_default()

    for y, row in enumerate(frame.rows()):
        for x, ch in enumerate(row):
            if ch != " ":
                draw.text((x * cell_w, y * cell_h), ch, fill=fg, font=font)
    return img


def save_gif(frames, path, duration=100, cell=CELL_SIZE, fg=GLYPH_COLOR, bg=BACKGROUND_COLOR):
    """Render frames to images and save them as a looping GIF."""
    images = [frame_to_image(f, cell=cell, fg=fg, bg=bg) for f in frames]
    if not images:
        raise ValueError("no frames to export")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    images[0].save(
        path,
        save_all=True,
        append_images=images[1:],
        duration=duration,  # ms per frame
        loop=0,
    )
    log.info("saved %d-frame GIF to %s", len(images), path)
    return path
