# gridstar/viz.py
from __future__ import annotations
import os
from PIL import Image, ImageDraw

from .astar import EngineView

class Colors:
    FLOOR = (255, 255, 255)
    CLOSED = (224, 224, 224)
    OPEN = (168, 197, 255)
    WALL = (11, 11, 15)
    CURRENT = (255, 159, 26)
    PATH = (255, 209, 102)
    START = (0, 208, 132)
    GOAL = (239, 71, 111)

def _cell_box(i: int, width: int, cell: int, inset: int = 0):
    x0, y0 = (i % width) * cell, (i // width) * cell
    return (x0 + inset, y0 + inset, x0 + cell - 1 - inset, y0 + cell - 1 - inset)

def render_search(view: EngineView, cell: int = 10) -> Image.Image:
    w, h = view.width, view.height
    img = Image.new("RGB", (w * cell, h * cell), Colors.FLOOR)
    drw = ImageDraw.Draw(img)

    for i, closed in enumerate(view.closed_mask):
        if closed:
            drw.rectangle(_cell_box(i, w, cell), fill=Colors.CLOSED)
    for i in view.open_cells:
        drw.rectangle(_cell_box(i, w, cell), fill=Colors.OPEN)
    for i, blocked in enumerate(view.obstacles):
        if blocked:
            drw.rectangle(_cell_box(i, w, cell), fill=Colors.WALL)

    if view.current is not None:
        drw.rectangle(_cell_box(view.current, w, cell, inset=cell // 5), fill=Colors.CURRENT)
    for i in view.path:
        drw.rectangle(_cell_box(i, w, cell, inset=cell // 4), fill=Colors.PATH)

    drw.rectangle(_cell_box(0, w, cell, inset=cell // 5), fill=Colors.START)
    drw.rectangle(_cell_box(w * h - 1, w, cell, inset=cell // 5), fill=Colors.GOAL)
    return img

def draw_search_png(view: EngineView, out_png: str, cell: int = 10) -> None:
    img = render_search(view, cell=cell)
    os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)
    img.save(out_png)
