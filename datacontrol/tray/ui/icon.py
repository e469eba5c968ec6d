from __future__ import annotations

from functools import lru_cache

from PIL import Image, ImageDraw

from ..render import INDICATOR_MID, INDICATOR_OFF, INDICATOR_ON, RenderSnapshot


_ICON_SIZE = (64, 64)
_TILE = 28
_GAP = 4
_MARGIN = 2

_INDICATOR_COLORS: dict[str, tuple[int, int, int]] = {
    INDICATOR_ON: (76, 199, 120),
    INDICATOR_MID: (240, 176, 48),
    INDICATOR_OFF: (112, 112, 112),
}
_AUTO_COLOR = (90, 160, 240)
_OUTLINE = (235, 235, 235)

# Fill fraction of the brightness tile per icon name.
_BRIGHTNESS_FILL = {"off": 0.0, "half": 0.5, "full": 1.0, "auto": 1.0}


def _tile_box(index: int) -> tuple[int, int, int, int]:
    row, col = divmod(index, 2)
    x0 = _MARGIN + col * (_TILE + _GAP)
    y0 = _MARGIN + row * (_TILE + _GAP)
    return (x0, y0, x0 + _TILE - 1, y0 + _TILE - 1)


def _draw_capability(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int], indicator: str) -> None:
    color = _INDICATOR_COLORS.get(indicator, _INDICATOR_COLORS[INDICATOR_OFF])
    if indicator == INDICATOR_OFF:
        draw.rounded_rectangle(box, radius=6, outline=(*color, 255), width=3)
    elif indicator == INDICATOR_MID:
        # Half-filled: the state is moving and not yet confirmed.
        x0, y0, x1, y1 = box
        draw.rounded_rectangle(box, radius=6, outline=(*color, 255), width=3)
        draw.rectangle((x0 + 3, (y0 + y1) // 2, x1 - 3, y1 - 3), fill=(*color, 255))
    else:
        draw.rounded_rectangle(box, radius=6, fill=(*color, 255))


def _draw_brightness(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int], icon_name: str) -> None:
    x0, y0, x1, y1 = box
    color = _AUTO_COLOR if icon_name == "auto" else _OUTLINE
    draw.ellipse(box, outline=(*color, 255), width=3)

    fill = _BRIGHTNESS_FILL.get(icon_name, 0.0)
    if fill <= 0.0:
        return
    inner = (x0 + 6, y0 + 6, x1 - 6, y1 - 6)
    if fill >= 1.0:
        draw.ellipse(inner, fill=(*color, 255))
    else:
        draw.pieslice(inner, start=90, end=270, fill=(*color, 255))


@lru_cache(maxsize=32)
def _create_icon_cached(indicators: tuple[str, ...], brightness_icon: str) -> Image.Image:
    img = Image.new("RGBA", _ICON_SIZE, color=(0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    for index, indicator in enumerate(indicators[:3]):
        _draw_capability(draw, _tile_box(index), indicator)
    _draw_brightness(draw, _tile_box(3), brightness_icon)
    return img


def create_icon(snapshot: RenderSnapshot) -> Image.Image:
    """Create the tray icon: one tile per radio plus a brightness dial."""

    indicators = tuple(view.indicator for view in snapshot.capabilities)
    return _create_icon_cached(indicators, str(snapshot.brightness.icon)).copy()
