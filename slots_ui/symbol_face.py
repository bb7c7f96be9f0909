from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from slots_ui.ui_config import SYMBOL_COLORS, THEMES, TILE_PADDING_RATIO

ASSET_DIR = Path(__file__).with_name("assets")
SCALE = 4  # supersampling factor, tiles are drawn large then reduced

RESAMPLE = Image.Resampling.LANCZOS


def get_font(size):
    for name in ("DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def _text_center(draw, cx, cy, text, size, fill):
    font = get_font(size)
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text((cx - (right - left) / 2 - left, cy - (bottom - top) / 2 - top), text, font=font, fill=fill)


def draw_crown(draw, cx, cy, s, fill):
    h = s // 2
    draw.polygon(
        [
            (cx - h, cy + h // 2),
            (cx - h, cy - h // 2),
            (cx - h // 2, cy),
            (cx, cy - h),
            (cx + h // 2, cy),
            (cx + h, cy - h // 2),
            (cx + h, cy + h // 2),
        ],
        fill=fill,
    )
    draw.rectangle((cx - h, cy + h // 2, cx + h, cy + h // 2 + s // 8), fill=fill)


def draw_diamond(draw, cx, cy, s, fill):
    h = s // 2
    draw.polygon([(cx - h, cy - h // 3), (cx - h // 2, cy - h), (cx + h // 2, cy - h), (cx + h, cy - h // 3), (cx, cy + h)], fill=fill)
    draw.line([(cx - h, cy - h // 3), (cx + h, cy - h // 3)], fill=(255, 255, 255), width=max(1, s // 30))


def draw_present(draw, cx, cy, s, fill):
    h = s // 2
    draw.rectangle((cx - h, cy - h // 2, cx + h, cy + h), fill=fill)
    ribbon = (250, 204, 21)
    band = max(2, s // 10)
    draw.rectangle((cx - band // 2, cy - h // 2, cx + band // 2, cy + h), fill=ribbon)
    draw.rectangle((cx - h, cy + h // 4 - band // 2, cx + h, cy + h // 4 + band // 2), fill=ribbon)
    r = s // 6
    draw.ellipse((cx - 2 * r, cy - h // 2 - r, cx, cy - h // 2 + r // 2), outline=ribbon, width=band // 2 + 1)
    draw.ellipse((cx, cy - h // 2 - r, cx + 2 * r, cy - h // 2 + r // 2), outline=ribbon, width=band // 2 + 1)


def draw_seven(draw, cx, cy, s, fill):
    _text_center(draw, cx, cy, "7", int(s * 1.1), fill)


def draw_bar(draw, cx, cy, s, fill):
    h = s // 2
    draw.rectangle((cx - h, cy - h // 3, cx + h, cy + h // 3), fill=fill)
    _text_center(draw, cx, cy, "BAR", int(s * 0.36), (255, 255, 255))


def draw_cherry(draw, cx, cy, s, fill):
    r = s // 5
    stem = (21, 128, 61)
    width = max(2, s // 24)
    draw.line([(cx - r, cy + r // 2), (cx + r // 3, cy - s // 2)], fill=stem, width=width)
    draw.line([(cx + r, cy + r // 2), (cx + r // 3, cy - s // 2)], fill=stem, width=width)
    draw.ellipse((cx - 2 * r, cy, cx, cy + 2 * r), fill=fill)
    draw.ellipse((cx, cy, cx + 2 * r, cy + 2 * r), fill=fill)


def draw_jewel(draw, cx, cy, s, fill):
    h = s // 2
    points = [(cx, cy - h), (cx + h, cy - h // 4), (cx + h * 2 // 3, cy + h), (cx - h * 2 // 3, cy + h), (cx - h, cy - h // 4)]
    draw.polygon(points, fill=fill)
    draw.polygon([(cx, cy - h // 2), (cx + h // 2, cy), (cx, cy + h // 2), (cx - h // 2, cy)], fill=(167, 243, 208))


def draw_bomb(draw, cx, cy, s, fill):
    r = s * 2 // 5
    draw.ellipse((cx - r, cy - r + s // 10, cx + r, cy + r + s // 10), fill=fill)
    fuse = (120, 53, 15)
    draw.line([(cx + r // 2, cy - r // 2), (cx + r, cy - r)], fill=fuse, width=max(2, s // 20))
    spark = s // 10
    draw.ellipse((cx + r - spark, cy - r - spark, cx + r + spark, cy - r + spark), fill=(249, 115, 22))


PAINTERS = {
    "crown": draw_crown,
    "diamond": draw_diamond,
    "present": draw_present,
    "seven": draw_seven,
    "bar": draw_bar,
    "cherry": draw_cherry,
    "jewel": draw_jewel,
    "bomb": draw_bomb,
}


class SymbolFaceRenderer:
    """
    Produces square PIL images for symbols and the card back.
    With the "Assets" tile style, assets/<symbol>.png and assets/cardback.png are
    used when they exist; anything missing is drawn.
    """

    def __init__(self, asset_dir=ASSET_DIR):
        self.asset_dir = Path(asset_dir)
        self.cache = {}

    def asset_path(self, name):
        return self.asset_dir / f"{name}.png"

    def load_asset(self, name, size):
        path = self.asset_path(name)
        if not path.is_file():
            return None
        try:
            with Image.open(path) as img:
                return img.convert("RGBA").resize((size, size), RESAMPLE)
        except OSError:
            return None

    def render_tile(self, symbol, size, theme_name="Casino", tile_style="Drawn"):
        key = ("tile", symbol, size, theme_name, tile_style)
        if key in self.cache:
            return self.cache[key]
        img = None
        if tile_style == "Assets":
            img = self.load_asset(symbol, size)
        if img is None:
            img = self.draw_tile(symbol, size, THEMES[theme_name]["tile_bg"])
        self.cache[key] = img
        return img

    def render_back(self, size, theme_name="Casino", tile_style="Drawn"):
        key = ("back", size, theme_name, tile_style)
        if key in self.cache:
            return self.cache[key]
        img = None
        if tile_style == "Assets":
            img = self.load_asset("cardback", size)
        if img is None:
            img = self.draw_back(size, THEMES[theme_name]["tile_back"])
        self.cache[key] = img
        return img

    def draw_tile(self, symbol, size, background):
        big = size * SCALE
        img = Image.new("RGBA", (big, big), background + (255,))
        draw = ImageDraw.Draw(img)
        inner = int(big * (1 - 2 * TILE_PADDING_RATIO))
        PAINTERS[symbol](draw, big // 2, big // 2, inner, SYMBOL_COLORS[symbol])
        return img.resize((size, size), RESAMPLE)

    def draw_back(self, size, color):
        big = size * SCALE
        img = Image.new("RGBA", (big, big), color + (255,))
        draw = ImageDraw.Draw(img)
        margin = big // 10
        draw.rounded_rectangle((margin, margin, big - margin, big - margin), radius=big // 12, outline=(250, 204, 21), width=max(2, big // 40))
        _text_center(draw, big // 2, big // 2, "SLOTS", big // 6, (250, 204, 21))
        return img.resize((size, size), RESAMPLE)
