import configparser
from pathlib import Path

from slots_ui.ui_config import FONT_SCALE_ORDER, THEME_ORDER, TILE_STYLE_ORDER

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "theme_name": "Casino",
    "font_scale": "Normal",
    "tile_style": "Drawn",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: str(v).strip() for k, v in settings.items() if k in DEFAULT_SETTINGS})

    if data["theme_name"] not in THEME_ORDER:
        data["theme_name"] = DEFAULT_SETTINGS["theme_name"]
    if data["font_scale"] not in FONT_SCALE_ORDER:
        data["font_scale"] = DEFAULT_SETTINGS["font_scale"]
    if data["tile_style"] not in TILE_STYLE_ORDER:
        data["tile_style"] = DEFAULT_SETTINGS["tile_style"]
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except configparser.Error:
        return dict(DEFAULT_SETTINGS)
    if "ui" not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser["ui"].get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser["ui"] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)
