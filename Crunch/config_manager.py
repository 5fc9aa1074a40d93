# config_manager.py
import sys
import json
from pathlib import Path

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

config_json = PROJECT_ROOT / "config.json"
ui_strings = PROJECT_ROOT / "ui_strings.json"

# Used for any key missing from config.json
DEFAULT_SETTINGS = {
    "decimal_places": 12,
    "darkmode": False,
    "copy_on_enter": False,
    "keep_history": True,
    "debug": False,
}


def load_setting_value(key_value):
    try:
        with open(config_json, 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        settings_dict = {}

    settings = dict(DEFAULT_SETTINGS)
    settings.update(settings_dict)

    if key_value == "all":
        return settings

    else:
        return settings.get(key_value, 0)


def load_setting_description(key_value):
    try:
        with open(ui_strings, 'r', encoding='utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}

    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, key_value)


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return {}


def history_dir():
    """Directory holding the history-<uuid>.json files."""
    return PROJECT_ROOT / "history"
