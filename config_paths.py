import json
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "vex")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
THEME_DEFAULT = None
CLIPBOARD_INTERFACE_COMMAND_DEFAULT = None


def load_config(path=None):
    cfg = {
        "THEME": THEME_DEFAULT,
        "CLIPBOARD_INTERFACE_COMMAND": CLIPBOARD_INTERFACE_COMMAND_DEFAULT,
    }

    path = path or CONFIG_JSON
    if not os.path.exists(path):
        return cfg

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg

    if not isinstance(data, dict):
        return cfg

    theme = data.get("theme")
    if isinstance(theme, str) and theme.strip():
        cfg["THEME"] = theme.strip()

    clip_cmd = data.get("clipboard_interface_command")
    if isinstance(clip_cmd, list) and clip_cmd and all(isinstance(item, str) for item in clip_cmd):
        cfg["CLIPBOARD_INTERFACE_COMMAND"] = clip_cmd

    return cfg
