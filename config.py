"""Shared constants and path configuration for the blog content pipeline."""

import json
import os

_ROOT = os.path.dirname(os.path.abspath(__file__))
_SETTINGS_FILE = os.environ.get(
    "JANGDU_BLOG_SETTINGS", os.path.expanduser("~/.config/jangdu-blog/settings.json")
)
_DEFAULT_CONTENT_DIR = os.path.join(_ROOT, "src", "content")


def _read_setting(*keys, default=None):
    """Read a nested setting from the settings file."""
    try:
        with open(_SETTINGS_FILE) as f:
            data = json.load(f)
        for k in keys:
            data = data[k]
        return data
    except (FileNotFoundError, json.JSONDecodeError, KeyError, TypeError):
        return default


def get_content_dir(content_dir=None):
    """Resolve the content root. An explicit argument wins over settings."""
    if content_dir:
        return os.path.abspath(content_dir)
    return os.path.abspath(_read_setting("content", "dir", default=_DEFAULT_CONTENT_DIR))


def get_site_file():
    """Optional YAML overlay for site metadata, or None."""
    path = _read_setting("site", "file", default=None)
    if path:
        return path
    candidate = os.path.join(_ROOT, "site.yaml")
    return candidate if os.path.isfile(candidate) else None


def _positive_int(value, default: int) -> int:
    """Coerce a settings value to an int >= 1; unusable values fall back to default."""
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return default


CONTENT_DIR = get_content_dir()
CONTENT_EXTENSIONS = (".md", ".mdx")
LOAD_WORKERS = _positive_int(_read_setting("content", "workers", default=1), 1)
WORDS_PER_MINUTE = _positive_int(_read_setting("reading", "words_per_minute", default=200), 200)
LOG_LEVEL = _read_setting("log_level", default="INFO")
PORT = 4321
