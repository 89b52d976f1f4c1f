"""Site metadata: title, author, page descriptions, nav links, social links.

Built once per process and handed to consumers explicitly. An optional YAML
file can override any of the defaults; its keys mirror SiteConfig.as_dict().
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

import yaml

from config import get_site_file
from services.errors import SiteConfigError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    title: str
    description: str


@dataclass(frozen=True)
class NavLink:
    text: str
    href: str


@dataclass(frozen=True)
class Social:
    name: str
    icon: str
    text: str
    href: str


@dataclass(frozen=True)
class SiteConfig:
    title: str
    description: str
    author: str
    url: str = ""
    pages: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    links: tuple[NavLink, ...] = ()
    socials: tuple[Social, ...] = ()

    def page(self, name: str) -> Page | None:
        return self.pages.get(name.upper())

    def as_dict(self) -> dict:
        """Page-facing surface with upper-case keys."""
        return {
            "TITLE": self.title,
            "DESCRIPTION": self.description,
            "AUTHOR": self.author,
            "URL": self.url,
            "PAGES": {
                name: {"TITLE": p.title, "DESCRIPTION": p.description}
                for name, p in self.pages.items()
            },
            "LINKS": [{"TEXT": link.text, "HREF": link.href} for link in self.links],
            "SOCIALS": [
                {"NAME": s.name, "ICON": s.icon, "TEXT": s.text, "HREF": s.href}
                for s in self.socials
            ],
        }


_DEFAULTS = {
    "TITLE": "Jangdu's Blog",
    "DESCRIPTION": "Welcome to Jangdu's Blog, a blog for developers.",
    "AUTHOR": "Jangdu",
    "URL": "https://blog.jangdu.me",
    "PAGES": {
        "BLOG": {"TITLE": "Blog", "DESCRIPTION": "Writing about topics I am interested in."},
        "SEARCH": {"TITLE": "Search", "DESCRIPTION": "Search all posts by keyword."},
    },
    "LINKS": [
        {"TEXT": "Home", "HREF": "/"},
        {"TEXT": "Blog", "HREF": "/blog"},
    ],
    "SOCIALS": [
        {
            "NAME": "Email",
            "ICON": "email",
            "TEXT": "jjd0324@gmail.com",
            "HREF": "mailto:jjd0324@gmail.com",
        },
        {
            "NAME": "Github",
            "ICON": "github",
            "TEXT": "jangdu",
            "HREF": "https://github.com/jangdu",
        },
    ],
}


def _require(entry: dict, keys: tuple, where: str) -> None:
    if not isinstance(entry, dict):
        raise SiteConfigError(f"{where} must be a mapping, got {type(entry).__name__}")
    missing = [k for k in keys if not isinstance(entry.get(k), str)]
    if missing:
        raise SiteConfigError(f"{where} is missing string field(s): {', '.join(missing)}")


def build_site_config(data: dict) -> SiteConfig:
    """Construct a SiteConfig from a dict shaped like SiteConfig.as_dict()."""
    _require(data, ("TITLE", "DESCRIPTION", "AUTHOR"), "site")

    pages = data.get("PAGES") or {}
    if not isinstance(pages, dict):
        raise SiteConfigError("PAGES must be a mapping")
    for name, entry in pages.items():
        _require(entry, ("TITLE", "DESCRIPTION"), f"PAGES.{name}")

    links = data.get("LINKS") or []
    socials = data.get("SOCIALS") or []
    if not isinstance(links, list) or not isinstance(socials, list):
        raise SiteConfigError("LINKS and SOCIALS must be lists")
    for i, entry in enumerate(links):
        _require(entry, ("TEXT", "HREF"), f"LINKS[{i}]")
    for i, entry in enumerate(socials):
        _require(entry, ("NAME", "ICON", "TEXT", "HREF"), f"SOCIALS[{i}]")

    return SiteConfig(
        title=data["TITLE"],
        description=data["DESCRIPTION"],
        author=data["AUTHOR"],
        url=data.get("URL") or "",
        pages=MappingProxyType(
            {name.upper(): Page(e["TITLE"], e["DESCRIPTION"]) for name, e in pages.items()}
        ),
        links=tuple(NavLink(e["TEXT"], e["HREF"]) for e in links),
        socials=tuple(Social(e["NAME"], e["ICON"], e["TEXT"], e["HREF"]) for e in socials),
    )


def _load_overlay(path: str) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise SiteConfigError(f"Could not read site file {path!r}: {e}") from e
    except yaml.YAMLError as e:
        raise SiteConfigError(f"Site file {path!r} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise SiteConfigError(f"Site file {path!r} must contain a mapping")
    return data


@lru_cache(maxsize=None)
def get_site_config(path: str = None) -> SiteConfig:
    """Return the site configuration, overlaid with the YAML file at path if given.

    Without a path, the configured site file (if any) is used. Top-level keys in
    the overlay replace the defaults wholesale; PAGES merges per page.
    """
    path = path or get_site_file()
    data = dict(_DEFAULTS)
    if path:
        overlay = _load_overlay(path)
        overlay_pages = overlay.get("PAGES") or {}
        if not isinstance(overlay_pages, dict):
            raise SiteConfigError("PAGES must be a mapping")
        pages = {**_DEFAULTS["PAGES"], **overlay_pages}
        data.update(overlay)
        data["PAGES"] = pages
        log.info("Site config loaded from %s", path)
    return build_site_config(data)
