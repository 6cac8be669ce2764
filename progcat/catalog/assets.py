# -*- coding: utf-8 -*-
"""
Asset Resolver - Make catalog file references directly consumable.

Rewrites the relative file references of a loaded index into absolute
paths (``file://`` URIs for image roles) and renders the markdown
descriptions into HTML for the presentation layer. Both passes are
safe to run again on an already processed index.

Dependencies
------------
markdown

License
-------
MIT License
Copyright (c) 2026 progcat contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
from pathlib import Path
from typing import Callable, Sequence

# Third-party
import markdown

logger = logging.getLogger(__name__)

# progcat internal
from progcat.catalog.models import CatalogEntry, CatalogIndex, FileRole


URI_SCHEME = "file:"

MarkdownRenderer = Callable[[str], str]


def render_html(text: str) -> str:
    """Default markdown-to-HTML renderer."""
    return markdown.markdown(text)


def entry_file(source_dir: Path, entry: CatalogEntry, raw: str) -> Path:
    """Location of an entry file given its raw (relative) value."""
    return Path(source_dir) / entry.path / raw


def localize_value(source_dir: Path, entry: CatalogEntry, role: FileRole, value: str) -> str:
    """Rewrite one file reference.

    Values already carrying the URI scheme are returned unchanged;
    absolute paths are not joined again.
    """
    if value.startswith(URI_SCHEME):
        return value
    path = Path(value)
    if not path.is_absolute():
        path = entry_file(source_dir, entry, value).absolute()
    if role.image:
        return path.as_uri()
    return str(path)


def localize(index: CatalogIndex, source_dir: Path, roles: Sequence[FileRole]) -> None:
    """Rewrite every role field of every entry in place."""
    for entry, role in index.pairs(roles):
        entry.files[role.name] = localize_value(
            source_dir, entry, role, entry.files[role.name]
        )


def _read_text(path: Path) -> str:
    # Undecodable bytes become U+FFFD rather than failing the load.
    return path.read_text(encoding='utf-8', errors='replace')


def render_markdown(
    index: CatalogIndex,
    source_dir: Path,
    description_role: str = "description",
    renderer: MarkdownRenderer = render_html,
) -> None:
    """Render the landing page and every entry description to HTML.

    Expects ``index`` to be localized already. The landing is left
    empty when the source declares no description or its file is
    missing.

    Raises
    ------
    OSError
        If an entry description file cannot be read.
    """
    index.landing.title = ""
    index.landing.markdown = ""

    if index.description:
        landing_path = Path(source_dir) / index.description
        try:
            contents = _read_text(landing_path)
        except FileNotFoundError:
            logger.warning("Catalog description %s not found", landing_path)
        else:
            index.landing.title = index.name
            index.landing.markdown = renderer(contents)

    for entry in index.entries:
        entry.markdown = renderer(_read_text(Path(entry.files[description_role])))
