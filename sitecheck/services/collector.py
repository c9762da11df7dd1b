"""URL collector: derives the site-relative URLs declared by a content tree."""

import logging
from pathlib import Path
from typing import List, Set, Union

from sitecheck.services.frontmatter import parse_frontmatter

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")

# Section landing pages; never contribute URLs
INDEX_STEM = "_index"

# Slugs that never get a canonical URL (their aliases still count)
_EXCLUDED_SLUGS = {INDEX_STEM, "about"}


def normalize_path(path: str) -> str:
    """Return *path* with a single leading slash and a trailing slash."""
    path = "/" + path.lstrip("/")
    if path.endswith("/"):
        path = path[:-1]
    return path + "/"


def _markdown_files(root: Path):
    for path in root.rglob("*"):
        if path.suffix in MARKDOWN_SUFFIXES and path.is_file():
            yield path


def _document_urls(path: Path, root: Path) -> List[str]:
    """Return the alias and canonical URLs declared by one document."""
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Collector: skipping unreadable file %s – %s", path, exc)
        return []

    frontmatter = parse_frontmatter(text)
    urls = [normalize_path(alias) for alias in frontmatter.aliases]

    section = path.parent.name
    if path.parent == root or section == root.name:
        return urls

    slug = frontmatter.slug or path.stem
    if slug in _EXCLUDED_SLUGS:
        return urls

    urls.append(f"/{section}/{slug}/")
    return urls


def collect_urls(content_dir: Union[str, Path]) -> List[str]:
    """Walk *content_dir* and return every declared URL, sorted and unique.

    Each non-index Markdown document contributes its aliases plus a canonical
    ``/<section>/<slug>/`` path, where *section* is the document's parent
    directory and *slug* falls back to the file name.  Files that cannot be
    read are skipped.
    """
    root = Path(content_dir)
    if not root.is_dir():
        logger.warning("Collector: content directory %s does not exist", root)
        return []

    url_set: Set[str] = set()
    for path in _markdown_files(root):
        if path.stem == INDEX_STEM:
            continue
        url_set.update(_document_urls(path, root))

    logger.debug("Collector: %d URLs from %s", len(url_set), root)
    return sorted(url_set)
