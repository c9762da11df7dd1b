"""Narrow frontmatter scanner: reads only the ``slug`` and ``aliases`` keys.

This is not a YAML parser.  A document's frontmatter is the block between a
``---`` line at the very top of the file and the next ``---`` line; inside it
the scanner recognises ``slug: value`` and an ``aliases:`` key followed by
``- /path/`` list items.  Anything else is ignored.
"""

import re
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

DELIMITER = "---"

_SLUG_RE = re.compile(r"^slug:\s*(.+)$")
_ALIAS_ITEM_RE = re.compile(r"""^\s*-\s*["']?(/[^\s"']*)""")


class Frontmatter(NamedTuple):
    slug: Optional[str] = None
    aliases: Tuple[str, ...] = ()


class _State(Enum):
    OUTSIDE = "outside"
    IN_FRONTMATTER = "in_frontmatter"
    IN_ALIASES = "in_aliases"


def _unquote(value: str) -> str:
    """Drop one pair of matching surrounding quotes, if present."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1].strip()
    return value


def parse_frontmatter(text: str) -> Frontmatter:
    """Return the slug and aliases declared in *text*'s frontmatter block.

    Documents without a leading delimiter, or whose block is never closed,
    yield an empty :class:`Frontmatter`.
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].rstrip() != DELIMITER:
        return Frontmatter()

    slug: Optional[str] = None
    aliases: List[str] = []
    state = _State.IN_FRONTMATTER

    for line in lines[1:]:
        if line.rstrip() == DELIMITER:
            state = _State.OUTSIDE
            break

        if line.startswith("slug:"):
            match = _SLUG_RE.match(line)
            if match:
                slug = _unquote(match.group(1).strip()) or None
            state = _State.IN_FRONTMATTER
            continue

        if line.startswith("aliases:"):
            state = _State.IN_ALIASES
            continue

        if state is _State.IN_ALIASES:
            match = _ALIAS_ITEM_RE.match(line)
            if match:
                aliases.append(match.group(1))
            elif line and line[0] not in " \t":
                state = _State.IN_FRONTMATTER

    if state is not _State.OUTSIDE:
        # Unterminated block
        return Frontmatter()
    return Frontmatter(slug=slug, aliases=tuple(aliases))
