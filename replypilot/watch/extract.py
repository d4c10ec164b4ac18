from __future__ import annotations

from typing import List, Set

from bs4 import Tag

from .selectors import TEXT_SELECTOR


def extract_post_text(post: Tag) -> str:
    """Text of the post's text blocks, joined by single spaces and trimmed.

    Blocks nested inside another matched block are skipped so their text is
    not counted twice.
    """
    outer: List[Tag] = []
    seen: Set[int] = set()
    # select() yields document order, so an enclosing block always comes first
    for block in post.select(TEXT_SELECTOR):
        if any(id(p) in seen for p in block.parents):
            continue
        seen.add(id(block))
        outer.append(block)
    parts = [block.get_text().strip() for block in outer]
    return " ".join(p for p in parts if p).strip()
