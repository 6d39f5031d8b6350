"""Rebuild tree-tool text from a parsed (and possibly pruned) document."""

from __future__ import annotations

from TreeXL.models import ParsedDocument, TreeEntry


def render_tree(doc: ParsedDocument) -> str:
    """Render the entries of *doc* back into a tree listing.

    Example output:
        project/
        ├── src/
        │   ├── main.py
        │   └── utils.py
        └── README.md
    """
    entries = doc.entries
    if not entries:
        return ""

    lines: list[str] = []
    # open_levels[d] is True while more siblings follow at depth d + 1
    open_levels: list[bool] = []
    for index, entry in enumerate(entries):
        is_last = _is_last_sibling(entries, index)
        display_name = f"{entry.name}/" if entry.is_directory else entry.name

        if entry.depth == 0:
            lines.append(display_name)
        else:
            prefix = "".join(
                "│   " if still_open else "    "
                for still_open in open_levels[1:entry.depth]
            )
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{display_name}")

        del open_levels[entry.depth:]
        open_levels.append(not is_last)

    return "\n".join(lines)


def _is_last_sibling(entries: tuple[TreeEntry, ...], index: int) -> bool:
    """True when no later entry shares this entry's parent."""
    depth = entries[index].depth
    for later in entries[index + 1:]:
        if later.depth < depth:
            return True
        if later.depth == depth:
            return False
    return True
