"""Parse, resolve merges, and reconcile counts in one call."""

from __future__ import annotations

from typing import Iterable

from TreeXL.merge_resolver import reconcile_statistics, resolve
from TreeXL.models import Conversion
from TreeXL.tree_parser import parse


def convert(lines: Iterable[str], include_hidden: bool = False) -> Conversion:
    """Run the whole pipeline over listing lines.

    Raises:
        MalformedInputError: propagated from the parser.
    """
    document = parse(lines, include_hidden=include_hidden)
    return Conversion(
        document=document,
        merges=resolve(document),
        statistics=reconcile_statistics(document, include_hidden),
    )
