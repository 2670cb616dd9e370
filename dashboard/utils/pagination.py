"""Helpers for handling paginated views."""

from __future__ import annotations

import math
from typing import Dict, List, Union

from flask import request

ITEMS_PER_PAGE = 6


def get_page(param: str = "page") -> int:
    """Return a validated 1-based page number from the query string."""

    value = request.args.get(param, type=int)
    if value is None or value < 1:
        return 1
    return value


def count_pages(total: int, per_page: int = ITEMS_PER_PAGE) -> int:
    """Return how many pages ``total`` rows fill."""
    return math.ceil(total / per_page)


def build_pagination_args(page_param: str = "page") -> Dict[str, Union[str, List[str]]]:
    """Assemble arguments for pagination links.

    Parameters
    ----------
    page_param:
        Name of the page number query parameter to exclude.

    Returns
    -------
    dict
        Mapping of query parameter names to values suitable for ``url_for``.
    """

    args: Dict[str, Union[str, List[str]]] = {}
    for key, values in request.args.lists():
        if key == page_param or not values:
            continue
        args[key] = values[0] if len(values) == 1 else values
    return args


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
    """Return the page links to render, with ``"..."`` marking gaps.

    Up to seven pages are listed in full; beyond that the first, last and
    current neighbourhood are kept.
    """

    if total_pages <= 7:
        return list(range(1, total_pages + 1))
    if current_page <= 3:
        return [1, 2, 3, "...", total_pages - 1, total_pages]
    if current_page >= total_pages - 2:
        return [1, 2, "...", total_pages - 2, total_pages - 1, total_pages]
    return [
        1,
        "...",
        current_page - 1,
        current_page,
        current_page + 1,
        "...",
        total_pages,
    ]
