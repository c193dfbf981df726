"""List Responses — collection endpoints report their size in X-Total-Count."""

from fastapi import Response

TOTAL_COUNT_HEADER = "X-Total-Count"


def with_total_count(response: Response, items: list) -> list:
    """Set X-Total-Count to the number of items returned and pass them through."""
    response.headers[TOTAL_COUNT_HEADER] = str(len(items))
    return items
