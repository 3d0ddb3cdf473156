"""Paginated name and latest-version resolution.

Both helpers drive a `list_page(offset, page_size)` coroutine until a page
comes back shorter than the requested size. Errors raised by the callables
propagate unchanged; nothing is retried.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

from ..constants import DEFAULT_PAGE_SIZE
from ..utils.exceptions import ResourceNotFoundError

logger = structlog.get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ListPage = Callable[[int, int], Awaitable[list[T]]]


def _attr(field: str) -> Callable[[Any], Any]:
    """Read a field from a model or a mapping."""

    def getter(item: Any) -> Any:
        if isinstance(item, dict):
            return item.get(field)
        return getattr(item, field, None)

    return getter


async def find_by_name(
    name: str,
    list_page: ListPage[T],
    resource_type: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    name_of: Callable[[T], Any] | None = None,
) -> T:
    """
    Find the first item whose name equals `name` (case-sensitive).

    Args:
        name: Name to look for
        list_page: Coroutine returning one page for (offset, page_size)
        resource_type: Used in the not-found message
        page_size: Requested page size
        name_of: Name accessor, defaults to the `name` field

    Returns:
        The first matching item in server order

    Raises:
        ResourceNotFoundError: If no page contains the name
    """
    name_of = name_of or _attr("name")
    offset = 0
    while True:
        page = await list_page(offset, page_size)
        logger.verbose("Scanning page", resource_type=resource_type, offset=offset, items=len(page))
        for item in page:
            if name_of(item) == name:
                return item
        if len(page) < page_size:
            raise ResourceNotFoundError(resource_type, name)
        offset += page_size


async def find_latest_version(
    list_versions: ListPage[T],
    fetch_version: Callable[[int], Awaitable[R]],
    resource_type: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    version_of: Callable[[T], Any] | None = None,
) -> R:
    """
    Fetch the highest-numbered version of a versioned resource.

    Every version page is read before the detail call is made, so the
    maximum is taken across all pages.

    Args:
        list_versions: Coroutine returning one page of versions
        fetch_version: Coroutine fetching the full body of one version
        resource_type: Used in the not-found message
        page_size: Requested page size
        version_of: Version number accessor, defaults to the `version` field

    Returns:
        Whatever fetch_version returns for the maximum version

    Raises:
        ResourceNotFoundError: If the resource has no versions
    """
    version_of = version_of or _attr("version")
    latest: int | None = None
    offset = 0
    while True:
        page = await list_versions(offset, page_size)
        for item in page:
            number = int(version_of(item))
            if latest is None or number > latest:
                latest = number
        if len(page) < page_size:
            break
        offset += page_size

    if latest is None:
        raise ResourceNotFoundError(f"{resource_type} version", "latest")

    logger.debug("Resolved latest version", resource_type=resource_type, version=latest)
    return await fetch_version(latest)


async def list_all(list_page: ListPage[T], page_size: int = DEFAULT_PAGE_SIZE) -> list[T]:
    """Collect every item of a paginated listing."""
    items: list[T] = []
    offset = 0
    while True:
        page = await list_page(offset, page_size)
        items.extend(page)
        if len(page) < page_size:
            return items
        offset += page_size
