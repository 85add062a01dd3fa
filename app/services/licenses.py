"""Vendor licenses: admin listing with status filter and search."""

from app.core.exceptions import BadRequestError
from app.core.pagination import PaginationParams
from app.models.license import LICENSE_STATUSES, License
from app.services.listing import SortSpec, contains_pattern, fetch_page

LICENSE_SORT_FIELDS = {
    "createdAt": "created_at",
    "licenseNumber": "license_number",
    "shopName": "shop_name",
    "status": "status",
    "expiresAt": "expires_at",
}


async def list_licenses(
    params: PaginationParams,
    sort: SortSpec,
    status: str | None = None,
    search: str | None = None,
) -> tuple[list[License], int]:
    """
    ``status`` of None or "all" means every status. Search runs inside the
    query so the total matches what the pages contain.
    """
    filters: list = []
    if status and status.lower() != "all":
        status = status.upper()
        if status not in LICENSE_STATUSES:
            raise BadRequestError("Invalid license status", details={"allowed": list(LICENSE_STATUSES)})
        filters.append({"status": status})
    if search and search.strip():
        pattern = contains_pattern(search)
        filters.append({"$or": [{"license_number": pattern}, {"shop_name": pattern}]})
    return await fetch_page(License, filters, sort, params)
