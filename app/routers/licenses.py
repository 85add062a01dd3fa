from fastapi import APIRouter, Depends, Request

from app.core.pagination import PaginationParams, create_pagination_result, get_sort_params
from app.deps import paginated, require_railway_admin
from app.models.user import User
from app.services import licenses as licenses_service

router = APIRouter()


def _license_out(lic) -> dict:
    return {
        "id": str(lic.id),
        "licenseNumber": lic.license_number,
        "status": lic.status,
        "shopName": lic.shop_name,
        "licenseType": lic.license_type,
        "vendorId": str(lic.vendor_id),
        "stationId": str(lic.station_id),
        "monthlyRent": lic.monthly_rent,
        "issuedAt": lic.issued_at.isoformat() if lic.issued_at else None,
        "expiresAt": lic.expires_at.isoformat() if lic.expires_at else None,
        "createdAt": lic.created_at.isoformat(),
    }


@router.get("/licenses")
async def licenses_list(
    request: Request,
    admin: User = Depends(require_railway_admin),
    params: PaginationParams = Depends(paginated()),
    status: str | None = None,
    search: str | None = None,
):
    """Paginated vendor licenses; status "all" disables the status filter."""
    sort = get_sort_params(request.query_params, licenses_service.LICENSE_SORT_FIELDS, "created_at")
    licenses, total = await licenses_service.list_licenses(params, sort, status=status, search=search)
    data = [_license_out(lic) for lic in licenses]
    return create_pagination_result(data, total, params.page, params.limit).model_dump(by_alias=True)
