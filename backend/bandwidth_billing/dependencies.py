from typing import Optional
from fastapi import Header, HTTPException


def get_tenant_id(x_tenant_id: Optional[str] = Header(None, description="Tenant the request acts for")) -> str:
    """Every billing record belongs to one tenant, taken from the X-Tenant-ID header"""
    if not x_tenant_id or not x_tenant_id.strip():
        raise HTTPException(status_code=400, detail="X-Tenant-ID header is required")
    return x_tenant_id.strip()
