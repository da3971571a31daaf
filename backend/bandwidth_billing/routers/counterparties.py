from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.models.counterparty import BandwidthProvider, BandwidthClient
from bandwidth_billing.schemas.counterparty import (
    ProviderCreate,
    ProviderResponse,
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    CounterpartyUpdate
)
from bandwidth_billing.services.counterparty_service import counterparty_service

router = APIRouter(prefix="/api", tags=["counterparties"])


@router.get("/providers", response_model=List[ProviderResponse])
def list_providers(
    include_inactive: bool = Query(False),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """List bandwidth providers with what we still owe each one"""
    return counterparty_service.list(BandwidthProvider, tenant_id, db, include_inactive)


@router.post("/providers", response_model=ProviderResponse, status_code=201)
def create_provider(provider: ProviderCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    return counterparty_service.create(BandwidthProvider, tenant_id, provider.model_dump(), db)


@router.get("/providers/{provider_id}", response_model=ProviderResponse)
def get_provider(provider_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    try:
        return counterparty_service.get(BandwidthProvider, provider_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/providers/{provider_id}", response_model=ProviderResponse)
def update_provider(
    provider_id: int,
    changes: CounterpartyUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    try:
        return counterparty_service.update(BandwidthProvider, provider_id, tenant_id, changes.model_dump(exclude_unset=True), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/providers/{provider_id}")
def delete_provider(provider_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Delete a provider with no bills or payments; otherwise deactivate it via PATCH"""
    try:
        counterparty_service.delete(BandwidthProvider, provider_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Provider deleted", "provider_id": provider_id}


@router.get("/clients", response_model=List[ClientResponse])
def list_clients(
    include_inactive: bool = Query(False),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """List bandwidth clients with what each one still owes us"""
    return counterparty_service.list(BandwidthClient, tenant_id, db, include_inactive)


@router.post("/clients", response_model=ClientResponse, status_code=201)
def create_client(client: ClientCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    return counterparty_service.create(BandwidthClient, tenant_id, client.model_dump(), db)


@router.get("/clients/{client_id}", response_model=ClientResponse)
def get_client(client_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    try:
        return counterparty_service.get(BandwidthClient, client_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/clients/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: int,
    changes: ClientUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    try:
        return counterparty_service.update(BandwidthClient, client_id, tenant_id, changes.model_dump(exclude_unset=True), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/clients/{client_id}")
def delete_client(client_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Delete a client with no invoices or collections; otherwise deactivate it via PATCH"""
    try:
        counterparty_service.delete(BandwidthClient, client_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Client deleted", "client_id": client_id}
