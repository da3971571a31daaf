from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.schemas.ledger import CollectionCreate, CollectionUpdate, CollectionResponse
from bandwidth_billing.services.ledger_service import ledger_service, COLLECTION

router = APIRouter(prefix="/api/collections", tags=["collections"])


@router.get("", response_model=List[CollectionResponse])
def list_collections(
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    invoice_id: Optional[int] = Query(None, description="Filter by sales invoice ID"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """List money received from clients"""
    return ledger_service.list_entries(
        COLLECTION, tenant_id, db, counterparty_id=client_id, document_id=invoice_id, skip=skip, limit=limit
    )


@router.post("", response_model=CollectionResponse, status_code=201)
def record_collection(collection: CollectionCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """
    Record a collection. When linked to an invoice, the invoice's paid/due
    amounts and payment status are updated; the client's receivable goes down.
    """
    try:
        return ledger_service.record_collection(tenant_id, collection, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{collection_id}", response_model=CollectionResponse)
def update_collection(
    collection_id: int,
    changes: CollectionUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Correct a collection; an amount change is applied to the invoice and client as a difference"""
    try:
        return ledger_service.update_collection(collection_id, tenant_id, changes, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{collection_id}")
def delete_collection(
    collection_id: int,
    user_identifier: Optional[str] = Query(None, description="Who is deleting, for the activity log"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Delete a collection and reverse its effect on the invoice and client"""
    try:
        ledger_service.delete_collection(collection_id, tenant_id, db, user_identifier)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Collection deleted", "collection_id": collection_id}
