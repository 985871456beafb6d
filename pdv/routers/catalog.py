# pdv/routers/catalog.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pdv.crud import catalog as catalog_crud
from pdv.database import get_db
from pdv.models import User
from pdv.schemas.catalog import ServiceCreate, ServiceRead, ServiceUpdate
from pdv.security import get_current_user

router = APIRouter()

@router.get("/", response_model=List[ServiceRead])
def list_services(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return catalog_crud.get_all_services(db, include_inactive=include_inactive)

@router.post("/", response_model=ServiceRead)
def create_service(
    service_in: ServiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return catalog_crud.create_service(db, service_in)

@router.get("/{service_id}", response_model=ServiceRead)
def read_service(
    service_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service = catalog_crud.get_service(db, service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Serviço não encontrado")
    return service

@router.put("/{service_id}", response_model=ServiceRead)
def update_service(
    service_id: int,
    service_in: ServiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service = catalog_crud.get_service(db, service_id)
    if not service:
        raise HTTPException(status_code=404, detail="Serviço não encontrado")
    return catalog_crud.update_service(db, service, service_in)
