from typing import List, Optional

from sqlalchemy.orm import Session

from pdv.models import Service
from pdv.schemas.catalog import ServiceCreate, ServiceUpdate


def get_service(db: Session, service_id: int) -> Optional[Service]:
    return db.query(Service).filter(Service.id == service_id).first()


def get_all_services(db: Session, include_inactive: bool = False) -> List[Service]:
    query = db.query(Service)
    if not include_inactive:
        query = query.filter(Service.is_active == True)
    return query.order_by(Service.name.asc()).all()


def create_service(db: Session, service_in: ServiceCreate) -> Service:
    db_service = Service(**service_in.model_dump())
    db.add(db_service)
    db.commit()
    db.refresh(db_service)
    return db_service


def update_service(db: Session, service: Service, service_in: ServiceUpdate) -> Service:
    for field, value in service_in.model_dump(exclude_unset=True).items():
        setattr(service, field, value)
    db.commit()
    db.refresh(service)
    return service
