from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from pdv.models import Customer
from pdv.schemas.customers import CustomerCreate

SEARCH_LIMIT = 10


def get_customer(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def get_active_customers(db: Session) -> List[Customer]:
    return db.query(Customer).filter(Customer.is_active == True).order_by(Customer.name).all()


def search_customers(db: Session, term: Optional[str]) -> List[Customer]:
    """Busca por nome, telefone ou e-mail, sem diferenciar maiúsculas."""
    if not term or not term.strip():
        return []

    pattern = f"%{term.strip()}%"
    return (
        db.query(Customer)
        .filter(Customer.is_active == True)
        .filter(or_(
            Customer.name.ilike(pattern),
            Customer.phone.ilike(pattern),
            Customer.email.ilike(pattern),
        ))
        .order_by(Customer.name)
        .limit(SEARCH_LIMIT)
        .all()
    )


def create_customer(db: Session, customer: CustomerCreate) -> Customer:
    db_customer = Customer(
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        address=customer.address,
        notes=customer.notes,
    )
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer
