import logging
from decimal import Decimal

from pdv.crud.inventory import create_product, get_product_by_sku
from pdv.database import SessionLocal, engine
from pdv.models import Base, Customer, Role, Service, User
from pdv.schemas.products import ProductCreate
from pdv.security import get_password_hash

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger("init_db")


def init_db():
    logger.info("--- Criando tabelas ---")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    logger.info("--- Populando ---")

    # 1. FUNCIONÁRIOS
    users_to_create = [
        ("admin", "1234", "Administrador", Role.ADMINISTRADOR),
        ("caixa1", "0000", "Caixa 1", Role.FUNCIONARIO),
        ("caixa2", "1111", "Caixa 2", Role.FUNCIONARIO),
    ]
    for uname, pin, full_name, role in users_to_create:
        if not db.query(User).filter(User.username == uname).first():
            db.add(User(
                username=uname,
                full_name=full_name,
                password_hash=get_password_hash(pin),
                role=role,
            ))
            logger.info("Funcionário '%s' criado.", uname)
    db.commit()

    # 2. CLIENTES
    customers_data = [
        {"name": "Maria Souza", "phone": "(11) 98888-0001", "email": "maria@example.com"},
        {"name": "João Lima", "phone": "(11) 97777-0002"},
    ]
    for c in customers_data:
        if not db.query(Customer).filter(Customer.name == c["name"]).first():
            db.add(Customer(**c))
    db.commit()

    # 3. SERVIÇOS
    services_data = [
        ("Lavagem simples", Decimal("25.00"), "Lavagem", 30),
        ("Lavagem completa", Decimal("45.00"), "Lavagem", 60),
        ("Polimento", Decimal("120.00"), "Estética", 120),
    ]
    for name, price, category, duration in services_data:
        if not db.query(Service).filter(Service.name == name).first():
            db.add(Service(name=name, price=price, category=category, duration=duration))
    db.commit()

    # 4. PRODUTOS (estoque inicial entra no kardex)
    products_list = [
        ("Cera líquida 500ml", "CERA500", Decimal("35.00"), Decimal("18.00"), 20),
        ("Pretinho para pneus", "PNEU1L", Decimal("22.00"), Decimal("9.50"), 15),
        ("Aromatizante", "AROMA", Decimal("10.00"), Decimal("4.00"), 50),
    ]
    count = 0
    for name, sku, price, cost, stock in products_list:
        if not get_product_by_sku(db, sku):
            create_product(db, ProductCreate(
                name=name, sku=sku, unit_price=price, cost_price=cost, initial_stock=stock,
            ))
            count += 1
    logger.info("%s produtos criados.", count)
    db.close()


if __name__ == "__main__":
    init_db()
