from decimal import Decimal

import pytest

from pdv.crud import catalog as catalog_crud
from pdv.crud import customers as customers_crud
from pdv.crud import inventory as inventory_crud
from pdv.exceptions import NotFoundError, StockUnavailableError
from pdv.models import Customer, MovementType, StockMovement
from pdv.schemas.catalog import ServiceCreate, ServiceUpdate
from pdv.schemas.inventory import StockMovementCreate
from pdv.schemas.products import ProductCreate


def movement(product, type, quantity, **kwargs):
    return StockMovementCreate(product_id=product.id, type=type, quantity=quantity,
                               reason=kwargs.pop("reason", "Teste"), **kwargs)


class TestStockMovement:
    def test_entry_adds_to_stock(self, db, product_a, employee):
        mov = inventory_crud.create_stock_movement(
            db, movement(product_a, MovementType.IN, 10, reason="Compra"), user=employee,
        )

        db.refresh(product_a)
        assert product_a.current_stock == 15
        assert (mov.previous_stock, mov.new_stock) == (5, 15)
        assert mov.responsible_user_id == employee.id
        # Sem preço informado, vale o custo
        assert mov.total_value == Decimal("60.00")

    def test_loss_subtracts(self, db, product_a):
        inventory_crud.create_stock_movement(db, movement(product_a, MovementType.LOSS, 2))

        db.refresh(product_a)
        assert product_a.current_stock == 3

    def test_adjustment_sets_stock(self, db, product_a):
        mov = inventory_crud.create_stock_movement(db, movement(product_a, MovementType.ADJUSTMENT, 12))

        db.refresh(product_a)
        assert product_a.current_stock == 12
        assert mov.previous_stock == 5

    def test_unit_price_overrides_cost(self, db, product_a):
        mov = inventory_crud.create_stock_movement(
            db, movement(product_a, MovementType.OUT, 2, unit_price=Decimal("10.00")),
        )

        assert mov.total_value == Decimal("20.00")

    def test_negative_stock_is_rejected(self, db, product_a):
        with pytest.raises(StockUnavailableError):
            inventory_crud.create_stock_movement(db, movement(product_a, MovementType.OUT, 6))

        db.rollback()
        db.refresh(product_a)
        assert product_a.current_stock == 5
        assert db.query(StockMovement).count() == 0

    def test_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            inventory_crud.create_stock_movement(db, StockMovementCreate(
                product_id=404, type=MovementType.IN, quantity=1, reason="Compra",
            ))

    def test_movements_listed_newest_first(self, db, product_a, product_out_of_stock):
        first = inventory_crud.create_stock_movement(db, movement(product_a, MovementType.IN, 1))
        second = inventory_crud.create_stock_movement(db, movement(product_a, MovementType.OUT, 1))
        inventory_crud.create_stock_movement(db, movement(product_out_of_stock, MovementType.IN, 3))

        listed = inventory_crud.get_stock_movements(db, product_id=product_a.id)

        assert [m.id for m in listed] == [second.id, first.id]


class TestCreateProduct:
    def test_initial_stock_goes_through_kardex(self, db, employee):
        product = inventory_crud.create_product(db, ProductCreate(
            name="Aromatizante", sku="AROMA", unit_price=Decimal("10.00"),
            cost_price=Decimal("4.00"), initial_stock=50,
        ), user=employee)

        assert product.current_stock == 50
        mov = db.query(StockMovement).filter(StockMovement.product_id == product.id).one()
        assert mov.type == MovementType.IN
        assert mov.reason == "Estoque inicial"
        assert mov.total_value == Decimal("200.00")

    def test_without_initial_stock_has_no_movement(self, db):
        product = inventory_crud.create_product(db, ProductCreate(
            name="Flanela", sku="FLAN", unit_price=Decimal("8.00"),
        ))

        assert product.current_stock == 0
        assert db.query(StockMovement).count() == 0


class TestSearchCustomers:
    @pytest.fixture
    def customers(self, db):
        db.add_all([
            Customer(name="Maria Souza", phone="(11) 98888-0001", email="maria@example.com"),
            Customer(name="Mariana Alves", phone="(21) 3333-4444"),
            Customer(name="João Lima", email="joao@example.com"),
            Customer(name="Marta Inativa", is_active=False),
        ])
        db.commit()

    def test_matches_name_case_insensitively(self, db, customers):
        found = customers_crud.search_customers(db, "mari")

        assert [c.name for c in found] == ["Maria Souza", "Mariana Alves"]

    def test_matches_phone_and_email(self, db, customers):
        assert [c.name for c in customers_crud.search_customers(db, "3333")] == ["Mariana Alves"]
        assert [c.name for c in customers_crud.search_customers(db, "joao@")] == ["João Lima"]

    def test_blank_term_returns_nothing(self, db, customers):
        assert customers_crud.search_customers(db, "") == []
        assert customers_crud.search_customers(db, "   ") == []
        assert customers_crud.search_customers(db, None) == []

    def test_inactive_customers_are_hidden(self, db, customers):
        assert customers_crud.search_customers(db, "Marta") == []

    def test_limited_to_ten(self, db):
        db.add_all([Customer(name=f"Cliente {i:02d}") for i in range(15)])
        db.commit()

        found = customers_crud.search_customers(db, "cliente")

        assert len(found) == customers_crud.SEARCH_LIMIT
        assert found[0].name == "Cliente 00"


class TestServices:
    def test_inactive_services_hidden_by_default(self, db, service_b):
        other = catalog_crud.create_service(db, ServiceCreate(name="Polimento", price=Decimal("120.00")))
        catalog_crud.update_service(db, other, ServiceUpdate(is_active=False))

        assert [s.name for s in catalog_crud.get_all_services(db)] == ["Lavagem simples"]
        assert len(catalog_crud.get_all_services(db, include_inactive=True)) == 2

    def test_partial_update_keeps_other_fields(self, db, service_b):
        updated = catalog_crud.update_service(db, service_b, ServiceUpdate(price=Decimal("30.00")))

        assert updated.price == Decimal("30.00")
        assert updated.name == "Lavagem simples"
        assert updated.duration == 30
