import threading
from decimal import Decimal

import pytest

from pdv.cart import Cart, CartStore, PosSession
from pdv.exceptions import EmptyCartError, InvalidDiscountError, NotFoundError, StockUnavailableError
from pdv.models import ItemType, PaymentMethod
from pdv.schemas.sales import CatalogEntry


def product(id=1, price="10.00", stock=3, name="Cera"):
    return CatalogEntry(id=id, name=name, price=Decimal(price), stock=stock)


def service(id=1, price="25.00", name="Lavagem"):
    return CatalogEntry(id=id, name=name, price=Decimal(price))


def assert_subtotal_consistent(cart):
    for item in cart.items:
        assert item.subtotal == item.price * item.quantity
    assert cart.subtotal == sum((i.price * i.quantity for i in cart.items), Decimal("0"))


class TestAddItem:
    def test_new_item_starts_with_quantity_one(self):
        cart = Cart()
        item = cart.add_item(product(), ItemType.PRODUCT)

        assert item.quantity == 1
        assert item.subtotal == Decimal("10.00")
        assert len(cart) == 1

    def test_same_item_increments_quantity(self):
        cart = Cart()
        cart.add_item(product(), ItemType.PRODUCT)
        item = cart.add_item(product(), ItemType.PRODUCT)

        assert len(cart) == 1
        assert item.quantity == 2
        assert item.subtotal == Decimal("20.00")

    def test_same_id_different_type_are_separate_lines(self):
        cart = Cart()
        cart.add_item(product(id=7), ItemType.PRODUCT)
        cart.add_item(service(id=7), ItemType.SERVICE)

        assert len(cart) == 2

    def test_product_without_stock_is_rejected(self):
        cart = Cart()
        with pytest.raises(StockUnavailableError):
            cart.add_item(product(stock=0), ItemType.PRODUCT)

        assert cart.is_empty

    def test_increment_beyond_stock_is_rejected(self):
        cart = Cart()
        entry = product(stock=2)
        cart.add_item(entry, ItemType.PRODUCT)
        cart.add_item(entry, ItemType.PRODUCT)

        with pytest.raises(StockUnavailableError):
            cart.add_item(entry, ItemType.PRODUCT)

        assert cart.find(entry.id, ItemType.PRODUCT).quantity == 2

    def test_services_have_no_stock_limit(self):
        cart = Cart()
        for _ in range(10):
            cart.add_item(service(), ItemType.SERVICE)

        assert cart.find(1, ItemType.SERVICE).quantity == 10

    def test_accepts_plain_string_type(self):
        cart = Cart()
        cart.add_item(service(), "service")

        assert cart.items[0].type == ItemType.SERVICE


class TestUpdateQuantity:
    def test_decrement_to_zero_removes_line(self):
        cart = Cart()
        cart.add_item(product(), ItemType.PRODUCT)

        result = cart.update_quantity(1, ItemType.PRODUCT, -1)

        assert result is None
        assert cart.is_empty

    def test_above_stock_keeps_line_unchanged(self):
        cart = Cart()
        cart.add_item(product(stock=1), ItemType.PRODUCT)

        with pytest.raises(StockUnavailableError):
            cart.update_quantity(1, ItemType.PRODUCT, 1, stock=1)

        item = cart.find(1, ItemType.PRODUCT)
        assert item.quantity == 1
        assert item.subtotal == Decimal("10.00")

    def test_increment_within_stock(self):
        cart = Cart()
        cart.add_item(product(stock=3), ItemType.PRODUCT)

        item = cart.update_quantity(1, ItemType.PRODUCT, 2, stock=3)

        assert item.quantity == 3
        assert item.subtotal == Decimal("30.00")

    def test_unknown_line_raises(self):
        with pytest.raises(NotFoundError):
            Cart().update_quantity(99, ItemType.PRODUCT, 1)


class TestRemoveItem:
    def test_removes_only_matching_line(self):
        cart = Cart()
        cart.add_item(product(id=1), ItemType.PRODUCT)
        cart.add_item(service(id=1), ItemType.SERVICE)

        cart.remove_item(1, ItemType.PRODUCT)

        assert [(i.id, i.type) for i in cart.items] == [(1, ItemType.SERVICE)]

    def test_missing_line_is_noop(self):
        cart = Cart()
        cart.add_item(service(), ItemType.SERVICE)

        cart.remove_item(5, ItemType.PRODUCT)

        assert len(cart) == 1


class TestTotals:
    def test_scenario_subtotal_and_total(self):
        cart = Cart()
        cart.add_item(product(price="10.00", stock=5), ItemType.PRODUCT)
        cart.add_item(product(price="10.00", stock=5), ItemType.PRODUCT)
        cart.add_item(service(id=2, price="25.00"), ItemType.SERVICE)
        cart.set_discount(Decimal("5.00"))

        totals = cart.totals()
        assert totals.subtotal == Decimal("45.00")
        assert totals.discount == Decimal("5.00")
        assert totals.total == Decimal("40.00")

    def test_subtotal_tracks_every_mutation(self):
        cart = Cart()
        a = product(id=1, price="10.00", stock=4)
        b = product(id=2, price="3.50", stock=2)
        s = service(id=1, price="25.00")

        steps = [
            lambda: cart.add_item(a, ItemType.PRODUCT),
            lambda: cart.add_item(s, ItemType.SERVICE),
            lambda: cart.add_item(b, ItemType.PRODUCT),
            lambda: cart.update_quantity(1, ItemType.PRODUCT, 2, stock=4),
            lambda: cart.add_item(b, ItemType.PRODUCT),
            lambda: cart.update_quantity(1, ItemType.SERVICE, 3),
            lambda: cart.update_quantity(2, ItemType.PRODUCT, -1),
            lambda: cart.remove_item(1, ItemType.SERVICE),
            lambda: cart.update_quantity(1, ItemType.PRODUCT, -3),
        ]
        for step in steps:
            step()
            assert_subtotal_consistent(cart)

        assert cart.subtotal == Decimal("3.50")

    def test_discount_outside_range_is_rejected(self):
        cart = Cart()
        cart.add_item(service(price="25.00"), ItemType.SERVICE)

        with pytest.raises(InvalidDiscountError):
            cart.set_discount(Decimal("-1"))
        with pytest.raises(InvalidDiscountError):
            cart.set_discount(Decimal("25.01"))

        assert cart.discount == Decimal("0.00")

    def test_discount_equal_to_subtotal_zeroes_total(self):
        cart = Cart()
        cart.add_item(service(price="25.00"), ItemType.SERVICE)

        cart.set_discount("25.00")

        assert cart.total == Decimal("0.00")

    def test_discount_is_rounded_to_cents(self):
        cart = Cart()
        cart.add_item(service(price="25.00"), ItemType.SERVICE)

        assert cart.set_discount("0.005") == Decimal("0.01")
        assert cart.total == Decimal("24.99")

    def test_removing_lines_keeps_discount_within_subtotal(self):
        cart = Cart()
        cart.add_item(service(id=1, price="25.00"), ItemType.SERVICE)
        cart.add_item(service(id=2, price="10.00"), ItemType.SERVICE)
        cart.set_discount("30.00")

        cart.remove_item(1, ItemType.SERVICE)

        assert cart.discount == Decimal("10.00")
        assert cart.total == Decimal("0.00")

    def test_decrement_keeps_discount_within_subtotal(self):
        cart = Cart()
        cart.add_item(service(price="25.00"), ItemType.SERVICE)
        cart.add_item(service(price="25.00"), ItemType.SERVICE)
        cart.set_discount("40.00")

        cart.update_quantity(1, ItemType.SERVICE, -1)

        assert cart.discount == Decimal("25.00")
        assert cart.total >= 0

    def test_emptying_cart_drops_discount(self):
        cart = Cart()
        cart.add_item(service(), ItemType.SERVICE)
        cart.set_discount("5.00")

        cart.update_quantity(1, ItemType.SERVICE, -1)

        assert cart.discount == Decimal("0.00")

    def test_snapshot_is_detached_from_cart(self):
        cart = Cart()
        cart.add_item(service(), ItemType.SERVICE)
        snapshot = cart.snapshot()

        cart.add_item(service(), ItemType.SERVICE)

        assert snapshot[0].quantity == 1
        assert cart.items[0].quantity == 2


class TestPosSession:
    def test_reset_clears_state_and_restores_default_payment(self):
        session = PosSession()
        session.cart.add_item(service(), ItemType.SERVICE)
        session.cart.set_discount("5")
        session.customer_id = 3
        session.customer_name = "Maria"
        session.payment_method = PaymentMethod.DINHEIRO
        session.installments = 2

        session.reset()

        assert session.cart.is_empty
        assert session.cart.discount == Decimal("0.00")
        assert session.customer_id is None
        assert session.customer_name is None
        assert session.payment_method == PaymentMethod.PIX
        assert session.installments is None

    def test_store_keeps_one_session_per_employee(self):
        store = CartStore(PaymentMethod.DEBITO)

        first = store.get(1)
        assert store.get(1) is first
        assert store.get(2) is not first
        assert first.payment_method == PaymentMethod.DEBITO

        store.discard(1)
        assert store.get(1) is not first

    def test_failed_checkout_keeps_session(self):
        session = PosSession()
        session.cart.add_item(service(), ItemType.SERVICE)
        session.customer_id = 3

        def commit(pos):
            raise EmptyCartError()

        with pytest.raises(EmptyCartError):
            session.checkout(commit)

        assert len(session.cart) == 1
        assert session.customer_id == 3
        assert not session.lock.locked()

    def test_overlapping_checkouts_commit_the_cart_once(self):
        session = PosSession()
        session.cart.add_item(service(), ItemType.SERVICE)
        committed = []
        refused = []
        inside = threading.Event()
        release = threading.Event()

        def commit(pos):
            if pos.cart.is_empty:
                raise EmptyCartError()
            committed.append(pos.cart.snapshot())
            inside.set()
            release.wait(timeout=5)
            return len(committed)

        def run():
            try:
                session.checkout(commit)
            except EmptyCartError as exc:
                refused.append(exc)

        first = threading.Thread(target=run)
        first.start()
        assert inside.wait(timeout=5)
        second = threading.Thread(target=run)
        second.start()
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert len(committed) == 1
        assert len(refused) == 1
        assert session.cart.is_empty
