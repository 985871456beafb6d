"""
Carrinho do PDV.

Mantém os itens da venda em montagem, só em memória. A checagem de
estoque usa o estoque informado no momento de cada alteração; quem chama
é responsável por ler o estoque atual do produto.
"""
import threading
from decimal import Decimal
from typing import Callable, Dict, List, Optional, TypeVar

from pdv.exceptions import InvalidDiscountError, NotFoundError, StockUnavailableError
from pdv.models.sales import ItemType, PaymentMethod
from pdv.schemas.sales import CartItem, CartTotals, CatalogEntry
from pdv.utils.money import to_money

ZERO = Decimal("0.00")

T = TypeVar("T")


class Cart:
    def __init__(self, items: Optional[List[CartItem]] = None):
        self.items: List[CartItem] = list(items or [])
        self.discount: Decimal = ZERO

    def __len__(self):
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, item_id: int, item_type: ItemType) -> Optional[CartItem]:
        for item in self.items:
            if item.id == item_id and item.type == item_type:
                return item
        return None

    def add_item(self, entry: CatalogEntry, item_type: ItemType) -> CartItem:
        """Adiciona uma unidade; se o item já está no carrinho, soma 1."""
        item_type = ItemType(item_type)
        is_product = item_type == ItemType.PRODUCT

        if is_product and (entry.stock or 0) <= 0:
            raise StockUnavailableError("Produto sem estoque!")

        existing = self.find(entry.id, item_type)
        if existing:
            if is_product and existing.quantity >= entry.stock:
                raise StockUnavailableError()
            existing.quantity += 1
            existing.subtotal = existing.price * existing.quantity
            return existing

        item = CartItem(
            id=entry.id,
            type=item_type,
            name=entry.name,
            price=entry.price,
            quantity=1,
            subtotal=entry.price,
        )
        self.items.append(item)
        return item

    def update_quantity(self, item_id: int, item_type: ItemType, delta: int,
                        stock: Optional[int] = None) -> Optional[CartItem]:
        """
        Ajusta a quantidade em `delta`. Quantidade <= 0 remove a linha e
        devolve None. Para produtos, `stock` é o estoque atual; acima dele a
        linha fica como estava.
        """
        item_type = ItemType(item_type)
        item = self.find(item_id, item_type)
        if item is None:
            raise NotFoundError("Item não está no carrinho")

        new_quantity = item.quantity + delta
        if new_quantity <= 0:
            self.remove_item(item_id, item_type)
            return None

        if item_type == ItemType.PRODUCT and stock is not None and new_quantity > stock:
            raise StockUnavailableError()

        item.quantity = new_quantity
        item.subtotal = item.price * new_quantity
        self._fit_discount()
        return item

    def remove_item(self, item_id: int, item_type: ItemType) -> None:
        item_type = ItemType(item_type)
        self.items = [i for i in self.items if not (i.id == item_id and i.type == item_type)]
        self._fit_discount()

    def set_discount(self, amount) -> Decimal:
        amount = to_money(amount)
        if amount < 0 or amount > self.subtotal:
            raise InvalidDiscountError()
        self.discount = amount
        return amount

    def _fit_discount(self) -> None:
        # Desconto nunca passa do subtotal depois de remover itens
        if self.discount > self.subtotal:
            self.discount = self.subtotal

    @property
    def subtotal(self) -> Decimal:
        return sum((item.subtotal for item in self.items), ZERO)

    @property
    def total(self) -> Decimal:
        return self.subtotal - self.discount

    def totals(self) -> CartTotals:
        return CartTotals(subtotal=self.subtotal, discount=self.discount, total=self.total)

    def snapshot(self) -> List[CartItem]:
        """Cópia dos itens, desacoplada do carrinho."""
        return [item.model_copy() for item in self.items]

    def clear(self) -> None:
        self.items = []
        self.discount = ZERO


class PosSession:
    """
    Estado do PDV de um operador: carrinho, cliente e forma de pagamento.

    Requisições do mesmo operador chegam em threads diferentes; toda
    leitura ou alteração passa por `lock`.
    """

    def __init__(self, default_payment_method: PaymentMethod = PaymentMethod.PIX):
        self.lock = threading.Lock()
        self.default_payment_method = PaymentMethod(default_payment_method)
        self.cart = Cart()
        self.customer_id: Optional[int] = None
        self.customer_name: Optional[str] = None
        self.payment_method = self.default_payment_method
        self.installments: Optional[int] = None

    def reset(self) -> None:
        self.cart.clear()
        self.customer_id = None
        self.customer_name = None
        self.payment_method = self.default_payment_method
        self.installments = None

    def checkout(self, commit: Callable[["PosSession"], T]) -> T:
        """
        Executa `commit` com a sessão travada e zera a sessão se ele der
        certo. Se `commit` falha, carrinho e seleções ficam como estavam.
        """
        with self.lock:
            result = commit(self)
            self.reset()
            return result


class CartStore:
    """Sessões de PDV em memória do processo, uma por funcionário."""

    def __init__(self, default_payment_method: PaymentMethod = PaymentMethod.PIX):
        self.default_payment_method = PaymentMethod(default_payment_method)
        self._sessions: Dict[int, PosSession] = {}
        self._lock = threading.Lock()

    def get(self, employee_id: int) -> PosSession:
        with self._lock:
            session = self._sessions.get(employee_id)
            if session is None:
                session = PosSession(self.default_payment_method)
                self._sessions[employee_id] = session
            return session

    def discard(self, employee_id: int) -> None:
        with self._lock:
            self._sessions.pop(employee_id, None)
