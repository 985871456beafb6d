"""
Erros de negócio do PDV.

Cada erro carrega o status HTTP e a mensagem exibida ao operador;
o handler registrado em main.py converte para {"detail": ...}.
"""


class PDVError(Exception):
    status_code = 400
    default_detail = "Operação inválida"

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(PDVError):
    status_code = 404
    default_detail = "Recurso não encontrado"


class MissingOperatorError(PDVError):
    status_code = 401
    default_detail = "Erro: usuário ou caixa não encontrado!"


class EmptyCartError(PDVError):
    default_detail = "Adicione itens ao carrinho antes de finalizar a venda!"


class InvalidTotalError(PDVError):
    default_detail = "Total deve ser maior que zero!"


class InvalidDiscountError(PDVError):
    default_detail = "Desconto deve estar entre zero e o subtotal"


class StockUnavailableError(PDVError):
    status_code = 409
    default_detail = "Quantidade indisponível no estoque!"


class RegisterClosedError(PDVError):
    status_code = 409
    default_detail = "Caixa já está fechado!"


class RegisterAlreadyOpenError(PDVError):
    status_code = 409
    default_detail = "Já existe um caixa aberto para hoje"
