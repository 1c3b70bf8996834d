"""Enumerated values shared by models, schemas and services."""

import enum


class RoleName(str, enum.Enum):
    ADMINISTRADOR = "Administrador"
    CLIENTE = "Cliente"


class OrderStatus(str, enum.Enum):
    PENDENTE = "Pendente"
    EM_PREPARACAO = "EmPreparação"
    ENTREGUE = "Entregue"
    CANCELADO = "Cancelado"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.ENTREGUE, OrderStatus.CANCELADO)


class DeliveryType(str, enum.Enum):
    RETIRADA = "Retirada"
    ENTREGA = "Entrega"


class PaymentStatus(str, enum.Enum):
    PENDENTE = "Pendente"
    APROVADO = "Aprovado"
    REJEITADO = "Rejeitado"


class DiscountType(str, enum.Enum):
    PERCENTUAL = "Percentual"
    FIXO = "Fixo"


class ReviewStatus(str, enum.Enum):
    PENDENTE = "Pendente"
    APROVADO = "Aprovado"
    REJEITADO = "Rejeitado"


class ResolveAction(str, enum.Enum):
    REMOVE = "Remove"
    KEEP = "Keep"
