from decimal import Decimal
from types import SimpleNamespace

from helpers import DatabaseTestCase

from app.application.services import order_service, product_service
from app.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ForbiddenException,
    InvalidStatusTransitionException,
)
from app.domain.enums import DeliveryType, DiscountType, OrderStatus
from app.domain.models.order import Order, OrderItem, Payment
from app.domain.schemas.order import OrderUpdate
from app.domain.schemas.product import ProductUpdate


class CreateOrderTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.customer = self.make_customer()
        self.admin = self.make_admin()
        category = self.make_category()
        self.temaki = self.make_product("Temaki", "10.00", category=category)
        self.gyoza = self.make_product("Gyoza", "5.50", category=category)

    def test_total_is_computed_from_items(self):
        """
        Cenário: O total do pedido é a soma de quantidade x preço dos itens.
        """
        order = self.place_order(self.customer, (self.temaki, 2), (self.gyoza, 1))

        self.assertEqual(order.total, Decimal("25.50"))
        self.assertEqual(order.status, OrderStatus.PENDENTE.value)
        self.assertEqual(order.customer_id, self.customer.id)
        self.assertEqual(len(order.items), 2)

    def test_percent_coupon_discount(self):
        """
        Cenário: Cupom percentual de 10% sobre 25,50 resulta em 22,95.
        """
        coupon = self.make_coupon(value="10")

        order = self.place_order(self.customer, (self.temaki, 2), (self.gyoza, 1), coupon_id=coupon.id)

        self.assertEqual(order.total, Decimal("22.95"))
        self.assertEqual(order.coupon_id, coupon.id)

    def test_fixed_coupon_never_makes_total_negative(self):
        """
        Cenário: Um desconto fixo maior que o pedido zera o total, sem ficar negativo.
        """
        coupon = self.make_coupon(code="FIXO30", discount_type=DiscountType.FIXO, value="30")

        order = self.place_order(self.customer, (self.gyoza, 1), coupon_id=coupon.id)

        self.assertEqual(order.total, Decimal("0.00"))

    def test_no_payment_when_coupon_covers_the_order(self):
        """
        Cenário: Com o cupom cobrindo todo o pedido não há nada a cobrar, então
        nenhum pagamento é registrado mesmo com forma de pagamento informada.
        """
        coupon = self.make_coupon(code="FIXO30", discount_type=DiscountType.FIXO, value="30")

        order = self.place_order(self.customer, (self.gyoza, 1), coupon_id=coupon.id, payment_method="Pix")

        self.assertEqual(order.total, Decimal("0.00"))
        self.assertEqual(self.db.query(Payment).filter(Payment.order_id == order.id).count(), 0)

    def test_missing_coupon_is_not_found(self):
        with self.assertRaises(EntityNotFoundException):
            self.place_order(self.customer, (self.temaki, 1), coupon_id=999)

    def test_inactive_expired_and_exhausted_coupons_are_rejected(self):
        """
        Cenário: Cupons inativos, vencidos ou esgotados não podem ser usados.
        """
        inactive = self.make_coupon(code="OFF", active=False)
        expired = self.make_coupon(code="OLD", starts_in_days=-10, ends_in_days=-1)
        single_use = self.make_coupon(code="ONCE", max_uses=1)
        self.place_order(self.customer, (self.temaki, 1), coupon_id=single_use.id)

        for coupon in (inactive, expired, single_use):
            with self.subTest(coupon=coupon.code):
                with self.assertRaises(BusinessRuleViolationException):
                    self.place_order(self.customer, (self.temaki, 1), coupon_id=coupon.id)

    def test_cancelled_orders_do_not_consume_coupon_uses(self):
        single_use = self.make_coupon(code="ONCE", max_uses=1)
        first = self.place_order(self.customer, (self.temaki, 1), coupon_id=single_use.id)
        order_service.update_order_status(self.db, first.id, OrderStatus.CANCELADO, self.admin)

        second = self.place_order(self.customer, (self.temaki, 1), coupon_id=single_use.id)

        self.assertEqual(second.coupon_id, single_use.id)

    def test_delivery_requires_an_address(self):
        """
        Cenário: Pedidos com entrega e endereço vazio falham na validação.
        """
        for address in (None, "", "   "):
            with self.subTest(address=address):
                with self.assertRaises(BusinessRuleViolationException):
                    self.place_order(
                        self.customer,
                        (self.temaki, 1),
                        delivery_type=DeliveryType.ENTREGA,
                        delivery_address=address,
                    )
        self.assertEqual(self.db.query(Order).count(), 0)

    def test_delivery_with_address(self):
        order = self.place_order(
            self.customer,
            (self.temaki, 1),
            delivery_type=DeliveryType.ENTREGA,
            delivery_address="Rua das Cerejeiras, 42",
        )

        self.assertEqual(order.delivery_address, "Rua das Cerejeiras, 42")

    def test_order_needs_distinct_items(self):
        with self.assertRaises(BusinessRuleViolationException):
            self.place_order(self.customer)
        with self.assertRaises(BusinessRuleViolationException):
            self.place_order(self.customer, (self.temaki, 1), (self.temaki, 2))

    def test_unavailable_or_missing_product(self):
        sold_out = self.make_product("Esgotado", "3.00", available=False)

        with self.assertRaises(BusinessRuleViolationException):
            self.place_order(self.customer, (sold_out, 1))
        with self.assertRaises(EntityNotFoundException):
            self.place_order(self.customer, (SimpleNamespace(id=404), 1))

    def test_payment_is_created_with_the_order(self):
        """
        Cenário: Informar a forma de pagamento cria um pagamento pendente no mesmo pedido.
        """
        order = self.place_order(self.customer, (self.temaki, 3), payment_method="Pix")

        payment = self.db.query(Payment).filter(Payment.order_id == order.id).one()
        self.assertEqual(payment.amount, Decimal("30.00"))
        self.assertEqual(payment.method, "Pix")
        self.assertEqual(payment.status, "Pendente")

    def test_admin_places_order_for_a_customer(self):
        order = self.place_order(self.admin, (self.temaki, 1), customer_id=self.customer.id)

        self.assertEqual(order.customer_id, self.customer.id)

    def test_customer_cannot_place_order_for_someone_else(self):
        other = self.make_customer()

        order = self.place_order(self.customer, (self.temaki, 1), customer_id=other.id)

        self.assertEqual(order.customer_id, self.customer.id)

    def test_snapshot_prices_survive_price_changes(self):
        """
        Cenário: Os preços dos itens ficam congelados mesmo após o produto mudar de preço.
        """
        order = self.place_order(self.customer, (self.temaki, 1), (self.gyoza, 2))
        product_service.update_product(self.db, self.temaki.id, ProductUpdate(price=Decimal("99.90")), self.admin)
        self.db.expire_all()

        fetched = order_service.get_order(self.db, order.id, self.customer)

        prices = {item.product_id: item.unit_price for item in fetched.items}
        self.assertEqual(prices, {self.temaki.id: Decimal("10.00"), self.gyoza.id: Decimal("5.50")})


class OrderAccessTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.make_customer(name="Alice")
        self.bob = self.make_customer(name="Bob")
        self.admin = self.make_admin()
        self.product = self.make_product()
        self.order = self.place_order(self.alice, (self.product, 1))

    def test_owner_and_admin_can_read(self):
        self.assertEqual(order_service.get_order(self.db, self.order.id, self.alice).id, self.order.id)
        self.assertEqual(order_service.get_order(self.db, self.order.id, self.admin).id, self.order.id)

    def test_other_customer_gets_not_found(self):
        """
        Cenário: Um cliente não descobre a existência do pedido de outro cliente.
        """
        with self.assertRaises(EntityNotFoundException):
            order_service.get_order(self.db, self.order.id, self.bob)

    def test_list_for_customer_only_returns_own_orders(self):
        self.place_order(self.bob, (self.product, 2))

        orders = order_service.get_orders_for_customer(self.db, self.alice.id)

        self.assertEqual([o.id for o in orders], [self.order.id])

    def test_all_orders_is_admin_only(self):
        self.place_order(self.bob, (self.product, 2))

        self.assertEqual(len(order_service.get_all_orders(self.db, self.admin)), 2)
        self.assertEqual(len(order_service.get_all_orders(self.db, self.admin, OrderStatus.ENTREGUE)), 0)
        with self.assertRaises(ForbiddenException):
            order_service.get_all_orders(self.db, self.alice)

    def test_customer_id_cannot_be_changed_by_owner(self):
        """
        Cenário: O dono edita o pedido tentando transferi-lo; o cliente permanece o mesmo.
        """
        updated = order_service.update_order(
            self.db, self.order.id, OrderUpdate(notes="Sem cebola", customer_id=self.bob.id), self.alice
        )

        self.assertEqual(updated.customer_id, self.alice.id)
        self.assertEqual(updated.notes, "Sem cebola")

    def test_admin_can_reassign_customer(self):
        updated = order_service.update_order(self.db, self.order.id, OrderUpdate(customer_id=self.bob.id), self.admin)

        self.assertEqual(updated.customer_id, self.bob.id)

    def test_owner_cannot_edit_after_preparation_started(self):
        order_service.update_order_status(self.db, self.order.id, OrderStatus.EM_PREPARACAO, self.admin)

        with self.assertRaises(BusinessRuleViolationException):
            order_service.update_order(self.db, self.order.id, OrderUpdate(notes="Atrasado"), self.alice)

    def test_other_customer_cannot_edit(self):
        with self.assertRaises(EntityNotFoundException):
            order_service.update_order(self.db, self.order.id, OrderUpdate(notes="x"), self.bob)


class OrderStatusTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.make_customer()
        self.bob = self.make_customer()
        self.admin = self.make_admin()
        self.order = self.place_order(self.alice, (self.make_product(), 1))

    def test_customer_cannot_change_status_admin_can(self):
        """
        Cenário: O cliente B tenta mudar o status do pedido de A e é barrado; o admin consegue.
        """
        with self.assertRaises(ForbiddenException):
            order_service.update_order_status(self.db, self.order.id, OrderStatus.EM_PREPARACAO, self.bob)
        with self.assertRaises(ForbiddenException):
            order_service.update_order_status(self.db, self.order.id, OrderStatus.EM_PREPARACAO, self.alice)

        updated = order_service.update_order_status(self.db, self.order.id, OrderStatus.EM_PREPARACAO, self.admin)

        self.assertEqual(updated.status, OrderStatus.EM_PREPARACAO.value)

    def test_full_lifecycle(self):
        order_service.update_order_status(self.db, self.order.id, OrderStatus.EM_PREPARACAO, self.admin)
        delivered = order_service.update_order_status(self.db, self.order.id, OrderStatus.ENTREGUE, self.admin)

        self.assertEqual(delivered.status, OrderStatus.ENTREGUE.value)

    def test_invalid_transitions_are_rejected(self):
        with self.assertRaises(InvalidStatusTransitionException):
            order_service.update_order_status(self.db, self.order.id, OrderStatus.ENTREGUE, self.admin)

        order_service.update_order_status(self.db, self.order.id, OrderStatus.CANCELADO, self.admin)
        for target in (OrderStatus.PENDENTE, OrderStatus.EM_PREPARACAO, OrderStatus.ENTREGUE):
            with self.subTest(target=target):
                with self.assertRaises(InvalidStatusTransitionException):
                    order_service.update_order_status(self.db, self.order.id, target, self.admin)

    def test_status_of_missing_order(self):
        with self.assertRaises(EntityNotFoundException):
            order_service.update_order_status(self.db, 999, OrderStatus.CANCELADO, self.admin)

    def test_transition_table(self):
        self.assertTrue(order_service.can_transition(OrderStatus.PENDENTE, OrderStatus.CANCELADO))
        self.assertTrue(order_service.can_transition(OrderStatus.EM_PREPARACAO, OrderStatus.CANCELADO))
        self.assertFalse(order_service.can_transition(OrderStatus.ENTREGUE, OrderStatus.PENDENTE))
        self.assertFalse(order_service.can_transition(OrderStatus.ENTREGUE, OrderStatus.CANCELADO))


class DeleteOrderTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.customer = self.make_customer()
        self.admin = self.make_admin()
        self.order = self.place_order(self.customer, (self.make_product(), 2), payment_method="Dinheiro")

    def test_delete_removes_items_and_payment(self):
        order_service.delete_order(self.db, self.order.id, self.admin)

        self.assertEqual(self.db.query(Order).count(), 0)
        self.assertEqual(self.db.query(OrderItem).count(), 0)
        self.assertEqual(self.db.query(Payment).count(), 0)

    def test_second_delete_is_not_found(self):
        """
        Cenário: Excluir o mesmo pedido duas vezes; a segunda chamada responde NotFound.
        """
        order_service.delete_order(self.db, self.order.id, self.admin)

        with self.assertRaises(EntityNotFoundException):
            order_service.delete_order(self.db, self.order.id, self.admin)

    def test_customer_cannot_delete(self):
        with self.assertRaises(ForbiddenException):
            order_service.delete_order(self.db, self.order.id, self.customer)
        self.assertEqual(self.db.query(Order).count(), 1)
