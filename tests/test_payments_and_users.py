from decimal import Decimal

from helpers import DatabaseTestCase

from app.application.services import customer_service, payment_service, user_admin_service
from app.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ForbiddenException,
)
from app.domain.enums import PaymentStatus, RoleName
from app.domain.models.customer import Administrator, Customer
from app.domain.models.order import Order
from app.domain.models.review import Review
from app.domain.models.user import User
from app.domain.schemas.order import PaymentCreate, PaymentUpdate
from app.domain.schemas.user import AdminUserCreate, AdminUserUpdate, CustomerUpdate


class PaymentServiceTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.make_customer()
        self.bob = self.make_customer()
        self.admin = self.make_admin()
        self.product = self.make_product()
        self.order = self.place_order(self.alice, (self.product, 2))

    def _create(self, **overrides):
        data = dict(order_id=self.order.id, method="Cartão de Crédito", amount=Decimal("20.00"))
        data.update(overrides)
        return payment_service.create_payment(self.db, PaymentCreate(**data), self.admin)

    def test_admin_records_a_payment(self):
        payment = self._create()

        self.assertEqual(payment.status, PaymentStatus.PENDENTE.value)
        self.assertIsNotNone(payment.paid_at)

    def test_one_payment_per_order(self):
        self._create()

        with self.assertRaises(BusinessRuleViolationException):
            self._create(method="Pix")

    def test_payment_for_missing_order(self):
        with self.assertRaises(EntityNotFoundException):
            self._create(order_id=999)

    def test_visibility(self):
        """
        Cenário: Cada cliente vê apenas os próprios pagamentos; o pagamento alheio "não existe".
        """
        payment = self._create()

        self.assertEqual([p.id for p in payment_service.get_my_payments(self.db, self.alice)], [payment.id])
        self.assertEqual(payment_service.get_my_payments(self.db, self.bob), [])
        self.assertEqual(payment_service.get_payment(self.db, payment.id, self.alice).id, payment.id)
        with self.assertRaises(EntityNotFoundException):
            payment_service.get_payment(self.db, payment.id, self.bob)
        with self.assertRaises(ForbiddenException):
            payment_service.get_all_payments(self.db, self.alice)

    def test_update_and_delete(self):
        payment = self._create()

        updated = payment_service.update_payment(
            self.db, payment.id, PaymentUpdate(status=PaymentStatus.APROVADO, external_transaction_id="tx-1"), self.admin
        )
        self.assertEqual(updated.status, "Aprovado")
        self.assertEqual(updated.external_transaction_id, "tx-1")

        payment_service.delete_payment(self.db, payment.id, self.admin)
        with self.assertRaises(EntityNotFoundException):
            payment_service.delete_payment(self.db, payment.id, self.admin)


class CustomerProfileTestCase(DatabaseTestCase):

    def test_update_own_address(self):
        customer = self.make_customer()

        profile = customer_service.update_my_profile(
            self.db, CustomerUpdate(address="Av. Paulista, 1000", city="São Paulo", state="SP"), customer
        )

        self.assertEqual(profile.city, "São Paulo")
        self.assertEqual(profile.version_id, 2)

    def test_listing_is_admin_only(self):
        customer = self.make_customer()
        admin = self.make_admin()

        self.assertEqual(len(customer_service.list_customers(self.db, admin)), 1)
        with self.assertRaises(ForbiddenException):
            customer_service.list_customers(self.db, customer)


class UserAdministrationTestCase(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.admin = self.make_admin()

    def _new_user(self, role=RoleName.CLIENTE, email="novo@ryujin.test"):
        return user_admin_service.create_user_with_role(
            self.db,
            AdminUserCreate(name="Novo", email=email, password="segredo123", role=role, job_title="Caixa"),
            self.admin,
        )

    def test_create_customer_creates_profile(self):
        user = self._new_user()

        self.assertEqual(user.role_names, {"Cliente"})
        self.assertIsNotNone(self.db.get(Customer, user.id))

    def test_create_administrator_creates_profile(self):
        user = self._new_user(role=RoleName.ADMINISTRADOR)

        profile = self.db.get(Administrator, user.id)
        self.assertEqual(profile.job_title, "Caixa")
        self.assertEqual(len(user_admin_service.list_administrators(self.db, self.admin)), 2)

    def test_duplicate_email(self):
        self._new_user()

        with self.assertRaises(BusinessRuleViolationException):
            self._new_user()

    def test_edit_requires_an_existing_role(self):
        """
        Cenário: Editar um usuário sem papel, ou com papel inexistente, é rejeitado.
        """
        user = self._new_user()

        for role in (None, "", "Gerente"):
            with self.subTest(role=role):
                with self.assertRaises(BusinessRuleViolationException):
                    user_admin_service.update_user(
                        self.db, user.id, AdminUserUpdate(name="Novo", email=user.email, role=role), self.admin
                    )
        self.assertEqual(user.role_names, {"Cliente"})

    def test_promote_to_administrator(self):
        user = self._new_user()

        updated = user_admin_service.update_user(
            self.db,
            user.id,
            AdminUserUpdate(name="Promovido", email=user.email, role="Administrador"),
            self.admin,
        )

        self.assertEqual(updated.name, "Promovido")
        self.assertEqual(updated.role_names, {"Administrador"})
        self.assertIsNotNone(self.db.get(Administrator, user.id))

    def test_delete_user_cascades(self):
        customer = self.make_customer()
        product = self.make_product()
        self.place_order(customer, (product, 1), payment_method="Pix")
        self.make_review(product, customer)

        user_admin_service.delete_user(self.db, customer.id, self.admin)

        self.assertIsNone(self.db.get(User, customer.id))
        self.assertEqual(self.db.query(Customer).filter(Customer.id == customer.id).count(), 0)
        self.assertEqual(self.db.query(Order).count(), 0)
        self.assertEqual(self.db.query(Review).count(), 0)

    def test_delete_reviewer_without_orders_keeps_other_reviews(self):
        """
        Cenário: Um cliente que só avaliou produtos é excluído; as avaliações de
        outros clientes permanecem.
        """
        reviewer = self.make_customer()
        other = self.make_customer()
        product = self.make_product()
        self.make_review(product, reviewer)
        kept = self.make_review(product, other, score=4)

        user_admin_service.delete_user(self.db, reviewer.id, self.admin)

        self.assertIsNone(self.db.get(Customer, reviewer.id))
        self.assertEqual([r.id for r in self.db.query(Review).all()], [kept.id])

    def test_admin_cannot_delete_itself(self):
        with self.assertRaises(BusinessRuleViolationException):
            user_admin_service.delete_user(self.db, self.admin.id, self.admin)

    def test_customer_cannot_administer_users(self):
        customer = self.make_customer()

        with self.assertRaises(ForbiddenException):
            user_admin_service.list_users(self.db, customer)
