"""Shared fixtures: an in-memory database per test case and small factories."""

import unittest
import uuid
from datetime import timedelta
from decimal import Decimal

from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.domain.models  # noqa: F401
from app.application.services import order_service
from app.application.services.authorization import Actor
from app.core.clock import utcnow
from app.domain.enums import DeliveryType, DiscountType, RoleName
from app.domain.models.coupon import Coupon
from app.domain.models.customer import Administrator, Customer
from app.domain.models.product import Category, Product
from app.domain.models.review import Review
from app.domain.models.user import Role, User
from app.domain.schemas.order import OrderCreate, OrderItemCreate
from app.infrastructure.database import Base, build_engine


class DatabaseTestCase(unittest.TestCase):
    """Each test gets a fresh schema with the two roles already present."""

    def setUp(self):
        self.engine = build_engine("sqlite://", poolclass=StaticPool)
        Base.metadata.create_all(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.db = self.Session()

        self.roles = {name.value: Role(name=name.value) for name in RoleName}
        self.db.add_all(self.roles.values())
        self.db.commit()

    def tearDown(self):
        self.db.close()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    # Factories

    def make_user(self, *role_names: str, email: str = None, name: str = "Usuário") -> User:
        user = User(
            id=str(uuid.uuid4()),
            name=name,
            email=email or f"{uuid.uuid4().hex[:8]}@ryujin.test",
            password_hash="not-a-real-hash",
            created_at=utcnow(),
            is_active=True,
        )
        user.roles = [self.roles[r] for r in role_names]
        self.db.add(user)
        self.db.flush()
        if RoleName.CLIENTE.value in role_names:
            self.db.add(Customer(id=user.id))
        if RoleName.ADMINISTRADOR.value in role_names:
            self.db.add(Administrator(id=user.id, job_title="Gerente", hired_at=utcnow()))
        self.db.commit()
        return user

    def make_customer(self, **kwargs) -> Actor:
        return Actor.from_user(self.make_user(RoleName.CLIENTE.value, **kwargs))

    def make_admin(self, **kwargs) -> Actor:
        return Actor.from_user(self.make_user(RoleName.ADMINISTRADOR.value, **kwargs))

    def make_category(self, name: str = "Sushi") -> Category:
        category = Category(name=name)
        self.db.add(category)
        self.db.commit()
        return category

    def make_product(self, name: str = "Temaki", price: str = "10.00", available: bool = True, category=None) -> Product:
        category = category or self.make_category()
        product = Product(name=name, price=Decimal(price), is_available=available, category_id=category.id)
        self.db.add(product)
        self.db.commit()
        return product

    def make_coupon(self, code: str = "RYUJIN10", discount_type=DiscountType.PERCENTUAL, value: str = "10",
                    active: bool = True, max_uses: int = None, starts_in_days: int = -1, ends_in_days: int = 30) -> Coupon:
        now = utcnow()
        coupon = Coupon(
            code=code,
            discount_type=discount_type.value,
            discount_value=Decimal(value),
            starts_at=now + timedelta(days=starts_in_days),
            ends_at=now + timedelta(days=ends_in_days),
            is_active=active,
            max_uses=max_uses,
        )
        self.db.add(coupon)
        self.db.commit()
        return coupon

    def make_review(self, product: Product, author: Actor, score: int = 5, reported: bool = False) -> Review:
        review = Review(product_id=product.id, customer_id=author.id, score=score, comment="Muito bom",
                        created_at=utcnow(), is_reported=reported)
        self.db.add(review)
        self.db.commit()
        return review

    def place_order(self, actor: Actor, *products_and_quantities, **kwargs):
        items = [OrderItemCreate(product_id=p.id, quantity=q) for p, q in products_and_quantities]
        data = OrderCreate(
            delivery_type=kwargs.pop("delivery_type", DeliveryType.RETIRADA),
            items=items,
            **kwargs,
        )
        return order_service.create_order(self.db, data, actor)
