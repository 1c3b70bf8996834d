"""Customer and Administrator profiles — 1:1 extensions of a user (shared key)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.clock import utcnow
from app.infrastructure.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    address = Column(String(500), nullable=True)
    complement = Column(String(100), nullable=True)
    city = Column(String(50), nullable=True)
    state = Column(String(50), nullable=True)
    postal_code = Column(String(20), nullable=True)
    version_id = Column(Integer, nullable=False)

    user = relationship("User", lazy="joined")

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self):
        return f"<Customer {self.id}>"


class Administrator(Base):
    __tablename__ = "administrators"

    id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    job_title = Column(String(100), nullable=False, default="")
    hired_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", lazy="joined")

    def __repr__(self):
        return f"<Administrator {self.id} - {self.job_title}>"
