"""Employee model."""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.base import AuditMixin

if TYPE_CHECKING:
    from app.models.department import Department
    from app.models.dependent import Dependent


class Employee(AuditMixin, Base):
    __tablename__ = "employees"

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    hire_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    position: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    salary: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0"))

    department_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    department: Mapped[Optional["Department"]] = relationship(
        "Department",
        back_populates="employees",
    )
    dependents: Mapped[List["Dependent"]] = relationship(
        "Dependent",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def active_dependents(self) -> List["Dependent"]:
        return [d for d in self.dependents if d.is_active]

    @property
    def dependents_count(self) -> int:
        return len(self.active_dependents)

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, email={self.email})>"
