"""Dependent model (family members or other people in an employee's care)."""

from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Date, ForeignKey
from sqlalchemy import orm
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.base import AuditMixin

if TYPE_CHECKING:
    from app.models.employee import Employee


class Dependent(AuditMixin, Base):
    __tablename__ = "dependents"

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    date_of_birth: Mapped[date] = mapped_column(Date)
    relationship: Mapped[str] = mapped_column(String(50))
    gender: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    identification_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    employee_id: Mapped[int] = mapped_column(
        ForeignKey("employees.id", ondelete="CASCADE"),
        index=True,
    )

    # `relationship` is a column on this model, hence orm.relationship.
    employee: Mapped["Employee"] = orm.relationship(
        "Employee",
        back_populates="dependents",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def age(self) -> int:
        today = date.today()
        years = today.year - self.date_of_birth.year
        if (today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return years

    @property
    def employee_name(self) -> str:
        return self.employee.full_name if self.employee else ""

    def __repr__(self) -> str:
        return f"<Dependent(id={self.id}, employee_id={self.employee_id})>"
