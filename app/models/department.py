"""Department model."""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.base import AuditMixin

if TYPE_CHECKING:
    from app.models.employee import Employee


class Department(AuditMixin, Base):
    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(100))
    code: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Purging a department leaves its employees in place (FK is SET NULL).
    employees: Mapped[List["Employee"]] = relationship(
        "Employee",
        back_populates="department",
        passive_deletes=True,
    )

    @property
    def employee_count(self) -> int:
        return len(self.employees)

    def __repr__(self) -> str:
        return f"<Department(id={self.id}, code={self.code})>"
