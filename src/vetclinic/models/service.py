from decimal import Decimal

from sqlalchemy import Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column
from vetclinic.database.base import Base


class Service(Base):
    """A bookable clinic service (consultation, vaccine, grooming...)."""
    __tablename__ = "services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))

    def __repr__(self) -> str:
        return f"<Service(id={self.id!r}, name={self.name!r})>"
