import datetime as dt

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from vetclinic.database.base import Base


class Appointment(Base):
    """
    A booking linking a tutor, a pet and a service.

    The references are nullable and SET NULL on delete, so history survives
    when a tutor, pet or service is removed. The list endpoint resolves them
    to display names with outer joins.
    """
    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tutor_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("tutors.id", ondelete="SET NULL")
    )
    pet_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("pets.id", ondelete="SET NULL")
    )
    service_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("services.id", ondelete="SET NULL")
    )
    datetime: Mapped[dt.datetime | None] = mapped_column(DateTime)
    status: Mapped[str | None] = mapped_column(Text, server_default="scheduled")

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id!r}, datetime={self.datetime!r}, status={self.status!r})>"
