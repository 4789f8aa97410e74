"""
Database Models (SQLAlchemy ORM)
=============================================================================
CONCEPT: ORM Models

The service owns a single table, `employee`. There are no relationships.

ID GENERATION:
  Ids are assigned by the database, never by the caller, starting at 101.
    - PostgreSQL: the `employee_id_seq` sequence (START 101, INCREMENT 1)
    - SQLite: an AUTOINCREMENT table whose sqlite_sequence row is primed
      to 100 right after CREATE TABLE, so the first insert gets 101

CREATION TIME:
  `creation_time` is an in-memory attribute, not a column. It is stamped
  whenever a Python object is materialised: by __init__ for new records
  and by the ORM reconstructor for rows loaded from the database.
=============================================================================
"""

from datetime import date, datetime

from sqlalchemy import DDL, Date, Integer, Sequence, String, event
from sqlalchemy.orm import Mapped, mapped_column, reconstructor

from employee_service.db.engine import Base

ID_START = 101

NAME_MAX_LENGTH = 20
DESIGNATION_MAX_LENGTH = 50
COMPANY_MAX_LENGTH = 100


class Employee(Base):
    __tablename__ = "employee"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        Sequence("employee_id_seq", start=ID_START, increment=1),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    designation: Mapped[str | None] = mapped_column(String(DESIGNATION_MAX_LENGTH))
    date_of_birth: Mapped[date | None] = mapped_column("dob", Date)
    company: Mapped[str | None] = mapped_column(String(COMPANY_MAX_LENGTH))

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.creation_time = datetime.now()

    @reconstructor
    def _on_load(self) -> None:
        self.creation_time = datetime.now()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Employee):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else 0

    def __repr__(self) -> str:
        return (
            f"Employee(id={self.id!r}, name={self.name!r}, "
            f"designation={self.designation!r}, date_of_birth={self.date_of_birth!r}, "
            f"company={self.company!r})"
        )


# SQLite has no sequences; prime AUTOINCREMENT so the first id is ID_START.
event.listen(
    Employee.__table__,
    "after_create",
    DDL("DELETE FROM sqlite_sequence WHERE name = 'employee'").execute_if(dialect="sqlite"),
)
event.listen(
    Employee.__table__,
    "after_create",
    DDL(
        f"INSERT INTO sqlite_sequence (name, seq) VALUES ('employee', {ID_START - 1})"
    ).execute_if(dialect="sqlite"),
)
