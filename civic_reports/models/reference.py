"""Reference catalogue models: cities and issue categories."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from civic_reports.database import Base


class City(Base):
    """A municipality reports can be filed against."""

    __tablename__ = "cities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)

    def __repr__(self):
        return f"<City(id={self.id}, name='{self.name}')>"


class Category(Base):
    """An issue category (street lighting, potholes, noise, ...)."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
