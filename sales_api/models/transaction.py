"""Transaction model module."""
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sales_api.database.database import Base


class Transaction(Base):
    """Product sale record loaded from the seed dataset."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Stored as naive UTC
    date_of_sale: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
