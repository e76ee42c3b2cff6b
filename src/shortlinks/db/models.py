from sqlalchemy import BigInteger, CheckConstraint, DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime

from shortlinks.db.base import Base

class ShortUrl(Base):
    __tablename__ = "shortener"
    __table_args__ = (
        CheckConstraint("times_followed >= 0", name="ck_shortener_times_followed"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    long_url: Mapped[str] = mapped_column(Text, nullable=False)
    short_url: Mapped[str] = mapped_column(Text, unique=True, index=True)

    times_followed: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0, server_default="0"
    )
