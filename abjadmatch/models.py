from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base

INT64 = BigInteger().with_variant(Integer, "sqlite")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CompatibilityResult(Base):
    __tablename__ = "compatibility_results"

    id: Mapped[int] = mapped_column(INT64, primary_key=True, autoincrement=True)
    partner1_name: Mapped[str] = mapped_column(Text, nullable=False)
    partner2_name: Mapped[str] = mapped_column(Text, nullable=False)
    partner1_date_of_birth: Mapped[str | None] = mapped_column(String(64))
    partner1_birth_time: Mapped[str | None] = mapped_column(String(64))
    partner2_date_of_birth: Mapped[str | None] = mapped_column(String(64))
    partner2_birth_time: Mapped[str | None] = mapped_column(String(64))
    partner1_abjad_value: Mapped[int] = mapped_column(Integer, nullable=False)
    partner2_abjad_value: Mapped[int] = mapped_column(Integer, nullable=False)
    partner1_digital_root: Mapped[int] = mapped_column(Integer, nullable=False)
    partner2_digital_root: Mapped[int] = mapped_column(Integer, nullable=False)
    partner1_element: Mapped[str] = mapped_column(String(16), nullable=False)
    partner2_element: Mapped[str] = mapped_column(String(16), nullable=False)
    name_compatibility_score: Mapped[int] = mapped_column(Integer, nullable=False)
    life_path_compatibility_score: Mapped[int | None] = mapped_column(Integer)
    overall_compatibility_score: Mapped[int] = mapped_column(Integer, nullable=False)
    compatibility_level: Mapped[str] = mapped_column(String(64), nullable=False)
    insights: Mapped[str] = mapped_column(Text, nullable=False)
    marriage_advice: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
