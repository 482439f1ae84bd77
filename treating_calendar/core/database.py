# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine singleton and table definitions."""
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import Engine

from treating_calendar.core.config import settings

metadata = MetaData()

teams = Table(
    "teams",
    metadata,
    Column("team_id", String(120), primary_key=True),
    Column("team_name", String(255), nullable=False),
    Column("sort_type", String(20), nullable=False),
    Column("host_notifications_enabled", Boolean, nullable=False, default=False),
    Column("team_notifications_enabled", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

personnel = Table(
    "personnel",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("team_id", String(120), ForeignKey("teams.team_id", ondelete="CASCADE"),
           nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("phone", String(64), nullable=True),
    Column("hosting_count", Integer, nullable=False, default=0),
    Column("host_offset", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), nullable=True),
)

host_schedule = Table(
    "host_schedule",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("team_id", String(120), ForeignKey("teams.team_id", ondelete="CASCADE"),
           nullable=False, index=True),
    Column("date", Date, nullable=False),
    Column("person_id", String(36), nullable=True),
    Column("completed", Boolean, nullable=False, default=False),
    Column("host_notified", Boolean, nullable=False, default=False),
    Column("team_notified", Boolean, nullable=False, default=False),
    UniqueConstraint("team_id", "date", name="uq_host_schedule_team_date"),
)


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, pool_pre_ping=True)
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.POOL_SIZE,
        max_overflow=settings.MAX_OVERFLOW,
        pool_recycle=settings.POOL_RECYCLE,
        pool_timeout=settings.POOL_TIMEOUT,
    )


engine = build_engine(settings.DATABASE_URL)


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables."""
    metadata.create_all(bind=bind or engine)
