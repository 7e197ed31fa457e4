from datetime import datetime, timezone

from sqlalchemy import Integer, String, Boolean, DateTime, LargeBinary, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class Proxy(Base):
    __tablename__ = "proxies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    create_user: Mapped[str] = mapped_column(String(255), default="")
    update_user: Mapped[str] = mapped_column(String(255), default="")
    create_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    kind: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # http, https
    host: Mapped[str] = mapped_column(String(255), default="")
    port: Mapped[int] = mapped_column(Integer, default=0)
    excluded: Mapped[bytes | None] = mapped_column(LargeBinary)  # JSON-encoded list of hosts
    identity_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("identities.id", ondelete="SET NULL")
    )

    # Relationships
    identity = relationship("Identity")

    __table_args__ = (
        CheckConstraint("kind IN ('http', 'https')", name="ck_proxies_kind"),
    )
