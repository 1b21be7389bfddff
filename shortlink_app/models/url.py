from sqlalchemy import Column, Integer, String, DateTime
from shortlink_app.database.connection import Base


class URL(Base):
    """
    Authoritative short URL record.

    The store owns the lifetime of these rows: they are created by the
    shorten operation, mutated only by the visit counter and removed only
    by an explicit delete. Cached copies are derived from `code` and
    `original_url` alone.
    """
    __tablename__ = "urls"

    code = Column(String(6), primary_key=True)
    # Not unique: dedup is a lookup optimization, first writer wins
    original_url = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    visits = Column(Integer, nullable=False, default=0)
