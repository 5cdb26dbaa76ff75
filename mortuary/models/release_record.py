# mortuary/models/release_record.py
"""Hand-over record written when a body is released, at most one per deceased."""

from datetime import datetime
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import orm
from mortuary.database import Base


class ReleaseRecord(Base):
    __tablename__ = "release_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    deceased_id = Column(Integer, ForeignKey("deceased_records.id", ondelete="CASCADE"),
                         unique=True, nullable=False)
    released_to = Column(String(200), nullable=False)
    relationship = Column(String(50), nullable=False)
    release_date = Column(Date, nullable=False, index=True)
    documents = Column(Text)
    remarks = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    deceased = orm.relationship("DeceasedRecord", back_populates="release_record")

    def __repr__(self):
        return f"<ReleaseRecord {self.id} deceased={self.deceased_id} to={self.released_to}>"
