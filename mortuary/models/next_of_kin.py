# mortuary/models/next_of_kin.py
"""Next-of-kin contacts, many per deceased record."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy import orm
from mortuary.database import Base


class NextOfKin(Base):
    __tablename__ = "next_of_kin"

    id = Column(Integer, primary_key=True, autoincrement=True)
    deceased_id = Column(Integer, ForeignKey("deceased_records.id", ondelete="CASCADE"),
                         nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    relationship = Column(String(50), nullable=False)
    phone_number = Column(String(30), nullable=False)
    email = Column(String(200))
    address = Column(Text)

    deceased = orm.relationship("DeceasedRecord", back_populates="next_of_kin")

    def __repr__(self):
        return f"<NextOfKin {self.id} {self.last_name} ({self.relationship}) of {self.deceased_id}>"
