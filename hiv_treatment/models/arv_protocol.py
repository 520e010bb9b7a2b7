from sqlalchemy import Column, String, Text

from ..core.database import Base


class ARVProtocol(Base):
    __tablename__ = "arv_protocols"

    arv_id = Column(String(20), primary_key=True)
    arv_code = Column(String(50), nullable=False)
    arv_name = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    age_range = Column(String(50), nullable=True)
    for_group = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<ARVProtocol(arv_id='{self.arv_id}', code='{self.arv_code}', name='{self.arv_name}')>"
