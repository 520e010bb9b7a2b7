from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..core.sequence import ARV_PROTOCOL_PREFIX, highest_id, next_id
from ..models.arv_protocol import ARVProtocol
from ..repositories.arv_protocol_repository import ARVProtocolRepository
from ..schemas.arv_protocol import ARVProtocolSchema, CreateARVProtocol

logger = logging.getLogger(__name__)


class ARVProtocolService:
    def __init__(self, db: Session):
        self.protocols = ARVProtocolRepository(db)

    def get_all(self) -> List[ARVProtocol]:
        return self.protocols.get_all()

    def get_by_id(self, arv_id: str) -> Optional[ARVProtocol]:
        return self.protocols.get_by_id(arv_id)

    def add(self, data: CreateARVProtocol) -> bool:
        """Insert a protocol unless its code or name is already taken."""
        existing = self.protocols.get_all()

        if any(p.arv_code == data.arv_code or p.arv_name == data.arv_name for p in existing):
            logger.info(f"Duplicate ARV protocol rejected: code={data.arv_code!r} name={data.arv_name!r}")
            return False

        protocol = ARVProtocol(
            arv_id=next_id(ARV_PROTOCOL_PREFIX, highest_id(p.arv_id for p in existing)),
            arv_code=data.arv_code,
            arv_name=data.arv_name,
            description=data.description,
            age_range=data.age_range,
            for_group=data.for_group,
        )
        self.protocols.add(protocol)
        logger.info(f"ARV protocol {protocol.arv_id} created")
        return True

    def update(self, data: Optional[ARVProtocolSchema]) -> bool:
        """Overwrite every field of an existing protocol."""
        if data is None:
            return False

        protocol = self.protocols.get_by_id(data.arv_id)
        if not protocol:
            return False

        protocol.arv_code = data.arv_code
        protocol.arv_name = data.arv_name
        protocol.description = data.description
        protocol.age_range = data.age_range
        protocol.for_group = data.for_group
        self.protocols.update(protocol)
        return True
