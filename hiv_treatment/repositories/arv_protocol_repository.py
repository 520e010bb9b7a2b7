from ..models.arv_protocol import ARVProtocol
from .base import BaseRepository


class ARVProtocolRepository(BaseRepository[ARVProtocol]):
    model = ARVProtocol
    id_column = "arv_id"
