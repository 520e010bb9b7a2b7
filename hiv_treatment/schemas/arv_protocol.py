from pydantic import BaseModel
from typing import Optional


class CreateARVProtocol(BaseModel):
    arv_code: str
    arv_name: str
    description: Optional[str] = None
    age_range: Optional[str] = None
    for_group: Optional[str] = None


class ARVProtocolSchema(CreateARVProtocol):
    arv_id: str

    class Config:
        from_attributes = True
