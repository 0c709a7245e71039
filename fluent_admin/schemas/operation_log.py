"""
Operation log (audit trail) schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class OperationLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    username: str
    user_role: str
    action: str
    resource: str
    resource_id: str
    details: str
    status: str
    ip_address: Optional[str] = None
    request_id: Optional[str] = None
    created_at: datetime
