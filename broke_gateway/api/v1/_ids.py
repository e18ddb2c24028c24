"""Path parameter parsing shared by routers"""

import uuid
from fastapi import HTTPException


def parse_id(raw_id: str, label: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw_id)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")
