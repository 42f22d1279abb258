from datetime import datetime
from typing import Dict
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every wire schema: camelCase on the wire, snake_case in Python"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class HealthResponse(BaseModel):
    success: bool = True
    message: str = "Server is running"
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    database: Dict[str, bool] = Field(default_factory=dict)
