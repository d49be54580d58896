from decimal import Decimal
from pydantic import BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated

from bucketbook.core.money import format_money

# Decimal that always leaves the API as a 2-place string, e.g. "45.23"
Money = Annotated[Decimal, PlainSerializer(format_money, return_type=str, when_used="json")]

class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class MessageResponse(CamelModel):
    message: str
