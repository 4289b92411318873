"""
Typed records returned by the collection endpoints.

Every entity shares the integer ``id`` identity field. Fields beyond those
declared here are ignored when a payload is validated.
"""

from pydantic import BaseModel, ConfigDict, Field


class BaseEntity(BaseModel):
    """
    Common shape of a fetched record.
    """

    id: int = Field(..., description="Identifies the record within its collection")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class User(BaseEntity):
    name: str
    email: str


class Product(BaseEntity):
    name: str
    price: float
    description: str


class Fruit(BaseEntity):
    name: str
    rich_in: str = Field(..., alias="richIn", description="Main nutrient")
