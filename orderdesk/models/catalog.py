"""Catalog models consumed by order line resolution."""

from decimal import Decimal

from pydantic import BaseModel, Field


class CatalogItem(BaseModel):
    """The part of a catalog item an order needs: identity, name and price."""

    id: str
    name: str
    unit_price: Decimal = Field(ge=0)
