"""Pydantic contracts shared across the dataset client, services and API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductTransaction(BaseModel):
    """One record of the remote product transactions dataset.

    Unknown upstream fields (``image`` for instance) are kept and serialised
    back unchanged.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: int | str | None = None
    title: str = ""
    description: str = ""
    price: int | float = 0
    category: str | None = None
    date_of_sale: str | None = Field(default=None, alias="dateOfSale")
    sold: bool = False

    @field_validator("title", "description", mode="before")
    @classmethod
    def coerce_text(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        return value


class TransactionPage(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    items: list[ProductTransaction]
    total: int
    page: int
    per_page: int = Field(alias="perPage")


class PriceRangeCount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    range: str
    count: int


class MonthSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    total_sales: int | float = Field(default=0, alias="totalSales")
    total_sold_items: int = Field(default=0, alias="totalSoldItems")
    total_not_sold_items: int = Field(default=0, alias="totalNotSoldItems")


class CategoryCount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: str
    count: int


class ErrorResponse(BaseModel):
    """JSON body returned with every HTTP 500."""

    model_config = ConfigDict(extra="forbid")

    message: str
