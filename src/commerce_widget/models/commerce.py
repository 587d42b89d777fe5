"""WooCommerce models."""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """REST API credentials; only built once all three values are present."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    consumer_key: str
    consumer_secret: str


class Customer(BaseModel):
    """A customer record as returned by `GET /customers`."""

    model_config = ConfigDict(extra="ignore")

    id: int
    email: str
    first_name: str = ""
    last_name: str = ""
    username: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Order(BaseModel):
    """An order as returned by `GET /orders`; `total` stays a decimal string."""

    model_config = ConfigDict(extra="ignore")

    id: int
    number: str
    status: str
    total: str
    date_created: str

    def created_date(self) -> date:
        return datetime.fromisoformat(self.date_created).date()


class DetailResult(BaseModel):
    """Customer and orders resolved for one email; `customer` is None when unmatched."""

    customer: Optional[Customer] = None
    orders: List[Order] = Field(default_factory=list)
