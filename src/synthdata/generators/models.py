"""Record models produced by the entity builders.

Records are immutable once built. Wire names are camelCase, attribute names
snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """Base for all generated records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Address(Record):
    street: str
    city: str
    country: str
    zip_code: str = Field(..., alias="zipCode")


class User(Record):
    """A user with every optional field nullable.

    Only the requested fields are populated; output filtering decides which
    keys reach the client.
    """

    id: str
    name: str | None = None
    email: str | None = None
    age: int | None = None
    address: Address | None = None
    phone: str | None = None
    job: str | None = None


class UserRef(Record):
    id: str
    name: str


class Variant(Record):
    size: str
    color: str
    stock: int = Field(..., ge=0, le=100)


class Product(Record):
    id: str
    name: str
    price: float = Field(..., ge=0)
    category: str
    in_stock: bool = Field(..., alias="inStock")
    variants: tuple[Variant, ...]


class ProductRef(Record):
    id: str
    name: str
    price: float


class Department(Record):
    name: str
    head: str
    budget: float


class Company(Record):
    name: str
    industry: str
    catch_phrase: str = Field(..., alias="catchPhrase")
    employees: int = Field(..., ge=10, le=10000)
    location: str
    departments: tuple[Department, ...]


class Transaction(Record):
    id: str
    user: UserRef
    product: ProductRef
    amount: float
    currency: str
    date: str
    status: str


class TimeSeriesPoint(Record):
    timestamp: str
    value: float
