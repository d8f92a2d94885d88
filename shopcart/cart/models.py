"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shopcart.services.money import multiply, round_money, to_decimal


class CatalogProduct(BaseModel):
    """Product record as served by the catalog (no cart amount)."""
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    price: Decimal
    image: str = ""

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return to_decimal(v)


class Product(CatalogProduct):
    """A cart entry: catalog product plus the quantity in the cart."""
    amount: int = Field(ge=1)

    @classmethod
    def from_catalog(cls, product: CatalogProduct, amount: int) -> "Product":
        return cls(**product.model_dump(exclude={"amount"}), amount=amount)

    @property
    def subtotal(self) -> Decimal:
        """Price for all units of this entry."""
        return round_money(multiply(self.price, self.amount))

    def to_dict(self) -> dict:
        """Convert to the persisted JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "price": str(self.price),
            "image": self.image,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        return cls.model_validate(data)


class Stock(BaseModel):
    """Available quantity for a product. Never persisted."""
    model_config = ConfigDict(extra="ignore")

    id: int
    amount: int = 0

    @field_validator("amount", mode="before")
    @classmethod
    def default_missing_amount(cls, v):
        # Inventory omits or nulls the field for sold-out products
        return v or 0


@dataclass
class Cart:
    """Ordered sequence of cart entries with unique product ids."""
    items: List[Product] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"Duplicate product {item.id} in cart")
            seen.add(item.id)

    def __iter__(self) -> Iterator[Product]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def index_of(self, product_id: int) -> Optional[int]:
        """Position of the entry for product_id, or None."""
        for index, item in enumerate(self.items):
            if item.id == product_id:
                return index
        return None

    def find(self, product_id: int) -> Optional[Product]:
        index = self.index_of(product_id)
        return self.items[index] if index is not None else None

    def copy(self) -> "Cart":
        """Snapshot with fresh entry objects; nothing is shared with self."""
        return Cart(items=[item.model_copy() for item in self.items])

    @property
    def size(self) -> int:
        """Number of distinct products."""
        return len(self.items)

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.amount for item in self.items)

    @property
    def total(self) -> Decimal:
        return round_money(sum((item.subtotal for item in self.items), Decimal("0")))

    def to_list(self) -> List[dict]:
        """Convert to the persisted JSON shape (a bare list of products)."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: Any) -> "Cart":
        """Create from the persisted JSON shape."""
        if not isinstance(data, list):
            raise ValueError(f"Cart data must be a list, got {type(data).__name__}")
        return cls(items=[Product.from_dict(item) for item in data])
