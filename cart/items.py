from dataclasses import dataclass, field
from typing import List, Optional

from common.numbers import safe_number

PLACEHOLDER_IMAGE = "/placeholder.svg"
UNKNOWN_PRODUCT = "Unknown Product"
DEFAULT_MODEL = "Standard Model"
DEFAULT_CATEGORY = "Electric Vehicle"


@dataclass
class ProductSnapshot:
    name: str
    price: float
    image_url: str
    images: List[str]
    model: str
    category: str
    description: Optional[str] = None


@dataclass
class CartItem:
    id: str
    product_id: Optional[int]
    quantity: int
    price: float
    total: float
    name: str
    image_url: str
    product: ProductSnapshot
    color: Optional[str] = None
    extra: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, raw):
        """Build a display-safe item out of whatever the backend sent."""
        raw = raw or {}
        product = raw.get("product") or {}

        price = max(0, safe_number(raw.get("price")))
        quantity = int(max(1, safe_number(raw.get("quantity"))))
        total = safe_number(raw.get("total")) or price * quantity

        image_url = product.get("image_url") or raw.get("image_url") or PLACEHOLDER_IMAGE
        snapshot = ProductSnapshot(
            name=product.get("name") or raw.get("name") or UNKNOWN_PRODUCT,
            price=safe_number(product.get("price") or raw.get("price")),
            image_url=image_url,
            images=product.get("images") or [raw.get("image_url") or PLACEHOLDER_IMAGE],
            model=product.get("model") or DEFAULT_MODEL,
            category=product.get("category") or DEFAULT_CATEGORY,
            description=product.get("description"),
        )

        known = {"id", "product_id", "quantity", "price", "total", "name", "image_url", "product", "color"}
        return cls(
            id=str(raw.get("id", "")),
            product_id=raw.get("product_id"),
            quantity=quantity,
            price=price,
            total=total,
            name=raw.get("name") or snapshot.name,
            image_url=raw.get("image_url") or image_url,
            product=snapshot,
            color=raw.get("color"),
            extra={k: v for k, v in raw.items() if k not in known},
        )
