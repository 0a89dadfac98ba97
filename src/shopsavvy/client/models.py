"""Client configuration, response envelope and record models.

Records are built from the decoded JSON with `from_dict`; keys the API
adds later are ignored there but stay available on APIResponse.raw.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar

from shopsavvy.config.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS

T = TypeVar("T")

Availability = Literal["in_stock", "out_of_stock", "limited_stock"]
Condition = Literal["new", "used", "refurbished"]
Frequency = Literal["hourly", "daily", "weekly"]
OutputFormat = Literal["json", "csv"]


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str | None = DEFAULT_BASE_URL
    timeout: int | None = DEFAULT_TIMEOUT_MS  # milliseconds

    def __post_init__(self):
        # Empty or zero means "use the default", same as omitting the argument
        if not self.base_url:
            object.__setattr__(self, "base_url", DEFAULT_BASE_URL)
        if not self.timeout:
            object.__setattr__(self, "timeout", DEFAULT_TIMEOUT_MS)


@dataclass(frozen=True)
class ProductDetails:
    product_id: str
    name: str
    brand: str | None = None
    category: str | None = None
    image_url: str | None = None
    barcode: str | None = None
    asin: str | None = None
    model: str | None = None
    mpn: str | None = None
    description: str | None = None
    identifiers: dict[str, str] | None = None  # scheme -> value, e.g. {"upc": "..."}

    @classmethod
    def from_dict(cls, data: dict) -> "ProductDetails":
        return cls(
            product_id=data.get("product_id", ""),
            name=data.get("name", ""),
            brand=data.get("brand"),
            category=data.get("category"),
            image_url=data.get("image_url"),
            barcode=data.get("barcode"),
            asin=data.get("asin"),
            model=data.get("model"),
            mpn=data.get("mpn"),
            description=data.get("description"),
            identifiers=data.get("identifiers"),
        )


def _offer_fields(data: dict) -> dict:
    return {
        "offer_id": data.get("offer_id", ""),
        "retailer": data.get("retailer", ""),
        "price": data.get("price"),
        "currency": data.get("currency", ""),
        "availability": data.get("availability", ""),
        "condition": data.get("condition", ""),
        "url": data.get("url", ""),
        "last_updated": data.get("last_updated", ""),
        "shipping": data.get("shipping"),
    }


@dataclass(frozen=True)
class Offer:
    offer_id: str
    retailer: str
    price: float
    currency: str
    availability: Availability
    condition: Condition
    url: str
    last_updated: str
    shipping: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Offer":
        return cls(**_offer_fields(data))


@dataclass(frozen=True)
class PriceHistoryEntry:
    date: str  # YYYY-MM-DD
    price: float
    availability: str

    @classmethod
    def from_dict(cls, data: dict) -> "PriceHistoryEntry":
        return cls(
            date=data.get("date", ""),
            price=data.get("price"),
            availability=data.get("availability", ""),
        )


@dataclass(frozen=True)
class OfferWithHistory(Offer):
    price_history: list[PriceHistoryEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "OfferWithHistory":
        return cls(
            **_offer_fields(data),
            price_history=[
                PriceHistoryEntry.from_dict(entry) for entry in data.get("price_history") or []
            ],
        )


@dataclass(frozen=True)
class ScheduledProduct:
    product_id: str
    identifier: str
    frequency: Frequency
    created_at: str
    retailer: str | None = None
    last_refreshed: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduledProduct":
        return cls(
            product_id=data.get("product_id", ""),
            identifier=data.get("identifier", ""),
            frequency=data.get("frequency", ""),
            created_at=data.get("created_at", ""),
            retailer=data.get("retailer"),
            last_refreshed=data.get("last_refreshed"),
        )


@dataclass(frozen=True)
class UsageInfo:
    credits_used: int
    credits_remaining: int
    credits_total: int
    billing_period_start: str
    billing_period_end: str
    plan_name: str

    @classmethod
    def from_dict(cls, data: dict) -> "UsageInfo":
        return cls(
            credits_used=data.get("credits_used", 0),
            credits_remaining=data.get("credits_remaining", 0),
            credits_total=data.get("credits_total", 0),
            billing_period_start=data.get("billing_period_start", ""),
            billing_period_end=data.get("billing_period_end", ""),
            plan_name=data.get("plan_name", ""),
        )


@dataclass(frozen=True)
class ScheduleResult:
    scheduled: bool
    product_id: str

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleResult":
        return cls(scheduled=data.get("scheduled", False), product_id=data.get("product_id", ""))


@dataclass(frozen=True)
class BatchScheduleResult:
    identifier: str
    scheduled: bool
    product_id: str

    @classmethod
    def from_dict(cls, data: dict) -> "BatchScheduleResult":
        return cls(
            identifier=data.get("identifier", ""),
            scheduled=data.get("scheduled", False),
            product_id=data.get("product_id", ""),
        )


@dataclass(frozen=True)
class RemovalResult:
    removed: bool

    @classmethod
    def from_dict(cls, data: dict) -> "RemovalResult":
        return cls(removed=data.get("removed", False))


@dataclass(frozen=True)
class BatchRemovalResult:
    identifier: str
    removed: bool

    @classmethod
    def from_dict(cls, data: dict) -> "BatchRemovalResult":
        return cls(identifier=data.get("identifier", ""), removed=data.get("removed", False))


# Payload parsers. Each one converts only the JSON shape it expects and
# returns anything else (null data, CSV text) untouched.

def record(cls) -> Callable[[Any], Any]:
    def parse(data: Any) -> Any:
        return cls.from_dict(data) if isinstance(data, dict) else data
    return parse


def record_list(cls) -> Callable[[Any], Any]:
    item = record(cls)

    def parse(data: Any) -> Any:
        return [item(entry) for entry in data] if isinstance(data, list) else data
    return parse


def record_list_map(cls) -> Callable[[Any], Any]:
    items = record_list(cls)

    def parse(data: Any) -> Any:
        return {key: items(value) for key, value in data.items()} if isinstance(data, dict) else data
    return parse


@dataclass(frozen=True)
class APIResponse(Generic[T]):
    """Envelope wrapping every API payload.

    `success` is reported exactly as the server sent it; a 2xx reply with
    `success: false` is still returned, not raised.
    """

    success: bool
    data: T
    message: str | None = None
    credits_used: int | None = None
    credits_remaining: int | None = None
    raw: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, payload: Any, parse: Callable[[Any], Any] | None = None) -> "APIResponse":
        fields = payload if isinstance(payload, dict) else {}
        data = fields.get("data")
        if parse is not None and data is not None:
            data = parse(data)
        return cls(
            success=fields.get("success", False),
            data=data,
            message=fields.get("message"),
            credits_used=fields.get("credits_used"),
            credits_remaining=fields.get("credits_remaining"),
            raw=payload,
        )
