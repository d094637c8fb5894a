"""
Grocery handoff models.

Request bodies and responses for the Instacart Developer Platform API
(shopping list pages, recipe pages, nearby retailers).
"""

from dataclasses import dataclass, field
from typing import Any

# (substring or exact aliases, API unit), checked in order
_UNIT_RULES: list[tuple[tuple[str, ...], tuple[str, ...], str]] = [
    # Volume
    (("cup",), (), "cups"),
    (("tablespoon",), ("tbsp", "tb"), "tablespoons"),
    (("teaspoon",), ("tsp", "ts"), "teaspoons"),
    (("fl oz",), ("fluid ounce",), "fl oz"),
    (("gallon",), ("gal",), "gallons"),
    (("liter",), ("l",), "liters"),
    (("ml", "milliliter"), (), "ml"),
    (("pint",), ("pt",), "pints"),
    (("quart",), ("qt",), "quarts"),
    # Weight
    (("pound",), ("lb", "lbs"), "lbs"),
    (("ounce",), ("oz",), "oz"),
    (("gram",), ("g",), "grams"),
    (("kilogram",), ("kg",), "kg"),
    # Countable
    (("bunch",), (), "bunches"),
    (("head",), (), "heads"),
    (("large",), ("lg",), "large"),
    (("medium",), ("med",), "medium"),
    (("small",), ("sm",), "small"),
    (("can",), (), "cans"),
    (("package", "pkg"), (), "packages"),
    (("clove",), (), "cloves"),
]


@dataclass
class InstacartMeasurement:
    """Quantity and unit for a line item."""

    unit: str
    quantity: float

    def to_json(self) -> dict[str, Any]:
        return {"unit": self.unit, "quantity": self.quantity}

    @staticmethod
    def normalize_unit(unit: str) -> str:
        """Map a recipe unit to the API's unit vocabulary (default "each")."""
        normalized = unit.lower().strip()
        for contains, exact, api_unit in _UNIT_RULES:
            if any(token in normalized for token in contains) or normalized in exact:
                return api_unit
        return "each"


@dataclass
class InstacartLineItem:
    """Line item for a shopping list or recipe page."""

    name: str
    measurements: list[InstacartMeasurement] | None = None
    display_text: str | None = None
    filters: dict[str, Any] | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.measurements:
            data["line_item_measurements"] = [m.to_json() for m in self.measurements]
        if self.display_text is not None:
            data["display_text"] = self.display_text
        if self.filters is not None:
            data["filters"] = self.filters
        return data

    @classmethod
    def from_ingredient(
        cls,
        name: str,
        quantity: float | None = None,
        unit: str | None = None,
        display_text: str | None = None,
    ) -> "InstacartLineItem":
        measurements = None
        if quantity is not None and quantity > 0:
            measurements = [
                InstacartMeasurement(
                    unit=InstacartMeasurement.normalize_unit(unit) if unit else "each",
                    quantity=quantity,
                )
            ]
        return cls(name=name, measurements=measurements, display_text=display_text or name)


@dataclass
class CreateShoppingListRequest:
    title: str
    line_items: list[InstacartLineItem]
    image_url: str | None = None
    link_type: str | None = "shopping_list"
    partner_linkback_url: str | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "line_items": [item.to_json() for item in self.line_items],
        }
        if self.image_url is not None:
            data["image_url"] = self.image_url
        if self.link_type is not None:
            data["link_type"] = self.link_type
        if self.partner_linkback_url is not None:
            data["partner_linkback_url"] = self.partner_linkback_url
        return data


@dataclass
class CreateRecipePageRequest:
    title: str
    line_items: list[InstacartLineItem]
    image_url: str | None = None
    author: str | None = None
    servings: int | None = None
    prep_time: int | None = None  # minutes
    cook_time: int | None = None  # minutes
    instructions: list[str] | None = None
    partner_linkback_url: str | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "line_items": [item.to_json() for item in self.line_items],
            "link_type": "recipe",
        }
        optional = {
            "image_url": self.image_url,
            "author": self.author,
            "servings": self.servings,
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "instructions": self.instructions,
            "partner_linkback_url": self.partner_linkback_url,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


@dataclass
class InstacartLinkResponse:
    """Result of creating a shopping list or recipe page."""

    success: bool
    products_link_url: str | None = None
    error: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "InstacartLinkResponse":
        url = data.get("products_link_url")
        return cls(success=url is not None, products_link_url=url)

    @classmethod
    def failure(cls, message: str) -> "InstacartLinkResponse":
        return cls(success=False, error=message)


def _join_address(source: dict[str, Any]) -> str | None:
    parts = []
    if source.get("address_line_1"):
        parts.append(source["address_line_1"])
    if source.get("city"):
        parts.append(source["city"])
    if source.get("state"):
        state = source["state"]
        parts.append(f"{state} {source['zip_code']}" if source.get("zip_code") else state)
    return ", ".join(parts) if parts else None


@dataclass
class InstacartRetailer:
    id: str
    name: str
    logo_url: str | None = None
    address: str | None = None
    postal_code: str | None = None
    distance: float | None = None  # miles
    is_available: bool = True

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "InstacartRetailer":
        # Retailer payloads put the address in one of several places
        address = data.get("address")
        if address is None and isinstance(data.get("location"), dict):
            address = _join_address(data["location"])
        if address is None:
            address = data.get("formatted_address")
        if address is None:
            address = _join_address(data)

        distance = data.get("distance")
        retailer_id = data.get("id") if data.get("id") is not None else data.get("retailer_key")

        return cls(
            id=str(retailer_id) if retailer_id is not None else "",
            name=data.get("name") or "Unknown Store",
            logo_url=data.get("retailer_logo_url") or data.get("logo_url"),
            address=address,
            postal_code=data.get("postal_code") or data.get("zip_code"),
            distance=float(distance) if distance is not None else None,
            is_available=data.get("is_available", True),
        )


@dataclass
class NearbyRetailersResponse:
    success: bool
    retailers: list[InstacartRetailer] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "NearbyRetailersResponse":
        retailers = [InstacartRetailer.from_json(r) for r in data.get("retailers") or []]
        return cls(success=True, retailers=retailers)

    @classmethod
    def failure(cls, message: str) -> "NearbyRetailersResponse":
        return cls(success=False, error=message)
