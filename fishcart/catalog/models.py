"""Catalog Models - inbound product records and their mapping to cart items."""
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from fishcart.cart.models import LineItem, Number
from fishcart.errors import InvalidQuantity, ERROR_UNPARSEABLE_QUANTITY

UNKNOWN_FISHERMAN = "Tuntematon"


class CatchInfo(BaseModel):
    """Catch the listing came from."""
    catch_date: Optional[str] = None


class FishermanUser(BaseModel):
    full_name: Optional[str] = None


class FishermanProfile(BaseModel):
    user: Optional[FishermanUser] = None


class Product(BaseModel):
    """Product listing as returned by the catalog."""
    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields from DB

    id: str
    species: str
    form: str
    price_per_kg: float
    available_quantity: float = 0
    catch: Optional[CatchInfo] = None
    fisherman_profile: Optional[FishermanProfile] = None

    @field_validator("price_per_kg", "available_quantity", mode="before")
    @classmethod
    def convert_to_number(cls, v):
        if v is None:
            return 0
        if isinstance(v, str):
            return v.strip().replace(",", ".")
        return v

    @property
    def fisherman_name(self) -> str:
        """Seller display name, with a placeholder when the profile is missing."""
        profile = self.fisherman_profile
        if profile and profile.user and profile.user.full_name:
            return profile.user.full_name
        return UNKNOWN_FISHERMAN

    def to_line_item(self, quantity: Number = 1) -> LineItem:
        """Map the listing to a cart line item with the chosen quantity."""
        return LineItem(
            product_id=self.id,
            species=self.species,
            form=self.form,
            price_per_kg=self.price_per_kg,
            quantity=quantity,
            fisherman_name=self.fisherman_name,
            available_quantity=self.available_quantity,
        )


def parse_quantity(text: str) -> float:
    """
    Parse a quantity typed by the user, accepting a decimal comma.

    Raises:
        InvalidQuantity: if the text is not a finite number
    """
    try:
        value = float(str(text).strip().replace(",", "."))
    except ValueError:
        raise InvalidQuantity(ERROR_UNPARSEABLE_QUANTITY, quantity=text)
    if not math.isfinite(value):
        raise InvalidQuantity(ERROR_UNPARSEABLE_QUANTITY, quantity=text)
    return value
