"""
Restaurant contact lookup for orders shown to customers and drivers.

Orders without a linked restaurant fall back to the configured placeholder
until every order carries a restaurant reference.
"""
from dataclasses import dataclass
from typing import Optional

from delivery_app.core.config import Settings


@dataclass
class RestaurantInfo:
    name: str
    phone: Optional[str]
    address: Optional[str]


def placeholder_restaurant(settings: Settings) -> RestaurantInfo:
    return RestaurantInfo(
        name=settings.placeholder_restaurant_name,
        phone=settings.placeholder_restaurant_phone,
        address=settings.placeholder_restaurant_address,
    )


def restaurant_for_order(order, settings: Settings) -> RestaurantInfo:
    """Expects ``order.restaurant`` to be eagerly loaded"""
    restaurant = order.restaurant
    if restaurant is None:
        return placeholder_restaurant(settings)
    return RestaurantInfo(name=restaurant.name, phone=restaurant.phone, address=restaurant.address)
