from enum import Enum


class ItemType(str, Enum):
    gold = "gold"
    silver = "silver"
    platinum = "platinum"
    diamonds = "diamonds"
    gemstones = "gemstones"


class InventoryUnit(str, Enum):
    grams = "grams"
    ounces = "ounces"
    kilograms = "kilograms"
    carats = "carats"
    pieces = "pieces"


class InventoryTransactionType(str, Enum):
    deposit = "deposit"
    withdraw = "withdraw"
    transfer = "transfer"

    @property
    def decreases_stock(self) -> bool:
        return self in (InventoryTransactionType.withdraw, InventoryTransactionType.transfer)


class StockStatus(str, Enum):
    empty = "Empty"
    low_stock = "Low Stock"
    in_stock = "In Stock"


class PartyStatus(str, Enum):
    active = "active"
    inactive = "inactive"
