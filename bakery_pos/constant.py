"""Editable static catalog and opening stock."""

from __future__ import annotations

CATEGORY_NAMES: dict[str, str] = {
    "bread": "Bread",
    "pastry": "Pastry",
    "sandwich": "Sandwich",
    "drink": "Drinks",
    "alcohol": "Alcohol",
    "goods": "Goods",
}

# Canonical product values consumed by bakery_pos.catalog (which wraps these into Product instances).
PRODUCTS_BY_ID: dict[str, dict[str, str | int | bool]] = {
    "shokupan": {"name": "Shokupan", "price": 380, "category_id": "bread", "type": "food"},
    "baguette": {"name": "Baguette", "price": 320, "category_id": "bread", "type": "food"},
    "melon_pan": {"name": "Melon Pan", "price": 220, "category_id": "bread", "type": "food"},
    "an_pan": {"name": "An Pan", "price": 200, "category_id": "bread", "type": "food"},
    "curry_pan": {"name": "Curry Pan", "price": 260, "category_id": "bread", "type": "food"},
    "croissant": {"name": "Croissant", "price": 240, "category_id": "pastry", "type": "food"},
    "pain_au_chocolat": {"name": "Pain au Chocolat", "price": 280, "category_id": "pastry", "type": "food"},
    "apple_pie": {"name": "Apple Pie", "price": 350, "category_id": "pastry", "type": "food"},
    "egg_sando": {"name": "Egg Sando", "price": 420, "category_id": "sandwich", "type": "food"},
    "katsu_sando": {"name": "Katsu Sando", "price": 520, "category_id": "sandwich", "type": "food"},
    "blend_coffee": {"name": "Blend Coffee", "price": 350, "category_id": "drink", "type": "drink"},
    "cafe_latte": {"name": "Cafe Latte", "price": 420, "category_id": "drink", "type": "drink"},
    "orange_juice": {"name": "Orange Juice", "price": 300, "category_id": "drink", "type": "drink"},
    "craft_beer": {
        "name": "Craft Beer",
        "price": 650,
        "category_id": "alcohol",
        "type": "alcohol",
        "is_alcoholic": True,
    },
    "house_wine": {
        "name": "House Wine",
        "price": 600,
        "category_id": "alcohol",
        "type": "alcohol",
        "is_alcoholic": True,
    },
    "tote_bag": {"name": "Tote Bag", "price": 1200, "category_id": "goods", "type": "merchandise"},
    "gift_box": {"name": "Gift Box", "price": 500, "category_id": "goods", "type": "merchandise", "is_active": False},
}

# Opening stock as (current_quantity, min_threshold). Only stock-managed products appear here.
OPENING_STOCK: dict[str, tuple[int, int]] = {
    "shokupan": (12, 4),
    "baguette": (8, 3),
    "melon_pan": (20, 6),
    "an_pan": (15, 5),
    "curry_pan": (10, 4),
    "croissant": (18, 6),
    "pain_au_chocolat": (12, 4),
    "apple_pie": (4, 3),
    "egg_sando": (6, 2),
    "katsu_sando": (0, 2),
    "tote_bag": (5, 1),
    "gift_box": (3, 1),
}
