from __future__ import annotations

from decimal import Decimal
from typing import Any

SERVICE_SEED: list[dict[str, Any]] = [
    # Hair
    {"name": "Precision Cut & Style", "category": "hair", "price": Decimal("85.00"), "down_payment": Decimal("25.00"), "duration": 60, "description": "Professional haircut and styling"},
    {"name": "Color & Highlights", "category": "hair", "price": Decimal("150.00"), "down_payment": Decimal("50.00"), "duration": 120, "description": "Hair coloring and highlighting"},
    {"name": "Blowout Styling", "category": "hair", "price": Decimal("45.00"), "down_payment": Decimal("15.00"), "duration": 45, "description": "Professional blowout and styling"},
    # Eye
    {"name": "Eyebrow Threading", "category": "eye", "price": Decimal("35.00"), "down_payment": Decimal("10.00"), "duration": 30, "description": "Precise eyebrow shaping"},
    {"name": "Brow Tinting", "category": "eye", "price": Decimal("55.00"), "down_payment": Decimal("20.00"), "duration": 45, "description": "Eyebrow tinting service"},
    {"name": "Lash Extensions", "category": "eye", "price": Decimal("120.00"), "down_payment": Decimal("40.00"), "duration": 90, "description": "Professional lash extensions"},
    # Special
    {"name": "Curtain Bangs", "category": "special", "price": Decimal("65.00"), "down_payment": Decimal("20.00"), "duration": 45, "description": "Trendy curtain bang cut"},
    {"name": "Hair Treatment", "category": "special", "price": Decimal("75.00"), "down_payment": Decimal("25.00"), "duration": 60, "description": "Deep conditioning treatment"},
    {"name": "Bridal Package", "category": "special", "price": Decimal("250.00"), "down_payment": Decimal("75.00"), "duration": 180, "description": "Complete bridal styling package"},
]
