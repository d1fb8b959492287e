import json
import logging
import random
import time

import requests

from drone_management import Order, ORDER_PENDING
from locations import LOCATION_COORDINATES

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
SYSTEM_PROMPT = (
    "Generate a realistic drone delivery order. Return only JSON with fields: "
    "packageType, weight (e.g. '2.5 kg'), pickup, delivery. Make it varied and realistic."
)
REQUIRED_FIELDS = ("packageType", "weight", "pickup", "delivery")

PACKAGE_CATALOGUE = [
    ("Medical Supplies", 0.5, 3.0),
    ("Electronics", 0.3, 2.5),
    ("Food Package", 1.0, 4.0),
    ("Documents", 0.1, 0.8),
    ("Lab Samples", 0.2, 1.5),
    ("Spare Parts", 1.0, 4.5),
]


def new_order_id():
    """ORD- followed by the last four digits of the epoch in milliseconds."""
    return f"ORD-{str(int(time.time() * 1000))[-4:]}"


def order_from_fields(fields, order_id=None):
    """Builds a Pending order from generator output; None if any field is missing or blank."""
    if not isinstance(fields, dict):
        return None
    values = {}
    for key in REQUIRED_FIELDS:
        value = fields.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and key == "weight":
            value = f"{value} kg"
        if not isinstance(value, str) or not value.strip():
            return None
        values[key] = value.strip()
    return Order(
        id=order_id or new_order_id(),
        package_type=values["packageType"],
        weight=values["weight"],
        pickup=values["pickup"],
        delivery=values["delivery"],
        status=ORDER_PENDING,
    )


class OrderGenerator:
    """Produces candidate orders, either from an LLM via OpenRouter or locally at random."""
    def __init__(self, api_key=None, model="anthropic/claude-3-haiku", rng=None, timeout=30):
        self.api_key = api_key
        self.model = model
        self.rng = rng or random.Random()
        self.timeout = timeout

    def generate(self):
        """Asks the LLM for an order. Returns None on any failure."""
        if not self.api_key:
            logger.warning("[generate] no OpenRouter API key configured")
            return None
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": "Generate a new delivery order"},
            ],
        }
        try:
            resp = requests.post(OPENROUTER_URL, headers=headers, json=body, timeout=self.timeout)
            resp.raise_for_status()
            content = resp.json()["choices"][0]["message"]["content"]
            fields = json.loads(content)
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("[generate] order generation failed: %s", exc)
            return None

        order = order_from_fields(fields)
        if order is None:
            logger.warning("[generate] malformed order fields: %r", fields)
        return order

    def generate_synthetic(self):
        """Random order between two distinct known locations."""
        package_type, low, high = self.rng.choice(PACKAGE_CATALOGUE)
        pickup, delivery = self.rng.sample(sorted(LOCATION_COORDINATES), 2)
        weight = f"{self.rng.uniform(low, high):.1f} kg"
        return order_from_fields({
            "packageType": package_type,
            "weight": weight,
            "pickup": pickup,
            "delivery": delivery,
        })
