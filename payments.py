"""Simulated payment processing.

There is no payment provider: an order reads as "processing" for a short
while after creation and "success" afterwards.
"""

import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

PAYMENT_SIMULATION_SECONDS = float(os.getenv("PAYMENT_SIMULATION_SECONDS", "2"))

PROCESSING = "processing"
SUCCESS = "success"


def payment_status(order: Dict[str, Any], now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    created_at = order["created_at"]
    # pymongo hands back naive UTC datetimes
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    elapsed = (now - created_at).total_seconds()
    return SUCCESS if elapsed >= PAYMENT_SIMULATION_SECONDS else PROCESSING
