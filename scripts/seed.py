"""Insert a few demo payment records so GET /payments has something to show."""
from __future__ import annotations

import uuid
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

from app.config import get_settings  # noqa: E402
from app.db import create_all, session_scope  # noqa: E402
from app.models import PaymentRecord, PaymentStatus  # noqa: E402
from app.services.record_store import PaymentRecordStore  # noqa: E402

DEMO_PAYEE = "https://wallet.example/merchant"
DEMO_ROWS = (
    ("5.00", PaymentStatus.CREATED.value),
    ("12.50", PaymentStatus.PENDING.value),
    ("99.99", "completed"),
)


def main() -> None:
    settings = get_settings()
    print(f"Seeding {settings.database_url}")

    create_all()
    with session_scope() as session:
        store = PaymentRecordStore(session)
        for amount, status in DEMO_ROWS:
            local_id = str(uuid.uuid4())
            store.insert(
                PaymentRecord(
                    id=str(uuid.uuid4()),
                    local_id=local_id,
                    amount=Decimal(amount),
                    currency=settings.DEFAULT_CURRENCY,
                    payee=DEMO_PAYEE,
                    status=status,
                    resource_url=f"{DEMO_PAYEE}/incoming-payments/{local_id[:8]}",
                    remote_response={"status": 201, "headers": {}, "json": {"seeded": True}},
                )
            )
        print(f"{store.count()} payment records in the table.")


if __name__ == "__main__":
    main()
