from __future__ import annotations

from datetime import date

from sqlalchemy import select

from .db import SessionLocal
from .models import Customer, Invoice, Revenue


SEED_CUSTOMERS = [
    {
        "id": "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    },
    {
        "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
        "name": "Delba de Oliveira",
        "email": "delba@oliveira.com",
        "image_url": "/customers/delba-de-oliveira.png",
    },
    {
        "id": "3958dc9e-742f-4377-85e9-fec4b6a6442a",
        "name": "Lee Robinson",
        "email": "lee@robinson.com",
        "image_url": "/customers/lee-robinson.png",
    },
    {
        "id": "76d65c26-f784-44a2-ac19-586678f7c2f2",
        "name": "Michael Novotny",
        "email": "michael@novotny.com",
        "image_url": "/customers/michael-novotny.png",
    },
]

SEED_INVOICES = [
    {"customer": 0, "amount": 15795, "status": "pending", "date": date(2022, 12, 6)},
    {"customer": 1, "amount": 20348, "status": "pending", "date": date(2022, 11, 14)},
    {"customer": 3, "amount": 3040, "status": "paid", "date": date(2022, 10, 29)},
    {"customer": 2, "amount": 44800, "status": "paid", "date": date(2023, 9, 10)},
    {"customer": 0, "amount": 34577, "status": "pending", "date": date(2023, 8, 5)},
    {"customer": 3, "amount": 54246, "status": "pending", "date": date(2023, 7, 16)},
    {"customer": 1, "amount": 666, "status": "pending", "date": date(2023, 6, 27)},
    {"customer": 2, "amount": 32545, "status": "paid", "date": date(2023, 6, 9)},
]

SEED_REVENUE = [
    ("Jan", 2000),
    ("Feb", 1800),
    ("Mar", 2200),
    ("Apr", 2500),
    ("May", 2300),
    ("Jun", 3200),
    ("Jul", 3500),
    ("Aug", 3700),
    ("Sep", 2500),
    ("Oct", 2800),
    ("Nov", 3000),
    ("Dec", 4800),
]


def seed_customers(session) -> int:
    created = 0
    for entry in SEED_CUSTOMERS:
        if session.get(Customer, entry["id"]):
            continue
        session.add(Customer(**entry))
        created += 1
    return created


def seed_invoices(session) -> int:
    if session.execute(select(Invoice.id).limit(1)).first():
        return 0
    for entry in SEED_INVOICES:
        session.add(
            Invoice(
                customer_id=SEED_CUSTOMERS[entry["customer"]]["id"],
                amount=entry["amount"],
                status=entry["status"],
                date=entry["date"],
            )
        )
    return len(SEED_INVOICES)


def seed_revenue(session) -> int:
    created = 0
    for position, (month, revenue) in enumerate(SEED_REVENUE):
        if session.get(Revenue, month):
            continue
        session.add(Revenue(month=month, revenue=revenue, position=position))
        created += 1
    return created


def seed_all() -> dict[str, int]:
    with SessionLocal() as session:
        counts = {
            "customers": seed_customers(session),
            "revenue": seed_revenue(session),
        }
        session.flush()
        counts["invoices"] = seed_invoices(session)
        if any(counts.values()):
            session.commit()
    return counts


def main() -> None:
    counts = seed_all()
    print(
        "Seeded customers: {customers}, invoices: {invoices}, "
        "revenue: {revenue}".format(**counts)
    )


if __name__ == "__main__":
    main()
