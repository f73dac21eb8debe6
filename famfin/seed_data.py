"""
Seed script that creates a demo family.

This script:
1. Creates a family with one ADMIN and two USERs (password: "password")
2. Plans budgets and pocket money for the current and next month
3. Adds a few cash flow entries, goals and tasks

Run it with ``python -m famfin.seed_data``. It does nothing when the demo
admin already exists.
"""

import argparse
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from . import auth
from .budget import month_bounds
from .db import models, session

DEMO_ADMIN_EMAIL = "admin@example.com"
DEMO_PASSWORD = "password"


def seed_demo_family(db: Session) -> bool:
    """Insert the demo family. Returns False if it was already there."""
    if db.query(models.User).filter(models.User.email == DEMO_ADMIN_EMAIL).first():
        return False

    hashed_password = auth.get_password_hash(DEMO_PASSWORD)
    family = models.Family(name="Demo family")
    admin = models.User(username="parent", email=DEMO_ADMIN_EMAIL, password=hashed_password,
                        role=models.Role.ADMIN, family=family)
    anna = models.User(username="anna", email="anna@example.com", password=hashed_password,
                       role=models.Role.USER, family=family)
    tom = models.User(username="tom", email="tom@example.com", password=hashed_password,
                      role=models.Role.USER, family=family)
    db.add_all([family, admin, anna, tom])

    this_month, next_month = month_bounds(date.today())
    for month in (this_month, next_month):
        db.add(models.Budget(family=family, month=month, amount=200))
        db.add(models.PocketMoney(owner=anna, month=month, amount=60))
        db.add(models.PocketMoney(owner=tom, month=month, amount=40))

    db.add_all([
        models.CashFlow(owner=anna, name="Birthday gift", amount=25, date=this_month),
        models.CashFlow(owner=anna, name="Cinema", amount=-12.5, date=this_month + timedelta(days=3)),
        models.CashFlow(owner=tom, name="Comics", amount=-8, date=this_month + timedelta(days=1)),
    ])

    start = datetime.combine(this_month, datetime.min.time())
    db.add_all([
        models.Goal(owner=anna, name="New bike", description="Saving for a bike", amount=300,
                    start_date=start, end_date=start + timedelta(days=180)),
        models.Task(owner=anna, name="Wash the car", description="Inside and outside", amount=10,
                    start_date=start, end_date=start + timedelta(days=7),
                    is_active=True, status=models.TaskStatus.PENDING),
        models.Task(owner=tom, name="Mow the lawn", description="Front yard", amount=8,
                    start_date=start, end_date=start + timedelta(days=2),
                    is_active=False, status=models.TaskStatus.APPROVED),
    ])
    db.commit()
    return True


def main():
    parser = argparse.ArgumentParser(description="Seed the FamFin database with a demo family.")
    parser.parse_args()

    models.Base.metadata.create_all(bind=session.engine)
    db = session.SessionLocal()
    try:
        if seed_demo_family(db):
            print(f"Demo family created. Sign in as {DEMO_ADMIN_EMAIL} / {DEMO_PASSWORD}")
        else:
            print("Demo family already present, nothing to do.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
