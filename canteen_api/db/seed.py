"""
canteen_api/db/seed.py – Demo canteens, accounts and menu.

Loaded on startup when the store is empty (SEED_DEMO_DATA=1) and by tests.
Passwords are hashed on the way in.
"""
from typing import Callable

from sqlalchemy.orm import Session

from .models import Canteen, MenuItem, User

CANTEENS = [
    {"id": "block1", "name": "Block 1", "location": "Academic Block 1"},
    {"id": "block5", "name": "Block 5", "location": "Academic Block 5"},
    {"id": "oat",    "name": "OAT",     "location": "Open Air Theatre"},
    {"id": "aavin",  "name": "Aavin",   "location": "Dairy Counter"},
]

USERS = [
    {"id": "stu-1",   "name": "Anita",     "email": "student@svce.edu", "college_id": "22CSE001",
     "role": "student", "canteen_id": None,     "password": "student123"},
    {"id": "staff-1", "name": "Chef Ravi", "email": "staff@svce.edu",   "college_id": "STAFF101",
     "role": "staff",   "canteen_id": "block1", "password": "staff123"},
    {"id": "admin-1", "name": "Admin",     "email": "admin@svce.edu",   "college_id": "ADMIN1",
     "role": "admin",   "canteen_id": None,     "password": "admin123"},
]

MENU = [
    {"id": "m1", "canteen_id": "block1", "name": "Idli (2 pcs)",   "price": 30, "available": True},
    {"id": "m2", "canteen_id": "block1", "name": "Masala Dosa",    "price": 55, "available": True},
    {"id": "m3", "canteen_id": "block5", "name": "Veg Fried Rice", "price": 70, "available": True},
    {"id": "m4", "canteen_id": "oat",    "name": "Samosa",         "price": 20, "available": False},
    {"id": "m5", "canteen_id": "aavin",  "name": "Milkshake",      "price": 40, "available": True},
]


def seed_demo_data(session: Session, hash_password: Callable[[str], str]) -> None:
    session.add_all(Canteen(**c) for c in CANTEENS)
    for u in USERS:
        fields = {k: v for k, v in u.items() if k != "password"}
        session.add(User(**fields, password_hash=hash_password(u["password"])))
    session.add_all(MenuItem(**m) for m in MENU)
