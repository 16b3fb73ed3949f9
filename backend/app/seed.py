import os
import random

from sqlalchemy.orm import Session

from app.core.db import Base, engine, SessionLocal
from app.core.security import hash_password
from app.models.admin import Admin
from app.models.enums import Category, HistoryType
from app.models.history import ProductHistory
from app.models.product import Product

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@storetrack.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "password123")

ADJECTIVES = ["Ergonomic", "Rustic", "Sleek", "Handmade", "Compact", "Premium", "Classic", "Smart"]
NOUNS = {
    Category.ELECTRONICS: ["Headphones", "Keyboard", "Monitor", "Speaker", "Charger", "Webcam"],
    Category.CLOTHING: ["Jacket", "T-Shirt", "Sneakers", "Scarf", "Hoodie", "Jeans"],
    Category.BOOKS: ["Cookbook", "Novel", "Atlas", "Field Guide", "Biography", "Anthology"],
    Category.HOME_GOODS: ["Lamp", "Chair", "Mug", "Pillow", "Vase", "Towel Set"],
}


def reset_db(db: Session):
    # Drops & recreates all tables
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_admin(db: Session):
    db.add(Admin(email=ADMIN_EMAIL, hashed_password=hash_password(ADMIN_PASSWORD)))


def seed_products(db: Session, count: int = 100, rng: random.Random | None = None):
    rng = rng or random.Random()
    for _ in range(count):
        category = rng.choice(list(Category))
        product = Product(
            name=f"{rng.choice(ADJECTIVES)} {rng.choice(NOUNS[category])}",
            supply=rng.randint(10, 200),
            price=rng.randint(100, 50000),  # cents
            category=category.value,
        )
        db.add(product)
        db.add(ProductHistory(product=product, type=HistoryType.ARRIVAL.value, quantity=product.supply))


def main():
    db = SessionLocal()
    try:
        reset_db(db)
        seed_admin(db)
        seed_products(db)
        db.commit()

        print("Seed complete.")
        print(f"Log in with {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
