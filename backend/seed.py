# backend/seed.py
"""Fill an empty database with an admin account, categories and sample products."""
import logging
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

from database import init_db
from schemas.category import CategoryCreate
from schemas.product import ProductCreate
from schemas.user import UserInsert
from storage import storage
from utils.hashing import get_password_hash

logger = logging.getLogger(__name__)

# Configuration
ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123" # Change after first login

CATEGORIES = [
    ("Electronics", "electronics"),
    ("Home & Kitchen", "home-kitchen"),
    ("Books", "books"),
]

PRODUCTS = [
    # (name, slug, category slug, price, original price, stock, featured)
    ("Wireless Headphones", "wireless-headphones", "electronics", "79.99", "99.99", 25, True),
    ("Smart Watch", "smart-watch", "electronics", "149.00", None, 12, True),
    ("USB-C Charger", "usb-c-charger", "electronics", "19.99", None, 100, False),
    ("Chef Knife", "chef-knife", "home-kitchen", "45.50", "59.00", 30, True),
    ("French Press", "french-press", "home-kitchen", "24.90", None, 40, False),
    ("Python Cookbook", "python-cookbook", "books", "39.95", None, 15, False),
]
# End Configuration


def seed():
    init_db()

    if not storage.get_user_by_username(ADMIN_USERNAME):
        storage.create_user(UserInsert(
            username=ADMIN_USERNAME,
            email=ADMIN_EMAIL,
            password=get_password_hash(ADMIN_PASSWORD),
            role="admin",
        ))
        logger.info("Admin account created (%s)", ADMIN_USERNAME)

    existing = {c.slug: c for c in storage.get_categories()}
    for name, slug in CATEGORIES:
        if slug not in existing:
            existing[slug] = storage.create_category(CategoryCreate(name=name, slug=slug))

    created = 0
    for name, slug, category_slug, price, original_price, stock, featured in PRODUCTS:
        if storage.get_product_by_slug(slug):
            continue
        storage.create_product(ProductCreate(
            name=name,
            slug=slug,
            description=f"{name} - sample product",
            price=Decimal(price),
            original_price=Decimal(original_price) if original_price else None,
            category_id=existing[category_slug].id,
            stock=stock,
            is_featured=featured,
        ))
        created += 1

    logger.info("Seed finished: %s new products", created)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
