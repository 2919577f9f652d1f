"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation
rules (EmailAddress VO, minimum password length, category slugs, Indian
postal codes) and match the field names of the API's Pydantic schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

PAYMENT_METHODS = ["credit-card", "paypal", "bank-transfer", "cash-on-delivery"]

INDIAN_STATES = ["Karnataka", "Maharashtra", "Tamil Nadu", "Delhi", "Kerala", "West Bengal"]

SEARCH_TERMS = ["tetra", "guppy", "filter", "plant", "food", "heater", "shrimp", "gravel"]

# ---------- Identity ----------


def valid_email() -> str:
    """Generate emails that pass EmailAddress VO validation.

    Rules: exactly one @, no spaces, valid domain with a dot.
    """
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@example.com"


def full_name() -> str:
    return fake.name()[:200]


def password() -> str:
    """At least six characters, so signup never trips the length rule."""
    return f"lt-{uuid.uuid4().hex[:10]}"


def signup_data() -> dict:
    return {"email": valid_email(), "password": password(), "full_name": full_name()}


def profile_data() -> dict:
    return {
        "full_name": full_name(),
        "phone": f"9{random.randint(100000000, 999999999)}",
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": random.choice(INDIAN_STATES),
        "zip_code": f"{random.randint(110001, 855999)}",
        "country": "India",
    }


# ---------- Catalogue ----------


def category_name() -> str:
    return f"{fake.word().title()} {uuid.uuid4().hex[:4]}"


def category_data() -> dict:
    return {"name": category_name(), "description": fake.sentence()}


def product_data(category: str) -> dict:
    """Generate a CreateProductRequest payload for ``category``."""
    price = round(random.uniform(49, 4999), 2)
    on_sale = random.random() < 0.25
    return {
        "name": f"{fake.color_name()} {fake.word().title()}"[:255],
        "description": fake.paragraph(nb_sentences=2),
        "price": price,
        "compare_at_price": round(price * 1.2, 2) if on_sale else None,
        "image_url": f"https://cdn.example.com/{uuid.uuid4().hex[:8]}.jpg",
        "category": category,
        "tags": random.sample(["freshwater", "marine", "beginner", "planted", "schooling"], 2),
        "rating": round(random.uniform(3.0, 5.0), 1),
        "is_new": random.random() < 0.3,
        "is_sale": on_sale,
        "is_featured": random.random() < 0.2,
        "is_trending": random.random() < 0.2,
        "stock": random.randint(0, 50),
    }


def search_term() -> str:
    return random.choice(SEARCH_TERMS)


# ---------- Ordering ----------


def address_data(email: str | None = None) -> dict:
    """Generate an AddressSchema payload."""
    first, last = fake.first_name()[:50], fake.last_name()[:50]
    return {
        "first_name": first,
        "last_name": last,
        "email": email or valid_email(),
        "phone": f"9{random.randint(100000000, 999999999)}",
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": random.choice(INDIAN_STATES),
        "zip_code": f"{random.randint(110001, 855999)}",
        "country": "India",
    }


def checkout_data(email: str | None = None) -> dict:
    return {
        "shipping_address": address_data(email),
        "payment_method": random.choice(PAYMENT_METHODS),
        "notes": fake.sentence() if random.random() < 0.2 else None,
    }


def order_data(product_ids: list[str]) -> dict:
    """Generate a PlaceOrderRequest payload over one to three of ``product_ids``."""
    chosen = random.sample(product_ids, k=min(len(product_ids), random.randint(1, 3)))
    return {
        "items": [{"product_id": pid, "quantity": random.randint(1, 2)} for pid in chosen],
        **checkout_data(),
    }
