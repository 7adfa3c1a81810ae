"""Demo data: one client and a catalogue of phones."""

import random
from decimal import Decimal

from sqlmodel import Session

from src.bilemo.core.security import hash_password
from src.bilemo.entities.core.client import ROLE_USER, Client, ClientRepository
from src.bilemo.entities.service.product import Product, ProductRepository

DEMO_CLIENT_EMAIL = "test@test.fr"
DEMO_CLIENT_PASSWORD = "password"

_BRANDS = ["Apple", "Samsung", "Google", "Xiaomi", "OnePlus", "Nokia", "Motorola", "Sony"]
_SERIES = ["Pro", "Max", "Lite", "Plus", "Ultra", "Mini", "Neo", "Edge"]


def _fake_product(rng: random.Random, index: int) -> Product:
    brand = rng.choice(_BRANDS)
    name = f"{brand} {rng.choice(_SERIES)} {index + 1}"
    storage = rng.choice([64, 128, 256, 512])
    description = (
        f"{name} with {storage} GB of storage, a {rng.uniform(5.4, 6.9):.1f}-inch "
        f"display and a {rng.choice([12, 48, 50, 108])} MP camera."
    )
    price = Decimal(f"{rng.uniform(1, 1000):.2f}")
    return Product(name=name, description=description, price=price)


def load_fixtures(session: Session, products: int = 100, seed: int | None = None) -> tuple[Client | None, int]:
    """Insert the demo client, unless it exists, and ``products`` products.

    Returns:
        The created client (None when it already existed) and the product count
    """
    rng = random.Random(seed)

    client = None
    client_repository = ClientRepository(session)
    if client_repository.get_by_email(DEMO_CLIENT_EMAIL) is None:
        client = client_repository.create(
            Client(
                email=DEMO_CLIENT_EMAIL,
                roles=[ROLE_USER],
                password_hash=hash_password(DEMO_CLIENT_PASSWORD),
            )
        )

    product_repository = ProductRepository(session)
    for index in range(products):
        product_repository.create(_fake_product(rng, index))

    session.commit()
    return client, products
