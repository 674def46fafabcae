"""Initial data: platform categories, an administrator and sample listings.

Safe to run more than once. Categories are installed only into an empty
registry and the sample data only when the administrator is first created.
"""

import json

import structlog
from protean.utils.globals import current_domain

from opinalocal.category.category import Category
from opinalocal.restaurant.registration import RegisterRestaurant, ValidateRestaurant
from opinalocal.review.submission import SubmitReview
from opinalocal.user.queries import find_user_by_external_id
from opinalocal.user.registration import RegisterUser
from opinalocal.user.user import User
from opinalocal.utils.queries import fetch_first

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES = ["Food", "Service", "Ambience", "Price", "Cleanliness", "Speed"]

ADMIN = {
    "external_id": "admin-sample-uid",
    "email": "admin@opinalocal.com",
    "name": "Admin OpinaLocal",
}

SAMPLE_RESTAURANTS = [
    {
        "name": "Restaurante Dona Maria",
        "street": "Rua da Consolação, 123",
        "city": "São Paulo",
        "state": "SP",
        "postal_code": "01234-567",
        "full_address": "Rua da Consolação, 123 - Consolação, São Paulo - SP",
        "latitude": -23.5505,
        "longitude": -46.6333,
        "review": {
            "text": "Excelente comida caseira! O ambiente é acolhedor e o atendimento é muito bom.",
            "visit_date": "2024-12-15",
            "standard": {"Food": 5, "Service": 4, "Ambience": 4, "Price": 4},
            "custom": {"Value for money": 5},
        },
    },
    {
        "name": "Pizzaria Napoli",
        "street": "Rua Augusta, 456",
        "city": "São Paulo",
        "state": "SP",
        "postal_code": "01234-567",
        "full_address": "Rua Augusta, 456 - Bela Vista, São Paulo - SP",
        "latitude": -23.5489,
        "longitude": -46.6388,
        "review": {
            "text": "Pizza muito boa! Massa fina e crocante, ingredientes frescos.",
            "visit_date": "2024-12-10",
            "standard": {"Food": 4, "Service": 4, "Ambience": 4, "Price": 3},
            "custom": {"Family friendly": 5},
        },
    },
    {
        "name": "Café Central",
        "street": "Av. Paulista, 789",
        "city": "São Paulo",
        "state": "SP",
        "postal_code": "01234-567",
        "full_address": "Av. Paulista, 789 - Bela Vista, São Paulo - SP",
        "latitude": -23.5618,
        "longitude": -46.6565,
        "review": {
            "text": "Ótimo local para trabalhar! Wi-fi rápido, café excelente e ambiente silencioso.",
            "visit_date": "2024-12-05",
            "standard": {"Food": 4, "Service": 5, "Ambience": 5, "Price": 4},
            "custom": {},
        },
    },
]


def seed_categories():
    if fetch_first(Category) is not None:
        logger.info("Categories already present, skipping")
        return 0

    repo = current_domain.repository_for(Category)
    for name in DEFAULT_CATEGORIES:
        repo.add(Category.seed(name))
    logger.info("Default categories created", count=len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)


def seed_admin():
    """Return (admin id, created?)."""
    existing = find_user_by_external_id(ADMIN["external_id"])
    if existing is not None:
        return str(existing.id), False

    admin_id = current_domain.process(RegisterUser(**ADMIN), asynchronous=False)
    repo = current_domain.repository_for(User)
    admin = repo.get(admin_id)
    admin.grant_admin()
    repo.add(admin)
    logger.info("Admin user created", user_id=admin_id)
    return admin_id, True


def seed_samples(admin_id):
    for sample in SAMPLE_RESTAURANTS:
        details = {key: value for key, value in sample.items() if key != "review"}
        restaurant_id = current_domain.process(
            RegisterRestaurant(created_by=admin_id, **details),
            asynchronous=False,
        )
        current_domain.process(ValidateRestaurant(restaurant_id=restaurant_id), asynchronous=False)

        review = sample["review"]
        current_domain.process(
            SubmitReview(
                user_id=admin_id,
                restaurant_id=restaurant_id,
                text=review["text"],
                visit_date=review["visit_date"],
                standard=json.dumps(review["standard"]),
                custom=json.dumps(review["custom"]),
            ),
            asynchronous=False,
        )
    logger.info("Sample restaurants created", count=len(SAMPLE_RESTAURANTS))


def seed():
    """Seed the active domain. Returns a summary of what was created."""
    categories = seed_categories()
    admin_id, created = seed_admin()
    if created:
        seed_samples(admin_id)
    else:
        logger.info("Admin user already exists", user_id=admin_id)

    return {
        "categories": categories,
        "admin_id": admin_id,
        "restaurants": len(SAMPLE_RESTAURANTS) if created else 0,
    }
