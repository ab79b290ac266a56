"""Field generators.

Each function produces one semantically typed random value from the given
GeneratorState and nothing else, so a seeded state reproduces the same
values in the same call order.
"""

from datetime import datetime, timedelta

from synthdata.generators.base import GeneratorState


JUNIOR_PREFIXES = ("Junior", "Associate", "Trainee", "Assistant")
SENIOR_PREFIXES = ("Senior", "Lead", "Principal", "Chief")

SIZES = ("S", "M", "L", "XL")
TRANSACTION_STATUSES = ("completed", "pending", "failed")

PRODUCT_CATEGORIES = (
    "Electronics",
    "Clothing",
    "Home & Garden",
    "Sports",
    "Toys",
    "Books",
    "Beauty",
    "Automotive",
    "Grocery",
    "Health",
)

PRODUCT_ADJECTIVES = (
    "Ergonomic", "Rustic", "Sleek", "Handcrafted", "Refined", "Practical",
    "Intelligent", "Gorgeous", "Licensed", "Recycled", "Modern", "Compact",
)

PRODUCT_MATERIALS = (
    "Cotton", "Steel", "Wooden", "Leather", "Plastic", "Granite",
    "Bamboo", "Rubber", "Ceramic", "Wool",
)

PRODUCT_NOUNS = (
    "Chair", "Shirt", "Lamp", "Keyboard", "Backpack", "Shoes", "Watch",
    "Table", "Bottle", "Jacket", "Headphones", "Mug",
)

INDUSTRIES = (
    "Technology",
    "Finance",
    "Healthcare",
    "Retail",
    "Manufacturing",
    "Energy",
    "Education",
    "Logistics",
    "Media",
    "Hospitality",
    "Telecommunications",
    "Real Estate",
)

DEPARTMENTS = (
    "Engineering",
    "Sales",
    "Marketing",
    "Finance",
    "Human Resources",
    "Operations",
    "Legal",
    "Customer Support",
    "Research",
    "Product",
)


def uuid4(state: GeneratorState) -> str:
    return state.uuid4()


def full_name(state: GeneratorState) -> str:
    return state.faker.name()


def email(state: GeneratorState) -> str:
    return state.faker.email()


def phone(state: GeneratorState) -> str:
    return state.faker.phone_number()


def integer(state: GeneratorState, low: int, high: int) -> int:
    """Uniform integer in the inclusive range [low, high]."""
    return state.rng.randint(low, high)


def age(state: GeneratorState, age_range: tuple[int, int]) -> int:
    low, high = age_range
    return integer(state, low, high)


def street_address(state: GeneratorState) -> str:
    return state.faker.street_address()


def city(state: GeneratorState) -> str:
    return state.faker.city()


def country(state: GeneratorState) -> str:
    return state.faker.country()


def zip_code(state: GeneratorState) -> str:
    return state.faker.postcode()


def job_title(state: GeneratorState, age_value: int) -> str:
    """Job title whose seniority follows the holder's age.

    Under 30 gets a junior style descriptor, everyone else a senior title.
    """
    prefixes = JUNIOR_PREFIXES if age_value < 30 else SENIOR_PREFIXES
    return f"{state.rng.choice(prefixes)} {state.faker.job()}"


def amount(state: GeneratorState, low: float = 1.0, high: float = 5000.0) -> float:
    """Currency amount rounded to cents."""
    return round(state.rng.uniform(low, high), 2)


def currency_code(state: GeneratorState) -> str:
    return state.faker.currency_code()


def boolean(state: GeneratorState) -> bool:
    return state.rng.random() < 0.5


def color(state: GeneratorState) -> str:
    return state.faker.color_name()


def size(state: GeneratorState) -> str:
    return state.rng.choice(SIZES)


def product_name(state: GeneratorState) -> str:
    return " ".join(
        state.rng.choice(words)
        for words in (PRODUCT_ADJECTIVES, PRODUCT_MATERIALS, PRODUCT_NOUNS)
    )


def product_category(state: GeneratorState) -> str:
    return state.rng.choice(PRODUCT_CATEGORIES)


def company_name(state: GeneratorState) -> str:
    return state.faker.company()


def catch_phrase(state: GeneratorState) -> str:
    return state.faker.catch_phrase()


def industry(state: GeneratorState) -> str:
    return state.rng.choice(INDUSTRIES)


def department_names(state: GeneratorState, low: int = 2, high: int = 5) -> list[str]:
    """Distinct department names, between low and high of them."""
    return state.rng.sample(DEPARTMENTS, state.rng.randint(low, high))


def transaction_status(state: GeneratorState) -> str:
    return state.rng.choice(TRANSACTION_STATUSES)


def recent_timestamp(state: GeneratorState, days: int = 30) -> datetime:
    """Instant within the ``days`` before the state's reference time."""
    offset = state.rng.uniform(0, days * 86400)
    return state.reference_time - timedelta(seconds=offset)


def past_year_timestamp(state: GeneratorState) -> datetime:
    """Instant within the past year, truncated to whole seconds."""
    offset = state.rng.randint(0, 365 * 86400)
    moment = state.reference_time - timedelta(seconds=offset)
    return moment.replace(microsecond=0)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with a ``Z`` suffix and whole seconds."""
    return f"{moment.year:04d}-{moment:%m-%dT%H:%M:%S}Z"
