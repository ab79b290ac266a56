"""Pool Manager - request-scoped entity pools for linked records.

Transactions and datasets reference users and products drawn from small
pools instead of fabricating a fresh entity per record, so the same user can
appear behind several transactions.
"""

from synthdata.errors import InternalGenerationError
from synthdata.generators.base import GeneratorState
from synthdata.generators.models import Product, User
from synthdata.generators.product_generator import ProductGenerator
from synthdata.generators.user_generator import UserGenerator
from synthdata.params.base import DEFAULT_AGE_RANGE


USER_POOL_CAP = 100
PRODUCT_POOL_CAP = 50

# Linked records need at least these user fields
POOL_USER_FIELDS = ("name", "email")


class PoolManager:
    """Builds user/product pools once and samples them uniformly.

    Sampling is with replacement. Pools are read-only once built and are
    discarded with the request.
    """

    def __init__(self, state: GeneratorState):
        self.state = state
        self.users: tuple[User, ...] = ()
        self.user_fields: tuple[str, ...] = ()
        self.products: tuple[Product, ...] = ()

    def build_users(
        self,
        count: int,
        requested: tuple[str, ...] = POOL_USER_FIELDS,
        age_range: tuple[int, int] = DEFAULT_AGE_RANGE,
    ) -> tuple[User, ...]:
        """Build a pool of ``min(count, 100)`` users.

        ``name`` is always populated since linked records copy it.
        """
        if "name" not in requested:
            requested = ("name",) + tuple(requested)

        builder = UserGenerator(self.state)
        self.user_fields = requested
        size = min(count, USER_POOL_CAP)
        self.users = tuple(builder.build_user(requested, age_range) for _ in range(size))
        return self.users

    def build_products(self, count: int) -> tuple[Product, ...]:
        """Build a pool of ``min(count, 50)`` products."""
        builder = ProductGenerator(self.state)
        size = min(count, PRODUCT_POOL_CAP)
        self.products = tuple(builder.build() for _ in range(size))
        return self.products

    def sample_user(self) -> User:
        if not self.users:
            raise InternalGenerationError("User pool is empty")
        return self.state.rng.choice(self.users)

    def sample_product(self) -> Product:
        if not self.products:
            raise InternalGenerationError("Product pool is empty")
        return self.state.rng.choice(self.products)
