"""Transaction Generator - builds transactions linked to pooled entities."""

from synthdata.generators import fields
from synthdata.generators.base import Generator, GeneratorState
from synthdata.generators.models import ProductRef, Transaction, UserRef
from synthdata.generators.pool import PoolManager
from synthdata.params.base import EntityKind, GenerationConfig


class TransactionGenerator(Generator):
    """Generator for transaction records.

    The buyer and the product come from the request's pools. The amount is
    the product price times a small quantity, dated within the last 30 days.
    """

    kind = EntityKind.TRANSACTIONS
    uses_pool = True

    MAX_QUANTITY = 5

    def __init__(self, state: GeneratorState, pool: PoolManager):
        super().__init__(state)
        self.pool = pool

    def build(self, config: GenerationConfig | None = None) -> Transaction:
        user = self.pool.sample_user()
        product = self.pool.sample_product()
        quantity = fields.integer(self.state, 1, self.MAX_QUANTITY)

        return Transaction(
            id=fields.uuid4(self.state),
            user=UserRef(id=user.id, name=user.name),
            product=ProductRef(id=product.id, name=product.name, price=product.price),
            amount=round(product.price * quantity, 2),
            currency=fields.currency_code(self.state),
            date=fields.format_timestamp(fields.recent_timestamp(self.state, days=30)),
            status=fields.transaction_status(self.state),
        )
