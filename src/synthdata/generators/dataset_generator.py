"""Dataset Generator - a relational bundle of users, products and transactions."""

from typing import Any

from synthdata.generators.transaction_generator import TransactionGenerator
from synthdata.params.base import EntityKind, GenerationConfig


class DatasetGenerator(TransactionGenerator):
    """Generator for linked datasets.

    The bundle exposes the pools themselves next to the transactions, so
    every ``user.id`` and ``product.id`` in a transaction resolves to an
    entry of the same payload. Records streamed by this generator are the
    transactions; the pools form the envelope around them.
    """

    kind = EntityKind.DATASET

    records_key = "transactions"

    def envelope(self, config: GenerationConfig) -> dict[str, Any]:
        user_keys = ("id",) + self.pool.user_fields
        users = []
        for user in self.pool.users:
            dumped = user.model_dump(by_alias=True, mode="json")
            users.append({key: dumped[key] for key in user_keys})

        return {
            "users": users,
            "products": [
                product.model_dump(by_alias=True, mode="json")
                for product in self.pool.products
            ],
        }
