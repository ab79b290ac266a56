"""Product Generator - builds catalog products with sized variants."""

from synthdata.generators import fields
from synthdata.generators.base import Generator
from synthdata.generators.models import Product, Variant
from synthdata.params.base import EntityKind, GenerationConfig


class ProductGenerator(Generator):
    """Generator for product records.

    Each product carries one to four variants of distinct sizes. A product
    is in stock when any of its variants is.
    """

    kind = EntityKind.PRODUCTS

    MIN_PRICE = 5.0
    MAX_PRICE = 1000.0

    def build(self, config: GenerationConfig | None = None) -> Product:
        variants = self._build_variants()
        return Product(
            id=fields.uuid4(self.state),
            name=fields.product_name(self.state),
            price=fields.amount(self.state, self.MIN_PRICE, self.MAX_PRICE),
            category=fields.product_category(self.state),
            in_stock=any(variant.stock > 0 for variant in variants),
            variants=variants,
        )

    def _build_variants(self) -> tuple[Variant, ...]:
        count = fields.integer(self.state, 1, len(fields.SIZES))
        sizes = sorted(
            self._rng.sample(fields.SIZES, count),
            key=fields.SIZES.index,
        )
        return tuple(
            Variant(
                size=size,
                color=fields.color(self.state),
                stock=fields.integer(self.state, 0, 100),
            )
            for size in sizes
        )
