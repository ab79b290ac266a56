"""Generators module - field generators, entity builders and pools.

Entity builders compose field generators into records for:
- Users
- Products
- Companies
- Transactions and linked datasets
- Time series
- Custom schemas
"""

from synthdata.generators.base import Generator, GeneratorState
from synthdata.generators.user_generator import UserGenerator
from synthdata.generators.product_generator import ProductGenerator
from synthdata.generators.company_generator import CompanyGenerator
from synthdata.generators.transaction_generator import TransactionGenerator
from synthdata.generators.dataset_generator import DatasetGenerator
from synthdata.generators.timeseries_generator import TimeSeriesGenerator
from synthdata.generators.custom_generator import CustomGenerator
from synthdata.generators.pool import PoolManager
from synthdata.generators.registry import GeneratorRegistry

__all__ = [
    "Generator",
    "GeneratorState",
    "UserGenerator",
    "ProductGenerator",
    "CompanyGenerator",
    "TransactionGenerator",
    "DatasetGenerator",
    "TimeSeriesGenerator",
    "CustomGenerator",
    "PoolManager",
    "GeneratorRegistry",
]
