"""Company Generator - builds companies with their departments."""

from synthdata.generators import fields
from synthdata.generators.base import Generator
from synthdata.generators.models import Company, Department
from synthdata.params.base import EntityKind, GenerationConfig


class CompanyGenerator(Generator):
    kind = EntityKind.COMPANIES

    def build(self, config: GenerationConfig | None = None) -> Company:
        departments = tuple(
            Department(
                name=name,
                head=fields.full_name(self.state),
                budget=fields.amount(self.state, 50_000, 5_000_000),
            )
            for name in fields.department_names(self.state)
        )
        return Company(
            name=fields.company_name(self.state),
            industry=fields.industry(self.state),
            catch_phrase=fields.catch_phrase(self.state),
            employees=fields.integer(self.state, 10, 10000),
            location=f"{fields.city(self.state)}, {fields.country(self.state)}",
            departments=departments,
        )
