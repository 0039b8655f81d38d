"""
Product catalog services.
"""

from __future__ import annotations

from src.components.crud import EntityService, EntityValidationError
from src.domain.entities import DistributorProductCatalog, Product, ProductCategory


class ProductCategoryService(EntityService[ProductCategory]):
    model = ProductCategory
    label = "product_category"
    unique_together = (("code",),)

    def get_by_code(self, code: str) -> ProductCategory | None:
        found = self.list_by(code=code)
        return found[0] if found else None


class ProductService(EntityService[Product]):
    model = Product
    label = "product"
    scope_fields = ("distributor_id",)


class ProductCatalogService(EntityService[DistributorProductCatalog]):
    model = DistributorProductCatalog
    label = "catalog_entry"
    scope_fields = ("distributor_id",)

    def validate(
        self, entity: DistributorProductCatalog, existing: DistributorProductCatalog | None
    ) -> list[EntityValidationError]:
        errors: list[EntityValidationError] = []
        if (
            entity.min_quantity is not None
            and entity.max_quantity is not None
            and entity.min_quantity > entity.max_quantity
        ):
            errors.append(
                EntityValidationError(
                    code="quantity_range_invalid",
                    message="min_quantity cannot exceed max_quantity",
                    field="min_quantity",
                )
            )
        if (
            entity.availability_start_date
            and entity.availability_end_date
            and entity.availability_end_date < entity.availability_start_date
        ):
            errors.append(
                EntityValidationError(
                    code="availability_period_invalid",
                    message="Availability cannot end before it starts",
                    field="availability_end_date",
                )
            )
        return errors
