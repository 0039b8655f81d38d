"""Product category, product and catalog routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import (
    get_product_catalog_service,
    get_product_category_service,
    get_product_service,
)
from src.api.routes._crud import add_crud_routes
from src.components.catalog import ProductCategoryService, ProductService
from src.components.crud import run_list
from src.domain.entities import (
    DistributorProductCatalog,
    DistributorProductCatalogFields,
    Product,
    ProductCategory,
    ProductCategoryFields,
    ProductFields,
)

category_router = APIRouter()
product_router = APIRouter()
catalog_router = APIRouter()


# --- Categories ---


@category_router.get("", response_model=list[ProductCategory])
def list_categories(
    service: ProductCategoryService = Depends(get_product_category_service),
) -> list[ProductCategory]:
    return run_list(service).items


@category_router.get("/active", response_model=list[ProductCategory])
def list_active_categories(
    service: ProductCategoryService = Depends(get_product_category_service),
) -> list[ProductCategory]:
    return run_list(service, is_active=True).items


@category_router.get("/code/{code}", response_model=ProductCategory)
def get_category_by_code(
    code: str,
    service: ProductCategoryService = Depends(get_product_category_service),
) -> ProductCategory:
    category = service.get_by_code(code)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Product category '{code}' not found")
    return category


add_crud_routes(
    category_router,
    service_dep=get_product_category_service,
    fields=ProductCategoryFields,
    entity=ProductCategory,
)


# --- Products ---


@product_router.get("", response_model=list[Product])
def list_products(
    distributor_id: UUID,
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    return run_list(service, {"distributor_id": distributor_id}).items


@product_router.get("/active", response_model=list[Product])
def list_active_products(
    distributor_id: UUID,
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    return run_list(service, {"distributor_id": distributor_id}, is_active=True).items


@product_router.get("/category/{category_id}", response_model=list[Product])
def list_products_by_category(
    distributor_id: UUID,
    category_id: UUID,
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    return run_list(service, {"distributor_id": distributor_id}, category_id=category_id).items


add_crud_routes(
    product_router,
    service_dep=get_product_service,
    fields=ProductFields,
    entity=Product,
    scope=("distributor_id",),
)


# --- Catalog ---

add_crud_routes(
    catalog_router,
    service_dep=get_product_catalog_service,
    fields=DistributorProductCatalogFields,
    entity=DistributorProductCatalog,
    scope=("distributor_id",),
)
