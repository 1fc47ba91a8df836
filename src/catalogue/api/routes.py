"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    BannerRequest,
    BannerResponse,
    BannerUpdateRequest,
    CategoryRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    ProductDetailResponse,
    ProductRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from catalogue.banner.management import CreateBanner, DeleteBanner, UpdateBanner, get_banner, list_banners
from catalogue.category.management import (
    CreateCategory,
    DeleteCategory,
    UpdateCategory,
    get_category,
    get_category_by_slug,
    list_categories,
)
from catalogue.product import listing
from catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from catalogue.product.product import Product
from identity.api.deps import require_admin
from shared.schemas import MessageResponse

category_router = APIRouter(prefix="/api/categories", tags=["categories"])
product_router = APIRouter(prefix="/api/products", tags=["products"])
banner_router = APIRouter(prefix="/api/banners", tags=["banners"])


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def get_categories() -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(category) for category in list_categories()]


@category_router.get("/slug/{slug}", response_model=CategoryResponse)
async def get_category_by_slug_route(slug: str) -> CategoryResponse:
    return CategoryResponse.model_validate(get_category_by_slug(slug))


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category_route(category_id: str) -> CategoryResponse:
    return CategoryResponse.model_validate(get_category(category_id))


@category_router.post("", status_code=201, response_model=CategoryResponse, dependencies=[Depends(require_admin)])
async def create_category(body: CategoryRequest) -> CategoryResponse:
    command = CreateCategory(name=body.name, slug=body.slug, description=body.description)
    category_id = current_domain.process(command, asynchronous=False)
    return CategoryResponse.model_validate(get_category(category_id))


@category_router.put("/{category_id}", response_model=CategoryResponse, dependencies=[Depends(require_admin)])
async def update_category(category_id: str, body: CategoryUpdateRequest) -> CategoryResponse:
    command = UpdateCategory(category_id=category_id, name=body.name, slug=body.slug, description=body.description)
    current_domain.process(command, asynchronous=False)
    return CategoryResponse.model_validate(get_category(category_id))


@category_router.delete("/{category_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_category(category_id: str) -> MessageResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return MessageResponse(message="Category deleted successfully")


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductDetailResponse])
async def get_products() -> list[ProductDetailResponse]:
    return [ProductDetailResponse.from_listing(item) for item in listing.list_products()]


@product_router.get("/category/{category_id}", response_model=list[ProductDetailResponse])
async def get_products_by_category(category_id: str) -> list[ProductDetailResponse]:
    return [ProductDetailResponse.from_listing(item) for item in listing.list_products_by_category(category_id)]


@product_router.get("/category-slug/{slug}", response_model=list[ProductDetailResponse])
async def get_products_by_category_slug(slug: str) -> list[ProductDetailResponse]:
    return [ProductDetailResponse.from_listing(item) for item in listing.list_products_by_category_slug(slug)]


@product_router.get("/{product_id}", response_model=ProductDetailResponse)
async def get_product(product_id: str) -> ProductDetailResponse:
    return ProductDetailResponse.from_listing(listing.get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def create_product(body: ProductRequest) -> ProductResponse:
    product_id = current_domain.process(CreateProduct(**body.command_fields()), asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: str, body: ProductUpdateRequest) -> ProductResponse:
    current_domain.process(UpdateProduct(product_id=product_id, **body.command_fields()), asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: str) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product deleted successfully")


# --- Banner endpoints ---


@banner_router.get("", response_model=list[BannerResponse])
async def get_banners(type: str | None = None) -> list[BannerResponse]:
    return [BannerResponse.model_validate(banner) for banner in list_banners(type)]


@banner_router.get("/{banner_id}", response_model=BannerResponse)
async def get_banner_route(banner_id: str) -> BannerResponse:
    return BannerResponse.model_validate(get_banner(banner_id))


@banner_router.post("", status_code=201, response_model=BannerResponse, dependencies=[Depends(require_admin)])
async def create_banner(body: BannerRequest) -> BannerResponse:
    banner_id = current_domain.process(CreateBanner(**body.model_dump()), asynchronous=False)
    return BannerResponse.model_validate(get_banner(banner_id))


@banner_router.put("/{banner_id}", response_model=BannerResponse, dependencies=[Depends(require_admin)])
async def update_banner(banner_id: str, body: BannerUpdateRequest) -> BannerResponse:
    current_domain.process(UpdateBanner(banner_id=banner_id, **body.model_dump()), asynchronous=False)
    return BannerResponse.model_validate(get_banner(banner_id))


@banner_router.delete("/{banner_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_banner(banner_id: str) -> MessageResponse:
    current_domain.process(DeleteBanner(banner_id=banner_id), asynchronous=False)
    return MessageResponse(message="Banner deleted successfully")
