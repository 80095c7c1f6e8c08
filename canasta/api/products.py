from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from canasta.api.deps import get_catalog_store
from canasta.catalog.errors import StorageError
from canasta.catalog.filters import FilterSpec
from canasta.catalog.service import list_products
from canasta.catalog.store import CatalogStore
from canasta.core.config import Settings, get_settings
from canasta.db.session import get_db
from canasta.models.product import Product
from canasta.schemas.product import Product as ProductSchema, ProductListResponse

router = APIRouter()

@router.get("", response_model=ProductListResponse, include_in_schema=False)
@router.get(
    "/",
    response_model=ProductListResponse,
    summary="Get available products with filtering",
    description="Retrieve a paginated list of available products filtered by category, producer, location, price, text and flags."
)
async def read_products(
    category: Optional[str] = Query(None, description="Category name (exact match)"),
    producer: Optional[str] = Query(None, description="Producer name (exact match)"),
    location: Optional[str] = Query(None, description="'City, Department' or a single city or department"),
    price_min: Optional[str] = Query(None, alias="priceMin", description="Minimum price"),
    price_max: Optional[str] = Query(None, alias="priceMax", description="Maximum price"),
    search: Optional[str] = Query(None, description="Words to look for in name, description and tags"),
    is_organic: Optional[str] = Query(None, alias="isOrganic", description="true or false"),
    is_featured: Optional[str] = Query(None, alias="isFeatured", description="true or false"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="createdAt, updatedAt, name, price, stock or rating"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    page: Optional[str] = Query(None, description="Page number starting from 1"),
    limit: Optional[str] = Query(None, description="Items per page"),
    store: CatalogStore = Depends(get_catalog_store),
    settings: Settings = Depends(get_settings)
):
    """
    Retrieve available products.

    - Every parameter is optional; an empty value is the same as leaving it out.
    - A category, producer or location that does not exist gives an empty page.
    - Prices that are not numbers are ignored; unknown sort values fall back to newest first.
    """
    spec = FilterSpec.from_query(
        {
            "category": category,
            "producer": producer,
            "location": location,
            "priceMin": price_min,
            "priceMax": price_max,
            "search": search,
            "isOrganic": is_organic,
            "isFeatured": is_featured,
            "sortBy": sort_by,
            "sortOrder": sort_order,
            "page": page,
            "limit": limit,
        },
        default_limit=settings.DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )

    try:
        result = await list_products(store, spec, timeout=settings.LISTING_TIMEOUT_SECONDS)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
            headers={"Retry-After": "1"},
        )

    return {
        "products": result.items,
        "pagination": {
            "current_page": result.current_page,
            "total_pages": result.total_pages,
            "total_products": result.total_products,
            "has_next_page": result.has_next_page,
            "has_prev_page": result.has_prev_page,
        },
    }

@router.get(
    "/featured",
    response_model=List[ProductSchema],
    summary="Get featured products",
    description="Retrieve featured, available products ordered by rating."
)
async def read_featured_products(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    result = await db.execute(
        select(Product)
        .where(Product.is_featured == True, Product.is_available == True)
        .order_by(Product.rating_average.desc(), Product.created_at.desc())
        .limit(settings.FEATURED_LIMIT)
    )
    return result.scalars().all()

@router.get(
    "/{product_id}",
    response_model=ProductSchema,
    summary="Get product by ID",
    description="Retrieve a specific product by its ID."
)
async def read_product(
    product_id: int,
    db: AsyncSession = Depends(get_db)
):
    db_product = await db.get(Product, product_id)
    if db_product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )
    return db_product
