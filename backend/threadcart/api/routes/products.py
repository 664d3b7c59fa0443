from typing import Dict, Optional
from fastapi import APIRouter, Body, Depends, Query, status

from threadcart.api.deps import get_catalog_service, get_current_admin, get_product_lookup
from threadcart.core.exceptions import NotFoundError
from threadcart.models.product import Category, Product
from threadcart.repositories.products import ProductLookup
from threadcart.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductMessageResponse,
    ProductUpdate
)
from threadcart.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/getproducts", response_model=ProductListResponse)
async def get_products(
    category: Optional[Category] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    products: ProductLookup = Depends(get_product_lookup)
):
    """
    Get list of products, optionally filtered by category.
    """
    items = await products.list_products(
        category=category.value if category else None,
        skip=skip,
        limit=limit
    )
    return ProductListResponse(products=items, count=len(items))


@router.get("/getproduct/{product_id}", response_model=Product)
async def get_single_product(
    product_id: str,
    products: ProductLookup = Depends(get_product_lookup)
):
    """Get a single product by id."""
    product = await products.find_by_id(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


@router.post("/addproduct", response_model=ProductMessageResponse, status_code=status.HTTP_201_CREATED)
async def add_product(
    request: ProductCreate,
    admin: dict = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Add a product to the catalog.

    Category details (fabric, care, fit) are filled in from the category
    preset; any details sent in the request override the preset.
    """
    product = await service.add_product(request)
    return ProductMessageResponse(message="Product added successfully", product=product)


@router.put("/updateproduct/{product_id}", response_model=ProductMessageResponse)
async def update_product(
    product_id: str,
    request: ProductUpdate,
    admin: dict = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    """Update a product. Items already in carts keep their price snapshot."""
    product = await service.update_product(product_id, request)
    return ProductMessageResponse(message="Product updated successfully", product=product)


@router.delete("/deleteproduct/{product_id}")
async def delete_product(
    product_id: str,
    admin: dict = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    await service.delete_product(product_id)
    return {"message": "Product deleted successfully"}


@router.put("/update-product-details/{product_id}", response_model=ProductMessageResponse)
async def update_product_details(
    product_id: str,
    details: Dict[str, str] = Body(...),
    admin: dict = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    """Merge detail fields into the product's details map."""
    product = await service.update_product_details(product_id, details)
    return ProductMessageResponse(message="Product details updated successfully", product=product)
