# backend/routes/products.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

import schemas.product as product_schemas
from storage import DatabaseStorage, get_storage
from utils.tokenJWT import require_admin

router = APIRouter(tags=["Products"])


# =========================
# LISTA PRODUKTÓW
# =========================
@router.get("/api/products", response_model=List[product_schemas.ProductOut])
def list_products(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    category_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    store: DatabaseStorage = Depends(get_storage),
):
    return store.get_products(limit=limit, offset=offset, category_id=category_id, search=search)


@router.get("/api/products/featured", response_model=List[product_schemas.ProductOut])
def featured_products(
    limit: int = Query(8, ge=1, le=100),
    store: DatabaseStorage = Depends(get_storage),
):
    return store.get_featured_products(limit=limit)


@router.get("/api/products/slug/{slug}", response_model=product_schemas.ProductOut)
def get_product_by_slug(slug: str, store: DatabaseStorage = Depends(get_storage)):
    product = store.get_product_by_slug(slug)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# POJEDYNCZY PRODUKT
# =========================
@router.get("/api/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, store: DatabaseStorage = Depends(get_storage)):
    product = store.get_product_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# PANEL ADMINA
# =========================
@router.get("/api/admin/products", response_model=List[product_schemas.ProductOut], dependencies=[Depends(require_admin)])
def list_all_products(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    store: DatabaseStorage = Depends(get_storage),
):
    return store.get_all_products(limit=limit, offset=offset)


@router.post("/api/products", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def add_product(payload: product_schemas.ProductCreate, store: DatabaseStorage = Depends(get_storage)):
    return store.create_product(payload)


@router.put("/api/products/{product_id}", response_model=product_schemas.ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: int, payload: product_schemas.ProductUpdate, store: DatabaseStorage = Depends(get_storage)):
    product = store.update_product(product_id, payload)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/api/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_product(product_id: int, store: DatabaseStorage = Depends(get_storage)):
    store.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
