# backend/routes/categories.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from storage import DatabaseStorage, get_storage
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(store: DatabaseStorage = Depends(get_storage)):
    return store.get_categories()


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, store: DatabaseStorage = Depends(get_storage)):
    category = store.get_category_by_id(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_category(payload: CategoryCreate, store: DatabaseStorage = Depends(get_storage)):
    return store.create_category(payload)


@router.put("/{category_id}", response_model=CategoryOut, dependencies=[Depends(require_admin)])
def update_category(category_id: int, payload: CategoryUpdate, store: DatabaseStorage = Depends(get_storage)):
    category = store.update_category(category_id, payload)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_category(category_id: int, store: DatabaseStorage = Depends(get_storage)):
    store.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
