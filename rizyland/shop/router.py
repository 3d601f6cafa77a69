"""Shop product routes. Deleting a product only deactivates it."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_storage
from ..models import InsertShopProduct, MessageResponse, ShopProduct, ShopProductUpdate
from ..storage import MemStorage

router = APIRouter(prefix="/shop-products", tags=["shop"])


@router.get("", response_model=List[ShopProduct])
def list_shop_products(storage: MemStorage = Depends(get_storage)) -> List[ShopProduct]:
    return storage.get_shop_products()


@router.get("/{product_id}", response_model=ShopProduct)
def get_shop_product(product_id: int, storage: MemStorage = Depends(get_storage)) -> ShopProduct:
    product = storage.get_shop_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Shop product not found")
    return product


@router.post("", response_model=ShopProduct, status_code=201)
def create_shop_product(
    payload: InsertShopProduct, storage: MemStorage = Depends(get_storage)
) -> ShopProduct:
    return storage.create_shop_product(payload)


@router.put("/{product_id}", response_model=ShopProduct)
def update_shop_product(
    product_id: int, payload: ShopProductUpdate, storage: MemStorage = Depends(get_storage)
) -> ShopProduct:
    product = storage.update_shop_product(product_id, payload)
    if product is None:
        raise HTTPException(status_code=404, detail="Shop product not found")
    return product


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_shop_product(
    product_id: int, storage: MemStorage = Depends(get_storage)
) -> MessageResponse:
    if not storage.delete_shop_product(product_id):
        raise HTTPException(status_code=404, detail="Shop product not found")
    return MessageResponse(message="Shop product deleted successfully")
