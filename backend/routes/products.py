import logging
import math
import time
import uuid
from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field, StrictFloat, StrictInt

from auth.dependencies import current_user_id
from errors import NotFound, ValidationError
from models.product import Product, utc_timestamp
from store import ProductStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


# ---------- Request / Response schemas ----------

class CreateProductRequest(BaseModel):
    name: Optional[str] = None
    amount: Optional[Union[StrictInt, StrictFloat]] = None
    comment: Optional[str] = None


class UpdateProductRequest(BaseModel):
    name: Optional[str] = None
    amount: Optional[Union[StrictInt, StrictFloat]] = None
    comment: Optional[str] = None


class ProductIdList(BaseModel):
    product_ids: Optional[Any] = Field(default=None, alias="productIds")


class ReorderRequest(ProductIdList):
    # The React client wraps the payload as {"data": {"productIds": [...]}}
    data: Optional[ProductIdList] = None


class SuccessResponse(BaseModel):
    success: bool = True


# ---------- Helpers ----------

def _new_product_id() -> str:
    return f"product_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def _check_amount(amount) -> None:
    if amount is None or not math.isfinite(amount) or amount < 0:
        raise ValidationError("Amount must be a non-negative number")


# ---------- Endpoints ----------

@router.get("", response_model=list[Product])
async def list_products(
    user_id: str = Depends(current_user_id),
    store: ProductStore = Depends(get_store),
):
    """Returns the caller's products in their stored order."""
    return store.list_for_user(user_id)


@router.post("", response_model=Product)
async def create_product(
    body: Optional[CreateProductRequest] = Body(default=None),
    user_id: str = Depends(current_user_id),
    store: ProductStore = Depends(get_store),
):
    """Appends a new product owned by the caller."""
    if body is None or not body.name or body.amount is None:
        raise ValidationError("Name and amount are required")
    _check_amount(body.amount)

    now = utc_timestamp()
    product = Product(
        id=_new_product_id(),
        name=body.name,
        amount=body.amount,
        comment=body.comment,
        user_id=user_id,
        created_at=now,
        updated_at=now,
    )
    saved = store.add(product)

    logger.info("Product %s created for %s", saved.id, user_id)
    return saved


@router.put("/reorder", response_model=SuccessResponse)
async def reorder_products(
    body: Optional[ReorderRequest] = Body(default=None),
    user_id: str = Depends(current_user_id),
    store: ProductStore = Depends(get_store),
):
    """
    Applies a new order to the caller's products.
    Every id must belong to the caller; otherwise nothing changes and 400 is returned.
    """
    product_ids = None
    if body is not None:
        product_ids = body.product_ids
        if product_ids is None and body.data is not None:
            product_ids = body.data.product_ids

    if not isinstance(product_ids, list) or not all(isinstance(pid, str) for pid in product_ids):
        raise ValidationError("Invalid productIds")

    if not store.reorder(user_id, product_ids):
        raise ValidationError("Invalid productIds")

    return SuccessResponse()


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    body: Optional[UpdateProductRequest] = Body(default=None),
    user_id: str = Depends(current_user_id),
    store: ProductStore = Depends(get_store),
):
    """
    Merges the provided fields into the product and bumps updatedAt.
    Fields absent from the body are left untouched.
    """
    fields = body.model_dump(exclude_unset=True) if body else {}
    if "name" in fields and not fields["name"]:
        raise ValidationError("Name cannot be empty")
    if "amount" in fields:
        _check_amount(fields["amount"])

    updated = store.update(product_id, fields)
    if updated is None:
        raise NotFound()

    logger.info("Product %s updated by %s", product_id, user_id)
    return updated


@router.delete("/{product_id}", response_model=SuccessResponse)
async def delete_product(
    product_id: str,
    user_id: str = Depends(current_user_id),
    store: ProductStore = Depends(get_store),
):
    if not store.delete(product_id):
        raise NotFound()

    logger.info("Product %s deleted by %s", product_id, user_id)
    return SuccessResponse()
