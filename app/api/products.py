# app/api/products.py

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from app.db.context import ProductContext, get_product_context
from app.models.products import INT32_MAX, INT32_MIN, Product

router = APIRouter(prefix="/api/Product", tags=["Product"])


@router.get("/", response_model=List[Product])
def list_products(
    ctx: ProductContext = Depends(get_product_context),
) -> List[Product]:
    """
    Return every product.
    """
    return ctx.list_all()


@router.get(
    "/{product_id}",
    response_model=Product,
    responses={404: {"description": "No product with this id"}},
)
def get_product(
    product_id: int = Path(ge=INT32_MIN, le=INT32_MAX),
    ctx: ProductContext = Depends(get_product_context),
):
    product = ctx.get_by_id(product_id)

    if product is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return product


@router.post("/", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: Product,
    response: Response,
    ctx: ProductContext = Depends(get_product_context),
) -> Product:
    """
    Create a product. Any id in the body is ignored; the database assigns one.
    """
    created = ctx.insert(payload)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return created


@router.put(
    "/{product_id}",
    response_class=Response,
    responses={404: {"description": "No product with this id"}},
)
def update_product(
    payload: Product,
    product_id: int = Path(ge=INT32_MIN, le=INT32_MAX),
    ctx: ProductContext = Depends(get_product_context),
) -> Response:
    """
    Replace all fields of an existing product (no merge).
    """
    if ctx.update_by_id(product_id, payload) != 1:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return Response(status_code=status.HTTP_200_OK)


@router.delete(
    "/{product_id}",
    response_class=Response,
    responses={404: {"description": "No product with this id"}},
)
def delete_product(
    product_id: int = Path(ge=INT32_MIN, le=INT32_MAX),
    ctx: ProductContext = Depends(get_product_context),
) -> Response:
    if ctx.delete_by_id(product_id) != 1:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return Response(status_code=status.HTTP_200_OK)
