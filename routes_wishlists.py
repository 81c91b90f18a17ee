from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from database import get_db
from mappers import wishlist_to_out
from schemas import WishlistOut
from wishlist_service import WishlistService

router = APIRouter(prefix="/wishlists", tags=["wishlists"])


def get_wishlist_service(db: Session = Depends(get_db)) -> WishlistService:
    return WishlistService(db)


@router.get("/{user_id}", response_model=WishlistOut)
def get_wishlist(user_id: int, wishlists: WishlistService = Depends(get_wishlist_service)):
    return wishlist_to_out(wishlists.get_wishlist_by_user_id(user_id))


@router.post("/{user_id}/product/{product_id}", response_model=WishlistOut, status_code=201)
def add_to_wishlist(user_id: int, product_id: int, wishlists: WishlistService = Depends(get_wishlist_service)):
    return wishlist_to_out(wishlists.add_product(user_id, product_id))


@router.delete("/{user_id}/product/{product_id}", status_code=204, response_class=Response)
def remove_from_wishlist(user_id: int, product_id: int, wishlists: WishlistService = Depends(get_wishlist_service)):
    wishlists.remove_product(user_id, product_id)
    return Response(status_code=204)
