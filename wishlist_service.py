"""
Wishlists: one per user, holding each product at most once.
"""
from sqlalchemy.orm import Session

from database import transactional
from errors import ConflictError, NotFoundError
from logging_config import get_logger
from models import Product, Wishlist, WishlistProduct
from repositories import ProductRepository, UserRepository, WishlistRepository

logger = get_logger("wishlists")


class WishlistService:
    def __init__(self, db: Session):
        self.db = db
        self.wishlists = WishlistRepository(db)
        self.users = UserRepository(db)
        self.products = ProductRepository(db)

    @transactional
    def get_wishlist_by_user_id(self, user_id: int) -> Wishlist:
        return self._wishlist_for(user_id)

    @transactional
    def add_product(self, user_id: int, product_id: int) -> Wishlist:
        wishlist = self._wishlist_for(user_id)
        product = self._product(product_id)
        if self.wishlists.contains(wishlist.id, product.id):
            raise ConflictError(f"Product {product_id} is already in the wishlist.")
        wishlist.wishlist_products.append(WishlistProduct(product=product))
        self.db.flush()
        logger.info("Product %s added to the wishlist of user %s", product_id, user_id)
        return wishlist

    @transactional
    def remove_product(self, user_id: int, product_id: int) -> Wishlist:
        """Remove a product; removing one that is not there is a no-op."""
        wishlist = self._wishlist_for(user_id)
        self._product(product_id)
        for entry in list(wishlist.wishlist_products):
            if entry.product_id == product_id:
                wishlist.wishlist_products.remove(entry)
                logger.info("Product %s removed from the wishlist of user %s", product_id, user_id)
        self.db.flush()
        return wishlist

    def _wishlist_for(self, user_id: int) -> Wishlist:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found.")
        wishlist = self.wishlists.find_by_user_id(user_id)
        if wishlist is None:
            # created on first access for users without one
            wishlist = Wishlist(user=user)
            self.db.add(wishlist)
            self.db.flush()
        return wishlist

    def _product(self, product_id: int) -> Product:
        product = self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product with id {product_id} not found.")
        return product
