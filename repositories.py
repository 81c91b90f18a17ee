"""
Data access for the record store.

Repositories only build and run queries; business rules live in the
services. None of them commit: the calling service owns the transaction.
"""
from typing import Any, List, Optional, Type

from sqlalchemy import exists, func, select, update
from sqlalchemy.orm import Session

from models import Order, OrderProduct, Product, User, Wishlist, WishlistProduct


class ProductRepository:
    """Queries over one product kind (or over every kind with ``Product``)."""

    def __init__(self, db: Session, model: Type[Product] = Product):
        self.db = db
        self.model = model

    def _column(self, field: str):
        column = getattr(self.model, field, None)
        if column is None:
            raise AttributeError(f"{self.model.__name__} has no field '{field}'")
        return column

    def find_by_id(self, product_id: int) -> Optional[Product]:
        stmt = select(self.model).where(self.model.id == product_id)
        return self.db.scalars(stmt).unique().one_or_none()

    def find_all(self) -> List[Product]:
        stmt = select(self.model).order_by(self.model.id)
        return list(self.db.scalars(stmt).unique())

    def find_by(self, **criteria: Any) -> List[Product]:
        stmt = select(self.model).order_by(self.model.id)
        for field, value in criteria.items():
            stmt = stmt.where(self._column(field) == value)
        return list(self.db.scalars(stmt).unique())

    def find_at_least(self, field: str, minimum: Any) -> List[Product]:
        stmt = select(self.model).where(self._column(field) >= minimum).order_by(self.model.id)
        return list(self.db.scalars(stmt).unique())

    def find_between(self, field: str, low: Any, high: Any) -> List[Product]:
        stmt = (
            select(self.model)
            .where(self._column(field).between(low, high))
            .order_by(self.model.id)
        )
        return list(self.db.scalars(stmt).unique())

    def find_name_containing(self, fragment: str, **criteria: Any) -> List[Product]:
        stmt = select(self.model).where(self.model.name.icontains(fragment, autoescape=True))
        for field, value in criteria.items():
            stmt = stmt.where(self._column(field) == value)
        return list(self.db.scalars(stmt.order_by(self.model.id)).unique())

    def count_by(self, **criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        for field, value in criteria.items():
            stmt = stmt.where(self._column(field) == value)
        return self.db.scalar(stmt) or 0

    def save(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.flush()


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, order_id: int) -> Optional[Order]:
        return self.db.get(Order, order_id)

    def find_all(self) -> List[Order]:
        return list(self.db.scalars(select(Order).order_by(Order.id)))

    def find_by_user(self, user: User) -> List[Order]:
        stmt = select(Order).where(Order.user_id == user.id).order_by(Order.id)
        return list(self.db.scalars(stmt))

    def find_latest_by_user(self, user: User) -> Optional[Order]:
        stmt = select(Order).where(Order.user_id == user.id).order_by(Order.id.desc()).limit(1)
        return self.db.scalars(stmt).first()

    def exists_by_product_id(self, product_id: int) -> bool:
        stmt = select(exists().where(OrderProduct.product_id == product_id))
        return bool(self.db.scalar(stmt))

    def next_sequence(self, user: User) -> int:
        """Increment and return the user's order counter.

        The UPDATE takes the row (SQLite: database) write lock, so concurrent
        transactions for the same user are serialized until commit.
        """
        self.db.execute(
            update(User)
            .where(User.id == user.id)
            .values(order_sequence=User.order_sequence + 1)
        )
        return self.db.scalar(select(User.order_sequence).where(User.id == user.id))

    def save(self, order: Order) -> Order:
        self.db.add(order)
        self.db.flush()
        return order

    def delete(self, order: Order) -> None:
        self.db.delete(order)
        self.db.flush()


class WishlistRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_user_id(self, user_id: int) -> Optional[Wishlist]:
        stmt = select(Wishlist).where(Wishlist.user_id == user_id)
        return self.db.scalars(stmt).one_or_none()

    def exists_by_product_id(self, product_id: int) -> bool:
        stmt = select(exists().where(WishlistProduct.product_id == product_id))
        return bool(self.db.scalar(stmt))

    def contains(self, wishlist_id: int, product_id: int) -> bool:
        stmt = select(
            exists().where(
                WishlistProduct.wishlist_id == wishlist_id,
                WishlistProduct.product_id == product_id,
            )
        )
        return bool(self.db.scalar(stmt))


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).one_or_none()

    def exists_by_email(self, email: str) -> bool:
        return bool(self.db.scalar(select(exists().where(User.email == email))))

    def find_all(self) -> List[User]:
        return list(self.db.scalars(select(User).order_by(User.id)))

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()
