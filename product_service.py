"""
Catalogue services: one per product kind, sharing ``CatalogService``.

Business rules enforced here:
- Album and vinyl release years lie between 1860 and the current year.
- Prices lie between 0 and MAX_PRICE, stock between 0 and MAX_STOCK.
- A vinyl record spins at exactly 33, 45 or 78 RPM.
- Durations are "mm:ss"; the seconds are stored for range queries.
- A product referenced by an order or a wishlist cannot be deleted.
"""
import re
from datetime import date
from typing import Any, Dict, List, Optional, Type

from sqlalchemy.orm import Session

from config import MAX_PRICE, MAX_STOCK, MIN_RELEASE_YEAR
from database import transactional
from enums import RECORD_RPMS, ProductCategory
from errors import ConflictError, NotFoundError, ValidationError
from logging_config import get_logger
from mappers import apply_changes, to_entity
from models import Album, Headphone, Player, Portable, Product, Speaker, Turntable, Vinyl
from repositories import OrderRepository, ProductRepository, WishlistRepository

logger = get_logger("products")

DURATION_RE = re.compile(r"^(\d{1,3}):([0-5]\d)$")


def validate_year(year: Optional[int]) -> None:
    if year is None or year < MIN_RELEASE_YEAR or year > date.today().year:
        raise ValidationError(f"The year must be between {MIN_RELEASE_YEAR} and the current year.")


def validate_price(price: Optional[float]) -> None:
    if price is None or not 0 <= price <= MAX_PRICE:
        raise ValidationError(f"The price must be between 0 and {MAX_PRICE:.2f}.")


def validate_stock(stock: int) -> None:
    if not 0 <= stock <= MAX_STOCK:
        raise ValidationError(f"The stock must be between 0 and {MAX_STOCK}.")


def validate_rpm(rpm) -> None:
    if rpm not in RECORD_RPMS:
        raise ValidationError("The vinyl can only have a speed of 33, 45, or 78 RPM.")


def duration_to_seconds(duration: str) -> int:
    """Parse "mm:ss" (minutes may exceed 59) into seconds."""
    match = DURATION_RE.match(duration or "")
    if not match:
        raise ValidationError(f"Invalid duration '{duration}', expected mm:ss.")
    minutes, seconds = match.groups()
    return int(minutes) * 60 + int(seconds)


class CatalogService:
    """Lookups, filters and the guarded delete for one product model."""

    model: Type[Product] = Product
    label = "Product"

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db, self.model)
        self.orders = OrderRepository(db)
        self.wishlists = WishlistRepository(db)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> List[Product]:
        return self.products.find_all()

    def get_by_id(self, product_id: int) -> Product:
        product = self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"{self.label} with id {product_id} not found.")
        return product

    def find_by(self, **criteria: Any) -> List[Product]:
        return self.products.find_by(**criteria)

    def find_at_least(self, field: str, minimum: Any) -> List[Product]:
        return self.products.find_at_least(field, minimum)

    def find_between(self, field: str, low: Any, high: Any) -> List[Product]:
        return self.products.find_between(field, low, high)

    def find_by_price_range(self, min_price: float, max_price: float) -> List[Product]:
        return self.products.find_between("price", min_price, max_price)

    def count_by(self, **criteria: Any) -> int:
        return self.products.count_by(**criteria)

    def search_by_name(self, fragment: str) -> List[Product]:
        return self.products.find_name_containing(fragment)

    def get_in_stock(self) -> List[Product]:
        return self.products.find_at_least("stock", 1)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transactional
    def delete(self, product_id: int) -> None:
        product = self.get_by_id(product_id)
        self.ensure_deletable(product.id)
        self.products.delete(product)
        logger.info("%s deleted: id=%s", self.label, product_id)

    def ensure_deletable(self, product_id: int) -> None:
        if self.orders.exists_by_product_id(product_id):
            logger.warning("Delete blocked: product %s is referenced by an order", product_id)
            raise ConflictError("Cannot delete the product because it is associated with an order.")
        if self.wishlists.exists_by_product_id(product_id):
            logger.warning("Delete blocked: product %s is in a wishlist", product_id)
            raise ConflictError("Cannot delete the product because it is in a wishlist.")


class ProductService(CatalogService):
    """Read access and guarded deletion across every product kind."""

    def find_by_category(self, category: ProductCategory) -> List[Product]:
        return self.products.find_by(category=category)

    def search(self, name: str, category: Optional[ProductCategory] = None) -> List[Product]:
        if category is None:
            return self.products.find_name_containing(name)
        return self.products.find_name_containing(name, category=category)

    def count_by_category(self, category: ProductCategory) -> int:
        return self.products.count_by(category=category)


class KindService(CatalogService):
    """Catalogue service for one concrete kind; adds create and update."""

    def validate(self, values: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        """Check the value rules and return the values to store.

        With ``partial`` only the keys present in ``values`` are checked.
        """
        if not partial or "price" in values:
            validate_price(values.get("price"))
        if values.get("stock") is not None:
            validate_stock(values["stock"])
        return values

    @transactional
    def create(self, data: Dict[str, Any]) -> Product:
        values = self.validate(dict(data))
        product = self.products.save(to_entity(self.model, values))
        logger.info("%s created: id=%s name=%r", self.label, product.id, product.name)
        return product

    @transactional
    def update(self, product_id: int, changes: Dict[str, Any]) -> Product:
        """Apply a partial change; only the keys given are written."""
        product = self.get_by_id(product_id)
        values = self.validate(dict(changes), partial=True)
        apply_changes(product, values)
        self.products.save(product)
        logger.info("%s updated: id=%s fields=%s", self.label, product_id, sorted(values))
        return product


class AlbumService(KindService):
    model = Album
    label = "Album"

    def validate(self, values, partial=False):
        values = super().validate(values, partial)
        if not partial or "year" in values:
            validate_year(values.get("year"))
        if values.get("duration") is not None:
            values["duration_seconds"] = duration_to_seconds(values["duration"])
        return values

    def find_by_year_range(self, start_year: int, end_year: int) -> List[Product]:
        return self.products.find_between("year", start_year, end_year)

    def find_by_duration_range(self, min_duration: str, max_duration: str) -> List[Product]:
        return self.products.find_between(
            "duration_seconds",
            duration_to_seconds(min_duration),
            duration_to_seconds(max_duration),
        )


class VinylService(AlbumService):
    model = Vinyl
    label = "Vinyl"

    def validate(self, values, partial=False):
        values = super().validate(values, partial)
        if not partial or "rpm" in values:
            validate_rpm(values.get("rpm"))
        return values


class HeadphoneService(KindService):
    model = Headphone
    label = "Headphone"


class SpeakerService(KindService):
    model = Speaker
    label = "Speaker"


class PlayerService(KindService):
    model = Player
    label = "Player"


class TurntableService(KindService):
    model = Turntable
    label = "Turntable"


class PortableService(KindService):
    model = Portable
    label = "Portable"
