"""
Conversions between ORM entities and API schemas.

No business rules here: validation happens in the services.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Type

from enums import ProductCategory
from models import Order, OrderProduct, Product, User, Wishlist
from schemas import (
    AlbumOut,
    HeadphoneOut,
    OrderItemOut,
    OrderOut,
    PlayerOut,
    PortableOut,
    ProductSummary,
    SpeakerOut,
    TurntableOut,
    UserOut,
    VinylOut,
    WishlistOut,
)

OUT_SCHEMAS = {
    ProductCategory.ALBUM: AlbumOut,
    ProductCategory.A_VINYL: VinylOut,
    ProductCategory.AE_HEADPHONES: HeadphoneOut,
    ProductCategory.AE_SPEAKER: SpeakerOut,
    ProductCategory.PLAYER: PlayerOut,
    ProductCategory.P_PORTABLE: PortableOut,
    ProductCategory.P_TURNTABLE: TurntableOut,
}


def to_entity(model: Type[Any], data: Dict[str, Any]) -> Any:
    return model(**data)


def apply_changes(entity: Any, changes: Dict[str, Any]) -> Any:
    """Copy every key of ``changes`` onto ``entity``."""
    for field, value in changes.items():
        if not hasattr(entity, field):
            raise AttributeError(f"{type(entity).__name__} has no field '{field}'")
        setattr(entity, field, value)
    return entity


def product_to_out(product: Product):
    """Full detail of a product, using the schema of its concrete kind."""
    return OUT_SCHEMAS[product.category].model_validate(product)


def product_to_summary(product: Product) -> ProductSummary:
    return ProductSummary.model_validate(product)


def user_to_out(user: User) -> UserOut:
    return UserOut.model_validate(user)


def order_product_to_out(line: OrderProduct) -> OrderItemOut:
    subtotal = Decimal(str(line.product.price)) * line.quantity
    return OrderItemOut(
        id=line.id,
        product_id=line.product_id,
        product_name=line.product.name,
        category=line.product.category,
        unit_price=line.product.price,
        quantity=line.quantity,
        subtotal=float(subtotal.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
    )


def order_to_out(order: Order) -> OrderOut:
    return OrderOut(
        id=order.id,
        tracking_number=order.tracking_number,
        user=user_to_out(order.user),
        items=[order_product_to_out(line) for line in order.order_products],
        status=order.status,
        total_amount=order.total_amount,
        created_at=order.created_at,
    )


def wishlist_to_out(wishlist: Wishlist) -> WishlistOut:
    return WishlistOut(
        id=wishlist.id,
        user=user_to_out(wishlist.user),
        products=[product_to_summary(entry.product) for entry in wishlist.wishlist_products],
    )
