"""
SQLAlchemy models for the record store.

Products are a tagged union: ``Product`` holds the shared record and the
``category`` discriminator, and every concrete kind sits exactly one level
below it in its own joined table. Attribute groups shared by several kinds
(album data, audio equipment, players) are column mixins, so the category is
always derived from the class and never set by hand.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database import Base
from enums import (
    AlbumFormat,
    AlbumGenre,
    HeadphoneType,
    Mechanism,
    NoiseCanceling,
    OrderStatus,
    PortableType,
    PowerType,
    ProductCategory,
    Resistance,
    Traction,
    VinylRpm,
    VinylSize,
)


# =============================================================================
# PRODUCTS
# =============================================================================

class Product(Base):
    """Shared product record; never instantiated directly."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category: Mapped[ProductCategory] = mapped_column(
        SQLEnum(ProductCategory, name="product_category"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    __mapper_args__ = {
        "polymorphic_on": "category",
        "with_polymorphic": "*",
    }

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, name='{self.name}', price={self.price})>"


class AlbumFields:
    artist: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    year: Mapped[Optional[int]] = mapped_column(Integer)
    format: Mapped[Optional[AlbumFormat]] = mapped_column(SQLEnum(AlbumFormat, name="album_format"))
    genre: Mapped[Optional[AlbumGenre]] = mapped_column(SQLEnum(AlbumGenre, name="album_genre"))
    # "mm:ss" as entered; seconds kept alongside for range queries
    duration: Mapped[Optional[str]] = mapped_column(String(10))
    duration_seconds: Mapped[Optional[int]] = mapped_column(Integer)


class AudioEquipmentFields:
    brand: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    color: Mapped[Optional[str]] = mapped_column(String(60))
    battery_life: Mapped[Optional[int]] = mapped_column(Integer)  # hours
    warranty: Mapped[Optional[int]] = mapped_column(Integer)  # months
    microphone_built_in: Mapped[Optional[bool]] = mapped_column(Boolean)
    wireless: Mapped[Optional[bool]] = mapped_column(Boolean)
    bluetooth: Mapped[Optional[bool]] = mapped_column(Boolean)
    usb: Mapped[Optional[bool]] = mapped_column(Boolean)
    aux: Mapped[Optional[bool]] = mapped_column(Boolean)


class PlayerFields:
    brand: Mapped[Optional[str]] = mapped_column(String(120), index=True)
    color: Mapped[Optional[str]] = mapped_column(String(60))
    warranty: Mapped[Optional[int]] = mapped_column(Integer)  # months
    bluetooth: Mapped[Optional[bool]] = mapped_column(Boolean)
    usb: Mapped[Optional[bool]] = mapped_column(Boolean)
    radio: Mapped[Optional[bool]] = mapped_column(Boolean)
    aux: Mapped[Optional[bool]] = mapped_column(Boolean)
    rca: Mapped[Optional[bool]] = mapped_column(Boolean)
    built_in_speaker: Mapped[Optional[bool]] = mapped_column(Boolean)


class Album(AlbumFields, Product):
    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)

    __mapper_args__ = {"polymorphic_identity": ProductCategory.ALBUM}


class Vinyl(AlbumFields, Product):
    __tablename__ = "vinyls"

    id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    size: Mapped[Optional[VinylSize]] = mapped_column(SQLEnum(VinylSize, name="vinyl_size"))
    rpm: Mapped[Optional[VinylRpm]] = mapped_column(SQLEnum(VinylRpm, name="vinyl_rpm"))
    color: Mapped[Optional[str]] = mapped_column(String(60))

    __mapper_args__ = {"polymorphic_identity": ProductCategory.A_VINYL}


class Headphone(AudioEquipmentFields, Product):
    __tablename__ = "headphones"

    id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    headphone_type: Mapped[Optional[HeadphoneType]] = mapped_column(
        SQLEnum(HeadphoneType, name="headphone_type")
    )
    anc: Mapped[Optional[NoiseCanceling]] = mapped_column(SQLEnum(NoiseCanceling, name="noise_canceling"))

    __mapper_args__ = {"polymorphic_identity": ProductCategory.AE_HEADPHONES}


class Speaker(AudioEquipmentFields, Product):
    __tablename__ = "speakers"

    id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    radio: Mapped[Optional[bool]] = mapped_column(Boolean)
    power: Mapped[Optional[int]] = mapped_column(Integer)  # W
    impedance: Mapped[Optional[int]] = mapped_column(Integer)  # ohm
    min_frequency: Mapped[Optional[int]] = mapped_column(Integer)  # Hz
    max_frequency: Mapped[Optional[int]] = mapped_column(Integer)  # Hz
    weight: Mapped[Optional[int]] = mapped_column(Integer)  # g
    power_type: Mapped[Optional[PowerType]] = mapped_column(SQLEnum(PowerType, name="power_type"))
    resistance: Mapped[Optional[Resistance]] = mapped_column(SQLEnum(Resistance, name="resistance"))

    __mapper_args__ = {"polymorphic_identity": ProductCategory.AE_SPEAKER}


class Player(PlayerFields, Product):
    __tablename__ = "players"

    id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)

    __mapper_args__ = {"polymorphic_identity": ProductCategory.PLAYER}


class Turntable(PlayerFields, Product):
    __tablename__ = "turntables"

    id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    has_built_in_preamp: Mapped[Optional[bool]] = mapped_column(Boolean)
    rpm: Mapped[Optional[VinylRpm]] = mapped_column(SQLEnum(VinylRpm, name="vinyl_rpm"))
    traction: Mapped[Optional[Traction]] = mapped_column(SQLEnum(Traction, name="traction"))
    mechanism: Mapped[Optional[Mechanism]] = mapped_column(SQLEnum(Mechanism, name="mechanism"))

    __mapper_args__ = {"polymorphic_identity": ProductCategory.P_TURNTABLE}


class Portable(PlayerFields, Product):
    __tablename__ = "portables"

    id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    portable_type: Mapped[Optional[PortableType]] = mapped_column(SQLEnum(PortableType, name="portable_type"))
    power_type: Mapped[Optional[PowerType]] = mapped_column(SQLEnum(PowerType, name="power_type"))
    battery_life: Mapped[Optional[int]] = mapped_column(Integer)  # hours
    resistance: Mapped[Optional[Resistance]] = mapped_column(SQLEnum(Resistance, name="resistance"))

    __mapper_args__ = {"polymorphic_identity": ProductCategory.P_PORTABLE}


# =============================================================================
# USERS, ORDERS, WISHLISTS
# =============================================================================

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30))
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # hashed
    address: Mapped[Optional[str]] = mapped_column(String(255))
    # last tracking sequence handed out; only ever incremented
    order_sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    orders: Mapped[List["Order"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", order_by="Order.id"
    )
    wishlist: Mapped[Optional["Wishlist"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", uselist=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tracking_number: Mapped[Optional[str]] = mapped_column(String(40), unique=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[Optional[OrderStatus]] = mapped_column(SQLEnum(OrderStatus, name="order_status"))
    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    user: Mapped[User] = relationship(back_populates="orders")
    order_products: Mapped[List["OrderProduct"]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by="OrderProduct.id"
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, tracking='{self.tracking_number}', total={self.total_amount})>"


class OrderProduct(Base):
    __tablename__ = "order_products"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_order_products_quantity"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    order: Mapped[Order] = relationship(back_populates="order_products")
    product: Mapped[Product] = relationship(lazy="joined")


class Wishlist(Base):
    __tablename__ = "wishlists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    user: Mapped[User] = relationship(back_populates="wishlist")
    wishlist_products: Mapped[List["WishlistProduct"]] = relationship(
        back_populates="wishlist", cascade="all, delete-orphan", order_by="WishlistProduct.id"
    )


class WishlistProduct(Base):
    __tablename__ = "wishlist_products"
    __table_args__ = (UniqueConstraint("wishlist_id", "product_id", name="uq_wishlist_product"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    wishlist_id: Mapped[int] = mapped_column(
        ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False, index=True)

    wishlist: Mapped[Wishlist] = relationship(back_populates="wishlist_products")
    product: Mapped[Product] = relationship(lazy="joined")
