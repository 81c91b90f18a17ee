"""
API schemas for the record store.

``*Create`` models carry a new row, ``*Update`` models carry a partial
change where every field is optional: a field is applied only when the
client sends a non-null value, so 0 and false are real values. ``*Out``
models are read from ORM objects.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from config import MAX_ORDER_QUANTITY, MAX_PRICE, MAX_STOCK
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


# -----------------
# Products
# -----------------
class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, description="Display name (album title or model)")
    price: float = Field(..., ge=0, le=MAX_PRICE)
    stock: int = Field(0, ge=0, le=MAX_STOCK, description="Units in stock")


class ProductPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, le=MAX_PRICE)
    stock: Optional[int] = Field(None, ge=0, le=MAX_STOCK)


class ProductSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    stock: int
    category: ProductCategory


class AlbumCreate(ProductIn):
    artist: str = Field(..., min_length=1)
    year: int = Field(..., description="Release year, 1860 to the current year")
    format: Optional[AlbumFormat] = None
    genre: Optional[AlbumGenre] = None
    duration: Optional[str] = Field(None, description="Running time as mm:ss", examples=["43:00"])


class AlbumUpdate(ProductPatch):
    artist: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = None
    format: Optional[AlbumFormat] = None
    genre: Optional[AlbumGenre] = None
    duration: Optional[str] = None


class AlbumOut(ProductSummary):
    artist: Optional[str] = None
    year: Optional[int] = None
    format: Optional[AlbumFormat] = None
    genre: Optional[AlbumGenre] = None
    duration: Optional[str] = None


class VinylCreate(AlbumCreate):
    size: Optional[VinylSize] = None
    rpm: VinylRpm = Field(..., description="RPM_33, RPM_45 or RPM_78")
    color: Optional[str] = None


class VinylUpdate(AlbumUpdate):
    size: Optional[VinylSize] = None
    rpm: Optional[VinylRpm] = None
    color: Optional[str] = None


class VinylOut(AlbumOut):
    size: Optional[VinylSize] = None
    rpm: Optional[VinylRpm] = None
    color: Optional[str] = None


class AudioEquipmentCreate(ProductIn):
    brand: Optional[str] = None
    color: Optional[str] = None
    battery_life: Optional[int] = Field(None, ge=0, description="Hours")
    warranty: Optional[int] = Field(None, ge=0, description="Months")
    microphone_built_in: Optional[bool] = None
    wireless: Optional[bool] = None
    bluetooth: Optional[bool] = None
    usb: Optional[bool] = None
    aux: Optional[bool] = None


class AudioEquipmentUpdate(ProductPatch):
    brand: Optional[str] = None
    color: Optional[str] = None
    battery_life: Optional[int] = Field(None, ge=0)
    warranty: Optional[int] = Field(None, ge=0)
    microphone_built_in: Optional[bool] = None
    wireless: Optional[bool] = None
    bluetooth: Optional[bool] = None
    usb: Optional[bool] = None
    aux: Optional[bool] = None


class AudioEquipmentOut(ProductSummary):
    brand: Optional[str] = None
    color: Optional[str] = None
    battery_life: Optional[int] = None
    warranty: Optional[int] = None
    microphone_built_in: Optional[bool] = None
    wireless: Optional[bool] = None
    bluetooth: Optional[bool] = None
    usb: Optional[bool] = None
    aux: Optional[bool] = None


class HeadphoneCreate(AudioEquipmentCreate):
    headphone_type: Optional[HeadphoneType] = None
    anc: Optional[NoiseCanceling] = None


class HeadphoneUpdate(AudioEquipmentUpdate):
    headphone_type: Optional[HeadphoneType] = None
    anc: Optional[NoiseCanceling] = None


class HeadphoneOut(AudioEquipmentOut):
    headphone_type: Optional[HeadphoneType] = None
    anc: Optional[NoiseCanceling] = None


class SpeakerFields(BaseModel):
    radio: Optional[bool] = None
    power: Optional[int] = Field(None, ge=0, description="Watts")
    impedance: Optional[int] = Field(None, ge=0, description="Ohms")
    min_frequency: Optional[int] = Field(None, ge=0, description="Hz")
    max_frequency: Optional[int] = Field(None, ge=0, description="Hz")
    weight: Optional[int] = Field(None, ge=0, description="Grams")
    power_type: Optional[PowerType] = None
    resistance: Optional[Resistance] = None


class SpeakerCreate(AudioEquipmentCreate, SpeakerFields):
    pass


class SpeakerUpdate(AudioEquipmentUpdate, SpeakerFields):
    pass


class SpeakerOut(AudioEquipmentOut, SpeakerFields):
    pass


class PlayerCreate(ProductIn):
    brand: Optional[str] = None
    color: Optional[str] = None
    warranty: Optional[int] = Field(None, ge=0, description="Months")
    bluetooth: Optional[bool] = None
    usb: Optional[bool] = None
    radio: Optional[bool] = None
    aux: Optional[bool] = None
    rca: Optional[bool] = None
    built_in_speaker: Optional[bool] = None


class PlayerUpdate(ProductPatch):
    brand: Optional[str] = None
    color: Optional[str] = None
    warranty: Optional[int] = Field(None, ge=0)
    bluetooth: Optional[bool] = None
    usb: Optional[bool] = None
    radio: Optional[bool] = None
    aux: Optional[bool] = None
    rca: Optional[bool] = None
    built_in_speaker: Optional[bool] = None


class PlayerOut(ProductSummary):
    brand: Optional[str] = None
    color: Optional[str] = None
    warranty: Optional[int] = None
    bluetooth: Optional[bool] = None
    usb: Optional[bool] = None
    radio: Optional[bool] = None
    aux: Optional[bool] = None
    rca: Optional[bool] = None
    built_in_speaker: Optional[bool] = None


class TurntableFields(BaseModel):
    has_built_in_preamp: Optional[bool] = None
    rpm: Optional[VinylRpm] = Field(None, description="Combined values such as RPM_33_45 are allowed")
    traction: Optional[Traction] = None
    mechanism: Optional[Mechanism] = None


class TurntableCreate(PlayerCreate, TurntableFields):
    pass


class TurntableUpdate(PlayerUpdate, TurntableFields):
    pass


class TurntableOut(PlayerOut, TurntableFields):
    pass


class PortableFields(BaseModel):
    portable_type: Optional[PortableType] = None
    power_type: Optional[PowerType] = None
    battery_life: Optional[int] = Field(None, ge=0, description="Hours")
    resistance: Optional[Resistance] = None


class PortableCreate(PlayerCreate, PortableFields):
    pass


class PortableUpdate(PlayerUpdate, PortableFields):
    pass


class PortableOut(PlayerOut, PortableFields):
    pass


class CountOut(BaseModel):
    count: int


# -----------------
# Users
# -----------------
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Full name")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, description="Plain password, stored hashed")
    phone: Optional[str] = None
    address: Optional[str] = None


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None


class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=6)


class PasswordCheck(BaseModel):
    password: str


class PasswordReset(BaseModel):
    new_password: str = Field(..., min_length=6)


class AddressUpdate(BaseModel):
    address: str


class PhoneUpdate(BaseModel):
    phone: str


class Message(BaseModel):
    message: str


# -----------------
# Orders
# -----------------
class OrderItemIn(BaseModel):
    product_id: int
    quantity: int = Field(1, description=f"Units, 1 to {MAX_ORDER_QUANTITY}")


class OrderCreate(BaseModel):
    user_id: int
    items: List[OrderItemIn]


class OrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    items: Optional[List[OrderItemIn]] = Field(None, description="Replaces the order lines when given")


class StatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    product_name: str
    category: ProductCategory
    unit_price: float
    quantity: int
    subtotal: float


class OrderOut(BaseModel):
    id: int
    tracking_number: str
    user: UserOut
    items: List[OrderItemOut]
    status: OrderStatus
    total_amount: float
    created_at: Optional[datetime] = None


# -----------------
# Wishlists
# -----------------
class WishlistOut(BaseModel):
    id: int
    user: UserOut
    products: List[ProductSummary]
