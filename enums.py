"""
Enumerations shared by the ORM models and the API schemas.

Values equal names so the database and JSON carry the same token.
"""
from enum import Enum


class ProductCategory(str, Enum):
    """Discriminator of the concrete product kind."""
    ALBUM = "ALBUM"
    A_VINYL = "A_VINYL"
    AE_HEADPHONES = "AE_HEADPHONES"
    AE_SPEAKER = "AE_SPEAKER"
    PLAYER = "PLAYER"
    P_PORTABLE = "P_PORTABLE"
    P_TURNTABLE = "P_TURNTABLE"


class AlbumFormat(str, Enum):
    LP = "LP"
    EP = "EP"
    CD = "CD"
    CASSETTE = "CASSETTE"
    DVD = "DVD"
    CD_DVD = "CD_DVD"
    BOXSET = "BOXSET"  # more than four discs


class AlbumGenre(str, Enum):
    ROCK = "ROCK"
    POP = "POP"
    HIP_HOP = "HIP_HOP"
    JAZZ = "JAZZ"
    BLUES = "BLUES"
    COUNTRY = "COUNTRY"
    ELECTRONICA = "ELECTRONICA"
    REGGAE = "REGGAE"
    CLASICA = "CLASICA"
    TROVA = "TROVA"
    SALSA = "SALSA"
    METAL = "METAL"
    PUNK = "PUNK"
    FUNK = "FUNK"
    SOUL = "SOUL"
    DISCO = "DISCO"
    INDIE = "INDIE"
    FOLK = "FOLK"
    RAP = "RAP"
    REGGAETON = "REGGAETON"


class VinylSize(str, Enum):
    S_7 = "S_7"
    S_10 = "S_10"
    S_12 = "S_12"


class VinylRpm(str, Enum):
    """Playback speeds. Combined values describe turntables, never records."""
    RPM_33 = "RPM_33"
    RPM_45 = "RPM_45"
    RPM_78 = "RPM_78"
    RPM_33_45 = "RPM_33_45"
    RPM_33_45_78 = "RPM_33_45_78"


RECORD_RPMS = frozenset({VinylRpm.RPM_33, VinylRpm.RPM_45, VinylRpm.RPM_78})


class HeadphoneType(str, Enum):
    IN_EAR = "IN_EAR"
    ON_EAR = "ON_EAR"
    OVER_EAR = "OVER_EAR"


class NoiseCanceling(str, Enum):
    NONE = "NONE"
    PASSIVE = "PASSIVE"
    ACTIVE = "ACTIVE"
    ACTIVE_AND_PASSIVE = "ACTIVE_AND_PASSIVE"


class PortableType(str, Enum):
    DIGITAL = "DIGITAL"
    CASSETTE = "CASSETTE"
    CD = "CD"


class PowerType(str, Enum):
    DC = "DC"
    AC = "AC"


class Resistance(str, Enum):
    WATER = "WATER"
    SHOCK = "SHOCK"
    DUST = "DUST"
    WS = "WS"
    WD = "WD"
    SD = "SD"
    WSD = "WSD"


class Traction(str, Enum):
    BELT_DRIVE = "BELT_DRIVE"
    DIRECT_DRIVE = "DIRECT_DRIVE"


class Mechanism(str, Enum):
    MANUAL = "MANUAL"
    AUTOMATIC = "AUTOMATIC"
    SEMI_AUTOMATIC = "SEMI_AUTOMATIC"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


ORDER_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.SHIPPED, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
    OrderStatus.SHIPPED: {OrderStatus.COMPLETED, OrderStatus.REFUNDED},
    OrderStatus.COMPLETED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: set(),
    OrderStatus.REFUNDED: set(),
}
