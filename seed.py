"""
Sample catalogue, users, wishlists and orders for a fresh database.
"""
import random
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from database import unit_of_work
from enums import (
    AlbumFormat,
    AlbumGenre,
    HeadphoneType,
    Mechanism,
    NoiseCanceling,
    PortableType,
    PowerType,
    Resistance,
    Traction,
    VinylRpm,
    VinylSize,
)
from logging_config import get_logger
from models import OrderProduct, Product, User
from order_service import OrderService
from product_service import (
    AlbumService,
    HeadphoneService,
    PlayerService,
    PortableService,
    SpeakerService,
    TurntableService,
    VinylService,
)
from user_service import UserService
from wishlist_service import WishlistService

logger = get_logger("seed")

USERS = [
    {"name": "Juan Perez", "phone": "5845464864", "email": "juanperez@gmail.com", "password": "juanperez", "address": "Callle 3ra #15"},
    {"name": "Maria Lopez", "phone": "5845464865", "email": "marialopez@gmail.com", "password": "marialopez", "address": "Avenida 5ta #20"},
    {"name": "Carlos Sanchez", "phone": "5845464866", "email": "carlossanchez@gmail.com", "password": "carlossanchez", "address": "Calle 8va #30"},
    {"name": "Ana Gomez", "phone": "5845464867", "email": "anagomez@gmail.com", "password": "anagomez", "address": "Boulevard 10ma #40"},
    {"name": "Luis Fernandez", "phone": "5845464868", "email": "luisfernandez@gmail.com", "password": "luisfernandez", "address": "Calle 12va #50"},
]

ALBUMS = [
    {"name": "The Dark Side of the Moon", "price": 20.0, "stock": 10, "artist": "Pink Floyd", "year": 1973, "format": AlbumFormat.CD, "genre": AlbumGenre.ROCK, "duration": "43:00"},
    {"name": "Thriller", "price": 25.0, "stock": 15, "artist": "Michael Jackson", "year": 1982, "format": AlbumFormat.DVD, "genre": AlbumGenre.POP, "duration": "42:19"},
    {"name": "Back in Black", "price": 22.0, "stock": 12, "artist": "AC/DC", "year": 1980, "format": AlbumFormat.CD_DVD, "genre": AlbumGenre.ROCK, "duration": "41:59"},
    {"name": "Rumours", "price": 18.0, "stock": 8, "artist": "Fleetwood Mac", "year": 1977, "format": AlbumFormat.BOXSET, "genre": AlbumGenre.ROCK, "duration": "39:43"},
    {"name": "Abbey Road", "price": 24.0, "stock": 20, "artist": "The Beatles", "year": 1969, "format": AlbumFormat.DVD, "genre": AlbumGenre.ROCK, "duration": "47:23"},
]

VINYLS = [
    {"name": "Lateralus", "price": 29.99, "stock": 50, "artist": "Tool", "year": 2001, "genre": AlbumGenre.METAL, "duration": "78:00", "color": "Black"},
    {"name": "DTMF", "price": 24.99, "stock": 100, "artist": "Bad Bunny", "year": 2025, "genre": AlbumGenre.REGGAETON, "duration": "53:21", "color": "Blue"},
    {"name": "Dear Science", "price": 19.99, "stock": 75, "artist": "TV on the Radio", "year": 2008, "genre": AlbumGenre.INDIE, "duration": "50:45", "color": "Red"},
    {"name": "Re", "price": 22.99, "stock": 60, "artist": "Cafe Tacvba", "year": 1994, "genre": AlbumGenre.ROCK, "duration": "45:30", "color": "Green"},
    {"name": "Siembra", "price": 27.99, "stock": 80, "artist": "Ruben Blades", "year": 1983, "genre": AlbumGenre.SALSA, "duration": "50:00", "color": "Yellow"},
]

TURNTABLES = [
    {"name": "Audio-Technica AT-LP120XUSB", "price": 349.00, "stock": 8, "brand": "Audio-Technica", "color": "Black", "warranty": 2,
     "bluetooth": True, "usb": True, "radio": False, "aux": True, "rca": True, "built_in_speaker": False, "has_built_in_preamp": True,
     "traction": Traction.DIRECT_DRIVE, "mechanism": Mechanism.MANUAL},
    {"name": "Pro-Ject Debut Carbon EVO", "price": 499.00, "stock": 5, "brand": "Pro-Ject", "color": "Red", "warranty": 2,
     "bluetooth": False, "usb": False, "radio": False, "aux": True, "rca": True, "built_in_speaker": False, "has_built_in_preamp": False,
     "traction": Traction.BELT_DRIVE, "mechanism": Mechanism.MANUAL},
    {"name": "Sony PS-LX310BT", "price": 198.00, "stock": 12, "brand": "Sony", "color": "Black", "warranty": 1,
     "bluetooth": True, "usb": False, "radio": False, "aux": True, "rca": False, "built_in_speaker": True, "has_built_in_preamp": False,
     "traction": Traction.BELT_DRIVE, "mechanism": Mechanism.AUTOMATIC},
    {"name": "Rega Planar 1", "price": 475.00, "stock": 6, "brand": "Rega", "color": "White", "warranty": 2,
     "bluetooth": False, "usb": False, "radio": False, "aux": False, "rca": False, "built_in_speaker": False, "has_built_in_preamp": False,
     "traction": Traction.BELT_DRIVE, "mechanism": Mechanism.MANUAL},
    {"name": "Technics SL-1500C", "price": 1199.00, "stock": 3, "brand": "Technics", "color": "Silver", "warranty": 2,
     "bluetooth": True, "usb": True, "radio": False, "aux": True, "rca": True, "built_in_speaker": False, "has_built_in_preamp": True,
     "traction": Traction.DIRECT_DRIVE, "mechanism": Mechanism.MANUAL},
]

HEADPHONES = [
    {"name": "WH-1000XM4", "price": 349.99, "stock": 200, "brand": "Sony", "color": "Black", "battery_life": 30, "warranty": 24,
     "microphone_built_in": True, "wireless": True, "bluetooth": True, "usb": False, "aux": True, "anc": NoiseCanceling.ACTIVE},
    {"name": "Beoplay H95", "price": 849.99, "stock": 150, "brand": "B&O", "color": "Gold", "battery_life": 38, "warranty": 24,
     "microphone_built_in": True, "wireless": True, "bluetooth": True, "usb": False, "aux": True, "anc": NoiseCanceling.ACTIVE},
    {"name": "ATH-M50X", "price": 149.99, "stock": 300, "brand": "Audio-Technica", "color": "Black", "battery_life": 0, "warranty": 12,
     "microphone_built_in": False, "wireless": False, "bluetooth": False, "usb": False, "aux": True, "anc": NoiseCanceling.PASSIVE},
    {"name": "Momentum 3 Wireless", "price": 399.99, "stock": 250, "brand": "Sennheiser", "color": "Black", "battery_life": 17, "warranty": 24,
     "microphone_built_in": True, "wireless": True, "bluetooth": True, "usb": False, "aux": True, "anc": NoiseCanceling.ACTIVE},
    {"name": "Harman Kardon FLY ANC", "price": 199.99, "stock": 180, "brand": "Harman/Kardon", "color": "Silver", "battery_life": 25, "warranty": 12,
     "microphone_built_in": True, "wireless": True, "bluetooth": True, "usb": False, "aux": True, "anc": NoiseCanceling.ACTIVE},
]

SPEAKERS = [
    {"name": "SRS-XB43", "price": 199.99, "stock": 150, "brand": "Sony", "color": "Black", "battery_life": 24, "warranty": 12,
     "microphone_built_in": False, "wireless": True, "bluetooth": True, "usb": True, "aux": True, "radio": False,
     "power": 30, "impedance": 6, "min_frequency": 20, "max_frequency": 20000, "weight": 3000,
     "power_type": PowerType.DC, "resistance": Resistance.WS},
    {"name": "SoundLink Revolve+", "price": 299.99, "stock": 100, "brand": "Bose", "color": "Silver", "battery_life": 16, "warranty": 12,
     "microphone_built_in": False, "wireless": True, "bluetooth": True, "usb": False, "aux": True, "radio": False,
     "power": 20, "impedance": 4, "min_frequency": 50, "max_frequency": 20000, "weight": 2000,
     "power_type": PowerType.DC, "resistance": Resistance.WATER},
    {"name": "Charge 5", "price": 179.99, "stock": 200, "brand": "JBL", "color": "Blue", "battery_life": 20, "warranty": 12,
     "microphone_built_in": False, "wireless": True, "bluetooth": True, "usb": True, "aux": True, "radio": False,
     "power": 40, "impedance": 8, "min_frequency": 65, "max_frequency": 20000, "weight": 2500,
     "power_type": PowerType.DC, "resistance": Resistance.WSD},
    {"name": "Stanmore II", "price": 349.99, "stock": 80, "brand": "Marshall", "color": "Black", "battery_life": 0, "warranty": 24,
     "microphone_built_in": False, "wireless": False, "bluetooth": True, "usb": False, "aux": True, "radio": False,
     "power": 80, "impedance": 6, "min_frequency": 50, "max_frequency": 20000, "weight": 4500,
     "power_type": PowerType.AC, "resistance": Resistance.SHOCK},
    {"name": "Onyx Studio 7", "price": 299.99, "stock": 120, "brand": "Harman Kardon", "color": "Gray", "battery_life": 8, "warranty": 12,
     "microphone_built_in": False, "wireless": True, "bluetooth": True, "usb": False, "aux": True, "radio": False,
     "power": 50, "impedance": 6, "min_frequency": 50, "max_frequency": 20000, "weight": 3300,
     "power_type": PowerType.DC, "resistance": Resistance.WD},
]

PLAYERS = [
    {"name": "CDP-CE500", "price": 199.99, "stock": 50, "brand": "Sony", "color": "Black", "warranty": 12},
    {"name": "CD-S300", "price": 249.99, "stock": 40, "brand": "Yamaha", "color": "Silver", "warranty": 24},
    {"name": "DCD-800NE", "price": 349.99, "stock": 30, "brand": "Denon", "color": "Black", "warranty": 24, "bluetooth": True},
    {"name": "PD-30AE", "price": 299.99, "stock": 35, "brand": "Pioneer", "color": "Silver", "warranty": 12},
    {"name": "C-7030", "price": 399.99, "stock": 25, "brand": "Onkyo", "color": "Black", "warranty": 24},
]

PORTABLES = [
    {"name": "NW-ZX507", "price": 699.99, "stock": 30, "brand": "Sony", "color": "Black", "warranty": 12, "bluetooth": True, "usb": True,
     "radio": False, "aux": True, "portable_type": PortableType.DIGITAL, "battery_life": 20, "resistance": Resistance.WATER},
    {"name": "WM-FX290", "price": 99.99, "stock": 50, "brand": "Sony", "color": "Silver", "warranty": 12, "bluetooth": False, "usb": False,
     "radio": True, "aux": True, "portable_type": PortableType.CASSETTE, "battery_life": 15, "resistance": Resistance.WS},
    {"name": "D-NE319", "price": 129.99, "stock": 40, "brand": "Sony", "color": "Blue", "warranty": 12, "bluetooth": False, "usb": False,
     "radio": True, "aux": True, "portable_type": PortableType.CD, "battery_life": 10, "resistance": Resistance.SHOCK},
    {"name": "Plenue D2", "price": 499.99, "stock": 25, "brand": "Cowon", "color": "Black", "warranty": 12, "bluetooth": False, "usb": True,
     "radio": False, "aux": True, "portable_type": PortableType.DIGITAL, "battery_life": 22, "resistance": Resistance.WD},
    {"name": "CT-X10", "price": 79.99, "stock": 60, "brand": "Panasonic", "color": "Red", "warranty": 12, "bluetooth": False, "usb": False,
     "radio": True, "aux": True, "portable_type": PortableType.CASSETTE, "battery_life": 12, "resistance": Resistance.DUST},
]


def seed_database(db: Session, rng: Optional[random.Random] = None) -> Dict[str, int]:
    """Load the sample data when the store is empty.

    Returns the number of rows created per kind (all zero when the store
    already held products or users). Everything is loaded in one unit of
    work, so a failure leaves the store empty.
    """
    created = {"users": 0, "products": 0, "orders": 0}
    if db.scalar(select(func.count()).select_from(Product)) or db.scalar(select(func.count()).select_from(User)):
        logger.info("Seed skipped: database is not empty")
        return created

    with unit_of_work(db):
        _load_sample_data(db, rng or random.Random(42), created)

    logger.info(
        "Seeded %d users, %d products and %d orders",
        created["users"], created["products"], created["orders"],
    )
    return created


def _load_sample_data(db: Session, rng: random.Random, created: Dict[str, int]) -> None:
    users = UserService(db)
    for data in USERS:
        users.create_user(data)
        created["users"] += 1

    catalogue = [
        (AlbumService, ALBUMS, {}),
        (VinylService, VINYLS, {"format": AlbumFormat.LP, "size": VinylSize.S_12, "rpm": VinylRpm.RPM_33}),
        (TurntableService, TURNTABLES, {"rpm": VinylRpm.RPM_33_45}),
        (HeadphoneService, HEADPHONES, {"headphone_type": HeadphoneType.OVER_EAR}),
        (SpeakerService, SPEAKERS, {}),
        (PlayerService, PLAYERS, {"bluetooth": False, "usb": True, "radio": False, "aux": True, "rca": True, "built_in_speaker": False}),
        (PortableService, PORTABLES, {"rca": False, "built_in_speaker": False, "power_type": PowerType.DC}),
    ]
    for service_cls, rows, defaults in catalogue:
        service = service_cls(db)
        for row in rows:
            service.create({**defaults, **row})
            created["products"] += 1

    products = list(db.scalars(select(Product).order_by(Product.id)).unique())
    wishlists = WishlistService(db)
    orders = OrderService(db)
    for user in users.get_all():
        for product in rng.sample(products, rng.randint(1, 3)):
            wishlists.add_product(user.id, product.id)
        for _ in range(rng.randint(1, 3)):
            lines = [
                OrderProduct(product=product, quantity=rng.randint(1, 5))
                for product in rng.sample(products, rng.randint(1, 3))
            ]
            orders.create_order(user, lines)
            created["orders"] += 1
