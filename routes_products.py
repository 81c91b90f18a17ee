"""
Catalogue endpoints: one router per product kind plus ``/products``.

Fixed paths (``/in-stock``, ``/search`` ...) are registered before the
``/{product_id}`` route of each router so they are not read as ids.
"""
from typing import Callable, List, Optional, Type

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import get_db
from enums import (
    AlbumFormat,
    AlbumGenre,
    HeadphoneType,
    Mechanism,
    NoiseCanceling,
    PortableType,
    PowerType,
    ProductCategory,
    Resistance,
    Traction,
    VinylRpm,
    VinylSize,
)
from mappers import product_to_out, product_to_summary
from product_service import (
    AlbumService,
    CatalogService,
    HeadphoneService,
    KindService,
    PlayerService,
    PortableService,
    ProductService,
    SpeakerService,
    TurntableService,
    VinylService,
)
from schemas import (
    AlbumCreate,
    AlbumOut,
    AlbumUpdate,
    CountOut,
    HeadphoneCreate,
    HeadphoneOut,
    HeadphoneUpdate,
    PlayerCreate,
    PlayerOut,
    PlayerUpdate,
    PortableCreate,
    PortableOut,
    PortableUpdate,
    ProductSummary,
    SpeakerCreate,
    SpeakerOut,
    SpeakerUpdate,
    TurntableCreate,
    TurntableOut,
    TurntableUpdate,
    VinylCreate,
    VinylOut,
    VinylUpdate,
)


def service_dependency(service_cls: Type[CatalogService]) -> Callable[..., CatalogService]:
    def get_service(db: Session = Depends(get_db)) -> CatalogService:
        return service_cls(db)
    return get_service


# Helpers
def add_field_route(router: APIRouter, get_service, out_schema, segment: str, field: str, value_type):
    """``GET /<segment>/{value}``: products whose ``field`` equals ``value``."""

    @router.get(f"/{segment}/{{value}}", response_model=List[out_schema], name=f"{router.tags[0]}_by_{field}")
    def find_by_field(value: value_type, service: CatalogService = Depends(get_service)):
        return [product_to_out(p) for p in service.find_by(**{field: value})]


def add_count_route(router: APIRouter, get_service, segment: str, field: str, value_type):
    @router.get(f"/count/{segment}/{{value}}", response_model=CountOut, name=f"{router.tags[0]}_count_by_{field}")
    def count_by_field(value: value_type, service: CatalogService = Depends(get_service)):
        return CountOut(count=service.count_by(**{field: value}))


def add_minimum_route(router: APIRouter, get_service, out_schema, segment: str, field: str):
    """``GET /<segment>?min=``: products whose ``field`` is at least ``min``."""

    @router.get(f"/{segment}", response_model=List[out_schema], name=f"{router.tags[0]}_min_{field}")
    def find_at_least(minimum: int = Query(..., alias="min", ge=0), service: CatalogService = Depends(get_service)):
        return [product_to_out(p) for p in service.find_at_least(field, minimum)]


def add_common_routes(router: APIRouter, get_service, out_schema):
    """Price range, stock and name search."""

    @router.get("/price-range", response_model=List[out_schema])
    def find_by_price_range(
        min_price: float = Query(..., alias="minPrice", ge=0),
        max_price: float = Query(..., alias="maxPrice", ge=0),
        service: CatalogService = Depends(get_service),
    ):
        return [product_to_out(p) for p in service.find_by_price_range(min_price, max_price)]

    @router.get("/in-stock", response_model=List[out_schema])
    def get_in_stock(service: CatalogService = Depends(get_service)):
        return [product_to_out(p) for p in service.get_in_stock()]

    @router.get("/search", response_model=List[out_schema])
    def search_by_name(name: str = Query(..., min_length=1), service: CatalogService = Depends(get_service)):
        return [product_to_out(p) for p in service.search_by_name(name)]


def add_crud_routes(router: APIRouter, get_service, create_schema: Type[BaseModel],
                    update_schema: Type[BaseModel], out_schema: Type[BaseModel]):
    @router.get("", response_model=List[out_schema])
    def list_all(service: CatalogService = Depends(get_service)):
        return [product_to_out(p) for p in service.get_all()]

    @router.get("/{product_id}", response_model=out_schema)
    def get_by_id(product_id: int, service: CatalogService = Depends(get_service)):
        return product_to_out(service.get_by_id(product_id))

    @router.post("/new", response_model=out_schema, status_code=201)
    def create(payload: create_schema, service: KindService = Depends(get_service)):
        return product_to_out(service.create(payload.model_dump()))

    @router.put("/update/{product_id}", response_model=out_schema)
    def update(product_id: int, payload: update_schema, service: KindService = Depends(get_service)):
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        return product_to_out(service.update(product_id, changes))

    @router.delete("/delete/{product_id}", status_code=204, response_class=Response)
    def delete(product_id: int, service: CatalogService = Depends(get_service)):
        service.delete(product_id)
        return Response(status_code=204)


def add_album_routes(router: APIRouter, get_service, out_schema):
    """Filters shared by albums and vinyls."""
    add_field_route(router, get_service, out_schema, "artist", "artist", str)
    add_field_route(router, get_service, out_schema, "genre", "genre", AlbumGenre)
    add_field_route(router, get_service, out_schema, "format", "format", AlbumFormat)
    add_count_route(router, get_service, "artist", "artist", str)
    add_count_route(router, get_service, "genre", "genre", AlbumGenre)
    add_count_route(router, get_service, "format", "format", AlbumFormat)

    @router.get("/year-range", response_model=List[out_schema])
    def find_by_year_range(
        start_year: int = Query(..., alias="startYear"),
        end_year: int = Query(..., alias="endYear"),
        service: AlbumService = Depends(get_service),
    ):
        return [product_to_out(p) for p in service.find_by_year_range(start_year, end_year)]

    @router.get("/duration-range", response_model=List[out_schema])
    def find_by_duration_range(
        min_duration: str = Query(..., alias="minDuration", examples=["30:00"]),
        max_duration: str = Query(..., alias="maxDuration", examples=["45:00"]),
        service: AlbumService = Depends(get_service),
    ):
        return [product_to_out(p) for p in service.find_by_duration_range(min_duration, max_duration)]

    add_common_routes(router, get_service, out_schema)


def add_player_routes(router: APIRouter, get_service, out_schema):
    """Filters shared by players, turntables and portables."""
    add_field_route(router, get_service, out_schema, "brand", "brand", str)
    add_field_route(router, get_service, out_schema, "color", "color", str)
    for flag in ("bluetooth", "usb", "radio", "aux"):
        add_field_route(router, get_service, out_schema, flag, flag, bool)
    add_minimum_route(router, get_service, out_schema, "warranty", "warranty")
    add_common_routes(router, get_service, out_schema)


# Albums
get_album_service = service_dependency(AlbumService)
albums = APIRouter(prefix="/albums", tags=["albums"])
add_album_routes(albums, get_album_service, AlbumOut)
add_crud_routes(albums, get_album_service, AlbumCreate, AlbumUpdate, AlbumOut)

# Vinyls
get_vinyl_service = service_dependency(VinylService)
vinyls = APIRouter(prefix="/vinyls", tags=["vinyls"])
add_field_route(vinyls, get_vinyl_service, VinylOut, "size", "size", VinylSize)
add_field_route(vinyls, get_vinyl_service, VinylOut, "rpm", "rpm", VinylRpm)
add_album_routes(vinyls, get_vinyl_service, VinylOut)
add_crud_routes(vinyls, get_vinyl_service, VinylCreate, VinylUpdate, VinylOut)

# Headphones
get_headphone_service = service_dependency(HeadphoneService)
headphones = APIRouter(prefix="/headphones", tags=["headphones"])
add_field_route(headphones, get_headphone_service, HeadphoneOut, "brand", "brand", str)
add_field_route(headphones, get_headphone_service, HeadphoneOut, "anc", "anc", NoiseCanceling)
add_field_route(headphones, get_headphone_service, HeadphoneOut, "type", "headphone_type", HeadphoneType)
add_field_route(headphones, get_headphone_service, HeadphoneOut, "bluetooth", "bluetooth", bool)
add_field_route(headphones, get_headphone_service, HeadphoneOut, "wireless", "wireless", bool)
add_minimum_route(headphones, get_headphone_service, HeadphoneOut, "warranty", "warranty")
add_minimum_route(headphones, get_headphone_service, HeadphoneOut, "battery-life", "battery_life")
add_common_routes(headphones, get_headphone_service, HeadphoneOut)
add_crud_routes(headphones, get_headphone_service, HeadphoneCreate, HeadphoneUpdate, HeadphoneOut)

# Speakers
get_speaker_service = service_dependency(SpeakerService)
speakers = APIRouter(prefix="/speakers", tags=["speakers"])
add_field_route(speakers, get_speaker_service, SpeakerOut, "brand", "brand", str)
add_field_route(speakers, get_speaker_service, SpeakerOut, "power-type", "power_type", PowerType)
add_field_route(speakers, get_speaker_service, SpeakerOut, "resistance", "resistance", Resistance)
add_field_route(speakers, get_speaker_service, SpeakerOut, "bluetooth", "bluetooth", bool)
add_field_route(speakers, get_speaker_service, SpeakerOut, "wireless", "wireless", bool)
add_common_routes(speakers, get_speaker_service, SpeakerOut)
add_crud_routes(speakers, get_speaker_service, SpeakerCreate, SpeakerUpdate, SpeakerOut)

# Players
get_player_service = service_dependency(PlayerService)
players = APIRouter(prefix="/players", tags=["players"])
add_player_routes(players, get_player_service, PlayerOut)
add_crud_routes(players, get_player_service, PlayerCreate, PlayerUpdate, PlayerOut)

# Turntables
get_turntable_service = service_dependency(TurntableService)
turntables = APIRouter(prefix="/turntables", tags=["turntables"])
add_field_route(turntables, get_turntable_service, TurntableOut, "rpm", "rpm", VinylRpm)
add_field_route(turntables, get_turntable_service, TurntableOut, "traction", "traction", Traction)
add_field_route(turntables, get_turntable_service, TurntableOut, "mechanism", "mechanism", Mechanism)
add_player_routes(turntables, get_turntable_service, TurntableOut)
add_crud_routes(turntables, get_turntable_service, TurntableCreate, TurntableUpdate, TurntableOut)

# Portables
get_portable_service = service_dependency(PortableService)
portables = APIRouter(prefix="/portables", tags=["portables"])
add_field_route(portables, get_portable_service, PortableOut, "type", "portable_type", PortableType)
add_field_route(portables, get_portable_service, PortableOut, "power-type", "power_type", PowerType)
add_field_route(portables, get_portable_service, PortableOut, "resistance", "resistance", Resistance)
add_minimum_route(portables, get_portable_service, PortableOut, "battery-life", "battery_life")
add_player_routes(portables, get_portable_service, PortableOut)
add_crud_routes(portables, get_portable_service, PortableCreate, PortableUpdate, PortableOut)


# Products (every kind)
get_product_service = service_dependency(ProductService)
products = APIRouter(prefix="/products", tags=["products"])


@products.get("", response_model=List[ProductSummary])
def list_products(service: ProductService = Depends(get_product_service)):
    return [product_to_summary(p) for p in service.get_all()]


@products.get("/category/{category}", response_model=List[ProductSummary])
def find_by_category(category: ProductCategory, service: ProductService = Depends(get_product_service)):
    return [product_to_summary(p) for p in service.find_by_category(category)]


@products.get("/search", response_model=List[ProductSummary])
def search_products(
    name: str = Query(..., min_length=1),
    category: Optional[ProductCategory] = None,
    service: ProductService = Depends(get_product_service),
):
    return [product_to_summary(p) for p in service.search(name, category)]


@products.get("/price-range", response_model=List[ProductSummary])
def find_products_by_price_range(
    min_price: float = Query(..., alias="minPrice", ge=0),
    max_price: float = Query(..., alias="maxPrice", ge=0),
    service: ProductService = Depends(get_product_service),
):
    return [product_to_summary(p) for p in service.find_by_price_range(min_price, max_price)]


@products.get("/available", response_model=List[ProductSummary])
def get_available(service: ProductService = Depends(get_product_service)):
    return [product_to_summary(p) for p in service.get_in_stock()]


@products.get("/count/category/{category}", response_model=CountOut)
def count_by_category(category: ProductCategory, service: ProductService = Depends(get_product_service)):
    return CountOut(count=service.count_by_category(category))


@products.get("/{product_id}")
def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """Full detail of the product, shaped by its kind."""
    return product_to_out(service.get_by_id(product_id))


@products.delete("/{product_id}", status_code=204, response_class=Response)
def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    service.delete(product_id)
    return Response(status_code=204)


routers = [albums, vinyls, headphones, speakers, players, turntables, portables, products]
