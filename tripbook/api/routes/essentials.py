"""Essentials endpoints - transfers, packing list, wishlist, places and weather."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from tripbook.adapters.place import PlaceLookupClient
from tripbook.api.deps import get_container, get_lookup_client, get_weather_fetcher
from tripbook.models.common import PackingCategory
from tripbook.models.lookup import PlaceResult
from tripbook.models.trip import (
    PackingItem,
    TransferDraft,
    TransportLeg,
    WeatherCard,
    WishlistItem,
)
from tripbook.state.container import TripStateContainer
from tripbook.state.lookups import WeatherFetcher, lookup_wishlist_place, refresh_weather

router = APIRouter(prefix="/essentials", tags=["essentials"])

Container = Annotated[TripStateContainer, Depends(get_container)]
LookupClient = Annotated[PlaceLookupClient, Depends(get_lookup_client)]
Fetcher = Annotated[WeatherFetcher, Depends(get_weather_fetcher)]


class PackingCreate(BaseModel):
    name: str
    category: PackingCategory = PackingCategory.misc


class PlaceQuery(BaseModel):
    query: str


def _not_found(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")


# Transfers


@router.post("/transfers", response_model=TransportLeg, status_code=status.HTTP_201_CREATED)
async def create_transfer(draft: TransferDraft, container: Container) -> TransportLeg:
    leg = container.save_transfer(draft)
    assert leg is not None
    return leg


@router.put("/transfers/{transfer_id}", response_model=TransportLeg)
async def update_transfer(
    transfer_id: str, draft: TransferDraft, container: Container
) -> TransportLeg:
    leg = container.save_transfer(draft, transfer_id)
    if leg is None:
        raise _not_found("Transfer")
    return leg


@router.delete("/transfers/{transfer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_transfer(transfer_id: str, container: Container) -> Response:
    if not container.remove_transfer(transfer_id):
        raise _not_found("Transfer")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Packing list


@router.post("/packing", response_model=PackingItem, status_code=status.HTTP_201_CREATED)
async def add_packing(request: PackingCreate, container: Container) -> PackingItem:
    return container.add_packing(request.name, request.category)


@router.post("/packing/{item_id}/toggle", response_model=PackingItem)
async def toggle_packed(item_id: str, container: Container) -> PackingItem:
    item = container.toggle_packed(item_id)
    if item is None:
        raise _not_found("Packing item")
    return item


@router.delete("/packing/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_packing(item_id: str, container: Container) -> Response:
    if not container.remove_packing(item_id):
        raise _not_found("Packing item")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Wishlist and place search


@router.post("/places/search", response_model=PlaceResult)
async def search_place(request: PlaceQuery, client: LookupClient) -> PlaceResult:
    return await client.search_place(request.query)


@router.post("/wishlist", response_model=WishlistItem, status_code=status.HTTP_201_CREATED)
async def add_wishlist(request: PlaceQuery, container: Container, client: LookupClient) -> WishlistItem:
    """Add a place by name; its details are looked up and merged in."""
    item = await lookup_wishlist_place(container, request.query, client)
    if item is None:
        raise _not_found("Wishlist entry")
    return item


@router.delete("/wishlist/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_wishlist(item_id: str, container: Container) -> Response:
    if not container.remove_wishlist(item_id):
        raise _not_found("Wishlist entry")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Weather


@router.get("/weather", response_model=list[WeatherCard])
async def get_weather(container: Container) -> list[WeatherCard]:
    return container.state.weather_cache


@router.post("/weather/refresh", response_model=list[WeatherCard])
async def refresh(container: Container, fetch: Fetcher) -> list[WeatherCard]:
    return await refresh_weather(container, fetch)
