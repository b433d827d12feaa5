"""
Restaurant API - Restaurant Route Handlers
===========================================

What:  The five CRUD routes for the restaurants collection.
How:   Each handler validates its input (path id, body fields), then makes
       exactly one service call. Validation runs before the service is
       invoked, so a rejected request never opens a store connection.
       Errors are raised, never caught here; main.py's handlers format them.

Route Inventory:
    GET    /restaurants        list all
    GET    /restaurant/{id}    get one
    POST   /restaurant         create
    PUT    /restaurant/{id}    partial update
    DELETE /restaurant/{id}    delete
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends

from restaurant_api.database import RestaurantStore, get_store
from restaurant_api.schemas.restaurant import (
    CreateResponse,
    ErrorResponse,
    MessageResponse,
    RestaurantResponse,
    UpdateResponse,
    ValidationErrorResponse,
)
from restaurant_api.services.restaurant_service import restaurant_service
from restaurant_api.services.validation import (
    parse_restaurant_id,
    validate_new_restaurant,
    validate_restaurant_update,
)

router = APIRouter(tags=["Restaurants"])

_BAD_REQUEST = {400: {"description": "Validation failed", "model": ValidationErrorResponse}}
_NOT_FOUND = {404: {"description": "Restaurant not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}


@router.get(
    "/restaurants",
    response_model=None,
    responses={
        200: {"description": "Every stored restaurant", "model": List[RestaurantResponse]},
        **_SERVER_ERROR,
    },
    summary="List all restaurants",
)
async def list_restaurants(store: RestaurantStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """
    What:  Returns the whole collection in store order; there is no pagination.
    Why:   Documents are passed through as stored. One record of an unexpected
           shape must not turn the listing into a 500 for every client.
    """
    return await restaurant_service.list_restaurants(store)


@router.get(
    "/restaurant/{restaurant_id}",
    response_model=None,
    responses={
        200: {"description": "The stored restaurant", "model": RestaurantResponse},
        **_BAD_REQUEST,
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Get a restaurant by ID",
)
async def get_restaurant(
    restaurant_id: str,
    store: RestaurantStore = Depends(get_store),
) -> Dict[str, Any]:
    """
    What:  Fetch one restaurant, every stored key included.
    Why:   A malformed id is rejected with 400 before the store is contacted;
           a well-formed id with no document is a 404.
    """
    oid = parse_restaurant_id(restaurant_id)
    return await restaurant_service.get_restaurant(store, oid)


@router.post(
    "/restaurant",
    status_code=201,
    response_model=CreateResponse,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Add a restaurant",
    description=(
        "Creates a restaurant from name, image, menu and rating. All four fields "
        "are required; every failing rule is reported in one 400 response."
    ),
)
async def create_restaurant(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: RestaurantStore = Depends(get_store),
) -> CreateResponse:
    """
    Validate the body, then insert one document.

    Unknown keys in the body are ignored; only the four restaurant fields are
    stored.
    """
    fields = validate_new_restaurant(payload)
    restaurant_id = await restaurant_service.create_restaurant(store, fields)
    return CreateResponse(id=restaurant_id)


@router.put(
    "/restaurant/{restaurant_id}",
    response_model=UpdateResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Update some fields of a restaurant",
    description=(
        "Any subset of name, image, menu and rating. Supplied fields are validated "
        "with the same rules as create; absent fields are left unchanged."
    ),
)
async def update_restaurant(
    restaurant_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    store: RestaurantStore = Depends(get_store),
) -> UpdateResponse:
    """
    What:  Set the supplied fields on an existing restaurant.
    Why:   The id and the body are both validated before the store is opened,
           so a request with a bad id and a bad body reports only the id.
           An empty body is accepted and only checks that the id exists.
    """
    oid = parse_restaurant_id(restaurant_id)
    fields = validate_restaurant_update(payload)
    modified = await restaurant_service.update_restaurant(store, oid, fields)
    return UpdateResponse(modified=modified)


@router.delete(
    "/restaurant/{restaurant_id}",
    response_model=MessageResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a restaurant",
)
async def delete_restaurant(
    restaurant_id: str,
    store: RestaurantStore = Depends(get_store),
) -> MessageResponse:
    """
    What:  Remove a restaurant by id.
    Why:   Not idempotent at the HTTP level: a second delete of the same id
           answers 404.
    """
    oid = parse_restaurant_id(restaurant_id)
    await restaurant_service.delete_restaurant(store, oid)
    return MessageResponse(message="Restaurant deleted successfully")
