"""
Restaurant API - Restaurant Service
====================================

What:  The five restaurant operations, each one store round trip.
Why:   Keeps driver details (result objects, PyMongoError) out of the routes.
How:   Every method opens the collection through the store gateway, runs a
       single operation, and translates the outcome:
           document / count > 0   → return value
           None / count == 0      → NotFoundError   (404)
           PyMongoError           → DatabaseError   (500, cause logged only)
Who:   Called by routes/restaurants.py after input validation has passed.

Read results are returned as stored: the collection has no schema, so a
document may carry extra keys or values of any type. Only `_id` is rewritten,
to its 24-char hex form.

Design Decision:
    RestaurantService is stateless; the store is passed in on every call.
    Tests hand it a store double whose collection is an AsyncMock.
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId
from pymongo.errors import PyMongoError

from restaurant_api.database import RestaurantStore
from restaurant_api.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)


def to_public(document: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a stored document with `_id` as a hex string."""
    public = dict(document)
    if isinstance(public.get("_id"), ObjectId):
        public["_id"] = str(public["_id"])
    return public


class RestaurantService:
    """
    Store operations for the restaurants collection.

    Error Handling Strategy:
        NotFoundError is raised outside the `except PyMongoError` scope so it
        propagates untouched. Driver failures are wrapped in DatabaseError
        with the exception type in `context`; no operation is retried.
    """

    async def list_restaurants(self, store: RestaurantStore) -> List[Dict[str, Any]]:
        """
        Fetch every restaurant in store-native order.

        No pagination: the whole collection is returned.
        """
        try:
            async with store.collection() as collection:
                records = await collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Store error listing restaurants: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve restaurants. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Fetched %d restaurants", len(records))
        return [to_public(record) for record in records]

    async def get_restaurant(self, store: RestaurantStore, restaurant_id: ObjectId) -> Dict[str, Any]:
        """
        Fetch a single restaurant by id.

        Raises:
            NotFoundError: No document has this id (→ 404)
            DatabaseError: Store unreachable or query failed (→ 500)
        """
        try:
            async with store.collection() as collection:
                record = await collection.find_one({"_id": restaurant_id})
        except PyMongoError as e:
            logger.error("Store error fetching restaurant %s: %s", restaurant_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the restaurant. Please try again.",
                context={"restaurant_id": str(restaurant_id), "error_type": type(e).__name__},
            )

        if record is None:
            raise NotFoundError(resource="Restaurant", resource_id=str(restaurant_id))
        return to_public(record)

    async def create_restaurant(self, store: RestaurantStore, fields: Dict[str, Any]) -> str:
        """
        Insert a validated restaurant.

        Args:
            store: Store gateway
            fields: Output of validate_new_restaurant (the four known fields)

        Returns:
            The store-assigned id as a hex string.
        """
        # insert_one adds `_id` to the dict it is given; keep the caller's copy clean
        document = dict(fields)
        try:
            async with store.collection() as collection:
                result = await collection.insert_one(document)
        except PyMongoError as e:
            logger.error("Store error adding restaurant: %s", str(e))
            raise DatabaseError(
                message="Error adding restaurant",
                context={"error_type": type(e).__name__},
            )

        restaurant_id = str(result.inserted_id)
        logger.info("Restaurant %s added", restaurant_id)
        return restaurant_id

    async def update_restaurant(
        self,
        store: RestaurantStore,
        restaurant_id: ObjectId,
        fields: Dict[str, Any],
    ) -> bool:
        """
        Apply the supplied fields to an existing restaurant.

        Only keys present in `fields` are `$set`; absent fields keep their
        stored values. A document that matches but already holds the same
        values is NOT treated as missing.

        With no fields to apply, MongoDB rejects an empty `$set`, so the
        single round trip becomes an existence check instead.

        Returns:
            True if the stored document changed, False if it was already equal.

        Raises:
            NotFoundError: No document has this id (→ 404)
            DatabaseError: Store unreachable or update failed (→ 500)
        """
        try:
            async with store.collection() as collection:
                if fields:
                    result = await collection.update_one({"_id": restaurant_id}, {"$set": fields})
                    matched, modified = result.matched_count, result.modified_count
                else:
                    existing = await collection.find_one({"_id": restaurant_id}, {"_id": 1})
                    matched, modified = (1 if existing is not None else 0), 0
        except PyMongoError as e:
            logger.error("Store error updating restaurant %s: %s", restaurant_id, str(e))
            raise DatabaseError(
                message="Could not update the restaurant. Please try again.",
                context={"restaurant_id": str(restaurant_id), "error_type": type(e).__name__},
            )

        if matched == 0:
            raise NotFoundError(resource="Restaurant", resource_id=str(restaurant_id))

        logger.info(
            "Restaurant %s updated (fields=%s, modified=%s)",
            restaurant_id,
            sorted(fields),
            bool(modified),
        )
        return bool(modified)

    async def delete_restaurant(self, store: RestaurantStore, restaurant_id: ObjectId) -> None:
        """
        Remove a restaurant by id.

        Deleting an id twice yields NotFoundError the second time and has no
        further effect on the store.
        """
        try:
            async with store.collection() as collection:
                result = await collection.delete_one({"_id": restaurant_id})
        except PyMongoError as e:
            logger.error("Store error deleting restaurant %s: %s", restaurant_id, str(e))
            raise DatabaseError(
                message="Could not delete the restaurant. Please try again.",
                context={"restaurant_id": str(restaurant_id), "error_type": type(e).__name__},
            )

        if result.deleted_count == 0:
            raise NotFoundError(resource="Restaurant", resource_id=str(restaurant_id))
        logger.info("Restaurant %s deleted", restaurant_id)


# Stateless; one shared instance
restaurant_service = RestaurantService()
