"""Repository interfaces and implementations for work order persistence."""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Mapping, Optional

from bson.errors import BSONError
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from work_orders.domain.models import WorkOrder
from work_orders.infrastructure.connection import ConnectionManager, ConnectionOptions
from work_orders.infrastructure.mapping import (
    ORDER_ID_FIELD,
    PROJECTION,
    TIMESTAMP_FIELD,
    degraded_fields,
    from_document,
    inspect_document,
    to_document,
)

FETCH_LIMIT = 10


class DataStore(ABC):
    """Abstract work order store."""

    @abstractmethod
    def get_data(self) -> list[Optional[WorkOrder]]:
        """Get the most recent orders, newest first. Unreadable records are None."""
        ...

    @abstractmethod
    def get_data_by_id(self, order_id: str) -> Optional[WorkOrder]:
        """Get a single order by its id. Returns None if not found."""
        ...

    @abstractmethod
    def create_new(self, data: WorkOrder) -> Optional[WorkOrder]:
        """Insert a new order. Returns the stored order, or None on failure."""
        ...

    @abstractmethod
    def update(self, data: WorkOrder) -> Optional[WorkOrder]:
        """Replace the order with the same id. Returns the order, or None on failure."""
        ...

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """Delete orders with the given id. False only if the delete failed."""
        ...


class MongoDataStore(DataStore):
    """MongoDB implementation of the work order store."""

    def __init__(self, manager: ConnectionManager, logger: logging.Logger | None = None):
        self._manager = manager
        self._logger = logger or logging.getLogger("work-orders")

    @classmethod
    def from_options(
        cls,
        options: Optional[ConnectionOptions],
        logger: logging.Logger | None = None,
    ) -> "MongoDataStore":
        """Build a store with its own connection pool. Raises ConfigurationError."""
        return cls(ConnectionManager(options, logger), logger)

    def _map(self, doc: Mapping[str, Any]) -> WorkOrder:
        if degraded := degraded_fields(inspect_document(doc)):
            self._logger.warning(
                f"Order {doc.get(ORDER_ID_FIELD)!r} has missing or malformed fields, "
                f"using defaults: {', '.join(degraded)}"
            )
        return from_document(doc)

    def get_data(self) -> list[Optional[WorkOrder]]:
        collection = self._manager.collection()
        try:
            cursor = iter(
                collection.find({}, PROJECTION)
                .sort(TIMESTAMP_FIELD, DESCENDING)
                .limit(FETCH_LIMIT)
            )
        except PyMongoError as e:
            self._logger.error(f"Error fetching work orders: {e}")
            return []

        # one slot per record, so a failed record is None rather than dropped
        orders: list[Optional[WorkOrder]] = []
        while len(orders) < FETCH_LIMIT:
            try:
                doc = next(cursor)
            except StopIteration:
                break
            except PyMongoError as e:
                if not orders:
                    self._logger.error(f"Error fetching work orders: {e}")
                    return []
                self._logger.error(f"Error reading work order {len(orders) + 1}: {e}")
                orders.append(None)
                continue
            except BSONError as e:
                self._logger.error(f"Error decoding work order {len(orders) + 1}: {e}")
                orders.append(None)
                continue

            try:
                orders.append(self._map(doc))
            except (AttributeError, TypeError, ValueError) as e:
                self._logger.error(f"Error reading work order document {doc!r}: {e}")
                orders.append(None)
        return orders

    def get_data_by_id(self, order_id: str) -> Optional[WorkOrder]:
        order_id = order_id.strip()
        if not order_id:
            self._logger.info("No order id given")
            return None

        collection = self._manager.collection()
        try:
            doc = collection.find_one({ORDER_ID_FIELD: order_id}, PROJECTION)
        except (PyMongoError, BSONError) as e:
            self._logger.error(f"Error finding order with id {order_id}: {e}")
            return None

        if doc is None:
            self._logger.info(f"No orders found with id {order_id}")
            return None

        try:
            return self._map(doc)
        except (AttributeError, TypeError, ValueError) as e:
            self._logger.error(f"Error reading order with id {order_id}: {e}")
            return None

    def create_new(self, data: WorkOrder) -> Optional[WorkOrder]:
        try:
            data.validate()
        except ValueError as e:
            self._logger.error(f"Refusing to insert work order {data}: {e}")
            return None

        doc = to_document(data)
        collection = self._manager.collection()
        self._logger.debug(f"Inserting work order {data.order_id}")
        try:
            # insert_one adds _id to the dict it is given
            collection.insert_one(dict(doc))
        except PyMongoError as e:
            self._logger.error(f"Error inserting work order {data}: {e}")
            return None

        self._logger.info(f"Inserted work order {data.order_id}")
        return from_document(doc)

    # TODO: support partial updates with $set instead of replacing the document
    def update(self, data: WorkOrder) -> Optional[WorkOrder]:
        try:
            data.validate()
        except ValueError as e:
            self._logger.error(f"Refusing to update work order {data}: {e}")
            return None

        collection = self._manager.collection()
        try:
            result = collection.replace_one(
                {ORDER_ID_FIELD: data.order_id}, to_document(data)
            )
        except PyMongoError as e:
            self._logger.error(f"Error updating work order {data.order_id}: {e}")
            return None

        if result.matched_count == 0:
            self._logger.warning(f"No orders found to update with id {data.order_id}")
        return data

    def delete(self, order_id: str) -> bool:
        order_id = order_id.strip()
        collection = self._manager.collection()
        try:
            result = collection.delete_many({ORDER_ID_FIELD: order_id})
        except PyMongoError as e:
            self._logger.error(f"Error deleting work order {order_id}: {e}")
            return False

        self._logger.debug(f"Deleted {result.deleted_count} work order(s) with id {order_id}")
        return True


class InMemoryDataStore(DataStore):
    """Dictionary-backed store with the same semantics as MongoDataStore."""

    def __init__(self, logger: logging.Logger | None = None):
        self._orders: dict[str, WorkOrder] = {}
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger("work-orders")

    def get_data(self) -> list[Optional[WorkOrder]]:
        with self._lock:
            orders = sorted(self._orders.values(), key=lambda o: o.timestamp, reverse=True)
            return [replace(o) for o in orders[:FETCH_LIMIT]]

    def get_data_by_id(self, order_id: str) -> Optional[WorkOrder]:
        with self._lock:
            order = self._orders.get(order_id.strip())
        if order is None:
            self._logger.info(f"No orders found with id {order_id}")
            return None
        return replace(order)

    def create_new(self, data: WorkOrder) -> Optional[WorkOrder]:
        try:
            data.validate()
        except ValueError as e:
            self._logger.error(f"Refusing to insert work order {data}: {e}")
            return None
        with self._lock:
            self._orders[data.order_id] = replace(data)
        return replace(data)

    def update(self, data: WorkOrder) -> Optional[WorkOrder]:
        try:
            data.validate()
        except ValueError as e:
            self._logger.error(f"Refusing to update work order {data}: {e}")
            return None
        with self._lock:
            if data.order_id in self._orders:
                self._orders[data.order_id] = replace(data)
            else:
                self._logger.warning(f"No orders found to update with id {data.order_id}")
        return data

    def delete(self, order_id: str) -> bool:
        order_id = order_id.strip()
        with self._lock:
            self._orders.pop(order_id, None)
        return True
