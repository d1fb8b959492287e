import logging

from drone_management import (
    Order, ORDER_PENDING, ORDER_APPROVED, ORDER_STATUSES,
)

logger = logging.getLogger(__name__)

DEMO_ORDERS = [
    Order("ORD-4821", "Medical Supplies", "2.4 kg", "Warehouse A", "Hospital B"),
    Order("ORD-4822", "Electronics", "1.8 kg", "Depot C", "Office Park D"),
    Order("ORD-4823", "Food Package", "3.1 kg", "Kitchen Hub", "Residential Zone E"),
    Order("ORD-4824", "Documents", "0.5 kg", "HQ Tower", "Branch Office F"),
    Order("ORD-4825", "Lab Samples", "1.2 kg", "Lab Center G", "Research Facility H"),
    Order("ORD-4826", "Spare Parts", "4.0 kg", "Factory I", "Maintenance Bay J"),
]


class OrderRegistry:
    """
    Ordered list of delivery orders and their lifecycle.
    Not thread-safe on its own; MissionEngine serializes access.
    """
    def __init__(self, orders=None):
        source = DEMO_ORDERS if orders is None else orders
        self._orders = [o.copy() for o in source]

    def _find(self, order_id):
        return next((o for o in self._orders if o.id == order_id), None)

    def get(self, order_id):
        order = self._find(order_id)
        return order.copy() if order else None

    def list(self):
        return [o.copy() for o in self._orders]

    def approve(self, order_id):
        """Pending -> Approved. Returns False (and changes nothing) for any other case."""
        order = self._find(order_id)
        if order is None:
            logger.info("[approve] unknown order %s", order_id)
            return False
        if order.status != ORDER_PENDING:
            logger.info("[approve] %s is %s, not Pending", order_id, order.status)
            return False
        order.status = ORDER_APPROVED
        logger.info("[approve] %s approved", order_id)
        return True

    def reject(self, order_id):
        """Removes the order. Idempotent: returns False when it was already gone."""
        before = len(self._orders)
        self._orders = [o for o in self._orders if o.id != order_id]
        removed = len(self._orders) < before
        if removed:
            logger.info("[reject] %s removed", order_id)
        return removed

    def add(self, order):
        if self._find(order.id) is not None:
            logger.warning("[add] duplicate order id %s, skipped", order.id)
            return False
        new_order = order.copy()
        new_order.status = ORDER_PENDING
        self._orders.append(new_order)
        logger.info("[add] %s: %s %s -> %s", new_order.id, new_order.package_type,
                    new_order.pickup, new_order.delivery)
        return True

    def set_status(self, order_id, status):
        if status not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status: {status}")
        order = self._find(order_id)
        if order is None:
            return False
        order.status = status
        return True

    def __len__(self):
        return len(self._orders)
