"""simulated business workload"""

from .order_simulator import CUSTOMER_TYPES, OrderSimulator

__all__ = ["CUSTOMER_TYPES", "OrderSimulator"]
