from typing import Annotated

from fastapi import Depends

from .logger import get_logger
from .services import OrderSimulator

logger = get_logger(__name__)


class OrderSimulatorDependency:
    """singleton for the order simulator"""

    _service = None

    @classmethod
    def get_instance(cls) -> OrderSimulator:
        """get or create service instance"""
        if cls._service is None:
            logger.info("creating order simulator instance")
            cls._service = OrderSimulator()
            logger.info(
                "order simulator created",
                work_min_ms=cls._service.work_min_ms,
                work_max_ms=cls._service.work_max_ms,
                failure_rate=cls._service.failure_rate,
            )

        return cls._service

    @classmethod
    def shutdown(cls):
        """cleanup"""
        if cls._service:
            logger.info("releasing order simulator")
            cls._service = None


def get_order_simulator() -> OrderSimulator:
    """dependency injection for fastapi endpoints"""
    return OrderSimulatorDependency.get_instance()


OrderSimulatorDep = Annotated[OrderSimulator, Depends(get_order_simulator)]
