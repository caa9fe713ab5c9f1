import asyncio
import random

from ..config import settings
from ..core.exceptions import SimulatedFailureError
from ..logger import get_logger
from ..models import OrderBatch
from ..observability.telemetry import get_tracer

logger = get_logger(__name__)
tracer = get_tracer(__name__)

CUSTOMER_TYPES = ("premium", "standard")


class OrderSimulator:
    """
    synthetic workload behind /metrics-test

    draws a work duration, an order count, a revenue and a customer type per
    order. randomness comes from an injectable `random.Random`
    """

    def __init__(
        self,
        work_min_ms: int | None = None,
        work_max_ms: int | None = None,
        max_orders: int | None = None,
        max_revenue: float | None = None,
        failure_rate: float | None = None,
        rng: random.Random | None = None,
    ):
        self.work_min_ms = settings.work_min_ms if work_min_ms is None else work_min_ms
        self.work_max_ms = settings.work_max_ms if work_max_ms is None else work_max_ms
        self.max_orders = settings.max_orders if max_orders is None else max_orders
        self.max_revenue = settings.max_revenue if max_revenue is None else max_revenue
        self.failure_rate = (
            settings.simulated_failure_rate if failure_rate is None else failure_rate
        )
        self.rng = rng or random.Random()

    async def simulate_work(self) -> int:
        """sleep for a random duration and return it in milliseconds"""
        duration_ms = self.rng.randrange(self.work_min_ms, self.work_max_ms)
        await asyncio.sleep(duration_ms / 1000)

        if self.failure_rate and self.rng.random() < self.failure_rate:
            raise SimulatedFailureError(
                "simulated work failed", {"duration_ms": duration_ms}
            )

        return duration_ms

    def generate_orders(self) -> OrderBatch:
        """draw a batch of synthetic orders"""
        with tracer.start_as_current_span("order_simulator.generate_orders") as span:
            count = self.rng.randrange(1, self.max_orders)
            revenue = self.rng.random() * self.max_revenue
            customer_types = [self.rng.choice(CUSTOMER_TYPES) for _ in range(count)]

            span.set_attribute("orders.count", count)

        return OrderBatch(count=count, revenue=revenue, customer_types=customer_types)
