import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional
from services.billing import BillingEngine
from services.menu import MenuCatalog
from services.orders import OrderLifecycleManager
from services.reservations import ReservationManager
from services.staff import StaffDirectory
from services.stats import WaiterStatistics
from services.tables import TableLifecycleManager
from storage.base import EntityStore
from storage.memory import MemoryStore
from storage.sql import SqlStore
from utils import config
from utils.ids import UuidIdGenerator
from utils.seed_data import seed_store
from utils.timeutils import utc_now

logger = logging.getLogger(__name__)


def store_from_url(url: str) -> EntityStore:
    """Empty url keeps everything in memory; anything else is a SQLAlchemy url."""
    if not url:
        return MemoryStore()
    return SqlStore(url)


class RestaurantCore:
    """Wires one store, one id generator and one clock into every manager."""

    def __init__(self, store: Optional[EntityStore] = None, id_generator=None,
                 clock: Optional[Callable[[], datetime]] = None,
                 tax_rate: Decimal = config.TAX_RATE,
                 default_reservation_minutes: int = config.DEFAULT_RESERVATION_MINUTES):
        self.store = store if store is not None else store_from_url(config.DATABASE_URL)
        self.id_generator = id_generator or UuidIdGenerator()
        self.clock = clock or utc_now

        self.menu = MenuCatalog(self.store, self.id_generator)
        self.tables = TableLifecycleManager(self.store, self.id_generator)
        self.reservations = ReservationManager(
            self.store, self.tables, self.id_generator, self.clock, default_reservation_minutes
        )
        self.orders = OrderLifecycleManager(self.store, self.tables, self.id_generator, self.clock)
        self.billing = BillingEngine(self.store, self.orders, self.id_generator, self.clock, tax_rate)
        self.staff = StaffDirectory(self.store)
        self.waiter_stats = WaiterStatistics(self.store, self.clock)

    def reset(self, seed: bool = True):
        """Drop all state and optionally reload the sample data."""
        self.store.reset()
        if seed:
            seed_store(self.store)
        logger.info(f"Store reset (seeded={seed})")

    def close(self):
        self.store.close()
