from __future__ import annotations

import logging

from car_marketplace.domain.car import FALLBACK_FILTER_OPTIONS, FilterOptions
from car_marketplace.domain.errors import InternalError
from car_marketplace.domain.result import ActionResult
from car_marketplace.ports.car_catalog_repository import CarCatalogRepository

logger = logging.getLogger(__name__)


class GetCarFilters:
    """
    Filter vocabulary for the catalog page.

    The filter panel must render even when the database is unreachable, so
    by default a repository failure is answered with the fallback vocabulary
    instead of an error. Demo mode always answers with the fallback.
    """

    def __init__(
        self,
        car_catalog_repository: CarCatalogRepository,
        demo_mode: bool = False,
        fallback_on_error: bool = True,
    ) -> None:
        self._repository = car_catalog_repository
        self._demo_mode = demo_mode
        self._fallback_on_error = fallback_on_error

    def execute(self) -> ActionResult[FilterOptions]:
        if self._demo_mode:
            return ActionResult.ok(FALLBACK_FILTER_OPTIONS)

        try:
            options = self._repository.filter_options()
        except Exception as exc:
            if not self._fallback_on_error:
                logger.exception("Error fetching car filters")
                return ActionResult.fatal(InternalError(f"Error fetching car filters: {exc}"))

            logger.warning(
                "Error fetching car filters, serving fallback options",
                extra={"error": str(exc)},
            )
            return ActionResult.ok(FALLBACK_FILTER_OPTIONS)

        return ActionResult.ok(options)
