"""
Cost calculator.
Converts a Price List product record into hourly/monthly/yearly estimates
and sums estimates into a total.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Union
import json
import logging
import math

from tfcost.core.config import config
from tfcost.domain.cost_models import CostEstimate
from tfcost.domain.resource_models import (
    EC2Specs,
    NormalizedResource,
    RDSSpecs,
    S3Specs,
)


logger = logging.getLogger(__name__)


HOURLY_UNITS = frozenset({"Hrs", "Hours", "hours"})
STORAGE_UNITS = frozenset({"GB-Mo", "GB-month"})
REQUEST_UNITS = frozenset({"Requests", "requests"})

DEFAULT_UNIT = "Hrs"

_CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def storage_size_gb(resource: NormalizedResource) -> int:
    """
    Storage size used for GB-month prices.

    Precedence: EC2 block device size, RDS allocated storage, S3
    estimated storage, otherwise zero.
    """
    specs = resource.specs
    if isinstance(specs, EC2Specs):
        return specs.storage.size_gb
    if isinstance(specs, RDSSpecs):
        return specs.storage_gb
    if isinstance(specs, S3Specs):
        return specs.estimated_storage_gb
    return 0


class CostCalculator:
    """Turns catalog price records into cost estimates."""

    def __init__(
        self,
        hours_per_month: int = config.HOURS_PER_MONTH,
        hours_per_year: int = config.HOURS_PER_YEAR,
        monthly_requests: int = config.ASSUMED_MONTHLY_REQUESTS,
    ):
        """
        Initialize calculator.

        Args:
            hours_per_month: Average hours in a month (730)
            hours_per_year: Hours in a year (8760)
            monthly_requests: Assumed request volume for per-request prices
        """
        self.hours_per_month = hours_per_month
        self.hours_per_year = hours_per_year
        self.monthly_requests = monthly_requests

    def compute_cost(
        self,
        price_record: Union[Dict[str, Any], str],
        resource: NormalizedResource,
    ) -> CostEstimate:
        """
        Compute the estimate for one resource from its catalog record.

        The first OnDemand term and its first price dimension are used.
        Unsupported units price at zero without failing. Any problem
        navigating the record yields a failed estimate instead of raising.

        Args:
            price_record: Product record from the catalog (dict or JSON text)
            resource: Resource being priced

        Returns:
            CostEstimate (failed=True with a reason when the record is unusable)
        """
        try:
            if isinstance(price_record, str):
                price_record = json.loads(price_record)

            terms = (price_record.get("terms") or {}).get("OnDemand")
            if not terms:
                return CostEstimate.failure("No on-demand pricing found")

            term = next(iter(terms.values()))
            price_dimensions = (term or {}).get("priceDimensions")
            if not price_dimensions:
                return CostEstimate.failure("No price dimensions found")

            dimension = next(iter(price_dimensions.values())) or {}
            price_per_unit = self._parse_price((dimension.get("pricePerUnit") or {}).get("USD"))
            unit = dimension.get("unit") or DEFAULT_UNIT

            assumptions: List[str] = []
            hourly_rate = self._hourly_rate(price_per_unit, unit, resource, assumptions)

            if isinstance(resource.specs, EC2Specs):
                hourly_rate *= resource.specs.count
                if resource.specs.count > 1:
                    assumptions.append(f"{resource.specs.count} instances")

            return CostEstimate(
                hourly=round2(hourly_rate),
                monthly=round2(hourly_rate * self.hours_per_month),
                yearly=round2(hourly_rate * self.hours_per_year),
                unit=unit,
                price_per_unit=price_per_unit,
                assumptions=assumptions,
            )

        except Exception as error:
            logger.error(
                f"Error calculating cost for {resource.source_resource_type}.{resource.name}: "
                f"{type(error).__name__}: {error}",
                exc_info=True
            )
            return CostEstimate.failure("Calculation error")

    def _parse_price(self, raw_price: Any) -> float:
        """Parse the USD unit price; unparseable values count as zero."""
        try:
            price = float(raw_price)
        except (TypeError, ValueError):
            return 0.0
        if math.isnan(price) or math.isinf(price) or price < 0:
            return 0.0
        return price

    def _hourly_rate(
        self,
        price_per_unit: float,
        unit: str,
        resource: NormalizedResource,
        assumptions: List[str],
    ) -> float:
        if unit in HOURLY_UNITS:
            assumptions.append(f"{self.hours_per_month} hours/month")
            return price_per_unit

        if unit in STORAGE_UNITS:
            size_gb = storage_size_gb(resource)
            assumptions.append(f"{size_gb} GB of storage")
            return price_per_unit * size_gb / self.hours_per_month

        if unit in REQUEST_UNITS:
            assumptions.append(f"{self.monthly_requests:,} requests/month")
            return price_per_unit * self.monthly_requests / self.hours_per_month

        # Not an error, but must not read as a genuinely free resource
        logger.warning(
            f"Unsupported pricing unit '{unit}' for "
            f"{resource.source_resource_type}.{resource.name}, priced at zero"
        )
        assumptions.append(f"Unsupported pricing unit '{unit}' priced at zero")
        return 0.0


def aggregate(estimates: Iterable[CostEstimate]) -> CostEstimate:
    """
    Sum estimates into a total, skipping failed ones.

    Args:
        estimates: Per-resource estimates

    Returns:
        Total estimate (never failed)
    """
    priced = [estimate for estimate in estimates if not estimate.failed]
    return CostEstimate(
        hourly=round2(math.fsum(estimate.hourly for estimate in priced)),
        monthly=round2(math.fsum(estimate.monthly for estimate in priced)),
        yearly=round2(math.fsum(estimate.yearly for estimate in priced)),
    )


def compute_cost(
    price_record: Union[Dict[str, Any], str],
    resource: NormalizedResource,
) -> CostEstimate:
    """Compute a cost estimate with default assumptions."""
    return CostCalculator().compute_cost(price_record, resource)
