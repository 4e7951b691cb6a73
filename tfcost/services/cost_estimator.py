"""
Cost estimator service.
Prices normalized Terraform resources against the AWS Price List catalog.
"""
from typing import Any, Optional, Sequence
from datetime import datetime, timezone
import asyncio
import logging

from tfcost.core.config import config
from tfcost.domain.cost_models import CostEstimate, PricingReport, ResourcePricing
from tfcost.domain.resource_models import NormalizedResource, UNKNOWN_SERVICE_CODE
from tfcost.parsing.terraform_parser import TerraformParser
from tfcost.pricing.aws_pricing_client import AWSPricingClient, AWSPricingError
from tfcost.pricing.cost_calculator import CostCalculator, aggregate
from tfcost.pricing.filter_builder import PricingFilterBuilder


logger = logging.getLogger(__name__)


class CostEstimatorError(Exception):
    """Raised when cost estimation cannot start."""
    pass


class CostEstimator:
    """
    Service for estimating costs of parsed Terraform resources.

    Each resource is priced independently: a catalog failure, timeout or
    malformed record for one resource becomes a failed estimate for that
    resource only and never affects its siblings or the total.
    """

    def __init__(
        self,
        catalog: Any = None,
        filter_builder: PricingFilterBuilder = None,
        calculator: CostCalculator = None,
        parser: TerraformParser = None,
        query_timeout: Optional[float] = None,
    ):
        """
        Initialize cost estimator.

        Args:
            catalog: Object with `async query(service_code, filters)`
                     (creates AWSPricingClient if None)
            filter_builder: Pricing filter builder (creates default if None)
            calculator: Cost calculator (creates default if None)
            parser: Terraform parser for `estimate_text` (creates default if None)
            query_timeout: Per-resource deadline in seconds (defaults to config)
        """
        if catalog is None:
            try:
                catalog = AWSPricingClient()
            except Exception as error:
                raise CostEstimatorError(
                    f"AWS pricing client unavailable: {str(error)}"
                ) from error
        self.catalog = catalog
        self.filter_builder = filter_builder or PricingFilterBuilder()
        self.calculator = calculator or CostCalculator()
        self.parser = parser or TerraformParser()
        self.query_timeout = query_timeout or config.PRICING_QUERY_TIMEOUT_SECONDS

    async def price(self, resource: NormalizedResource, region: str) -> CostEstimate:
        """
        Price one resource.

        Args:
            resource: Normalized resource
            region: AWS region code

        Returns:
            CostEstimate; failures come back as failed estimates, never raised
        """
        resource_label = f"{resource.source_resource_type}.{resource.name}"
        filters = self.filter_builder.build_filters(resource, region)

        # Only the location filter means there is nothing to look up
        if len(filters) <= 1 or resource.service_code == UNKNOWN_SERVICE_CODE:
            logger.info(f"No pricing filters available for {resource_label}")
            return CostEstimate.failure("No pricing filters available")

        try:
            price_record = await asyncio.wait_for(
                self.catalog.query(resource.service_code, filters),
                timeout=self.query_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Pricing lookup timed out for {resource_label}")
            return CostEstimate.failure("Pricing lookup timed out")
        except AWSPricingError as error:
            logger.warning(f"Pricing error for {resource_label}: {error}")
            return CostEstimate.failure(f"Unable to fetch pricing: {str(error)}")
        except Exception as error:
            logger.error(
                f"Unexpected error pricing {resource_label}: {type(error).__name__}: {error}",
                exc_info=True
            )
            return CostEstimate.failure("Unable to fetch pricing")

        if not price_record:
            logger.info(f"No pricing data found for {resource_label}")
            return CostEstimate.failure("No pricing data found")

        return self.calculator.compute_cost(price_record, resource)

    async def estimate(
        self,
        resources: Sequence[NormalizedResource],
        region: Optional[str] = None
    ) -> PricingReport:
        """
        Price all resources concurrently and total them.

        Args:
            resources: Normalized resources, in the order they should be reported
            region: AWS region code (defaults to config.DEFAULT_REGION)

        Returns:
            PricingReport with one entry per resource, in input order
        """
        region = region or config.DEFAULT_REGION
        estimates = await asyncio.gather(
            *(self.price(resource, region) for resource in resources)
        )

        items = [
            ResourcePricing(resource=resource, estimate=estimate)
            for resource, estimate in zip(resources, estimates)
        ]
        failed_count = sum(1 for estimate in estimates if estimate.failed)
        logger.info(
            f"Priced {len(items) - failed_count}/{len(items)} resources in {region}"
        )

        return PricingReport(
            resources=items,
            total=aggregate(estimates),
            region=region,
            pricing_timestamp=datetime.now(timezone.utc),
        )

    async def estimate_text(
        self,
        terraform_text: str,
        region: Optional[str] = None
    ) -> PricingReport:
        """
        Parse Terraform text and price every resource found.

        Args:
            terraform_text: Raw Terraform configuration
            region: AWS region code (defaults to config.DEFAULT_REGION)

        Returns:
            PricingReport for the parsed resources
        """
        parse_result = self.parser.parse(terraform_text)
        return await self.estimate(parse_result.resources, region)

