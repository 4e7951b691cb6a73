"""
AWS Pricing API client.
Uses boto3 to query the official AWS Price List API.
"""
from typing import Dict, Any, List, Optional
import asyncio
import json
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from tfcost.core.config import config
from tfcost.domain.cost_models import PricingFilter
from tfcost.resilience.circuit_breaker import CircuitBreaker, get_circuit_breaker


logger = logging.getLogger(__name__)


class AWSPricingError(Exception):
    """Raised when AWS pricing lookup fails."""
    pass


class AWSPricingClient:
    """Client for querying the AWS Price List catalog using boto3."""

    def __init__(
        self,
        pricing_client: Any = None,
        circuit_breaker: CircuitBreaker = None,
    ):
        """
        Initialize AWS pricing client.

        Args:
            pricing_client: boto3 'pricing' client (creates new if None)
            circuit_breaker: Circuit breaker guarding the catalog (shared one if None)
        """
        if pricing_client is None:
            # No retries: one failed lookup is one failed estimate
            boto_config = Config(
                connect_timeout=config.PRICING_TIMEOUT_SECONDS,
                read_timeout=config.PRICING_TIMEOUT_SECONDS,
                retries={'max_attempts': 0}
            )
            pricing_client = boto3.client(
                'pricing',
                region_name=config.AWS_PRICING_REGION,
                config=boto_config
            )
        self.pricing_client = pricing_client
        self.circuit_breaker = circuit_breaker or get_circuit_breaker("aws_pricing")

    async def query(
        self,
        service_code: str,
        filters: List[PricingFilter]
    ) -> Optional[Dict[str, Any]]:
        """
        Query the catalog for the first product matching the filters.

        The boto3 call runs in a worker thread so lookups for several
        resources can proceed concurrently.

        Args:
            service_code: AWS service code (e.g., 'AmazonEC2')
            filters: TERM_MATCH filters, location first

        Returns:
            Decoded product record (with 'terms'), or None if nothing matched

        Raises:
            AWSPricingError: If the circuit is open or the API call fails
        """
        if not self.circuit_breaker.allow_request():
            raise AWSPricingError(
                "AWS pricing service temporarily unavailable (circuit breaker open)"
            )

        try:
            response = await asyncio.to_thread(
                self.pricing_client.get_products,
                ServiceCode=service_code,
                Filters=[pricing_filter.to_boto() for pricing_filter in filters],
                FormatVersion='aws_v1',
                MaxResults=1
            )

            price_list = response.get('PriceList') or []
            if not price_list:
                self.circuit_breaker.record_success()  # Not found is not a failure
                return None

            price_data = price_list[0]
            if isinstance(price_data, str):
                price_data = json.loads(price_data)

            self.circuit_breaker.record_success()
            return price_data

        except ClientError as error:
            self.circuit_breaker.record_failure()
            logger.error(f"AWS pricing API error for {service_code}: {error}")
            raise AWSPricingError(f"Failed to query AWS pricing: {str(error)}") from error
        except (BotoCoreError, ValueError) as error:
            self.circuit_breaker.record_failure()
            logger.error(f"Error parsing AWS pricing response for {service_code}: {error}")
            raise AWSPricingError(f"Failed to parse AWS pricing response: {str(error)}") from error
