"""
Tests for the AWS Price List client.
"""

import json

import pytest
from unittest.mock import Mock
from botocore.exceptions import ClientError, EndpointConnectionError
from tfcost.domain.cost_models import PricingFilter
from tfcost.pricing.aws_pricing_client import AWSPricingClient, AWSPricingError
from tfcost.resilience.circuit_breaker import CircuitBreaker, CircuitState


LOCATION = PricingFilter('location', 'US East (N. Virginia)')


@pytest.fixture
def boto_pricing():
    """Mock boto3 pricing client."""
    return Mock()


@pytest.fixture
def breaker():
    """Dedicated circuit breaker for one test."""
    return CircuitBreaker('test_pricing', failure_threshold=2, open_duration=60)


@pytest.mark.asyncio
async def test_query_sends_filters_and_decodes_record(boto_pricing, breaker, price_record):
    """Filters are sent in API shape and the first product is decoded."""
    record = price_record('0.0832')
    boto_pricing.get_products.return_value = {'PriceList': [json.dumps(record)]}
    client = AWSPricingClient(pricing_client=boto_pricing, circuit_breaker=breaker)

    result = await client.query('AmazonEC2', [LOCATION, PricingFilter('instanceType', 't3.large')])

    assert result == record
    boto_pricing.get_products.assert_called_once_with(
        ServiceCode='AmazonEC2',
        Filters=[
            {'Type': 'TERM_MATCH', 'Field': 'location', 'Value': 'US East (N. Virginia)'},
            {'Type': 'TERM_MATCH', 'Field': 'instanceType', 'Value': 't3.large'},
        ],
        FormatVersion='aws_v1',
        MaxResults=1,
    )


@pytest.mark.asyncio
async def test_empty_price_list_returns_none(boto_pricing, breaker):
    """No matching product is not an error."""
    boto_pricing.get_products.return_value = {'PriceList': []}
    client = AWSPricingClient(pricing_client=boto_pricing, circuit_breaker=breaker)

    assert await client.query('AmazonEC2', [LOCATION]) is None
    assert breaker.failure_count == 0


@pytest.mark.asyncio
async def test_client_error_raises_and_records_failure(boto_pricing, breaker):
    """API errors surface as AWSPricingError and count against the breaker."""
    boto_pricing.get_products.side_effect = ClientError(
        {'Error': {'Code': 'ThrottlingException', 'Message': 'Rate exceeded'}},
        'GetProducts'
    )
    client = AWSPricingClient(pricing_client=boto_pricing, circuit_breaker=breaker)

    with pytest.raises(AWSPricingError):
        await client.query('AmazonEC2', [LOCATION])
    assert breaker.failure_count == 1


@pytest.mark.asyncio
async def test_connection_error_raises(boto_pricing, breaker):
    """Transport errors surface as AWSPricingError."""
    boto_pricing.get_products.side_effect = EndpointConnectionError(endpoint_url='https://api.pricing')
    client = AWSPricingClient(pricing_client=boto_pricing, circuit_breaker=breaker)

    with pytest.raises(AWSPricingError):
        await client.query('AmazonEC2', [LOCATION])


@pytest.mark.asyncio
async def test_malformed_price_list_entry_raises(boto_pricing, breaker):
    """Undecodable product JSON surfaces as AWSPricingError."""
    boto_pricing.get_products.return_value = {'PriceList': ['{not json']}
    client = AWSPricingClient(pricing_client=boto_pricing, circuit_breaker=breaker)

    with pytest.raises(AWSPricingError):
        await client.query('AmazonEC2', [LOCATION])


@pytest.mark.asyncio
async def test_open_circuit_fails_fast(boto_pricing, breaker):
    """Once the breaker opens, the API is no longer called."""
    boto_pricing.get_products.side_effect = ClientError(
        {'Error': {'Code': 'ServiceUnavailable', 'Message': 'down'}},
        'GetProducts'
    )
    client = AWSPricingClient(pricing_client=boto_pricing, circuit_breaker=breaker)

    for _ in range(2):
        with pytest.raises(AWSPricingError):
            await client.query('AmazonEC2', [LOCATION])
    assert breaker.current_state() == CircuitState.OPEN

    boto_pricing.get_products.reset_mock()
    with pytest.raises(AWSPricingError, match='circuit breaker open'):
        await client.query('AmazonEC2', [LOCATION])
    boto_pricing.get_products.assert_not_called()
