"""
Tests for the parse and pricing API endpoints.
"""

import pytest
from unittest.mock import patch
from tfcost.core.config import Config, config
from tfcost.services.cost_estimator import CostEstimator, CostEstimatorError


def test_pricing_status(client):
    """The status endpoint reports readiness."""
    response = client.get('/api/pricing')

    assert response.status_code == 200
    assert response.json() == {'status': 'ok', 'message': 'Pricing API is ready'}


def test_parse_endpoint_returns_resources(client, sample_terraform):
    """Parsing returns normalized resources without pricing."""
    response = client.post('/api/terraform/parse', json={'terraform_text': sample_terraform})

    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'ok'
    assert [r['kind'] for r in data['resources']] == [
        'EC2', 'RDS', 'S3', 'Lambda', 'DynamoDB', 'Other'
    ]
    assert data['service_codes'] == [
        'AWSLambda', 'AmazonDynamoDB', 'AmazonEC2', 'AmazonRDS', 'AmazonS3', 'AmazonVPC'
    ]
    assert data['resources'][1]['pricing_dimensions']['deploymentOption'] == 'Multi-AZ'


@pytest.mark.parametrize('path', ['/api/terraform/parse', '/api/pricing'])
def test_empty_text_is_rejected(client, path):
    """Blank Terraform text is a 400."""
    response = client.post(path, json={'terraform_text': '   \n'})
    assert response.status_code == 400


@pytest.mark.parametrize('path', ['/api/terraform/parse', '/api/pricing'])
def test_oversized_text_is_rejected(client, path, monkeypatch):
    """Terraform text over the size cap is a 413."""
    monkeypatch.setattr(config, 'MAX_TERRAFORM_TEXT_BYTES', 64)
    response = client.post(path, json={'terraform_text': 'resource "aws_s3_bucket" "b" {}\n' * 10})
    assert response.status_code == 413


def test_missing_text_field_is_rejected(client):
    """Requests without terraform_text fail validation."""
    response = client.post('/api/terraform/parse', json={})
    assert response.status_code == 422


def test_pricing_endpoint_returns_report(client, sample_terraform, fake_catalog):
    """Pricing returns per-resource costs, totals and unpriced resources."""
    estimator = CostEstimator(catalog=fake_catalog)

    with patch('tfcost.api.pricing.CostEstimator', return_value=estimator):
        response = client.post(
            '/api/pricing',
            json={'terraform_text': sample_terraform, 'region': 'us-east-1'}
        )

    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'ok'
    assert data['currency'] == 'USD'
    assert data['region'] == 'us-east-1'
    assert data['total']['monthly'] == 549.71
    assert data['resources'][0]['resource_type'] == 'EC2'
    assert data['resources'][0]['pricing']['monthly'] == 182.21
    assert data['resources'][5]['pricing']['failed'] is True
    assert data['unpriced_resources'][0]['terraform_type'] == 'aws_vpc'


def test_pricing_endpoint_defaults_region(client, fake_catalog):
    """Region defaults to us-east-1."""
    estimator = CostEstimator(catalog=fake_catalog)

    with patch('tfcost.api.pricing.CostEstimator', return_value=estimator):
        response = client.post(
            '/api/pricing',
            json={'terraform_text': 'resource "aws_s3_bucket" "b" {\n}\n'}
        )

    assert response.json()['region'] == 'us-east-1'


def test_pricing_catalog_unavailable_returns_503(client, sample_terraform):
    """A catalog that cannot be created is a 503."""
    with patch('tfcost.api.pricing.CostEstimator', side_effect=CostEstimatorError('no client')):
        response = client.post('/api/pricing', json={'terraform_text': sample_terraform})

    assert response.status_code == 503
    assert response.json()['detail'] == 'Pricing catalog unavailable'


def test_unexpected_error_returns_500(client, sample_terraform):
    """Unexpected failures are a generic 500."""
    with patch('tfcost.api.pricing.CostEstimator', side_effect=RuntimeError('boom')):
        response = client.post('/api/pricing', json={'terraform_text': sample_terraform})

    assert response.status_code == 500
    assert 'boom' not in response.text


def test_config_rejects_unknown_log_level(monkeypatch):
    """Invalid log levels fail validation."""
    monkeypatch.setattr(Config, 'LOG_LEVEL', 'LOUD')
    with pytest.raises(ValueError):
        Config.validate()


def test_config_defaults_are_valid():
    """Default configuration validates."""
    Config.validate()
    assert config.HOURS_PER_MONTH == 730
    assert config.HOURS_PER_YEAR == 8760
