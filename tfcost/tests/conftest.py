"""
Shared pytest fixtures for tfcost tests.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient
from tfcost.main import app
from tfcost.resilience.circuit_breaker import reset_circuit_breakers


SAMPLE_TERRAFORM = '''
provider "aws" {
  region = "us-east-1"
}

resource "aws_instance" "web_server" {
  count         = 3
  ami           = "ami-0c55b159cbfafe1f0"

  root_block_device {
    volume_size = 50
    volume_type = "gp3"
  }

  instance_type = "t3.large"
}

resource "aws_db_instance" "main" {
  identifier        = "app-db"
  engine            = "postgres"
  engine_version    = "15.4"
  instance_class    = "db.r5.large"
  allocated_storage = 500
  multi_az          = true
}

resource "aws_s3_bucket" "assets" {
  bucket = "app-assets"
}

resource "aws_lambda_function" "worker" {
  function_name = "worker"
  runtime       = "python3.12"
  memory_size   = 512
  timeout       = 30
}

resource "aws_dynamodb_table" "sessions" {
  name           = "sessions"
  billing_mode   = "PROVISIONED"
  read_capacity  = 5
  write_capacity = 5
  hash_key       = "id"

  attribute {
    name = "id"
    type = "S"
  }
}

resource "aws_vpc" "main" {
  cidr_block = "10.0.0.0/16"
}
'''


def make_price_record(price_usd, unit="Hrs", sku="SKU123"):
    """Build a Price List product record with a single OnDemand term."""
    return {
        "product": {"sku": sku, "attributes": {}},
        "terms": {
            "OnDemand": {
                f"{sku}.JRTCKXETXF": {
                    "priceDimensions": {
                        f"{sku}.JRTCKXETXF.6YS6EN2CT7": {
                            "unit": unit,
                            "pricePerUnit": {"USD": price_usd},
                            "description": "test price",
                        }
                    },
                    "sku": sku,
                }
            }
        },
    }


class FakeCatalog:
    """In-memory pricing catalog keyed by service code."""

    def __init__(self, records=None, errors=None):
        self.records = records or {}
        self.errors = errors or {}
        self.calls = []

    async def query(self, service_code, filters):
        self.calls.append((service_code, list(filters)))
        if service_code in self.errors:
            raise self.errors[service_code]
        return self.records.get(service_code)


@pytest.fixture(autouse=True)
def fresh_circuit_breakers():
    """Keep shared circuit breaker state from leaking between tests."""
    reset_circuit_breakers()
    yield
    reset_circuit_breakers()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def sample_terraform():
    """Terraform configuration covering every priced resource kind."""
    return SAMPLE_TERRAFORM


@pytest.fixture
def price_record():
    """Factory for catalog price records."""
    return make_price_record


@pytest.fixture
def catalog_factory():
    """Factory for in-memory catalogs."""
    return FakeCatalog


@pytest.fixture
def fake_catalog():
    """Catalog with hourly EC2/RDS, GB-month S3, per-request Lambda prices."""
    return FakeCatalog(records={
        "AmazonEC2": make_price_record("0.0832"),
        "AmazonRDS": make_price_record("0.5", unit="Hrs"),
        "AmazonS3": make_price_record("0.023", unit="GB-Mo"),
        "AWSLambda": make_price_record("0.0000002", unit="Requests"),
        "AmazonDynamoDB": make_price_record("0.00065", unit="WriteCapacityUnit-Hrs"),
    })
