"""
Domain models for parsed Terraform resources.
Defines the normalized resource record and its kind-specific specs.
"""
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


UNKNOWN_SERVICE_CODE = "Unknown"


class ResourceKind(Enum):
    """Resource kinds the normalizer knows how to price."""
    EC2 = "EC2"
    RDS = "RDS"
    S3 = "S3"
    LAMBDA = "Lambda"
    DYNAMODB = "DynamoDB"
    OTHER = "Other"


class BillingMode(Enum):
    """DynamoDB capacity billing modes."""
    PROVISIONED = "PROVISIONED"
    PAY_PER_REQUEST = "PAY_PER_REQUEST"


@dataclass(frozen=True)
class BlockStorage:
    """Root block device attached to an EC2 instance."""
    size_gb: int = 8
    volume_type: str = "gp2"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"size_gb": self.size_gb, "volume_type": self.volume_type}


@dataclass(frozen=True)
class EC2Specs:
    instance_type: Optional[str] = None
    count: int = 1
    storage: BlockStorage = field(default_factory=BlockStorage)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "instance_type": self.instance_type,
            "count": self.count,
            "storage": self.storage.to_dict(),
        }


@dataclass(frozen=True)
class RDSSpecs:
    instance_class: Optional[str] = None
    engine: Optional[str] = None
    storage_gb: int = 0
    storage_type: str = "gp2"
    multi_az: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "instance_class": self.instance_class,
            "engine": self.engine,
            "storage_gb": self.storage_gb,
            "storage_type": self.storage_type,
            "multi_az": self.multi_az,
        }


@dataclass(frozen=True)
class LambdaSpecs:
    runtime: Optional[str] = None
    memory_mb: int = 128
    timeout_sec: int = 3

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "runtime": self.runtime,
            "memory_mb": self.memory_mb,
            "timeout_sec": self.timeout_sec,
        }


@dataclass(frozen=True)
class DynamoDBSpecs:
    billing_mode: BillingMode = BillingMode.PROVISIONED
    read_capacity: Optional[int] = None
    write_capacity: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "billing_mode": self.billing_mode.value,
            "read_capacity": self.read_capacity,
            "write_capacity": self.write_capacity,
        }


@dataclass(frozen=True)
class S3Specs:
    # Bucket declarations carry no usage data, so this is always a placeholder
    estimated_storage_gb: int = 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"estimated_storage_gb": self.estimated_storage_gb}


@dataclass(frozen=True)
class EmptySpecs:
    """Specs for resource kinds that are not priced."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {}


ResourceSpecs = Union[EC2Specs, RDSSpecs, LambdaSpecs, DynamoDBSpecs, S3Specs, EmptySpecs]


@dataclass(frozen=True)
class NormalizedResource:
    """
    A single Terraform resource declaration in normalized form.

    `specs` holds the kind-specific shape matching `kind`; `pricing_dimensions`
    are catalog attribute hints derived from the declaration.
    """
    kind: ResourceKind
    name: str
    source_resource_type: str
    specs: ResourceSpecs
    service_code: str = UNKNOWN_SERVICE_CODE
    pricing_dimensions: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "resource_type": self.source_resource_type,
            "service_code": self.service_code,
            "specs": self.specs.to_dict(),
            "pricing_dimensions": dict(self.pricing_dimensions),
        }
