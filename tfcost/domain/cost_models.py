"""
Domain models for cost estimation.
Defines per-resource cost estimates, pricing filters and the priced report.
"""
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime

from tfcost.domain.resource_models import NormalizedResource


@dataclass(frozen=True)
class PricingFilter:
    """A single TERM_MATCH predicate for the Price List catalog."""
    field: str
    value: str
    type: str = "TERM_MATCH"

    def to_boto(self) -> Dict[str, str]:
        """Render in the shape expected by pricing.get_products."""
        return {"Type": self.type, "Field": self.field, "Value": self.value}


@dataclass(frozen=True)
class CostEstimate:
    """
    Cost of one resource (or a total) at hourly/monthly/yearly granularity.

    A failed estimate carries a reason and zeroed amounts so it can flow
    through aggregation without special casing by callers.
    """
    hourly: float = 0.0
    monthly: float = 0.0
    yearly: float = 0.0
    failed: bool = False
    reason: Optional[str] = None
    unit: Optional[str] = None
    price_per_unit: Optional[float] = None
    assumptions: List[str] = field(default_factory=list)

    @classmethod
    def failure(cls, reason: str) -> "CostEstimate":
        """Build a failed estimate with all amounts zero."""
        return cls(failed=True, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "hourly": self.hourly,
            "monthly": self.monthly,
            "yearly": self.yearly,
        }
        if self.failed:
            result["failed"] = True
            result["error"] = self.reason
        if self.unit is not None:
            result["unit"] = self.unit
        if self.price_per_unit is not None:
            result["price_per_unit"] = self.price_per_unit
        if self.assumptions:
            result["assumptions"] = list(self.assumptions)
        return result


@dataclass(frozen=True)
class ResourcePricing:
    """Pricing result for a single resource."""
    resource: NormalizedResource
    estimate: CostEstimate

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "resource_name": self.resource.name,
            "resource_type": self.resource.kind.value,
            "terraform_type": self.resource.source_resource_type,
            "service_code": self.resource.service_code,
            "pricing": self.estimate.to_dict(),
        }


@dataclass
class PricingReport:
    """Represents a complete priced report for one configuration."""
    resources: List[ResourcePricing]
    total: CostEstimate
    region: str
    pricing_timestamp: datetime
    currency: str = "USD"

    @property
    def failed_resources(self) -> List[ResourcePricing]:
        """Resources whose pricing failed and are excluded from the total."""
        return [item for item in self.resources if item.estimate.failed]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "currency": self.currency,
            "region": self.region,
            "timestamp": self.pricing_timestamp.isoformat(),
            "resources": [item.to_dict() for item in self.resources],
            "total": {
                "hourly": self.total.hourly,
                "monthly": self.total.monthly,
                "yearly": self.total.yearly,
            },
            "unpriced_resources": [
                {
                    "resource_name": item.resource.name,
                    "terraform_type": item.resource.source_resource_type,
                    "reason": item.estimate.reason,
                }
                for item in self.failed_resources
            ],
        }
