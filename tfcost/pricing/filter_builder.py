"""
Pricing filter builder.
Builds the Price List TERM_MATCH filters needed to look up one resource.
"""
from typing import Callable, Dict, List, Mapping
import logging

from tfcost.domain.cost_models import PricingFilter
from tfcost.domain.resource_models import EC2Specs, NormalizedResource, RDSSpecs, ResourceKind
from tfcost.pricing.aws_engine_map import RDS_ENGINE_NAMES, map_rds_engine
from tfcost.pricing.aws_region_map import AWS_REGION_TO_LOCATION, get_aws_pricing_location


logger = logging.getLogger(__name__)


class PricingFilterBuilder:
    """
    Maps normalized resources to catalog filters.

    The location filter always comes first. EC2 lookups always assume shared
    tenancy Linux with no pre-installed software, even when the AMI suggests
    another operating system.
    """

    def __init__(
        self,
        region_locations: Mapping[str, str] = AWS_REGION_TO_LOCATION,
        engine_names: Mapping[str, str] = RDS_ENGINE_NAMES,
    ):
        """
        Initialize filter builder.

        Args:
            region_locations: Region code -> Pricing API location table
            engine_names: RDS engine -> catalog databaseEngine table
        """
        self.region_locations = region_locations
        self.engine_names = engine_names
        self._kind_filters: Dict[ResourceKind, Callable[[NormalizedResource], List[PricingFilter]]] = {
            ResourceKind.EC2: self._ec2_filters,
            ResourceKind.RDS: self._rds_filters,
            ResourceKind.LAMBDA: self._lambda_filters,
            ResourceKind.S3: self._s3_filters,
            ResourceKind.DYNAMODB: self._dynamodb_filters,
        }

    def location_filter(self, region: str) -> PricingFilter:
        """Filter selecting the catalog location for a region code."""
        return PricingFilter("location", get_aws_pricing_location(region, self.region_locations))

    def build_filters(self, resource: NormalizedResource, region: str) -> List[PricingFilter]:
        """
        Build the ordered catalog filters for a resource.

        Args:
            resource: Normalized resource
            region: AWS region code (unknown codes price as us-east-1)

        Returns:
            Filters, location first. Only the location filter is returned for
            kinds that cannot be looked up.
        """
        filters = [self.location_filter(region)]
        kind_filters = self._kind_filters.get(resource.kind)
        if kind_filters is not None:
            filters.extend(kind_filters(resource))

        logger.debug(
            f"Built {len(filters)} pricing filters for {resource.source_resource_type}.{resource.name}"
        )
        return filters

    def _ec2_filters(self, resource: NormalizedResource) -> List[PricingFilter]:
        specs = resource.specs
        filters = []
        if isinstance(specs, EC2Specs) and specs.instance_type:
            filters.append(PricingFilter("instanceType", specs.instance_type))
        filters.extend([
            PricingFilter("tenancy", "Shared"),
            PricingFilter("operatingSystem", "Linux"),
            PricingFilter("preInstalledSw", "NA"),
            PricingFilter("capacitystatus", "Used"),
        ])
        return filters

    def _rds_filters(self, resource: NormalizedResource) -> List[PricingFilter]:
        specs = resource.specs
        if not isinstance(specs, RDSSpecs):
            specs = RDSSpecs()
        filters = []
        if specs.instance_class:
            filters.append(PricingFilter("instanceType", specs.instance_class))
        if specs.engine:
            filters.append(PricingFilter("databaseEngine", map_rds_engine(specs.engine, self.engine_names)))
        filters.append(PricingFilter("deploymentOption", "Multi-AZ" if specs.multi_az else "Single-AZ"))
        return filters

    def _lambda_filters(self, resource: NormalizedResource) -> List[PricingFilter]:
        # Only request pricing is estimated, not compute duration
        return [PricingFilter("group", "AWS-Lambda-Requests")]

    def _s3_filters(self, resource: NormalizedResource) -> List[PricingFilter]:
        return [
            PricingFilter("storageClass", "General Purpose"),
            PricingFilter("volumeType", "Standard"),
        ]

    def _dynamodb_filters(self, resource: NormalizedResource) -> List[PricingFilter]:
        # Write capacity only; read capacity and on-demand are not estimated
        return [PricingFilter("group", "DDB-WriteUnits")]
