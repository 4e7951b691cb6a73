"""
AWS region code to Pricing API location string mapping.
AWS Pricing API uses human-readable location strings, not region codes.
"""
from types import MappingProxyType
from typing import Mapping


DEFAULT_PRICING_LOCATION = "US East (N. Virginia)"

# AWS region code to Pricing API location string mapping
# Based on AWS Price List API location values
AWS_REGION_TO_LOCATION: Mapping[str, str] = MappingProxyType({
    # US East
    "us-east-1": "US East (N. Virginia)",
    "us-east-2": "US East (Ohio)",

    # US West
    "us-west-1": "US West (N. California)",
    "us-west-2": "US West (Oregon)",

    # Asia Pacific
    "ap-south-1": "Asia Pacific (Mumbai)",
    "ap-southeast-1": "Asia Pacific (Singapore)",
    "ap-southeast-2": "Asia Pacific (Sydney)",
    "ap-southeast-3": "Asia Pacific (Jakarta)",
    "ap-northeast-1": "Asia Pacific (Tokyo)",
    "ap-northeast-2": "Asia Pacific (Seoul)",
    "ap-northeast-3": "Asia Pacific (Osaka)",
    "ap-east-1": "Asia Pacific (Hong Kong)",

    # Europe
    "eu-west-1": "EU (Ireland)",
    "eu-west-2": "EU (London)",
    "eu-west-3": "EU (Paris)",
    "eu-central-1": "EU (Frankfurt)",
    "eu-central-2": "Europe (Zurich)",
    "eu-north-1": "EU (Stockholm)",
    "eu-south-1": "EU (Milan)",
    "eu-south-2": "Europe (Spain)",

    # Middle East
    "me-south-1": "Middle East (Bahrain)",
    "me-central-1": "Middle East (UAE)",

    # Africa
    "af-south-1": "Africa (Cape Town)",

    # South America
    "sa-east-1": "South America (Sao Paulo)",

    # Canada
    "ca-central-1": "Canada (Central)",
})


def get_aws_pricing_location(
    region_code: str,
    locations: Mapping[str, str] = AWS_REGION_TO_LOCATION,
) -> str:
    """
    Get AWS Pricing API location string from region code.

    Args:
        region_code: AWS region code (e.g., 'ap-south-1')
        locations: Region code -> location table

    Returns:
        Pricing API location string (e.g., 'Asia Pacific (Mumbai)').
        Unknown region codes fall back to US East (N. Virginia).
    """
    return locations.get(region_code, DEFAULT_PRICING_LOCATION)
