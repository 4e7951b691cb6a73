"""
Terraform configuration parser.
Scans raw Terraform text for resource declarations and normalizes each one.

The scan is regex based, not a full HCL parser. A resource body may contain
blocks nested one level deep (e.g. `root_block_device { ... }`). A body
nested deeper than that is cut at its first closing brace and whatever
attributes follow are not seen. Such declarations still produce a record.
This is deliberately more permissive than a strict scan that ends every
body at its first closing brace, which would hide `root_block_device`.
"""
from typing import Dict, Any, List, Set
from dataclasses import dataclass, field
import logging
import re

from tfcost.domain.resource_models import NormalizedResource, UNKNOWN_SERVICE_CODE
from tfcost.parsing.resource_normalizer import ResourceNormalizer
from tfcost.parsing.service_code_map import ResourceTypeClassifier


logger = logging.getLogger(__name__)


# resource "<type>" "<name>" { <body> }
# First alternative: body with at most one level of inner blocks.
# Second alternative: anything deeper, truncated at the first closing brace.
RESOURCE_PATTERN = re.compile(
    r'(?<![\w-])resource\s+"([^"]+)"\s+"([^"]+)"\s*\{'
    r'(?:((?:[^{}]|\{[^{}]*\})*)\}|([^}]*)\})'
)


@dataclass
class ParseResult:
    """Resources found in one configuration, in declaration order."""
    resources: List[NormalizedResource] = field(default_factory=list)
    service_codes: Set[str] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "resources": [resource.to_dict() for resource in self.resources],
            "service_codes": sorted(self.service_codes),
        }


class TerraformParser:
    """Parses Terraform text into normalized resource records."""

    def __init__(
        self,
        classifier: ResourceTypeClassifier = None,
        normalizer: ResourceNormalizer = None,
    ):
        """
        Initialize parser.

        Args:
            classifier: Resource type classifier (creates default if None)
            normalizer: Resource normalizer (creates default if None)
        """
        self.classifier = classifier or ResourceTypeClassifier()
        self.normalizer = normalizer or ResourceNormalizer(classifier=self.classifier)

    def parse(self, terraform_text: str) -> ParseResult:
        """
        Parse resource declarations out of Terraform text.

        Args:
            terraform_text: Raw Terraform configuration

        Returns:
            ParseResult with one record per declaration and the distinct
            service codes seen. Text without declarations yields an empty result.
        """
        result = ParseResult()
        if not terraform_text:
            return result

        for match in RESOURCE_PATTERN.finditer(terraform_text):
            resource_type, name = match.group(1), match.group(2)
            body = match.group(3)
            if body is None:
                body = match.group(4)
                logger.debug(f"Body of {resource_type}.{name} nests too deep, truncated")

            service_code = self.classifier.classify(resource_type)
            if service_code != UNKNOWN_SERVICE_CODE:
                result.service_codes.add(service_code)

            result.resources.append(
                self.normalizer.normalize(resource_type, name, body, service_code)
            )

        logger.info(
            f"Parsed {len(result.resources)} Terraform resources "
            f"across {len(result.service_codes)} services"
        )
        return result


def parse_terraform(terraform_text: str) -> ParseResult:
    """Parse Terraform text with the default classifier and normalizer."""
    return TerraformParser().parse(terraform_text)
