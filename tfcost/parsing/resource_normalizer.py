"""
Resource normalizer.
Turns a raw Terraform resource body into a NormalizedResource record.
"""
from dataclasses import replace
from typing import Callable, Dict, Mapping, Optional
import logging

from tfcost.core.config import config
from tfcost.domain.resource_models import (
    BillingMode,
    BlockStorage,
    DynamoDBSpecs,
    EC2Specs,
    EmptySpecs,
    LambdaSpecs,
    NormalizedResource,
    RDSSpecs,
    ResourceKind,
    S3Specs,
    UNKNOWN_SERVICE_CODE,
)
from tfcost.parsing.extractors import extract_block, extract_value, parse_int
from tfcost.parsing.service_code_map import ResourceTypeClassifier
from tfcost.pricing.aws_engine_map import RDS_ENGINE_NAMES, map_rds_engine


logger = logging.getLogger(__name__)


# AMI name fragments checked in order; first match wins
AMI_OS_HINTS = (
    ("windows", "Windows"),
    ("rhel", "RHEL"),
    ("suse", "SUSE"),
)


def infer_os_from_ami(ami: Optional[str]) -> str:
    """
    Infer the catalog operating system from an AMI identifier.

    Args:
        ami: AMI id or name (e.g., 'ami-windows-2022')

    Returns:
        'Windows', 'RHEL', 'SUSE' or 'Linux'
    """
    if not ami:
        return "Linux"
    for fragment, operating_system in AMI_OS_HINTS:
        if fragment in ami:
            return operating_system
    return "Linux"


class ResourceNormalizer:
    """Builds normalized records for the resource kinds the estimator prices."""

    def __init__(
        self,
        engine_names: Mapping[str, str] = RDS_ENGINE_NAMES,
        s3_estimated_storage_gb: int = None,
        classifier: ResourceTypeClassifier = None,
    ):
        """
        Initialize normalizer.

        Args:
            engine_names: RDS engine -> catalog databaseEngine table
            s3_estimated_storage_gb: Placeholder bucket size (defaults to config)
            classifier: Resource type classifier (creates default if None)
        """
        self.engine_names = engine_names
        self.classifier = classifier or ResourceTypeClassifier()
        if s3_estimated_storage_gb is None:
            s3_estimated_storage_gb = config.S3_ESTIMATED_STORAGE_GB
        self.s3_estimated_storage_gb = max(s3_estimated_storage_gb, 0)
        self._builders: Dict[str, Callable[[str, str], NormalizedResource]] = {
            "aws_instance": self._normalize_ec2_instance,
            "aws_db_instance": self._normalize_rds_instance,
            "aws_s3_bucket": self._normalize_s3_bucket,
            "aws_lambda_function": self._normalize_lambda_function,
            "aws_dynamodb_table": self._normalize_dynamodb_table,
        }

    def normalize(
        self,
        resource_type: str,
        name: str,
        body: str,
        service_code: Optional[str] = None,
    ) -> NormalizedResource:
        """
        Normalize one resource declaration.

        Never raises: unrecognized resource types become an `Other` record
        with empty specs and no pricing dimensions.

        Args:
            resource_type: Terraform resource type (e.g., 'aws_instance')
            name: Resource logical name (e.g., 'web')
            body: Text between the resource braces
            service_code: Catalog service code, if already classified
                          (classifies `resource_type` if None)

        Returns:
            NormalizedResource for the declaration
        """
        if service_code is None:
            service_code = self.classifier.classify(resource_type)
        service_code = service_code or UNKNOWN_SERVICE_CODE

        builder = self._builders.get(resource_type)
        if builder is None:
            logger.debug(f"No normalizer for {resource_type}.{name}, using stub record")
            return NormalizedResource(
                kind=ResourceKind.OTHER,
                name=name,
                source_resource_type=resource_type,
                specs=EmptySpecs(),
                service_code=service_code,
            )

        resource = builder(name, body or "")
        return replace(resource, service_code=service_code)

    def _normalize_ec2_instance(self, name: str, body: str) -> NormalizedResource:
        instance_type = extract_value(body, "instance_type") or None
        count = parse_int(extract_value(body, "count"), default=1, minimum=1)
        ami = extract_value(body, "ami")

        storage = BlockStorage()
        root_block_device = extract_block(body, "root_block_device")
        if root_block_device is not None:
            storage = BlockStorage(
                size_gb=parse_int(extract_value(root_block_device, "volume_size"), default=8),
                volume_type=extract_value(root_block_device, "volume_type") or "gp2",
            )

        pricing_dimensions = {}
        if instance_type:
            pricing_dimensions["instanceType"] = instance_type
        pricing_dimensions.update({
            "operatingSystem": infer_os_from_ami(ami),
            "preInstalledSw": "NA",
            "tenancy": "Shared",
            "licenseModel": "No License required",
        })

        return NormalizedResource(
            kind=ResourceKind.EC2,
            name=name,
            source_resource_type="aws_instance",
            specs=EC2Specs(instance_type=instance_type, count=count, storage=storage),
            pricing_dimensions=pricing_dimensions,
        )

    def _normalize_rds_instance(self, name: str, body: str) -> NormalizedResource:
        instance_class = extract_value(body, "instance_class") or None
        engine = extract_value(body, "engine") or None
        storage_gb = parse_int(extract_value(body, "allocated_storage"), default=0)
        storage_type = extract_value(body, "storage_type") or "gp2"
        multi_az = extract_value(body, "multi_az") == "true"

        pricing_dimensions = {}
        if instance_class:
            pricing_dimensions["instanceType"] = instance_class
        pricing_dimensions.update({
            "databaseEngine": map_rds_engine(engine, self.engine_names),
            "deploymentOption": "Multi-AZ" if multi_az else "Single-AZ",
            "licenseModel": "No license required",
        })

        return NormalizedResource(
            kind=ResourceKind.RDS,
            name=name,
            source_resource_type="aws_db_instance",
            specs=RDSSpecs(
                instance_class=instance_class,
                engine=engine,
                storage_gb=storage_gb,
                storage_type=storage_type,
                multi_az=multi_az,
            ),
            pricing_dimensions=pricing_dimensions,
        )

    def _normalize_lambda_function(self, name: str, body: str) -> NormalizedResource:
        return NormalizedResource(
            kind=ResourceKind.LAMBDA,
            name=name,
            source_resource_type="aws_lambda_function",
            specs=LambdaSpecs(
                runtime=extract_value(body, "runtime") or None,
                memory_mb=parse_int(extract_value(body, "memory_size"), default=128, minimum=1),
                timeout_sec=parse_int(extract_value(body, "timeout"), default=3, minimum=1),
            ),
            pricing_dimensions={
                "group": "AWS-Lambda-Requests",
                "groupDescription": "Invocation call for a Lambda function",
            },
        )

    def _normalize_dynamodb_table(self, name: str, body: str) -> NormalizedResource:
        billing_mode = BillingMode.PROVISIONED
        if extract_value(body, "billing_mode") == BillingMode.PAY_PER_REQUEST.value:
            billing_mode = BillingMode.PAY_PER_REQUEST

        if billing_mode is BillingMode.PAY_PER_REQUEST:
            pricing_dimensions = {
                "group": "DDB-OnDemand",
                "groupDescription": "DynamoDB On-Demand Capacity",
            }
        else:
            pricing_dimensions = {
                "group": "DDB-Provisioned",
                "groupDescription": "DynamoDB Provisioned Capacity",
            }

        return NormalizedResource(
            kind=ResourceKind.DYNAMODB,
            name=name,
            source_resource_type="aws_dynamodb_table",
            specs=DynamoDBSpecs(
                billing_mode=billing_mode,
                read_capacity=parse_int(extract_value(body, "read_capacity"), default=None),
                write_capacity=parse_int(extract_value(body, "write_capacity"), default=None),
            ),
            pricing_dimensions=pricing_dimensions,
        )

    def _normalize_s3_bucket(self, name: str, body: str) -> NormalizedResource:
        # Pricing depends on usage, which a bucket declaration never states
        return NormalizedResource(
            kind=ResourceKind.S3,
            name=name,
            source_resource_type="aws_s3_bucket",
            specs=S3Specs(estimated_storage_gb=self.s3_estimated_storage_gb),
            pricing_dimensions={
                "storageClass": "Standard",
                "volumeType": "Standard",
            },
        )
