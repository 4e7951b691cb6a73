"""
Terraform resource type to AWS Price List service code mapping.
The Price List API groups all prices for one service under a service code.
"""
from types import MappingProxyType
from typing import Mapping

from tfcost.domain.resource_models import UNKNOWN_SERVICE_CODE


# Terraform resource type -> AWS Price List service code
TERRAFORM_TO_AWS_SERVICE_CODE: Mapping[str, str] = MappingProxyType({
    # EC2 and Compute
    "aws_instance": "AmazonEC2",
    "aws_spot_instance_request": "AmazonEC2",
    "aws_launch_template": "AmazonEC2",
    "aws_launch_configuration": "AmazonEC2",
    "aws_autoscaling_group": "AmazonEC2",

    # Storage (EBS is part of EC2 pricing)
    "aws_ebs_volume": "AmazonEC2",
    "aws_ebs_snapshot": "AmazonEC2",
    "aws_efs_file_system": "AmazonEFS",
    "aws_fsx_lustre_file_system": "AmazonFSx",

    # RDS
    "aws_db_instance": "AmazonRDS",
    "aws_db_cluster": "AmazonRDS",
    "aws_rds_cluster": "AmazonRDS",
    "aws_db_proxy": "AmazonRDS",

    # DynamoDB
    "aws_dynamodb_table": "AmazonDynamoDB",

    # S3
    "aws_s3_bucket": "AmazonS3",
    "aws_s3_bucket_object": "AmazonS3",

    # VPC and Networking (Elastic IPs are billed under EC2)
    "aws_vpc": "AmazonVPC",
    "aws_nat_gateway": "AmazonVPC",
    "aws_vpn_gateway": "AmazonVPC",
    "aws_vpc_endpoint": "AmazonVPC",
    "aws_eip": "AmazonEC2",

    # Load Balancing
    "aws_lb": "AWSELB",
    "aws_alb": "AWSELB",
    "aws_elb": "AWSELB",
    "aws_lb_target_group": "AWSELB",

    # CloudFront
    "aws_cloudfront_distribution": "AmazonCloudFront",

    # Lambda
    "aws_lambda_function": "AWSLambda",

    # ElastiCache
    "aws_elasticache_cluster": "AmazonElastiCache",
    "aws_elasticache_replication_group": "AmazonElastiCache",

    # OpenSearch / Elasticsearch
    "aws_opensearch_domain": "AmazonES",
    "aws_elasticsearch_domain": "AmazonES",

    # ECS / Fargate
    "aws_ecs_cluster": "AmazonECS",
    "aws_ecs_service": "AmazonECS",
    "aws_ecs_task_definition": "AmazonECS",

    # Messaging
    "aws_sqs_queue": "AWSQueueService",
    "aws_sns_topic": "AmazonSNS",

    # Kinesis
    "aws_kinesis_stream": "AmazonKinesis",
    "aws_kinesis_firehose_delivery_stream": "AmazonKinesisFirehose",

    # Redshift
    "aws_redshift_cluster": "AmazonRedshift",

    # Route53
    "aws_route53_zone": "AmazonRoute53",
    "aws_route53_record": "AmazonRoute53",

    # CloudWatch
    "aws_cloudwatch_metric_alarm": "AmazonCloudWatch",
    "aws_cloudwatch_log_group": "AWSLogs",

    # API Gateway
    "aws_api_gateway_rest_api": "AmazonApiGateway",
    "aws_apigatewayv2_api": "AmazonApiGateway",

    # Secrets Manager
    "aws_secretsmanager_secret": "AWSSecretsManager",

    # ECR
    "aws_ecr_repository": "AmazonECR",

    # EKS
    "aws_eks_cluster": "AmazonEKS",
    "aws_eks_node_group": "AmazonEKS",
})


class ResourceTypeClassifier:
    """Maps Terraform resource types to Price List service codes."""

    def __init__(self, service_codes: Mapping[str, str] = TERRAFORM_TO_AWS_SERVICE_CODE):
        """
        Initialize classifier.

        Args:
            service_codes: Resource type -> service code table (read-only)
        """
        self.service_codes = MappingProxyType(dict(service_codes))

    def classify(self, resource_type: str) -> str:
        """
        Get the service code for a Terraform resource type.

        Args:
            resource_type: Terraform resource type (e.g., 'aws_instance')

        Returns:
            Service code (e.g., 'AmazonEC2'), or 'Unknown' if not mapped
        """
        return self.service_codes.get(resource_type) or UNKNOWN_SERVICE_CODE


_default_classifier = ResourceTypeClassifier()


def classify_resource_type(resource_type: str) -> str:
    """Classify a resource type using the built-in table."""
    return _default_classifier.classify(resource_type)
