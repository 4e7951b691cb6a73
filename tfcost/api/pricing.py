"""
API routes for parsing and pricing Terraform configurations.
"""
from typing import Dict, Any
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from tfcost.core.config import config
from tfcost.parsing.terraform_parser import TerraformParser
from tfcost.services.cost_estimator import CostEstimator, CostEstimatorError


logger = logging.getLogger(__name__)
router = APIRouter()


class TerraformParseRequest(BaseModel):
    """Request model for parsing Terraform text."""
    terraform_text: str = Field(..., description="Raw Terraform configuration")


class PricingRequest(BaseModel):
    """Request model for pricing Terraform text."""
    terraform_text: str = Field(..., description="Raw Terraform configuration")
    region: str = Field(default="us-east-1", description="AWS region code to price in")


def validate_terraform_text(terraform_text: str) -> None:
    """
    Reject empty or oversized Terraform input.

    Raises:
        HTTPException: 400 for empty input, 413 for input over the size cap
    """
    if not terraform_text or not terraform_text.strip():
        raise HTTPException(
            status_code=400,
            detail="Terraform text is required"
        )
    if len(terraform_text.encode("utf-8")) > config.MAX_TERRAFORM_TEXT_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Terraform text exceeds {config.MAX_TERRAFORM_TEXT_BYTES} bytes"
        )


@router.get("/api/pricing")
async def pricing_status() -> Dict[str, Any]:
    """Report that the pricing API is up."""
    return {"status": "ok", "message": "Pricing API is ready"}


@router.post("/api/terraform/parse")
async def parse_terraform_text(parse_request: TerraformParseRequest) -> Dict[str, Any]:
    """
    Parse Terraform text into normalized resources.

    No pricing lookups are made.

    Args:
        parse_request: Request body with Terraform text

    Returns:
        JSON response with normalized resources and service codes
    """
    validate_terraform_text(parse_request.terraform_text)
    result = TerraformParser().parse(parse_request.terraform_text)
    return {"status": "ok", **result.to_dict()}


@router.post("/api/pricing")
async def price_terraform_text(pricing_request: PricingRequest) -> Dict[str, Any]:
    """
    Parse Terraform text and price every resource found.

    Resources that cannot be priced are reported with a reason and left
    out of the total.

    Args:
        pricing_request: Request body with Terraform text and region

    Returns:
        JSON response with per-resource pricing and totals

    Raises:
        HTTPException: If input is invalid or the pricing catalog is unavailable
    """
    validate_terraform_text(pricing_request.terraform_text)

    try:
        estimator = CostEstimator()
        report = await estimator.estimate_text(
            pricing_request.terraform_text,
            region=pricing_request.region
        )
    except CostEstimatorError as error:
        logger.error(f"Pricing catalog unavailable: {error}")
        raise HTTPException(
            status_code=503,
            detail="Pricing catalog unavailable"
        ) from error
    except Exception as error:
        logger.error(
            f"Unexpected error pricing Terraform: {type(error).__name__}: {error}",
            exc_info=True
        )
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred while fetching pricing data"
        ) from error

    return {"status": "ok", **report.to_dict()}
