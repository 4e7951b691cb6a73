"""
Main FastAPI application bootstrap.
Configures logging and includes routers.
"""
import logging

from fastapi import FastAPI

from tfcost.core.config import config
from tfcost.api.pricing import router as pricing_router


# Validate configuration on startup
try:
    config.validate()
except ValueError as error:
    raise RuntimeError(f"Configuration error: {error}") from error

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)
logger.info(
    "Pricing catalog region=%s, default pricing region=%s",
    config.AWS_PRICING_REGION,
    config.DEFAULT_REGION
)


app = FastAPI(
    title="Terraform Cost Estimation",
    description="Estimate AWS costs from Terraform configuration",
)

app.include_router(pricing_router)
