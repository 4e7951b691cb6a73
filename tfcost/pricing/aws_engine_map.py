"""
Terraform RDS engine names to Pricing API databaseEngine values.
"""
from types import MappingProxyType
from typing import Mapping, Optional


UNKNOWN_ENGINE = "Unknown"

RDS_ENGINE_NAMES: Mapping[str, str] = MappingProxyType({
    "postgres": "PostgreSQL",
    "mysql": "MySQL",
    "mariadb": "MariaDB",
    "oracle": "Oracle",
    "sqlserver": "SQL Server",
    "aurora": "Aurora",
    "aurora-mysql": "Aurora MySQL",
    "aurora-postgresql": "Aurora PostgreSQL",
})


def map_rds_engine(
    engine: Optional[str],
    engine_names: Mapping[str, str] = RDS_ENGINE_NAMES,
) -> str:
    """
    Map a Terraform engine name to the catalog's databaseEngine vocabulary.

    Args:
        engine: Terraform `engine` value (e.g., 'postgres')
        engine_names: Engine name table

    Returns:
        Catalog engine name; unmapped engines pass through unchanged,
        a missing engine maps to 'Unknown'
    """
    if not engine:
        return UNKNOWN_ENGINE
    return engine_names.get(engine, engine)
