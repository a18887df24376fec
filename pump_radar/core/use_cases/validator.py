import logging
from typing import Any, Dict

from pydantic import ValidationError

from pump_radar.core.entities.dashboard import DashboardData
from pump_radar.core.exceptions import SchemaViolation

logger = logging.getLogger(__name__)


def validate_dashboard(payload: Dict[str, Any]) -> DashboardData:
    """
    Gate between payload assembly and the caller. Rejects on the first
    structural mismatch and reports its dotted field path; values are
    never coerced, so a passing payload comes back unchanged.
    """
    try:
        return DashboardData.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        path = ".".join(str(part) for part in first["loc"])
        logger.error(f"Dashboard payload failed validation at {path}: {first['msg']}")
        raise SchemaViolation(path, first["msg"]) from e
