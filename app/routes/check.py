"""Check route and configuration cache control."""

from deps import APIRouter, HTTPException

from baseline_buddy.config import ConfigError

from ..schemas import CheckRequest, CheckResponse
from ..services import CheckerService

router = APIRouter()
checker_svc = CheckerService()


@router.post("/check", response_model=CheckResponse, response_model_exclude_none=True)
def check(req: CheckRequest) -> CheckResponse:
    """Report non-baseline feature usage in documents or files."""
    try:
        return checker_svc.check(req)
    except ConfigError as e:
        raise HTTPException(400, {"message": "Invalid configuration", "errors": e.errors})
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.delete("/config/cache")
def clear_config_cache() -> dict:
    """Forget cached configuration so the next check reloads it."""
    checker_svc.clear_cache()
    return {"status": "cleared"}
