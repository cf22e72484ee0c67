from fastapi import APIRouter, Request

from pnctool.api.helpers import write_json

router = APIRouter(tags=["health"])


@router.get("/healthcheck")
def healthcheck_handler(request: Request):
    """Report that the service is up, plus its environment and version"""
    config = request.app.state.config
    return write_json(200, {
        "status": "available",
        "system_info": {
            "environment": config.env,
            "version": config.version,
        },
    })
