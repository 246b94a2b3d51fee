from fastapi import APIRouter, Request
from channel_lib.services.resolver import resolve_optional_service
from .health import get_health

router = APIRouter()


@router.get('/health')
async def api_health(request: Request):
    server_cfg = resolve_optional_service(request, 'server_config')
    return get_health(server_cfg.server_name if server_cfg is not None else None)
