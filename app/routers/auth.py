from fastapi import APIRouter, Depends

from app.dependencies import get_shiprocket
from app.services.shiprocket import ShiprocketService

router = APIRouter(tags=["Auth"])


@router.get("/auth/status")
def auth_status(service: ShiprocketService = Depends(get_shiprocket)):
    return {"success": True, "token": service.get_token_info()}
