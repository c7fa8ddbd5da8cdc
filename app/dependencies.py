from fastapi import Request

from app.services.shiprocket import ShiprocketService


def get_shiprocket(request: Request) -> ShiprocketService:
    return request.app.state.shiprocket
