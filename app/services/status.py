import re

from app.config import NOTIFICATION_MAPPING, STATUS_MAPPING

DEFAULT_SYSTEM_STATUS = "processing"


class StatusMapper:
    @staticmethod
    def normalize(shiprocket_status: str | None) -> str:
        """'Out For Delivery' / 'out-for-delivery' -> 'OUT_FOR_DELIVERY'."""
        return re.sub(r"[\s\-]+", "_", str(shiprocket_status or "").strip()).upper()

    @staticmethod
    def map_status_to_system(shiprocket_status: str | None) -> str:
        return STATUS_MAPPING.get(StatusMapper.normalize(shiprocket_status), DEFAULT_SYSTEM_STATUS)

    @staticmethod
    def should_notify_user(shiprocket_status: str | None) -> bool:
        return StatusMapper.normalize(shiprocket_status) in NOTIFICATION_MAPPING

    @staticmethod
    def get_notification_type(shiprocket_status: str | None) -> str | None:
        return NOTIFICATION_MAPPING.get(StatusMapper.normalize(shiprocket_status))
