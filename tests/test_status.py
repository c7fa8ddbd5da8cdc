import pytest

from app.services.status import StatusMapper


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("delivered", "delivered"),
        ("DELIVERED", "delivered"),
        ("Out For Delivery", "out for delivery"),
        ("in-transit", "shipped"),
        ("PICKUP SCHEDULED", "ready to ship"),
        ("RTO_INITIATED", "returned"),
        ("lost", "cancelled"),
        ("unknown_code", "processing"),
        ("", "processing"),
        (None, "processing"),
        (6, "processing"),
    ],
)
def test_map_status_to_system(raw, expected):
    assert StatusMapper.map_status_to_system(raw) == expected


def test_notifications_only_for_customer_facing_statuses():
    assert StatusMapper.should_notify_user("Picked Up")
    assert StatusMapper.get_notification_type("Picked Up") == "shipped"
    assert StatusMapper.get_notification_type("out for delivery") == "out_for_delivery"
    assert StatusMapper.get_notification_type("delivered") == "delivered"

    assert not StatusMapper.should_notify_user("NEW")
    assert StatusMapper.get_notification_type("NEW") is None
    assert not StatusMapper.should_notify_user(None)
