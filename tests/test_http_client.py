from unittest.mock import MagicMock

import pytest
import requests

from app.services.http_client import ShiprocketHttpClient

BASE_URL = "https://apiv2.shiprocket.in/v1/external"


def _response(status_code=200, json_body=None, text="", reason="OK"):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.text = text
    if isinstance(json_body, Exception):
        response.json.side_effect = json_body
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


def test_success_wraps_parsed_json_and_sends_json_headers(session):
    session.request.return_value = _response(200, {"order_id": 1})
    client = ShiprocketHttpClient(BASE_URL + "/", session=session)

    result = client.post("/orders/create/adhoc", {"order_id": "A"}, token="abc")

    assert result.ok and result.value == {"order_id": 1}
    assert result.error is None
    args, kwargs = session.request.call_args
    assert args == ("POST", f"{BASE_URL}/orders/create/adhoc")
    assert kwargs["json"] == {"order_id": "A"}
    assert kwargs["headers"] == {"Content-Type": "application/json", "Authorization": "Bearer abc"}


def test_no_authorization_header_without_token(session):
    session.request.return_value = _response(200, {"token": "t"})
    ShiprocketHttpClient(BASE_URL, session=session).post("/auth/login", {"email": "e"})

    headers = session.request.call_args.kwargs["headers"]
    assert "Authorization" not in headers


def test_non_2xx_becomes_error_info_with_raw_body(session):
    session.request.return_value = _response(422, text='{"message":"Invalid pincode"}', reason="Unprocessable Entity")

    result = ShiprocketHttpClient(BASE_URL, session=session).get("/courier/track/awb/X", token="abc")

    assert not result.ok and result.value is None
    assert result.error.status_code == 422
    assert result.error.status_text == "Unprocessable Entity"
    assert result.error.raw_body == '{"message":"Invalid pincode"}'
    assert result.error.message == "API Error: 422 Unprocessable Entity"


def test_network_failure_is_status_zero(session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    result = ShiprocketHttpClient(BASE_URL, session=session).get("/settings/company/pickup")

    assert not result.ok
    assert result.error.status_code == 0
    assert result.error.status_text == "Network Error"
    assert "connection refused" in result.error.message


def test_timeout_is_a_network_error(session):
    session.request.side_effect = requests.Timeout("read timed out")

    result = ShiprocketHttpClient(BASE_URL, session=session, timeout=5).get("/x")

    assert result.error.status_code == 0
    assert session.request.call_args.kwargs["timeout"] == 5


def test_invalid_json_on_2xx_is_reported(session):
    session.request.return_value = _response(200, ValueError("no json"), text="<html>")

    result = ShiprocketHttpClient(BASE_URL, session=session).get("/x")

    assert not result.ok
    assert result.error.status_text == "Invalid JSON"
    assert result.error.raw_body == "<html>"


def test_query_params_are_passed_through(session):
    session.request.return_value = _response(200, [])
    ShiprocketHttpClient(BASE_URL, session=session).get("/courier/track", token="t", params={"order_id": 7})

    assert session.request.call_args.kwargs["params"] == {"order_id": 7}
