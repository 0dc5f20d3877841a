import httpx
import pytest

from app.client.api_client import ApiClientError, MedicationApiClient
from app.helpers.exception_handler import NotificationError
from app.notifier.email_client import EmailClient
from app.notifier.sms_client import SmsClient


def test_sms_client_sends_gateway_query():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"status": "success"})

    client = SmsClient(api_url="https://sms.example.com/api/sms", api_token="tok", sender_id="MediRemind",
                       transport=httpx.MockTransport(handler))

    assert client.send_sms("+2348000000001", "Time: 08:00") == {"status": "success"}
    params = seen[0].url.params
    assert seen[0].method == "GET"
    assert params["token"] == "tok"
    assert params["senderID"] == "MediRemind"
    assert params["recipients"] == "+2348000000001"
    assert params["message"] == "Time: 08:00"


def test_sms_client_raises_on_gateway_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
    client = SmsClient(api_url="https://sms.example.com/api/sms", api_token="tok", transport=transport)

    with pytest.raises(NotificationError) as exc:
        client.send_sms("+2348000000001", "hello")

    assert exc.value.channel == "sms"
    assert "502" in exc.value.message


def test_sms_client_needs_token_and_recipient():
    client = SmsClient(api_url="https://sms.example.com/api/sms", api_token="")

    with pytest.raises(NotificationError):
        client.send_sms("+2348000000001", "hello")
    with pytest.raises(NotificationError):
        SmsClient(api_token="tok").send_sms("", "hello")


def test_email_client_without_host_fails_fast():
    with pytest.raises(NotificationError) as exc:
        EmailClient(host="").send_email("ada@example.com", "Medication Reminder", "body")

    assert exc.value.channel == "email"


def test_api_client_reads_envelope():
    def handler(request):
        assert request.headers["Authorization"] == "Bearer abc"
        return httpx.Response(200, json={"success": True, "message": "Success", "data": [{
            "medication_id": "med-1",
            "user_id": "user-1",
            "name": "Amoxicillin",
            "dosage": "500mg",
            "instruction": "After meals",
            "reminder_times": ["08:00"],
            "start_date": "2026-10-18",
            "days_of_week": ["Monday"],
        }]})

    client = MedicationApiClient("http://backend/api/", token="abc", transport=httpx.MockTransport(handler))

    medications = client.get_medications()

    assert [m.medication_id for m in medications] == ["med-1"]


def test_api_client_wraps_http_errors():
    client = MedicationApiClient("http://backend/api",
                                 transport=httpx.MockTransport(lambda request: httpx.Response(503)))

    with pytest.raises(ApiClientError) as exc:
        client.get_medications()

    assert "503" in str(exc.value)
