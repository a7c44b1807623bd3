from unittest.mock import MagicMock, patch

import pytest
import requests
from rest_framework import status

from notifications.models import Notification
from notifications.services import UnknownEventType, notify
from notifications.tasks import send_push_notification


CONTENT = {"title": "Bonus Received", "message": "Rs. 25 bonus added to your wallet.", "url": "/wallet"}


@pytest.fixture
def onesignal(settings):
    settings.ONESIGNAL_APP_ID = "app-123"
    settings.ONESIGNAL_REST_API_KEY = "rest-key"
    settings.ONESIGNAL_API_URL = "https://onesignal.test/api/v1/notifications"


@pytest.mark.django_db
class TestNotify:
    def test_persists_notification(self, default_user):
        notification = notify("bonus_received", default_user, {"amount": "25"})
        assert notification.title == "Bonus Received"
        assert notification.message == "Rs. 25 bonus added to your wallet."
        assert notification.url == "/wallet"
        assert notification.is_read is False

    def test_unknown_event_type_writes_nothing(self, default_user):
        with pytest.raises(UnknownEventType):
            notify("mystery", default_user)
        assert not Notification.objects.exists()

    def test_push_waits_for_commit(self, default_user, django_capture_on_commit_callbacks):
        with patch("notifications.tasks.send_push_notification.delay") as mock_delay:
            with django_capture_on_commit_callbacks() as callbacks:
                notify("ban_lifted", default_user)
            mock_delay.assert_not_called()
            for callback in callbacks:
                callback()
        mock_delay.assert_called_once()


class TestSendPushNotification:
    def test_skipped_when_not_configured(self, settings):
        settings.ONESIGNAL_APP_ID = None
        with patch("notifications.tasks.HttpClient") as mock_client:
            assert send_push_notification(7, CONTENT) is None
        mock_client.assert_not_called()

    def test_posts_to_onesignal(self, onesignal):
        with patch("notifications.tasks.HttpClient") as mock_client:
            mock_client.return_value.post.return_value.json.return_value = {"id": "notif-1"}
            result = send_push_notification(7, CONTENT, {"event_type": "bonus_received"})

        assert result == {"id": "notif-1"}
        mock_client.assert_called_once_with("onesignal")
        url = mock_client.return_value.post.call_args.args[0]
        kwargs = mock_client.return_value.post.call_args.kwargs
        assert url == "https://onesignal.test/api/v1/notifications"
        assert kwargs["headers"] == {"Authorization": "Basic rest-key"}
        payload = kwargs["json"]
        assert payload["app_id"] == "app-123"
        assert payload["include_aliases"] == {"external_id": ["7"]}
        assert payload["headings"] == {"en": "Bonus Received"}
        assert payload["contents"] == {"en": CONTENT["message"]}
        assert payload["url"] == "/wallet"
        assert payload["data"]["event_type"] == "bonus_received"

    def test_http_errors_propagate_for_retry(self, onesignal):
        failing = MagicMock()
        failing.post.side_effect = requests.ConnectionError("boom")
        with patch("notifications.tasks.HttpClient", return_value=failing):
            with pytest.raises(requests.ConnectionError):
                send_push_notification.run(7, CONTENT)


@pytest.mark.django_db
class TestNotificationAPI:
    def test_list_own_notifications(self, authenticated_client, default_user, user_factory):
        notify("profile_updated", default_user)
        notify("profile_updated", user_factory())

        response = authenticated_client.get("/api/notifications/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 1
        assert response.data["results"][0]["title"] == "Profile Updated"

    def test_read_all(self, authenticated_client, default_user):
        notify("ban_lifted", default_user)
        notify("profile_updated", default_user)

        response = authenticated_client.post("/api/notifications/read_all/")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not default_user.notifications.filter(is_read=False).exists()


@pytest.mark.django_db
class TestMeAPI:
    def test_update_profile_notifies(self, authenticated_client, default_user):
        response = authenticated_client.patch("/api/users/me/", {"in_game_name": "Sn1per"}, format="json")
        assert response.status_code == status.HTTP_200_OK
        assert response.data["in_game_name"] == "Sn1per"
        assert response.data["wallet_balance"] == "0.00"
        assert Notification.objects.filter(user=default_user, notification_type="profile_updated").exists()
