import pytest
import resend

from app.core.config import Settings
from app.services.email_service import SIGNUP_SUBJECT, EmailService, render_signup_html


def _settings(**overrides):
    values = dict(_env_file=None, RESEND_API_KEY="re_test", SECRET_RECIPIENT_MAIL="team@anveshan.dev")
    values.update(overrides)
    return Settings(**values)


@pytest.mark.parametrize("overrides", [{"RESEND_API_KEY": None}, {"SECRET_RECIPIENT_MAIL": None}, {"RESEND_API_KEY": ""}])
def test_from_settings_disabled_without_key_or_recipient(overrides):
    assert EmailService.from_settings(_settings(**overrides)) is None


def test_notify_signup_sends_to_recipient(monkeypatch):
    sent = []
    monkeypatch.setattr(resend.Emails, "send", lambda params: sent.append(params) or {"id": "email_1"})

    service = EmailService.from_settings(_settings())
    assert service.notify_signup("alice@example.com") is True

    params = sent[0]
    assert params["to"] == ["team@anveshan.dev"]
    assert params["from"] == "Anveshan Waitlist <onboarding@resend.dev>"
    assert params["subject"] == SIGNUP_SUBJECT
    assert "alice@example.com" in params["html"]
    assert resend.api_key == "re_test"


def test_send_failure_is_swallowed(monkeypatch):
    def boom(params):
        raise RuntimeError("403 Forbidden")

    monkeypatch.setattr(resend.Emails, "send", boom)
    service = EmailService.from_settings(_settings())
    assert service.send("team@anveshan.dev", "subject", "<p>hi</p>") is False


def test_signup_html_escapes_address():
    body = render_signup_html('"<script>"@example.com')
    assert "<script>" not in body
    assert "&lt;script&gt;" in body
