from __future__ import annotations

from typing import Any

import pytest

from phish_triage.domain.email.models import AuthenticationResult, Email

SAMPLE_EML = """Return-Path: <bounce@mailer.evil-example.net>
Received: from mail.evil-example.net (mail.evil-example.net [203.0.113.7]) by mx.example.com
Received: from localhost (127.0.0.1) by mail.evil-example.net
Authentication-Results: mx.example.com; spf=fail smtp.mailfrom=evil-example.net; dkim=fail header.d=evil-example.net; dmarc=fail
X-Originating-IP: [198.51.100.23]
X-Mailer: BulkMailer 2.1
From: "PayPal Support" <service@paypal-secure.example>
Reply-To: collect@attacker.example
To: victim@example.com
Subject: Urgent: verify your account
Date: Mon, 6 Jan 2025 10:00:00 +0000
MIME-Version: 1.0
Content-Type: multipart/mixed; boundary="sep"

--sep
Content-Type: text/plain; charset="utf-8"

Dear John, please verify your account at https://bit.ly/abc123.
Call 555-123-4567 or mail help@paypal-secure.example.
--sep
Content-Type: text/html; charset="utf-8"

<html><body><a href="https://login.evil-example.net/auth">Login</a><img src="logo.png"></body></html>
--sep
Content-Type: application/pdf
Content-Disposition: attachment; filename="invoice.pdf"
Content-Transfer-Encoding: base64

JVBERi0xLjQKJSVFT0Y=
--sep
Content-Type: application/octet-stream
Content-Disposition: attachment; filename="payload.exe"
Content-Transfer-Encoding: base64

TVqQAAMAAAAEAAAA
--sep--
"""

CLEAN_EML = """From: Alice <alice@example.com>
To: bob@example.com
Subject: Lunch
Authentication-Results: mx.example.com; spf=pass; dkim=pass; dmarc=pass
Date: Tue, 7 Jan 2025 12:00:00 +0000

See you at noon.
"""


@pytest.fixture
def sample_eml() -> str:
    return SAMPLE_EML


@pytest.fixture
def clean_eml() -> str:
    return CLEAN_EML


@pytest.fixture
def make_email():
    def _make(**overrides: Any) -> Email:
        payload: dict[str, Any] = {
            "id": "test",
            "sender": "alice@example.com",
            "authentication": AuthenticationResult(spf_status="pass", dkim_status="pass", dmarc_status="pass"),
        }
        payload.update(overrides)
        return Email(**payload)

    return _make
