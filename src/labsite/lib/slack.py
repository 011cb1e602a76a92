import json
import os
import sys
import traceback

from slack_sdk.webhook import WebhookClient


def own_traceback_locations():
    _, _, tb = sys.exc_info()
    return [(fs.filename, fs.lineno, fs.name) for fs in traceback.extract_tb(tb) if "/labsite/" in fs.filename]


def send_slack_message(err, request=None):
    """Report an unhandled exception to the Slack webhook in SLACK_WEBHOOK_URL, or print it."""
    report = {"type": err.__class__.__name__, "exception": str(err), "location": own_traceback_locations()}

    if request is not None:
        report["client"] = str(request.client.host) if request.client else None
        report["request"] = f"{request.method} {request.url}"

    text = json.dumps(report)
    slack_webhook_url = os.getenv("SLACK_WEBHOOK_URL")
    if not slack_webhook_url:
        print(f"EXCEPTION_HANDLER: {text}")
        return

    WebhookClient(url=slack_webhook_url).send(
        text=text,
        blocks=[{"type": "section", "text": {"type": "plain_text", "text": text}}],
    )
