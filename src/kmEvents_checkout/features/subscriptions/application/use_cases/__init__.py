"""Subscription use cases."""

from kmEvents_checkout.features.subscriptions.application.use_cases.submit_event_request import (
    EventRequestSubmitter,
    SubmissionResult,
)

__all__ = ["EventRequestSubmitter", "SubmissionResult"]
