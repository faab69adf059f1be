"""Tests for base handler functionality."""

from __future__ import annotations

from unittest.mock import patch

import kopf
import pytest

from fox_operator.handlers.base import BaseHandler, ready_conditions


class TestBaseHandler:
    """Test cases for BaseHandler class."""

    def test_init(self):
        """Test handler initialization."""
        handler = BaseHandler(kind="TestKind")
        assert handler.kind == "TestKind"
        assert handler.logger is not None

    def test_resource_context_defaults(self):
        """Test that missing metadata fields get placeholders."""
        handler = BaseHandler(kind="TestKind")
        assert handler._get_resource_context({}) == {
            "name": "unknown",
            "namespace": "",
            "uid": "unknown",
        }

    @patch("fox_operator.handlers.base.log_resource_event")
    def test_log_error_sanitizes(self, mock_log):
        """Test that logged errors are sanitized and typed."""
        handler = BaseHandler(kind="TestKind")
        meta = {"name": "echo", "namespace": "default", "uid": "abc"}

        handler.log_error(meta, "failed", error=ValueError("token=abc123"))

        kwargs = mock_log.call_args.kwargs
        assert kwargs["resource_name"] == "echo"
        assert kwargs["error_type"] == "ValueError"
        assert "abc123" not in kwargs["error"]

    @patch("fox_operator.handlers.base.metrics")
    def test_update_resource_status_ready(self, mock_metrics):
        """Test updating resource status to ready."""
        handler = BaseHandler(kind="TestKind")
        meta = {"name": "test-resource", "generation": 5}
        patch_obj = kopf.Patch()

        handler.update_resource_status(patch_obj, meta, {}, ready=True, message="Provisioned")

        assert patch_obj.status["observedGeneration"] == 5
        conditions = patch_obj.status["conditions"]
        assert conditions[0]["type"] == "Ready"
        assert conditions[0]["status"] == "True"
        assert conditions[0]["observedGeneration"] == 5
        mock_metrics.resource_status_total.labels.assert_called_with(
            kind="TestKind", status="ready"
        )

    @patch("fox_operator.handlers.base.metrics")
    def test_update_resource_status_not_ready(self, mock_metrics):
        """Test updating resource status to not ready."""
        handler = BaseHandler(kind="TestKind")
        meta = {"name": "test-resource", "generation": 3}
        patch_obj = kopf.Patch()
        status = {
            "conditions": [
                {"type": "Ready", "status": "True", "lastTransitionTime": "2024-01-01T00:00:00Z"}
            ]
        }

        handler.update_resource_status(patch_obj, meta, status, ready=False, message="boom")

        conditions = patch_obj.status["conditions"]
        assert len(conditions) == 1
        assert conditions[0]["status"] == "False"
        assert conditions[0]["message"] == "boom"
        assert conditions[0]["lastTransitionTime"] != "2024-01-01T00:00:00Z"
        mock_metrics.resource_status_total.labels.assert_called_with(
            kind="TestKind", status="not_ready"
        )

    @patch("fox_operator.handlers.base.metrics")
    def test_update_resource_status_minimal(self, mock_metrics):
        """Test updating resource status without generation."""
        handler = BaseHandler(kind="TestKind")
        patch_obj = kopf.Patch()

        handler.update_resource_status(patch_obj, {"name": "test"}, {}, ready=True, message="ok")

        assert patch_obj.status["observedGeneration"] == 0

    @patch("fox_operator.handlers.base.emit_reconcile_failed")
    @patch("fox_operator.handlers.base.sanitize_exception")
    def test_handle_reconciliation_error(self, mock_sanitize, mock_emit_failed):
        """Test that errors are reported and handed to kopf for retry."""
        handler = BaseHandler(kind="TestKind")
        body = {"metadata": {"name": "test-resource"}}
        error = ValueError("Test error")
        mock_sanitize.return_value = "Sanitized error"

        with pytest.raises(kopf.TemporaryError) as exc_info:
            handler.handle_reconciliation_error(body, body["metadata"], error, delay=5)

        assert exc_info.value.delay == 5
        assert exc_info.value.__cause__ is error
        mock_sanitize.assert_called_once_with(error)
        mock_emit_failed.assert_called_once_with(body, "Reconciliation failed: Sanitized error")


class TestReadyConditions:
    """Test cases for ready_conditions."""

    def test_new_condition(self) -> None:
        """Test adding the Ready condition to an empty list."""
        result = ready_conditions([], True, "Subresources provisioned", 1)

        assert len(result) == 1
        assert result[0]["type"] == "Ready"
        assert result[0]["status"] == "True"
        assert result[0]["reason"] == "Provisioned"
        assert result[0]["message"] == "Subresources provisioned"
        assert result[0]["observedGeneration"] == 1

    def test_failed(self) -> None:
        """Test the reason of a failed reconciliation."""
        result = ready_conditions([], False, "boom", 2)

        assert result[0]["status"] == "False"
        assert result[0]["reason"] == "ReconcileFailed"

    def test_same_status_keeps_transition_time(self) -> None:
        """Test that lastTransitionTime only moves when the status changes."""
        conditions = [
            {"type": "Ready", "status": "True", "lastTransitionTime": "2024-01-01T00:00:00Z"}
        ]

        result = ready_conditions(conditions, True, "still fine", 3)

        assert result[0]["lastTransitionTime"] == "2024-01-01T00:00:00Z"
        assert result[0]["message"] == "still fine"

    def test_keeps_other_conditions(self) -> None:
        """Test that unrelated conditions are untouched and the input is not modified."""
        conditions = [{"type": "Other", "status": "True"}, {"type": "Ready", "status": "False"}]

        result = ready_conditions(conditions, True, "ok", 1)

        assert [c["type"] for c in result] == ["Other", "Ready"]
        assert conditions[1]["status"] == "False"
