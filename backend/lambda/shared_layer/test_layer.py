"""test_layer.py — Unit tests for boycott_shared layer modules.

Run from shared_layer directory:
    PYTHONPATH=python python3 -m pytest test_layer.py -v
"""

from __future__ import annotations

import json
import logging
import os
import sys
import unittest
from decimal import Decimal
from unittest.mock import MagicMock, patch

# Ensure the layer's python/ directory is importable.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "python"))

import boycott_shared.http_utils as http_utils  # noqa: E402
from boycott_shared.auth import _claims_from_event, _subject_from_event  # noqa: E402
from boycott_shared.aws_clients import _get_ddb, _reset_clients  # noqa: E402
from boycott_shared.http_utils import (  # noqa: E402
    ResponseMessage,
    SerializationError,
    _error_message,
    _response,
    _server_error,
    _unauthorized,
)
from boycott_shared.observability import _emit_structured_log  # noqa: E402
from boycott_shared.serialization import _deserialize, _now_z, _serialize  # noqa: E402


class AuthTests(unittest.TestCase):
    def test_subject_from_rest_authorizer_claims(self):
        event = {"requestContext": {"authorizer": {"claims": {"sub": "u-1", "email": "a@b.c"}}}}
        self.assertEqual(_subject_from_event(event), "u-1")

    def test_subject_from_http_api_jwt_claims(self):
        event = {"requestContext": {"authorizer": {"jwt": {"claims": {"sub": "u-2"}}}}}
        self.assertEqual(_subject_from_event(event), "u-2")

    def test_missing_authorizer(self):
        self.assertIsNone(_subject_from_event({"requestContext": {}}))

    def test_missing_claims(self):
        self.assertIsNone(_subject_from_event({"requestContext": {"authorizer": {}}}))

    def test_missing_sub(self):
        event = {"requestContext": {"authorizer": {"claims": {"email": "a@b.c"}}}}
        self.assertIsNone(_subject_from_event(event))

    def test_blank_or_non_string_sub(self):
        for sub in ("", "   ", 42, None):
            with self.subTest(sub=sub):
                event = {"requestContext": {"authorizer": {"claims": {"sub": sub}}}}
                self.assertIsNone(_subject_from_event(event))

    def test_malformed_envelopes(self):
        for event in (None, {}, {"requestContext": None}, {"requestContext": {"authorizer": "x"}}):
            with self.subTest(event=event):
                self.assertIsNone(_subject_from_event(event))
                self.assertEqual(_claims_from_event(event), {})

    def test_claims_are_copied(self):
        claims = {"sub": "u-1"}
        out = _claims_from_event({"requestContext": {"authorizer": {"claims": claims}}})
        out["sub"] = "changed"
        self.assertEqual(claims["sub"], "u-1")


class HttpUtilsTests(unittest.TestCase):
    def test_string_body_is_json_string(self):
        resp = _response(200, "cause record updated = true")
        self.assertEqual(resp["statusCode"], 200)
        self.assertEqual(resp["headers"]["Content-Type"], "application/json")
        self.assertEqual(resp["body"], '"cause record updated = true"')

    def test_response_message_body(self):
        resp = _response(400, ResponseMessage(400, "cause_id not present", "Missing cause_id"))
        self.assertEqual(
            json.loads(resp["body"]),
            {"status": 400, "message": "cause_id not present", "devMsg": "Missing cause_id"},
        )

    def test_mapping_body_with_decimal(self):
        resp = _response(200, {"follower_count": Decimal("3"), "ratio": Decimal("0.5")})
        self.assertEqual(json.loads(resp["body"]), {"follower_count": 3, "ratio": 0.5})

    def test_error_helpers(self):
        self.assertEqual(json.loads(_unauthorized()["body"]), {"message": "Unauthorized"})
        self.assertEqual(_unauthorized()["statusCode"], 401)

        resp = _error_message(400, "increment not present", "Missing increment")
        self.assertEqual(resp["statusCode"], 400)
        self.assertEqual(json.loads(resp["body"])["devMsg"], "Missing increment")

        resp = _server_error("boom")
        self.assertEqual(resp["statusCode"], 500)
        self.assertEqual(json.loads(resp["body"]), {"error": "Unexpected server error: boom"})

    def test_cyclic_body_raises_serialization_error(self):
        body = {}
        body["self"] = body
        with self.assertRaises(SerializationError):
            _response(200, body)

    def test_unserializable_value_raises_serialization_error(self):
        with self.assertRaises(SerializationError):
            _response(200, {"when": object()})

    def test_unsupported_body_type_raises_serialization_error(self):
        for body in (42, ["a"], None):
            with self.subTest(body=body):
                with self.assertRaises(SerializationError):
                    _response(200, body)

    def test_serialization_error_is_value_error(self):
        self.assertTrue(issubclass(SerializationError, ValueError))

    def test_no_cors_headers_by_default(self):
        with patch.object(http_utils, "CORS_ORIGIN", ""):
            resp = _response(200, "ok")
        self.assertEqual(resp["headers"], {"Content-Type": "application/json"})

    def test_cors_headers_when_configured(self):
        with patch.object(http_utils, "CORS_ORIGIN", "https://boycott.example"):
            resp = _response(200, "ok")
        self.assertEqual(resp["headers"]["Access-Control-Allow-Origin"], "https://boycott.example")
        self.assertEqual(resp["headers"]["Content-Type"], "application/json")


class SerializationTests(unittest.TestCase):
    def test_serialize_string(self):
        self.assertEqual(_serialize("hello"), {"S": "hello"})

    def test_serialize_negative_int(self):
        self.assertEqual(_serialize(-1), {"N": "-1"})

    def test_serialize_float_is_rejected(self):
        # Counters are integers; boto3 refuses raw floats.
        with self.assertRaises(TypeError):
            _serialize(3.14)

    def test_deserialize_counter_is_int(self):
        result = _deserialize({"follower_count": {"N": "-1"}})
        self.assertEqual(result["follower_count"], -1)
        self.assertIsInstance(result["follower_count"], int)

    def test_deserialize_item(self):
        item = {"cause_id": {"S": "c-1"}, "follower_count": {"N": "42"}}
        self.assertEqual(_deserialize(item), {"cause_id": "c-1", "follower_count": 42})

    def test_now_z_format(self):
        ts = _now_z()
        self.assertRegex(ts, r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


class ObservabilityTests(unittest.TestCase):
    def test_structured_log_payload(self):
        with self.assertLogs("boycott_shared.observability", level="WARNING") as logs:
            payload = _emit_structured_log(
                component="cause_follower",
                event="request_rejected",
                subject="u-1",
                stage="validate",
                error_code="CAUSE_ID_MISSING",
                level=logging.WARNING,
                extra={"reason": "cause_id not present"},
            )

        self.assertEqual(payload["subject"], "u-1")
        self.assertEqual(payload["reason"], "cause_id not present")
        self.assertEqual(len(logs.output), 1)
        line = logs.output[0]
        self.assertIn("[OBSERVABILITY]", line)
        logged = json.loads(line.split("[OBSERVABILITY] ", 1)[1])
        self.assertEqual(logged["error_code"], "CAUSE_ID_MISSING")

    def test_missing_fields_default_to_empty(self):
        with self.assertLogs("boycott_shared.observability", level="INFO"):
            payload = _emit_structured_log(component="c", event="e")
        self.assertEqual(payload["subject"], "")
        self.assertEqual(payload["stage"], "")


class AwsClientTests(unittest.TestCase):
    def tearDown(self):
        _reset_clients()

    @patch("boycott_shared.aws_clients.boto3")
    def test_get_ddb_singleton(self, mock_boto3):
        _reset_clients()
        mock_client = MagicMock()
        mock_boto3.client.return_value = mock_client

        result1 = _get_ddb()
        result2 = _get_ddb()

        self.assertIs(result1, mock_client)
        self.assertIs(result1, result2)
        mock_boto3.client.assert_called_once()
        self.assertEqual(mock_boto3.client.call_args.args, ("dynamodb",))

    @patch("boycott_shared.aws_clients.boto3")
    def test_get_ddb_region_override(self, mock_boto3):
        _reset_clients()
        _get_ddb(region="eu-west-1")
        self.assertEqual(mock_boto3.client.call_args.kwargs["region_name"], "eu-west-1")


if __name__ == "__main__":
    unittest.main()
