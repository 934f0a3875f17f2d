import unittest
from rest_framework import status
from apps.api.utils import created_response, error_response


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "missing", {"id": 1})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"id": 1})

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_unknown_code_falls_back_to_bad_request(self):
        resp = error_response("weird_code", "odd")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["error"]["code"], "WEIRD_CODE")

    def test_envelope_holds_only_documented_keys(self):
        resp = error_response("CONFLICT", "Resource conflict")
        self.assertEqual(set(resp.data), {"error"})
        self.assertEqual(set(resp.data["error"]), {"code", "message", "status"})

    def test_rejects_out_of_range_status(self):
        with self.assertRaises(ValueError):
            error_response("CONFLICT", "nope", http_status=999)

    def test_rejects_blank_message(self):
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "   ")


class CreatedResponseTests(unittest.TestCase):
    def test_sets_status_and_location(self):
        resp = created_response({"id": 3, "name": "Oolong"}, "http://testserver/api/categories/3/")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp["Location"], "http://testserver/api/categories/3/")
        self.assertEqual(resp.data, {"id": 3, "name": "Oolong"})

    def test_requires_location(self):
        with self.assertRaises(ValueError):
            created_response({"id": 3}, "")
