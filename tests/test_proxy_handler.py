import json
import unittest
from urllib.parse import parse_qs

import httpx

from fakes import FakeClock, FakeFranceTravail, build_handler


class ProxyHandlerValidationTests(unittest.IsolatedAsyncioTestCase):
    async def test_options_short_circuits(self):
        server = FakeFranceTravail()
        response = await build_handler(server).handle("OPTIONS", {})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.body)
        self.assertEqual(
            response.headers,
            {
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )
        self.assertEqual(server.auth_requests, [])
        self.assertEqual(server.api_requests, [])

    async def test_missing_endpoint(self):
        server = FakeFranceTravail()
        response = await build_handler(server).handle("GET", {"keyword": "macon"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body, {"error": "Missing endpoint parameter"})
        self.assertEqual(server.auth_requests, [])

    async def test_empty_endpoint_counts_as_missing(self):
        response = await build_handler(FakeFranceTravail()).handle("GET", {"endpoint": ""})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body, {"error": "Missing endpoint parameter"})

    async def test_unknown_endpoint_regardless_of_params(self):
        server = FakeFranceTravail()
        handler = build_handler(server)
        for query in ({"endpoint": "jcmo"}, {"endpoint": "foo", "codeRome": "M1607", "keyword": "x"}):
            with self.subTest(query=query):
                response = await handler.handle("GET", query)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.body, {"error": "Unknown endpoint"})
        self.assertEqual(server.auth_requests, [])
        self.assertEqual(server.api_requests, [])

    async def test_missing_required_parameter(self):
        response = await build_handler(FakeFranceTravail()).handle("GET", {"endpoint": "competences"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.body, {"error": "Missing parameter: codeRome"})

    async def test_error_responses_carry_cors_headers(self):
        response = await build_handler(FakeFranceTravail()).handle("GET", {})
        self.assertEqual(response.headers["Access-Control-Allow-Origin"], "*")


class ProxyHandlerRelayTests(unittest.IsolatedAsyncioTestCase):
    async def test_success_payload_relayed_unchanged(self):
        payload = [{"code": "F1703", "libelle": "Maçon"}, {"code": "F1704", "libelle": "Préparateur"}]
        server = FakeFranceTravail(api_body=payload)
        response = await build_handler(server).handle("GET", {"endpoint": "metiers", "keyword": "maçon"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.body, payload)

    async def test_downstream_request_shape(self):
        server = FakeFranceTravail()
        await build_handler(server).handle("GET", {"endpoint": "offres", "codeRome": "M1607"})
        self.assertEqual(len(server.api_requests), 1)
        request = server.api_requests[0]
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.url.path, "/partenaire/offresdemploi/v2/offres/search")
        self.assertEqual(request.headers["Authorization"], "Bearer token-1")
        self.assertEqual(request.headers["Accept"], "application/json")
        self.assertEqual(dict(request.url.params), {"codeRome": "M1607", "range": "0-14"})

    async def test_token_request_shape(self):
        server = FakeFranceTravail()
        await build_handler(server).handle("GET", {"endpoint": "metiers", "keyword": "chef"})
        self.assertEqual(len(server.auth_requests), 1)
        request = server.auth_requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url.params["realm"], "/partenaire")
        self.assertEqual(request.headers["Content-Type"], "application/x-www-form-urlencoded")
        form = parse_qs(request.content.decode())
        self.assertEqual(form["grant_type"], ["client_credentials"])
        self.assertEqual(form["client_id"], ["client-id"])
        self.assertEqual(form["client_secret"], ["client-secret"])
        self.assertEqual(form["scope"], ["scope_rome_metiers nomenclatureRome"])

    async def test_downstream_error_status_relayed(self):
        server = FakeFranceTravail(api_status=404, api_body='{"msg":"not found"}')
        response = await build_handler(server).handle("GET", {"endpoint": "metiers", "keyword": "x"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.body, {"error": "API Error: 404", "details": '{"msg":"not found"}'})

    async def test_downstream_server_error_relayed(self):
        server = FakeFranceTravail(api_status=503, api_body="maintenance")
        response = await build_handler(server).handle("GET", {"endpoint": "marche", "codeRome": "M1607"})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.body, {"error": "API Error: 503", "details": "maintenance"})

    async def test_auth_failure_is_internal_error(self):
        server = FakeFranceTravail(auth_status=401)
        response = await build_handler(server).handle("GET", {"endpoint": "metiers", "keyword": "x"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.body["error"], "Authentication failed: 401")
        self.assertEqual(response.body["details"], '{"error":"invalid_client"}')
        self.assertEqual(server.api_requests, [])

    async def test_missing_credentials_still_attempt_exchange(self):
        server = FakeFranceTravail(auth_status=400)
        handler = build_handler(server, client_id=None, client_secret=None)
        response = await handler.handle("GET", {"endpoint": "metiers"})
        self.assertEqual(response.status_code, 500)
        form = parse_qs(server.auth_requests[0].content.decode(), keep_blank_values=True)
        self.assertEqual(form["client_id"], [""])
        self.assertEqual(form["client_secret"], [""])

    async def test_network_failure_is_internal_error(self):
        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        response = await build_handler(unreachable).handle("GET", {"endpoint": "metiers"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.body, {"error": "connection refused"})

    async def test_malformed_success_body_is_internal_error(self):
        server = FakeFranceTravail(api_body="<html>oops</html>")
        response = await build_handler(server).handle("GET", {"endpoint": "metiers"})
        self.assertEqual(response.status_code, 500)
        self.assertIn("error", response.body)

    async def test_json_null_relayed_as_body(self):
        server = FakeFranceTravail(api_body="null")
        response = await build_handler(server).handle("GET", {"endpoint": "metiers", "keyword": "zzz"})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.body)
        self.assertFalse(response.empty)

    async def test_only_preflight_is_empty(self):
        handler = build_handler(FakeFranceTravail())
        self.assertTrue((await handler.handle("OPTIONS", {})).empty)
        self.assertFalse((await handler.handle("GET", {})).empty)

    async def test_post_is_treated_like_get(self):
        server = FakeFranceTravail(api_body={"resultats": []})
        response = await build_handler(server).handle("POST", {"endpoint": "offres", "codeRome": "M1607"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(server.api_requests[0].method, "GET")


class ProxyHandlerTokenReuseTests(unittest.IsolatedAsyncioTestCase):
    async def test_fresh_token_reused_across_calls(self):
        server = FakeFranceTravail()
        handler = build_handler(server)
        await handler.handle("GET", {"endpoint": "metiers", "keyword": "a"})
        await handler.handle("GET", {"endpoint": "offres", "codeRome": "M1607"})
        self.assertEqual(len(server.auth_requests), 1)
        self.assertEqual(len(server.api_requests), 2)
        self.assertEqual(server.api_requests[1].headers["Authorization"], "Bearer token-1")

    async def test_token_refreshed_inside_safety_margin(self):
        clock = FakeClock()
        server = FakeFranceTravail(expires_in=1499)
        handler = build_handler(server, clock=clock)
        await handler.handle("GET", {"endpoint": "metiers"})

        clock.advance((1499 - 61) * 1000)
        await handler.handle("GET", {"endpoint": "metiers"})
        self.assertEqual(len(server.auth_requests), 1)

        clock.advance(2000)
        await handler.handle("GET", {"endpoint": "metiers"})
        self.assertEqual(len(server.auth_requests), 2)
        self.assertEqual(server.api_requests[-1].headers["Authorization"], "Bearer token-2")

    async def test_stale_token_triggers_one_acquisition(self):
        clock = FakeClock()
        server = FakeFranceTravail()
        handler = build_handler(server, clock=clock)
        handler.cache.set("old-token", 30)

        await handler.handle("GET", {"endpoint": "metiers"})
        self.assertEqual(len(server.auth_requests), 1)
        self.assertEqual(handler.cache.get().token, "token-1")

    async def test_failed_exchange_leaves_cache_untouched(self):
        clock = FakeClock()
        server = FakeFranceTravail(auth_status=500)
        handler = build_handler(server, clock=clock)
        await handler.handle("GET", {"endpoint": "metiers"})
        self.assertIsNone(handler.cache.get())


class ProxyHandlerFetchTests(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_returns_decoded_json(self):
        server = FakeFranceTravail(api_body={"companies": [{"siret": "1"}]})
        data = await build_handler(server).fetch(
            "labonneboite", {"codeRome": "M1607", "lat": "43.7", "lon": "7.26"}
        )
        self.assertEqual(data, {"companies": [{"siret": "1"}]})
        self.assertEqual(server.api_requests[0].url.params["distance"], "30")

    async def test_fetch_body_matches_json_text(self):
        server = FakeFranceTravail(api_body=json.dumps({"a": 1}))
        data = await build_handler(server).fetch("marche", {"codeRome": "M1607"})
        self.assertEqual(data, {"a": 1})

    async def test_fetch_empty_body_allowed_on_request(self):
        server = FakeFranceTravail(api_status=204, api_body="")
        data = await build_handler(server).fetch("offres", {"codeRome": "M1607"}, allow_empty=True)
        self.assertIsNone(data)

    async def test_proxy_empty_success_body_is_internal_error(self):
        server = FakeFranceTravail(api_status=204, api_body="")
        response = await build_handler(server).handle("GET", {"endpoint": "offres", "codeRome": "M1607"})
        self.assertEqual(response.status_code, 500)


if __name__ == "__main__":
    unittest.main()
