import json
import unittest

import httpx
from fastapi.testclient import TestClient

from recrutpro.ai.providers.gemini_provider import GeminiProvider, to_gemini_schema
from recrutpro.ai.types import AIProviderError
from recrutpro.api.v1.ads import ai_client_dependency
from recrutpro.main import api, app
from recrutpro.schemas.ads import ContractType, JobFormData
from recrutpro.services.ad_prompts import AGENCY_NAME, SYSTEM_INSTRUCTION, build_generation_prompt
from recrutpro.services.ad_service import AdGenerationError, generate_job_ads, job_image_url, suggest_job_details


def sample_generation() -> dict:
    return {
        "ads": [
            {
                "channel": "LinkedIn",
                "title": "🚀 Chef de chantier H/F",
                "content": "Rejoignez-nous !\n\n🎯 VOS MISSIONS :\n• Piloter",
                "hashtags": ["#BTP"],
                "seoKeywords": ["chef de chantier", "Nice"],
            },
            {
                "channel": "Jobboard",
                "title": "Chef de chantier H/F",
                "content": "Nous recherchons un chef de chantier.",
                "seoKeywords": ["chef de chantier"],
            },
            {
                "channel": "Social",
                "title": "On recrute !",
                "content": "Chef de chantier à Nice 🏗️",
                "hashtags": ["#emploi", "#Nice"],
                "seoKeywords": [],
            },
        ],
        "booleanSearch": '("chef de chantier" OR "conducteur de travaux") AND Nice',
        "huntingEmail": "Objet : Opportunité\n\nBonjour,",
        "interviewQuestions": [
            {
                "category": "Technique",
                "question": "Comment organisez-vous un planning de chantier ?",
                "linkedTo": "Planification",
                "evaluationCriteria": "Méthode claire",
                "greenFlags": "Outils cités",
                "redFlags": "Aucune méthode",
            }
        ],
        "analysis": {
            "seoScore": 82,
            "attractivenessScore": 74,
            "marketSalary": "38-45k€",
            "competitorComparison": "Dans la moyenne",
            "improvements": ["Préciser le salaire"],
        },
        "smsTemplate": "Bonjour, un poste de chef de chantier vous attend. Appelez-nous !",
        "voicemailScript": "Bonjour, ici ADVANCE EMPLOI 06...",
    }


class FakeAIClient:
    def __init__(self, text=None, error=None):
        self.text = text if text is not None else json.dumps(sample_generation())
        self.error = error
        self.calls: list[dict] = []

    async def complete_json(self, *, prompt, schema, system_prompt=None):
        self.calls.append({"prompt": prompt, "schema": schema, "system_prompt": system_prompt})
        if self.error is not None:
            raise self.error
        return self.text


def sample_form(**overrides) -> JobFormData:
    data = {
        "jobTitle": "Chef de chantier",
        "companyName": "Bâtisseurs Azur",
        "contractType": "CDI",
        "location": "Nice",
        "salary": "40k€",
        "sector": "BTP / Construction / Gros œuvre",
        "skills": "Planification, Management, Lecture de plans",
    }
    data.update(overrides)
    return JobFormData.model_validate(data)


class JobImageTests(unittest.TestCase):
    def test_sector_keywords(self):
        self.assertIn("photo-1504307651254", job_image_url("BTP / Construction"))
        self.assertIn("photo-1586528116311", job_image_url("Logistique / Manutention"))
        self.assertIn("photo-1517694712202", job_image_url("Informatique / Tech"))

    def test_keyword_must_be_whole_word(self):
        self.assertIn("photo-1555817128", job_image_url("Sécurité / Gardiennage"))

    def test_default_image(self):
        self.assertIn("photo-1497215728101", job_image_url(""))
        self.assertIn("photo-1497215728101", job_image_url("Marketing / Communication"))


class GenerationPromptTests(unittest.TestCase):
    def test_confidential_company_hidden(self):
        prompt = build_generation_prompt(sample_form(isConfidential=True))
        self.assertIn(f"Confidentiel (via {AGENCY_NAME})", prompt)
        self.assertNotIn("Bâtisseurs Azur", prompt)

    def test_interim_section_only_for_interim(self):
        self.assertNotIn("INTÉRIM", build_generation_prompt(sample_form()))
        prompt = build_generation_prompt(sample_form(contractType="Intérim"))
        self.assertIn("mission d'INTÉRIM", prompt)
        self.assertIn("+10% IFM (Fin de mission)", prompt)

    def test_urgent_and_benefits(self):
        prompt = build_generation_prompt(sample_form(isUrgent=True, benefits=["RTT", "13ème mois"]))
        self.assertIn("RECRUTEMENT URGENT", prompt)
        self.assertIn("RTT, 13ème mois", prompt)

    def test_main_skill_drives_technical_question(self):
        prompt = build_generation_prompt(sample_form())
        self.assertIn("1 TECHNIQUE liée à : Planification", prompt)


class AdServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_generation_enriches_result(self):
        client = FakeAIClient()
        result = await generate_job_ads(sample_form(), client=client)

        self.assertEqual(len(result.ads), 3)
        social = next(ad for ad in result.ads if ad.channel == "Social")
        self.assertIn("photo-1504307651254", social.image_url)
        self.assertIsNone(result.ads[0].image_url)
        self.assertEqual(len(result.id), 8)
        self.assertGreater(result.timestamp, 1_600_000_000_000)
        self.assertEqual(result.analysis.seo_score, 82)
        self.assertEqual(client.calls[0]["system_prompt"], SYSTEM_INSTRUCTION)
        self.assertIn("booleanSearch", client.calls[0]["schema"]["properties"])

    async def test_empty_completion(self):
        with self.assertRaises(AdGenerationError) as ctx:
            await generate_job_ads(sample_form(), client=FakeAIClient(text="   "))
        self.assertEqual(ctx.exception.status_code, 502)

    async def test_unreadable_completion(self):
        with self.assertRaises(AdGenerationError) as ctx:
            await generate_job_ads(sample_form(), client=FakeAIClient(text="{not json"))
        self.assertEqual(str(ctx.exception), "Réponse IA illisible.")

    async def test_incomplete_completion(self):
        with self.assertRaises(AdGenerationError) as ctx:
            await generate_job_ads(sample_form(), client=FakeAIClient(text=json.dumps({"ads": []})))
        self.assertEqual(str(ctx.exception), "Réponse IA incomplète.")

    async def test_model_unavailable(self):
        error = AIProviderError("model gone", model_unavailable=True)
        with self.assertRaises(AdGenerationError) as ctx:
            await generate_job_ads(sample_form(), client=FakeAIClient(error=error))
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertIn("Erreur Modèle", str(ctx.exception))

    async def test_suggestion(self):
        client = FakeAIClient(
            text=json.dumps({"sector": "Logistique", "contractType": "Intérim", "skills": "CACES 1A"})
        )
        suggestion = await suggest_job_details("Cariste", client=client)
        self.assertEqual(suggestion.sector, "Logistique")
        self.assertEqual(suggestion.contract_type, ContractType.INTERIM)
        self.assertIsNone(suggestion.salary)
        self.assertIn('"Cariste"', client.calls[0]["prompt"])


class GeminiProviderTests(unittest.IsolatedAsyncioTestCase):
    def test_schema_types_uppercased(self):
        converted = to_gemini_schema(
            {
                "type": "object",
                "additionalProperties": False,
                "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
                "required": ["tags"],
            }
        )
        self.assertEqual(
            converted,
            {
                "type": "OBJECT",
                "properties": {"tags": {"type": "ARRAY", "items": {"type": "STRING"}}},
                "required": ["tags"],
            },
        )

    async def test_generate_content_request(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": '{"a":'}, {"text": " 1}"}]}}]},
            )

        provider = GeminiProvider("gemini-2.5-flash", api_key="k", transport=httpx.MockTransport(handler))
        text = await provider.complete_json(prompt="hello", schema={"type": "object"}, system_prompt="sys")

        self.assertEqual(text, '{"a": 1}')
        self.assertTrue(seen[0].url.path.endswith("/models/gemini-2.5-flash:generateContent"))
        self.assertEqual(seen[0].url.params["key"], "k")
        body = json.loads(seen[0].content)
        self.assertEqual(body["generationConfig"]["responseSchema"], {"type": "OBJECT"})
        self.assertEqual(body["systemInstruction"]["parts"][0]["text"], "sys")

    async def test_missing_model(self):
        provider = GeminiProvider(
            "gemini-0", api_key="k", transport=httpx.MockTransport(lambda request: httpx.Response(404))
        )
        with self.assertRaises(AIProviderError) as ctx:
            await provider.complete_json(prompt="hello", schema={"type": "object"})
        self.assertTrue(ctx.exception.model_unavailable)


class AdsApiTests(unittest.TestCase):
    def setUp(self):
        self.ai = FakeAIClient()
        api.dependency_overrides[ai_client_dependency] = lambda: self.ai
        self.client = TestClient(app)

    def tearDown(self):
        api.dependency_overrides.clear()

    def test_options(self):
        response = self.client.get("/v1/ads/options")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIn("Intérim", body["contract_types"])
        self.assertIn("+10% IFM (Fin de mission)", body["interim_benefits"])

    def test_generate(self):
        response = self.client.post(
            "/v1/ads/generate",
            json={"jobTitle": "Chef de chantier", "sector": "BTP", "contractType": "CDD"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIn("booleanSearch", body)
        self.assertEqual(len(body["interviewQuestions"]), 1)
        social = [ad for ad in body["ads"] if ad["channel"] == "Social"][0]
        self.assertTrue(social["imageUrl"].startswith("https://images.unsplash.com/"))

    def test_generate_rejects_unknown_contract(self):
        response = self.client.post("/v1/ads/generate", json={"jobTitle": "Chef", "contractType": "Bénévolat"})
        self.assertEqual(response.status_code, 422)

    def test_generate_provider_failure(self):
        self.ai.error = AIProviderError("model gone", model_unavailable=True)
        response = self.client.post("/v1/ads/generate", json={"jobTitle": "Chef de chantier"})
        self.assertEqual(response.status_code, 503)

    def test_suggest(self):
        self.ai.text = json.dumps({"sector": "Transport", "salary": "13€/h"})
        response = self.client.post("/v1/ads/suggest", json={"jobTitle": "Chauffeur SPL"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"sector": "Transport", "salary": "13€/h"})


if __name__ == "__main__":
    unittest.main()
