from __future__ import annotations

from typing import Any

from recrutpro.schemas.ads import ContractType, JobFormData

AGENCY_NAME = "ADVANCE EMPLOI 06"

SYSTEM_INSTRUCTION = f"""
Tu es l'assistant IA de RecrutPro, travaillant pour {AGENCY_NAME}, une agence d'intérim et de recrutement basée sur la Côte d'Azur.
Tu es un expert Copywriter RH avec 15 ans d'expérience sur le marché français.

🎯 TA MISSION : Créer des annonces d'emploi EXCEPTIONNELLES qui se démarquent de la concurrence.

📋 RÈGLES D'OR POUR LES ANNONCES :
1. AÈRE LE TEXTE : Utilise "\\n\\n" pour séparer chaque section. JAMAIS de blocs compacts.
2. STRUCTURE OBLIGATOIRE :
   - Titre accrocheur avec emoji pertinent
   - Intro engageante (2-3 lignes max) qui donne envie
   - "\\n\\n🎯 VOS MISSIONS :\\n" puis liste avec "• " pour chaque mission (verbes d'action)
   - "\\n\\n👤 VOTRE PROFIL :\\n" puis liste avec "• " pour chaque critère
   - "\\n\\n🎁 NOS AVANTAGES :\\n" puis liste avec "• " pour chaque avantage
   - "\\n\\n📩 POSTULEZ :" puis call-to-action percutant
3. ADAPTATION PAR CANAL :
   - LinkedIn : Conversationnel, emojis pros (🚀💼🎯), storytelling, tutoiement OK
   - Jobboard : Formel, vouvoiement, très structuré, précis, PAS d'emojis
   - Social : Ultra court (280 car max), punchy, hashtags tendance, 1-2 emojis
4. SEO : Inclure des mots-clés pertinents pour le référencement (nom du poste, ville, compétences clés)
5. INTERDICTIONS : Pas de discrimination (âge, sexe, origine), orthographe parfaite.

📞 RÈGLES POUR SMS ET MESSAGE VOCAL :
- SMS : Max 160 caractères, direct, avec call-to-action
- Message vocal : Script naturel de 20-30 secondes, ton professionnel mais chaleureux

💡 RÈGLES POUR L'ANALYSE :
- Score SEO : Basé sur présence mots-clés, structure, longueur optimale
- Score Attractivité : Basé sur avantages, clarté, ton engageant
- Toujours donner des suggestions d'amélioration concrètes

❓ RÈGLES POUR LES QUESTIONS D'ENTRETIEN :
- Chaque question DOIT être directement liée aux COMPÉTENCES ou MISSIONS du poste
- Inclure des mises en situation concrètes
- Critères d'évaluation précis et mesurables
""".strip()


def _string() -> dict[str, Any]:
    return {"type": "string"}


def _string_list() -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}}


GENERATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "ads": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "channel": {"type": "string", "enum": ["LinkedIn", "Jobboard", "Social"]},
                    "title": _string(),
                    "content": _string(),
                    "hashtags": _string_list(),
                    "seoKeywords": _string_list(),
                },
                "required": ["channel", "title", "content", "seoKeywords"],
            },
        },
        "booleanSearch": _string(),
        "huntingEmail": _string(),
        "interviewQuestions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "category": {"type": "string", "enum": ["Technique", "Soft Skills", "Culture & Motivation"]},
                    "question": _string(),
                    "linkedTo": _string(),
                    "evaluationCriteria": _string(),
                    "greenFlags": _string(),
                    "redFlags": _string(),
                },
                "required": ["category", "question", "linkedTo", "evaluationCriteria"],
            },
        },
        "analysis": {
            "type": "object",
            "properties": {
                "seoScore": {"type": "number"},
                "attractivenessScore": {"type": "number"},
                "marketSalary": _string(),
                "competitorComparison": _string(),
                "improvements": _string_list(),
            },
            "required": ["seoScore", "attractivenessScore", "marketSalary", "improvements"],
        },
        "smsTemplate": _string(),
        "voicemailScript": _string(),
    },
    "required": [
        "ads",
        "booleanSearch",
        "huntingEmail",
        "interviewQuestions",
        "analysis",
        "smsTemplate",
        "voicemailScript",
    ],
}

SUGGESTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "sector": _string(),
        "contractType": {"type": "string", "enum": [item.value for item in ContractType]},
        "remotePolicy": _string(),
        "salary": _string(),
        "description": _string(),
        "skills": _string(),
    },
}


def build_suggestion_prompt(job_title: str) -> str:
    return f"""
Tu es un expert en recrutement français, spécialisé dans l'intérim et le placement sur la Côte d'Azur (06).
À partir du titre de poste : "{job_title}", déduis les détails les plus probables.

Contexte : Marché du travail en France, région PACA / Côte d'Azur.

Champs à remplir :
- sector: Le secteur d'activité le plus logique.
- contractType: Le type de contrat standard pour ce poste.
- remotePolicy: La politique de télétravail habituelle pour ce métier.
- salary: Une fourchette de salaire réaliste pour la région 06 (brut annuel ou taux horaire pour intérim).
- description: 3 à 4 missions principales courtes et percutantes.
- skills: Liste de 4-5 compétences clés (techniques + certifications requises si applicable comme CACES, habilitations, permis).

Réponds UNIQUEMENT au format JSON.
""".strip()


def _interim_section(form: JobFormData) -> str:
    if form.contract_type != ContractType.INTERIM or not form.interim_benefits:
        return ""
    return (
        "🚨 IMPORTANT : C'est une mission d'INTÉRIM.\n"
        f"- Inclus obligatoirement une section \"Avantages Intérim\" avec : {', '.join(form.interim_benefits)}.\n"
        "- Mentionne la possibilité de renouvellement/CDI si mission concluante.\n"
        f"- Précise que c'est via {AGENCY_NAME}, agence d'intérim de confiance."
    )


def _benefits_section(form: JobFormData) -> str:
    if not form.benefits:
        return ""
    return f"Avantages entreprise à mentionner : {', '.join(form.benefits)}."


def _urgent_section(form: JobFormData) -> str:
    if not form.is_urgent:
        return ""
    return (
        "⚡ RECRUTEMENT URGENT : Ajoute un sentiment d'urgence dans les annonces. "
        "Mentionne \"Poste à pourvoir immédiatement\" ou \"Démarrage rapide\"."
    )


def company_label(form: JobFormData) -> str:
    if form.is_confidential:
        return f"Confidentiel (via {AGENCY_NAME})"
    return form.company_name


def build_generation_prompt(form: JobFormData) -> str:
    main_skill = form.skills.split(",")[0].strip() or form.skills
    contract = form.contract_type.value
    extras = "\n".join(
        section for section in (_interim_section(form), _benefits_section(form), _urgent_section(form)) if section
    )

    return f"""
Génère un kit de recrutement COMPLET et PREMIUM pour ce poste :

📋 INFORMATIONS DU POSTE :
- Intitulé exact : {form.job_title}
- Entreprise cliente : {company_label(form)}
- Type de contrat : {contract}
- Niveau d'expérience : {form.experience_level}
- Localisation : {form.location} ({form.remote_policy})
- Rémunération : {form.salary}
- Secteur : {form.sector}
- Missions : {form.description}
- Compétences requises : {form.skills}
- Ton souhaité : {form.tone.value}

{extras}

📝 À GÉNÉRER (TOUT EST OBLIGATOIRE) :

1. TROIS ANNONCES (LinkedIn, Jobboard, Social) - Structure parfaite avec "\\n\\n"

2. REQUÊTE BOOLÉENNE avancée pour LinkedIn/Indeed/CVthèques

3. EMAIL DE CHASSE percutant (objet + corps) pour approche directe

4. TROIS QUESTIONS D'ENTRETIEN ultra-spécifiques :
   - 1 TECHNIQUE liée à : {main_skill}
   - 1 SOFT SKILLS avec mise en situation
   - 1 MOTIVATION liée au secteur {form.sector}
   - Avec greenFlags (bonnes réponses) et redFlags (alertes)

5. ANALYSE DE L'ANNONCE :
   - seoScore (0-100) : évalue le référencement
   - attractivenessScore (0-100) : évalue l'attractivité
   - marketSalary : fourchette salaire marché pour ce poste en région {form.location or "PACA"}
   - competitorComparison : comment se positionne cette offre vs marché
   - improvements : 3 suggestions concrètes d'amélioration

6. SMS TEMPLATE (max 160 car) pour relance candidat

7. SCRIPT MESSAGE VOCAL (20-30 sec) pour premier contact téléphonique
""".strip()
