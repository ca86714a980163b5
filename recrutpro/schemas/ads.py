from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Channel = Literal["LinkedIn", "Jobboard", "Social"]
QuestionCategory = Literal["Technique", "Soft Skills", "Culture & Motivation"]


class ContractType(str, Enum):
    CDI = "CDI"
    CDD = "CDD"
    INTERIM = "Intérim"
    FREELANCE = "Freelance"
    ALTERNANCE = "Alternance"
    STAGE = "Stage"


class Tone(str, Enum):
    PROFESSIONAL = "Professionnel & Structuré"
    FRIENDLY = "Amical & Dynamique"
    URGENT = "Urgent & Direct"
    PRESTIGE = "Prestigieux & Exclusif"
    STARTUP = "Startup & Décalé"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobFormData(CamelModel):
    job_title: str = Field(min_length=2, max_length=200)
    company_name: str = Field(default="", max_length=200)
    is_confidential: bool = False
    contract_type: ContractType = ContractType.CDI
    location: str = Field(default="", max_length=200)
    remote_policy: str = "À définir"
    salary: str = ""
    experience_level: str = "Confirmé (3-5 ans)"
    sector: str = ""
    description: str = Field(default="", max_length=20000)
    skills: str = Field(default="", max_length=5000)
    tone: Tone = Tone.PROFESSIONAL
    interim_benefits: list[str] = Field(
        default_factory=lambda: ["+10% IFM (Fin de mission)", "+10% CP (Congés Payés)"]
    )
    benefits: list[str] = Field(default_factory=list)
    is_urgent: bool = False


class SuggestRequest(CamelModel):
    job_title: str = Field(min_length=2, max_length=200)


class JobSuggestion(CamelModel):
    sector: str | None = None
    contract_type: ContractType | None = None
    remote_policy: str | None = None
    salary: str | None = None
    description: str | None = None
    skills: str | None = None


class GeneratedAd(CamelModel):
    channel: Channel
    title: str
    content: str
    hashtags: list[str] = Field(default_factory=list)
    seo_keywords: list[str] = Field(default_factory=list)
    image_url: str | None = None


class InterviewQuestion(CamelModel):
    category: QuestionCategory
    question: str
    linked_to: str
    evaluation_criteria: str
    green_flags: str | None = None
    red_flags: str | None = None


class AdAnalysis(CamelModel):
    seo_score: float = Field(ge=0, le=100)
    attractiveness_score: float = Field(ge=0, le=100)
    market_salary: str
    competitor_comparison: str = ""
    improvements: list[str] = Field(default_factory=list)


class GenerationResponse(CamelModel):
    id: str | None = None
    timestamp: int | None = None
    ads: list[GeneratedAd]
    boolean_search: str
    hunting_email: str
    interview_questions: list[InterviewQuestion]
    analysis: AdAnalysis | None = None
    sms_template: str | None = None
    voicemail_script: str | None = None
