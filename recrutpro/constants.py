from recrutpro.schemas.ads import ContractType, Tone

CONTRACT_OPTIONS = [item.value for item in ContractType]
TONE_OPTIONS = [item.value for item in Tone]

SECTOR_SUGGESTIONS = [
    "BTP / Construction / Gros œuvre",
    "Second œuvre / Finitions",
    "Électricité / Plomberie / CVC",
    "Industrie / Production",
    "Logistique / Manutention",
    "Transport / Chauffeur PL-SPL",
    "Hôtellerie / Restauration",
    "Commerce / Vente / Distribution",
    "Tertiaire / Administratif",
    "Santé / Médico-social",
    "Informatique / Tech",
    "Comptabilité / Finance",
    "Marketing / Communication",
    "Agroalimentaire",
    "Nettoyage / Propreté",
    "Sécurité / Gardiennage",
]

EXPERIENCE_OPTIONS = [
    "Débutant accepté (0-1 an)",
    "Junior (1-3 ans)",
    "Confirmé (3-5 ans)",
    "Senior (5-10 ans)",
    "Expert (+10 ans)",
]

REMOTE_OPTIONS = [
    "Sur site uniquement",
    "Télétravail partiel (1-2 jours)",
    "Télétravail hybride (3 jours+)",
    "Full Remote",
    "Chantiers / Déplacements",
    "À définir",
]

COMMON_BENEFITS = [
    "Tickets Restaurant",
    "Mutuelle prise en charge 100%",
    "Véhicule de fonction",
    "Primes sur objectifs",
    "Participation / Intéressement",
    "Horaires flexibles",
    "Crèche d'entreprise",
    "Salle de sport / Bien-être",
    "13ème mois",
    "RTT",
    "CE avantageux",
]

INTERIM_BENEFITS = [
    "+10% IFM (Fin de mission)",
    "+10% CP (Congés Payés)",
    "CET 5% (Compte Épargne Temps)",
    "Acompte de paie à la semaine",
    "Accès FASTT (Logement, Crédit, Mobilité)",
    "Mutuelle Intérimaire",
    "EPI fournis",
    "Prime de panier",
    "Prime de déplacement",
    "Formation professionnelle",
    "Accompagnement personnalisé",
]

COMMON_CERTIFICATIONS = {
    "BTP / Construction": ["CACES 1-3-5", "CACES Nacelle", "Habilitation Hauteur", "AIPR", "SST"],
    "Électricité": ["Habilitation B1V/B2V/BR/BC", "H0/H1/H2"],
    "Transport": ["Permis C/CE", "FIMO/FCO", "ADR", "Carte conducteur"],
    "Logistique": ["CACES 1A/1B/3/5", "CACES 6", "Gerbeur"],
    "Industrie": ["CACES Pont roulant", "Soudure (TIG/MIG/MAG)", "Électromécanique"],
    "Sécurité": ["CQP APS", "SSIAP 1/2/3", "Carte pro CNAPS"],
    "Santé": ["Diplôme AS/IDE", "AFGSU"],
}


def form_options() -> dict:
    return {
        "contract_types": CONTRACT_OPTIONS,
        "tones": TONE_OPTIONS,
        "sectors": SECTOR_SUGGESTIONS,
        "experience_levels": EXPERIENCE_OPTIONS,
        "remote_policies": REMOTE_OPTIONS,
        "benefits": COMMON_BENEFITS,
        "interim_benefits": INTERIM_BENEFITS,
        "certifications": COMMON_CERTIFICATIONS,
    }
