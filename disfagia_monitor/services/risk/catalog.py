"""
Risk engine constants

Single source for question catalogs, symptom weights, consistency options
and classification thresholds. Scoring functions read from here only.
"""
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class Question(BaseModel):
    """
    One triage question and the answer values it accepts
    """
    model_config = ConfigDict(frozen=True)
    key: str                       = Field(..., description="Question identifier used in answer maps")
    prompt: str                    = Field(..., description="Question text shown to the caregiver")
    legal_values: Tuple[int, ...]  = Field(..., description="Answer values accepted for this question")
    part: int                      = Field(default=1, description="Questionnaire part the question belongs to")


class Instrument(BaseModel):
    """
    An ordered questionnaire
    """
    model_config = ConfigDict(frozen=True)
    name: str                      = Field(..., description="Instrument identifier ('radi' or 'screener')")
    title: str                     = Field(..., description="Display title")
    questions: Tuple[Question, ...] = Field(..., description="Questions in the order they are asked")

    @property
    def keys(self) -> List[str]:
        return [q.key for q in self.questions]

    def question(self, key: str) -> Question:
        for q in self.questions:
            if q.key == key:
                return q
        raise KeyError(key)


YES_NO = (0, 1)
FREQUENCY_SCALE = (0, 1, 2, 3, 4)
PNEUMONIA_VALUES = (0, 4)

ANSWER_LABELS = {
    YES_NO: {0: "Não", 1: "Sim"},
    FREQUENCY_SCALE: {0: "Nunca", 1: "Raramente", 2: "Às vezes", 3: "Frequentemente", 4: "Sempre"},
    PNEUMONIA_VALUES: {0: "Não", 4: "Sim"},
}


# Nine-question RaDI (Rastreamento de Disfagia)
RADI = Instrument(
    name="radi",
    title="RaDI - Rastreamento de Disfagia",
    questions=(
        Question(key="multiple_swallows_needed", prompt="Precisa engolir muitas vezes o alimento para fazê-lo descer?", legal_values=YES_NO, part=1),
        Question(key="effort_to_swallow", prompt="Faz esforço para engolir?", legal_values=YES_NO, part=1),
        Question(key="pain_when_swallowing", prompt="Sente dor ao engolir?", legal_values=YES_NO, part=1),
        Question(key="weight_loss_difficulty_swallowing", prompt="Perdeu peso por ter dificuldade de engolir?", legal_values=YES_NO, part=1),
        Question(key="throat_clearing_after_swallowing", prompt="Tem pigarro depois de engolir?", legal_values=YES_NO, part=1),
        Question(key="voice_changes_after_swallowing", prompt="Sua voz modifica depois de engolir?", legal_values=YES_NO, part=2),
        Question(key="choking_after_swallowing", prompt="Tem engasgo depois de engolir?", legal_values=YES_NO, part=2),
        Question(key="pneumonia_after_choking", prompt="Teve pneumonia depois de algum engasgo?", legal_values=YES_NO, part=2),
        Question(key="tiredness_after_eating", prompt="Sente cansaço depois de comer?", legal_values=YES_NO, part=2),
    ),
)

# Five-question weighted screener
SCREENER = Instrument(
    name="screener",
    title="Triagem de Disfagia",
    questions=(
        Question(key="cough_during_meals", prompt="Com que frequência tosse durante as refeições?", legal_values=FREQUENCY_SCALE),
        Question(key="choking_episodes", prompt="Com que frequência se engasga ao comer ou beber?", legal_values=FREQUENCY_SCALE),
        Question(key="wet_voice", prompt="Com que frequência a voz fica molhada depois de comer?", legal_values=FREQUENCY_SCALE),
        Question(key="swallowing_effort", prompt="Com que frequência faz esforço para engolir?", legal_values=FREQUENCY_SCALE),
        Question(key="pneumonia", prompt="Teve pneumonia recorrente?", legal_values=PNEUMONIA_VALUES),
    ),
)

INSTRUMENTS: Dict[str, Instrument] = {
    RADI.name: RADI,
    SCREENER.name: SCREENER,
}

# Screener bands: score >= HIGH -> alto, score >= MEDIUM -> médio
SCREENER_HIGH_THRESHOLD = 12
SCREENER_MEDIUM_THRESHOLD = 6


# Daily record symptom catalog: id -> label
SYMPTOMS: Dict[str, str] = {
    "tosse": "Tosse durante alimentação",
    "engasgo": "Engasgo",
    "voz_molhada": "Voz molhada após comer",
    "deglutição_lenta": "Deglutição lenta",
    "residuo_oral": "Resíduo na boca",
    "recusa_alimentar": "Recusa alimentar",
    "fadiga": "Fadiga durante alimentação",
    "perda_peso": "Perda de peso",
}

HIGH_RISK_SYMPTOMS = frozenset({"tosse", "engasgo", "voz_molhada"})
MEDIUM_RISK_SYMPTOMS = frozenset({"deglutição_lenta", "residuo_oral", "recusa_alimentar"})

HIGH_RISK_WEIGHT = 3
MEDIUM_RISK_WEIGHT = 2
LOW_RISK_WEIGHT = 1

# Food consistency options: value -> label
FOOD_CONSISTENCIES: Dict[str, str] = {
    "normal": "Normal",
    "facil_mastigar": "Fácil de mastigar",
    "umidificados": "Umidificados",
    "pastosa": "Pastoso",
    "liquida_modificada": "Líquido modificado",
    "liquida_fina": "Líquido",
}

CONSISTENCY_ADJUSTMENTS: Dict[str, int] = {"pastosa": 1}

# History bands over the daily risk score, inclusive ranges; None is unbounded
DAILY_HISTORY_BANDS: Dict[str, Tuple[int, Optional[int]]] = {
    "baixo": (0, 3),
    "medio": (4, 6),
    "alto": (7, None),
}

RISK_LABELS: Dict[str, str] = {
    "normal": "Sem Sintomas",
    "alerta": "Presença de Sintomas",
    "baixo": "Baixo Risco",
    "médio": "Médio Risco",
    "medio": "Médio Risco",
    "alto": "Alto Risco",
}
