"""
Request bodies for the API.

The JSON the client sends is camelCase; attributes stay snake_case on the
Python side through the alias generator.
"""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Operation = Literal["convert", "compress", "merge", "split", "edit"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HumanizationOptions(CamelModel):
    level: Literal["light", "moderate", "strong"]
    style: Literal["standard", "academic", "creative", "professional", "casual"]
    fix_grammar: bool
    reorder_sentences: bool
    add_synonyms: bool

    # advanced panel, stored with the record only
    target_readability: Optional[Literal["simple", "standard", "academic"]] = None
    target_length: Optional[Literal["shorter", "similar", "longer"]] = None
    tone_adjustment: Optional[Literal["neutral", "formal", "casual", "persuasive", "enthusiastic"]] = None
    randomness_factor: Optional[int] = Field(None, ge=0, le=100)
    target_audience: Optional[Literal["general", "technical", "business", "academic", "casual"]] = None
    preserve_key_phrases: Optional[List[str]] = None
    preferred_synonyms: Optional[List[str]] = None
    avoided_words: Optional[List[str]] = None
    sentence_complexity_reduction: Optional[bool] = None
    convert_passive_to_active: Optional[bool] = None


class HumanizeRequest(CamelModel):
    text: str = Field(..., min_length=1, max_length=5000)
    options: HumanizationOptions


class ConversionOptions(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    from_format: str
    to_format: str
    operation: Operation


class ConvertRequest(CamelModel):
    file_ids: List[str]
    options: ConversionOptions


class Achievement(CamelModel):
    id: str
    name: str
    description: str
    icon: str
    unlocked: bool = False
    progress: Optional[int] = None
    max_progress: Optional[int] = None
    date_unlocked: Optional[str] = None


class AchievementData(CamelModel):
    """Scores from a humanize run, keyed by detector name (gptDetector, zeroGPT, ...)."""
    ai_detection: Optional[Dict[str, float]] = None
    plagiarism_score: Optional[Dict[str, float]] = None


class AchievementActionRequest(CamelModel):
    action: Literal["humanize_text", "use_option"]
    data: Optional[AchievementData] = None
    achievements: Optional[List[Achievement]] = None


class AdminLoginRequest(BaseModel):
    email: str
    password: str
