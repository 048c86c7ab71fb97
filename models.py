"""
Data model for LingoVibe dictionary entries and the saved-word notebook
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Language(Enum):
    """Languages offered for lookups"""
    ENGLISH = "English"
    CHINESE = "Chinese (Mandarin)"
    SPANISH = "Spanish"
    FRENCH = "French"
    GERMAN = "German"
    JAPANESE = "Japanese"
    KOREAN = "Korean"
    PORTUGUESE = "Portuguese"
    RUSSIAN = "Russian"
    ARABIC = "Arabic"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "Language":
        """Accept a Language, its display value, or its member name"""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        for lang in cls:
            if text == lang.value or text.upper() == lang.name:
                return lang
        raise ValueError(f"Unsupported language: {value!r}")


@dataclass
class ExampleSentence:
    """A sentence in the target language with its translation"""
    target: str
    native: str

    def to_dict(self) -> Dict[str, str]:
        return {"target": self.target, "native": self.native}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExampleSentence":
        return cls(target=str(data.get("target", "")), native=str(data.get("native", "")))


@dataclass
class UsageContext:
    """The "vibe check": tone, cultural notes, synonyms and nuance"""
    tone: str = ""
    culture: str = ""
    synonyms: List[str] = field(default_factory=list)
    nuance: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tone": self.tone,
            "culture": self.culture,
            "synonyms": list(self.synonyms),
            "nuance": self.nuance,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "UsageContext":
        data = data or {}
        return cls(
            tone=str(data.get("tone", "")),
            culture=str(data.get("culture", "")),
            synonyms=[str(s) for s in data.get("synonyms") or []],
            nuance=str(data.get("nuance", "")),
        )


@dataclass
class DictionaryResult:
    """Dictionary entry produced by a single lookup"""
    term: str
    definition: str
    examples: List[ExampleSentence] = field(default_factory=list)
    usage_context: UsageContext = field(default_factory=UsageContext)
    pronunciation: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "term": self.term,
            "definition": self.definition,
            "examples": [example.to_dict() for example in self.examples],
            "usageContext": self.usage_context.to_dict(),
        }
        if self.pronunciation is not None:
            data["pronunciation"] = self.pronunciation
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DictionaryResult":
        return cls(**cls._fields_from_dict(data))

    @staticmethod
    def _fields_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        if "term" not in data or "definition" not in data:
            raise ValueError("Entry is missing 'term' or 'definition'")
        return {
            "term": str(data["term"]),
            "definition": str(data["definition"]),
            "examples": [ExampleSentence.from_dict(e) for e in data.get("examples") or []],
            "usage_context": UsageContext.from_dict(data.get("usageContext")),
            "pronunciation": data.get("pronunciation"),
            "image_url": data.get("imageUrl"),
        }


@dataclass
class SavedWord(DictionaryResult):
    """A dictionary entry stored in the notebook"""
    id: str = ""
    timestamp: int = 0
    source_lang: Language = Language.ENGLISH
    target_lang: Language = Language.SPANISH

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "id": self.id,
            "timestamp": self.timestamp,
            "sourceLang": self.source_lang.value,
            "targetLang": self.target_lang.value,
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedWord":
        fields = cls._fields_from_dict(data)
        if not data.get("id"):
            raise ValueError("Saved word is missing 'id'")
        return cls(
            **fields,
            id=str(data["id"]),
            timestamp=int(data.get("timestamp", 0)),
            source_lang=Language.parse(data.get("sourceLang")),
            target_lang=Language.parse(data.get("targetLang")),
        )

    @classmethod
    def from_result(cls, result: DictionaryResult, *, id: str, timestamp: int,
                    source_lang: Language, target_lang: Language) -> "SavedWord":
        """Materialize a lookup result into a notebook record"""
        return cls(
            term=result.term,
            definition=result.definition,
            examples=copy.deepcopy(result.examples),
            usage_context=copy.deepcopy(result.usage_context),
            pronunciation=result.pronunciation,
            image_url=result.image_url,
            id=id,
            timestamp=timestamp,
            source_lang=source_lang,
            target_lang=target_lang,
        )
