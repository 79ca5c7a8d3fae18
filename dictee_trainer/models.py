from __future__ import annotations

from dataclasses import asdict, dataclass, field

NO_WORDS_FOUND = "no_words_found"


@dataclass
class DetectedSection:
    id: str
    title: str
    words: list[str]


@dataclass
class SpellingChoice:
    word: str
    correct: str
    wrong: str
    position: str  # left | right


@dataclass
class Blank:
    word: str  # surface form embedded in the text
    original_word: str  # vocabulary entry it came from
    position: int


@dataclass
class GeneratedText:
    full_text: str
    display_text: str
    blanks: list[Blank] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> GeneratedText:
        return cls(
            full_text=data["full_text"],
            display_text=data.get("display_text", ""),
            blanks=[Blank(**b) for b in data.get("blanks", [])],
        )


@dataclass
class ImportResult:
    words: list[str]
    sections: list[DetectedSection]
    has_multiple_sections: bool
    notice: str | None = None  # NO_WORDS_FOUND when nothing usable was extracted

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WordAttempt:
    word: str
    user_answer: str
    is_correct: bool


@dataclass
class SessionSummary:
    list_id: int
    total_words: int
    correct_words: int
    time_spent_seconds: int
    mode_used: str = "audio"  # flashcard | audio
    student_name: str | None = None
    chrono_time_seconds: int | None = None
    attempts: list[WordAttempt] = field(default_factory=list)

    @property
    def percentage(self) -> int:
        if self.total_words <= 0:
            return 0
        return round(100 * self.correct_words / self.total_words)


@dataclass
class ExtractedDocument:
    text: str
    tables: list[list[list[str]]] = field(default_factory=list)  # table -> row -> cell
