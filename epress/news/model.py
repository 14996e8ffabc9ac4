from dataclasses import dataclass
from enum import Enum
from typing import List


UNKNOWN_SOURCE = "Unknown Source"


@dataclass(frozen=True)
class Article:
    """A display-ready headline. Equality is structural over every field."""
    headline: str
    summary: str
    date: str  # Opaque timestamp string as sent by the provider
    link: str
    image_url: str = ""  # Empty string means no image
    source: str = UNKNOWN_SOURCE

    @property
    def has_image(self) -> bool:
        return self.image_url != ""

    def share_text(self) -> str:
        """Plain-text payload handed to a share target."""
        return f"{self.headline}\n{self.link}"


class Category(str, Enum):
    """Fixed set of headline categories, in display order."""
    GENERAL = "General"
    BUSINESS = "Business"
    TECHNOLOGY = "Technology"
    SPORTS = "Sports"
    HEALTH = "Health"

    @property
    def query_value(self) -> str:
        return self.value.lower()

    @classmethod
    def parse(cls, value: str) -> "Category":
        normalized = value.strip().lower()
        for category in cls:
            if category.query_value == normalized:
                return category
        available = [category.value for category in cls]
        raise ValueError(f"Invalid category '{value}'. Available categories: {available}")


CATEGORIES: List[Category] = list(Category)
