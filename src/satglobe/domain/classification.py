# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Name-based satellite classification.

Categories are assigned from an ordered list of keyword rules evaluated
against the catalog name. The first rule with a matching keyword wins,
so rule order resolves names that match several groups.
No external dependencies.
"""
from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Display category of a tracked object."""
    STARLINK = "starlink"
    COMMUNICATION = "communication"
    MILITARY = "military"
    RESEARCH = "research"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class ClassificationRule:
    """Assigns a category when any keyword is a substring of the name."""
    category: Category
    keywords: tuple[str, ...]

    def matches(self, name: str) -> bool:
        return any(keyword in name for keyword in self.keywords)


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(Category.STARLINK, ("STARLINK",)),
    ClassificationRule(
        Category.COMMUNICATION,
        ("UFO", "INMARSAT", "THURAYA", "DIRECTV", "INTELSAT"),
    ),
    ClassificationRule(
        Category.MILITARY,
        ("MILITARY", "USA", "OPS", "DSP", "MILSTAR"),
    ),
    ClassificationRule(
        Category.RESEARCH,
        ("RESEARCH", "TEMPSAT", "UOSAT", "CALIPSO", "SORCE", "AURA"),
    ),
)

# Marker colours (0xRRGGBB) per category.
CATEGORY_COLORS: dict[Category, int] = {
    Category.STARLINK: 0xFFFF00,
    Category.COMMUNICATION: 0x0000FF,
    Category.MILITARY: 0x008E00,
    Category.RESEARCH: 0xFFA500,
    Category.UNCLASSIFIED: 0xFF0000,
}


def classify(
    name: str,
    rules: tuple[ClassificationRule, ...] = DEFAULT_RULES,
) -> Category:
    """
    Classify a satellite by its catalog name.

    Matching is case-sensitive; catalog names are upper case.

    Args:
        name: Catalog name (first line of the element triple).
        rules: Ordered rules; earlier rules take precedence.

    Returns:
        Category of the first matching rule, else Category.UNCLASSIFIED.
    """
    for rule in rules:
        if rule.matches(name):
            return rule.category
    return Category.UNCLASSIFIED


def category_color(category: Category) -> int:
    """Marker colour for a category as an 0xRRGGBB integer."""
    return CATEGORY_COLORS[category]
